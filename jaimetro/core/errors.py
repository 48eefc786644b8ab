"""Error types for Jai Metro.

Storage errors are kept apart from lookup errors so read paths can mask an
unavailable database while still reporting a missing chart or bad index.
"""


class JaiMetroError(Exception):
    """Base class for application errors."""


class StorageError(JaiMetroError):
    """Raised when the storage backend fails to read or write."""


class StorageNotConnectedError(StorageError):
    """Raised when the database is used before Database.connect() was called."""


class ChartNotFoundError(JaiMetroError):
    """Raised when a cell edit targets a chart that was never created."""

    def __init__(self, year: int, chart_type: str):
        super().__init__(f"Chart not found for year={year} type={chart_type}")
        self.year = year
        self.chart_type = chart_type


class CellIndexError(JaiMetroError):
    """Raised when a week or day index does not exist in a stored chart."""
