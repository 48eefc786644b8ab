"""Week buckets for a yearly chart.

A year is cut into Monday-Sunday weeks. The first bucket runs from Jan 1 to
the first Sunday and the last one is clipped at Dec 31, so both may be
shorter than seven days. Everything is plain ``date`` arithmetic, which keeps
the output independent of the process timezone.
"""

from __future__ import annotations

from datetime import MAXYEAR, MINYEAR, date, timedelta
from typing import TypedDict

DAYS_PER_WEEK = 7
RANGE_SEPARATOR = " to "


class WeekBucket(TypedDict):
    range: str
    days: list[str]


def empty_days() -> list[str]:
    """Mon..Sun cells, all blank."""
    return [""] * DAYS_PER_WEEK


def format_range(start: date, end: date) -> str:
    return f"{start.isoformat()}{RANGE_SEPARATOR}{end.isoformat()}"


def parse_range(label: str) -> tuple[date, date]:
    """Parse a "YYYY-MM-DD to YYYY-MM-DD" label.

    Raises:
        ValueError: If the label is not in that form
    """
    start_raw, sep, end_raw = label.partition(RANGE_SEPARATOR)
    if not sep:
        raise ValueError(f"Not a week range label: {label!r}")
    return date.fromisoformat(start_raw.strip()), date.fromisoformat(end_raw.strip())


def _days_to_sunday(d: date) -> int:
    # Sunday-based day of week: 0=Sun .. 6=Sat
    dow = d.isoweekday() % 7
    return 0 if dow == 0 else 7 - dow


def build_year_rows(year: int) -> list[WeekBucket]:
    """Build the authoritative week buckets for a year.

    Args:
        year: Calendar year (1..9999)

    Returns:
        Ordered week buckets with blank day cells

    Raises:
        ValueError: If the year is outside the range ``date`` supports
    """
    if not MINYEAR <= year <= MAXYEAR:
        raise ValueError(f"year must be between {MINYEAR} and {MAXYEAR}, got {year}")

    rows: list[WeekBucket] = []
    start = date(year, 1, 1)
    year_end = date(year, 12, 31)

    while True:
        # Clamp the step first, date(9999, 12, 31) has no successor
        end = start + timedelta(days=min(_days_to_sunday(start), (year_end - start).days))
        rows.append({"range": format_range(start, end), "days": empty_days()})
        if end == year_end:
            break
        start = end + timedelta(days=1)

    return rows
