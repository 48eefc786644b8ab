"""Repository functions for yearly charts.

Handles reading, lazily creating and editing chart documents. Reads
reconcile the stored weeks against the authoritative layout and write back
only when something changed.
"""

from __future__ import annotations

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from jaimetro.charts.reconcile import reconcile
from jaimetro.charts.weeks import DAYS_PER_WEEK, build_year_rows
from jaimetro.core.errors import CellIndexError, ChartNotFoundError
from jaimetro.db.models import Chart
from jaimetro.db.session import Database

CHART_TYPES = ("day", "night")


def _find_chart(session: Session, year: int, chart_type: str) -> Chart | None:
    return session.execute(select(Chart).where(Chart.year == year, Chart.type == chart_type)).scalar_one_or_none()


def load_chart(db: Database, year: int, chart_type: str) -> dict:
    """Get the chart for (year, type), creating or repairing it as needed.

    Args:
        db: Connected database
        year: Chart year
        chart_type: "day" or "night"

    Returns:
        Chart document as a dict (year, type, weeks)

    Raises:
        StorageError: If the database read or write fails
    """
    authoritative = build_year_rows(year)

    with db.session() as session:
        chart = _find_chart(session, year, chart_type)
        result = reconcile(chart.to_dict() if chart is not None else None, authoritative)

        if chart is None:
            chart = Chart(year=year, type=chart_type, weeks=result.weeks)
            session.add(chart)
            logger.info(f"[CHART] Created chart year={year} type={chart_type} weeks={len(result.weeks)}")
        elif result.changed:
            chart.weeks = result.weeks
            logger.info(f"[CHART] Normalized stored chart year={year} type={chart_type}")

        return {"year": year, "type": chart_type, "weeks": result.weeks}


def _edit_cell(db: Database, year: int, chart_type: str, week_index: int, day_index: int, value: str) -> None:
    if not 0 <= day_index < DAYS_PER_WEEK:
        raise CellIndexError(f"dayIndex out of range: {day_index}")

    with db.session() as session:
        chart = _find_chart(session, year, chart_type)
        if chart is None:
            raise ChartNotFoundError(year, chart_type)
        if not 0 <= week_index < len(chart.weeks):
            raise CellIndexError(f"weekIndex out of range: {week_index}")

        # Reassign a copy so the JSON column is flagged as modified
        weeks = [
            {"range": w.get("range"), "days": list(w.get("days") or [])} if isinstance(w, dict) else {"range": None, "days": []}
            for w in chart.weeks
        ]
        days = weeks[week_index]["days"]
        if len(days) < DAYS_PER_WEEK:
            days.extend([""] * (DAYS_PER_WEEK - len(days)))
        days[day_index] = value
        chart.weeks = weeks


def set_cell(db: Database, year: int, chart_type: str, week_index: int, day_index: int, value: str) -> str:
    """Store a value in one chart cell.

    The value is stored as given; callers normalize it first.

    Raises:
        ChartNotFoundError: If the chart was never created
        CellIndexError: If the week or day index does not exist
        StorageError: If the database read or write fails
    """
    _edit_cell(db, year, chart_type, week_index, day_index, value)
    logger.info(f"[CHART] Cell saved year={year} type={chart_type} week={week_index} day={day_index}")
    return value


def clear_cell(db: Database, year: int, chart_type: str, week_index: int, day_index: int) -> None:
    """Blank one chart cell."""
    _edit_cell(db, year, chart_type, week_index, day_index, "")
    logger.info(f"[CHART] Cell cleared year={year} type={chart_type} week={week_index} day={day_index}")
