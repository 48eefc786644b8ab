"""Chart endpoints.

Reading a chart always succeeds for a valid (year, type): when the database
is unavailable the freshly built week layout is returned with
``ephemeral: true`` so the page still renders. Cell edits are admin only and
report storage failures.
"""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from loguru import logger

from jaimetro.api.dependencies.auth import require_admin
from jaimetro.api.dependencies.db import get_database
from jaimetro.api.schemas import CellPatchRequest
from jaimetro.charts.panel import sanitize_cell
from jaimetro.charts.repository import CHART_TYPES, clear_cell, load_chart, set_cell
from jaimetro.charts.weeks import build_year_rows
from jaimetro.core.errors import CellIndexError, ChartNotFoundError, StorageError
from jaimetro.db.session import Database

router = APIRouter(prefix="/api/chart", tags=["chart"])

NO_STORE = "no-store, no-cache, must-revalidate"


def _parse_year(raw: str | None) -> int | None:
    try:
        year = int((raw or "").strip())
    except ValueError:
        return None
    return year if 1 <= year <= 9999 else None


def _edit_or_raise(fn, *args) -> None:
    """Run a cell edit, mapping domain errors to HTTP errors."""
    try:
        fn(*args)
    except ChartNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Chart not found") from e
    except CellIndexError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Bad indexes") from e
    except StorageError as e:
        logger.error(f"[CHART] Cell write failed: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Storage unavailable") from e


@router.get("")
def get_chart(
    response: Response,
    year: str | None = Query(default=None),
    type: str | None = Query(default=None),
    db: Database = Depends(get_database),
):
    """Get the chart for a year and type, creating or repairing it as needed."""
    response.headers["Cache-Control"] = NO_STORE

    parsed_year = _parse_year(year)
    chart_type = (type or "").strip().lower()
    if parsed_year is None or chart_type not in CHART_TYPES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid year/type")

    try:
        chart = load_chart(db, parsed_year, chart_type)
    except StorageError as e:
        logger.warning(f"[CHART] Storage unavailable, serving ephemeral chart year={parsed_year} type={chart_type}: {e}")
        return {
            "ok": True,
            "data": {"year": parsed_year, "type": chart_type, "weeks": build_year_rows(parsed_year)},
            "ephemeral": True,
        }

    return {"ok": True, "data": chart}


@router.patch("/cell", dependencies=[Depends(require_admin)])
def patch_cell(body: CellPatchRequest, db: Database = Depends(get_database)):
    """Save one cell. Disallowed characters are dropped before storing."""
    value = sanitize_cell(body.value)
    _edit_or_raise(set_cell, db, body.year, body.type, body.week_index, body.day_index, value)
    return {"ok": True, "value": value}


@router.delete("/cell", dependencies=[Depends(require_admin)])
def delete_cell(
    year: int = Query(ge=1, le=9999),
    type: Literal["day", "night"] = Query(),
    week_index: int = Query(ge=0, alias="weekIndex"),
    day_index: int = Query(ge=0, le=6, alias="dayIndex"),
    db: Database = Depends(get_database),
):
    """Clear one cell."""
    _edit_or_raise(clear_cell, db, year, type, week_index, day_index)
    return {"ok": True}
