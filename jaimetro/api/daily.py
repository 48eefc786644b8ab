"""Daily numbers endpoints."""

from __future__ import annotations

from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from loguru import logger

from jaimetro.api.dependencies.auth import is_admin, require_admin
from jaimetro.api.dependencies.db import get_database, get_settings
from jaimetro.api.schemas import DailyPatchRequest
from jaimetro.config.settings import Settings
from jaimetro.core.errors import StorageError
from jaimetro.daily.clock import business_date_for
from jaimetro.daily.repository import SLOT_LABELS, empty_record, load_daily, sanitize_daily_value, set_slot
from jaimetro.db.session import Database

router = APIRouter(prefix="/api/daily", tags=["daily"])


def _resolve_date(value: str | None, settings: Settings) -> str:
    """Explicit date key or the current business date.

    Raises:
        HTTPException: 400 if an explicit date is malformed
    """
    try:
        return business_date_for(
            value,
            utc_offset=timedelta(minutes=settings.business_day_utc_offset_minutes),
            rollover_hour=settings.business_day_rollover_hour,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Bad date") from e


@router.get("")
def get_daily(
    response: Response,
    date: str | None = Query(default=None),
    admin: bool = Depends(is_admin),
    db: Database = Depends(get_database),
    settings: Settings = Depends(get_settings),
):
    """Get the record for a date, defaulting to the current business date."""
    response.headers["Cache-Control"] = "no-store"
    date_key = _resolve_date(date, settings)

    try:
        record = load_daily(db, date_key)
        ephemeral = False
    except StorageError as e:
        logger.warning(f"[DAILY] Storage unavailable, serving empty record date={date_key}: {e}")
        record = empty_record(date_key)
        ephemeral = True

    payload = {"ok": True, "data": {**record, "isAdmin": admin, "slots": SLOT_LABELS}}
    if ephemeral:
        payload["ephemeral"] = True
    return payload


@router.patch("", dependencies=[Depends(require_admin)])
def patch_daily(
    body: DailyPatchRequest,
    db: Database = Depends(get_database),
    settings: Settings = Depends(get_settings),
):
    """Save one slot of a daily record."""
    date_key = _resolve_date(body.date, settings)
    value = sanitize_daily_value(body.value)

    try:
        record = set_slot(db, date_key, body.slot, value)
    except StorageError as e:
        logger.error(f"[DAILY] Slot write failed date={date_key} slot={body.slot}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Storage unavailable") from e

    return {"ok": True, "data": record}
