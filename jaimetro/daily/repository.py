"""Repository functions for daily records."""

from __future__ import annotations

import re

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from jaimetro.db.models import DailyRecord
from jaimetro.db.session import Database

# slot name -> (field, position)
SLOTS: dict[str, tuple[str, int]] = {
    "day1": ("day", 0),
    "day2": ("day", 1),
    "night1": ("night", 0),
    "night2": ("night", 1),
}

# Published times shown next to each slot
SLOT_LABELS = {
    "day": ["11:00:00 AM", "12:00:00 PM"],
    "night": ["06:30:00 PM", "07:30:00 PM"],
}

MAX_VALUE_LEN = 40
_DISALLOWED = re.compile(r"[^0-9*#@/\-\s]")


def sanitize_daily_value(value: str) -> str:
    """Keep digits, whitespace, ``/``, ``-`` and ``* # @``; trim; cap the length."""
    return _DISALLOWED.sub("", value).strip()[:MAX_VALUE_LEN]


def empty_record(date_key: str) -> dict:
    return {"date": date_key, "day": ["", ""], "night": ["", ""]}


def _pair(values: list | None) -> list[str]:
    values = list(values or [])
    values = [v if isinstance(v, str) else "" for v in values[:2]]
    return values + [""] * (2 - len(values))


def _get_or_create(session: Session, date_key: str) -> DailyRecord:
    record = session.execute(select(DailyRecord).where(DailyRecord.date == date_key)).scalar_one_or_none()
    if record is None:
        record = DailyRecord(date=date_key, day=["", ""], night=["", ""])
        session.add(record)
        logger.info(f"[DAILY] Created daily record date={date_key}")
    return record


def load_daily(db: Database, date_key: str) -> dict:
    """Get the daily record for a business date, creating it if missing.

    Raises:
        StorageError: If the database read or write fails
    """
    with db.session() as session:
        record = _get_or_create(session, date_key)
        return {"date": record.date, "day": _pair(record.day), "night": _pair(record.night)}


def set_slot(db: Database, date_key: str, slot: str, value: str) -> dict:
    """Store a value in one slot of the daily record.

    Args:
        db: Connected database
        date_key: Business date ``YYYY-MM-DD``
        slot: One of day1, day2, night1, night2
        value: Already sanitized value; "" clears the slot

    Returns:
        The updated record as a dict

    Raises:
        KeyError: If the slot name is unknown
        StorageError: If the database read or write fails
    """
    field, position = SLOTS[slot]

    with db.session() as session:
        record = _get_or_create(session, date_key)
        values = _pair(getattr(record, field))
        values[position] = value
        setattr(record, field, values)
        logger.info(f"[DAILY] Slot saved date={date_key} slot={slot}")
        return {"date": record.date, "day": _pair(record.day), "night": _pair(record.night)}
