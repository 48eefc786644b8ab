"""Repository functions for the latest result per type."""

from __future__ import annotations

import re

from loguru import logger

from jaimetro.db.models import Result
from jaimetro.db.session import Database

RESULT_TYPES = ("day", "night")

_DISALLOWED = re.compile(r"[^0-9\- ]")


def sanitize_result_value(value: str) -> str:
    """Keep digits, dashes and spaces, then trim."""
    return _DISALLOWED.sub("", value).strip()


def get_result(db: Database, result_type: str) -> str:
    """Return the stored value, "" when nothing was published yet."""
    with db.session() as session:
        result = session.get(Result, result_type)
        return result.value if result is not None else ""


def save_result(db: Database, result_type: str, value: str) -> str:
    """Upsert the value for a type and return what was stored."""
    with db.session() as session:
        result = session.get(Result, result_type)
        if result is None:
            result = Result(type=result_type, value=value)
            session.add(result)
        else:
            result.value = value
        logger.info(f"[RESULT] Saved result type={result_type}")
        return result.value
