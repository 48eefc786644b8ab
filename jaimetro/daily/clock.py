"""Business-day clock.

Numbers are published at fixed local times, so "today's" record is keyed by
a business date rather than the UTC calendar date. The current instant is
shifted by a fixed offset (IST, +05:30, by default); before the rollover hour
the previous day's key is returned so early requests still see the last
complete day.

The rollover hour is 1 AM local. Older notes mention a noon rollover; that
variant is not implemented, set BUSINESS_DAY_ROLLOVER_HOUR=12 to get it.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone

DEFAULT_UTC_OFFSET = timedelta(hours=5, minutes=30)
DEFAULT_ROLLOVER_HOUR = 1

_DATE_KEY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def business_date(
    now: datetime | None = None,
    *,
    utc_offset: timedelta = DEFAULT_UTC_OFFSET,
    rollover_hour: int = DEFAULT_ROLLOVER_HOUR,
) -> date:
    """Return the business date for an instant.

    Args:
        now: Instant to evaluate; naive values are taken as UTC. Defaults to now.
        utc_offset: Fixed offset of the publishing location
        rollover_hour: Local hour (0-23) at which the date advances

    Returns:
        Business date
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    local = now.astimezone(timezone.utc) + utc_offset
    if local.hour < rollover_hour:
        return local.date() - timedelta(days=1)
    return local.date()


def current_business_date(
    now: datetime | None = None,
    *,
    utc_offset: timedelta = DEFAULT_UTC_OFFSET,
    rollover_hour: int = DEFAULT_ROLLOVER_HOUR,
) -> str:
    """Return the business date key as ``YYYY-MM-DD``."""
    return business_date(now, utc_offset=utc_offset, rollover_hour=rollover_hour).isoformat()


def parse_date_key(value: str) -> str:
    """Validate a ``YYYY-MM-DD`` key and return it zero-padded.

    Raises:
        ValueError: If the value is not a valid calendar date in that form
    """
    text = value.strip()
    if not _DATE_KEY.match(text):
        raise ValueError(f"Expected YYYY-MM-DD, got {value!r}")
    return date.fromisoformat(text).isoformat()


def business_date_for(
    value: str | None,
    now: datetime | None = None,
    *,
    utc_offset: timedelta = DEFAULT_UTC_OFFSET,
    rollover_hour: int = DEFAULT_ROLLOVER_HOUR,
) -> str:
    """Use an explicit date key when given, else the current business date."""
    if value:
        return parse_date_key(value)
    return current_business_date(now, utc_offset=utc_offset, rollover_hour=rollover_hour)
