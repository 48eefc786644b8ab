"""Chart reconciliation.

Brings a stored chart document in line with the authoritative week layout
from ``build_year_rows`` without discarding entered values.

Weeks are matched by position, not by range label. Labels are always
refreshed from the authoritative list. If a change to the week algorithm ever
shifts bucket boundaries, values stay at their old index and may end up under
a different label; this is a known limitation.

Pure function: no database access.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from loguru import logger

from jaimetro.charts.weeks import DAYS_PER_WEEK, WeekBucket


@dataclass(frozen=True)
class ReconcileResult:
    """Outcome of reconciling one stored chart.

    Attributes:
        weeks: Normalized week buckets
        changed: True when the stored document must be rewritten
        created: True when there was no stored document
    """

    weeks: list[WeekBucket]
    changed: bool
    created: bool = False


def _stored_weeks(stored: Mapping[str, Any] | Sequence[Any]) -> list[Any]:
    weeks = stored.get("weeks") if isinstance(stored, Mapping) else stored
    if isinstance(weeks, list):
        return weeks
    return []


def _days_of(week: Any) -> Any:
    if isinstance(week, Mapping):
        return week.get("days")
    return None


def _range_of(week: Any) -> Any:
    if isinstance(week, Mapping):
        return week.get("range")
    return None


def _normalize_days(days: Any) -> tuple[list[str], bool]:
    """Return seven string cells and whether the stored days needed repair."""
    if not isinstance(days, list):
        return [""] * DAYS_PER_WEEK, True

    normalized = []
    repaired = len(days) != DAYS_PER_WEEK
    for j in range(DAYS_PER_WEEK):
        value = days[j] if j < len(days) else None
        if isinstance(value, str):
            normalized.append(value)
        else:
            normalized.append("")
            repaired = True
    return normalized, repaired


def reconcile(
    stored: Mapping[str, Any] | Sequence[Any] | None,
    authoritative: Sequence[WeekBucket],
) -> ReconcileResult:
    """Normalize a stored chart against the authoritative week list.

    Args:
        stored: Stored chart document (``{"weeks": [...]}``) or its week list,
            None when no chart exists yet
        authoritative: Week buckets from ``build_year_rows``

    Returns:
        ReconcileResult with the normalized weeks and the changed flag
    """
    if stored is None:
        weeks = [{"range": w["range"], "days": list(w["days"])} for w in authoritative]
        return ReconcileResult(weeks=weeks, changed=True, created=True)

    stored_weeks = _stored_weeks(stored)
    changed = len(stored_weeks) != len(authoritative)

    weeks: list[WeekBucket] = []
    for i, target in enumerate(authoritative):
        source = stored_weeks[i] if i < len(stored_weeks) else None
        days, repaired = _normalize_days(_days_of(source))
        if repaired or _range_of(source) != target["range"]:
            changed = True
        weeks.append({"range": target["range"], "days": days})

    if changed:
        logger.debug(f"Chart reconciled: stored_weeks={len(stored_weeks)} authoritative_weeks={len(authoritative)}")

    return ReconcileResult(weeks=weeks, changed=changed)
