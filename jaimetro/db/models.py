from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all database models."""


class Chart(Base):
    """Yearly chart of week buckets for one type (day or night).

    Stores:
    - year / type: unique key of the chart
    - weeks: list of {"range": "YYYY-MM-DD to YYYY-MM-DD", "days": [7 strings]}

    Created lazily on first read; only ever mutated by single-cell edits and
    by reconciliation against the authoritative week layout.
    """

    __tablename__ = "charts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(8), nullable=False, index=True)
    weeks: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (UniqueConstraint("year", "type", name="uq_chart_year_type"),)

    def to_dict(self) -> dict:
        return {"year": self.year, "type": self.type, "weeks": self.weeks}


class DailyRecord(Base):
    """Numbers published for one business day.

    ``day`` and ``night`` each hold two slot values as strings.
    """

    __tablename__ = "daily_records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date: Mapped[str] = mapped_column(String(10), nullable=False, unique=True)
    day: Mapped[list] = mapped_column(JSON, nullable=False, default=lambda: ["", ""])
    night: Mapped[list] = mapped_column(JSON, nullable=False, default=lambda: ["", ""])
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    def to_dict(self) -> dict:
        return {"date": self.date, "day": list(self.day), "night": list(self.night)}


class Result(Base):
    """Latest announced result for a type (day or night)."""

    __tablename__ = "results"

    type: Mapped[str] = mapped_column(String(8), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
