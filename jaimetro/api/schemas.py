"""Request bodies for the JSON API.

Field names follow the camelCase the browser client sends.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

ChartType = Literal["day", "night"]
DailySlot = Literal["day1", "day2", "night1", "night2"]


class LoginRequest(BaseModel):
    username: StrictStr
    password: StrictStr


class CellPatchRequest(BaseModel):
    """Single chart cell edit."""

    model_config = ConfigDict(populate_by_name=True)

    year: StrictInt = Field(ge=1, le=9999)
    type: ChartType
    week_index: StrictInt = Field(ge=0, alias="weekIndex")
    day_index: StrictInt = Field(ge=0, le=6, alias="dayIndex")
    value: StrictStr


class DailyPatchRequest(BaseModel):
    """Daily slot edit. An empty value clears the slot."""

    date: StrictStr | None = None
    slot: DailySlot
    value: StrictStr


class ResultRequest(BaseModel):
    type: ChartType
    value: StrictStr
