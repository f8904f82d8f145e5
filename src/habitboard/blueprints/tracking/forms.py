"""Tracking payloads: daily log toggles and date-range queries."""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from pydantic import Field, StrictBool, field_validator, model_validator

from ...services.streaks import to_day
from ..forms import FormModel

_DATE_MESSAGE = "Date must be in YYYY-MM-DD format"


def _parse_day(value: Any) -> Any:
    if value is None or isinstance(value, date):
        return value
    day = to_day(value)
    if day is None:
        raise ValueError(_DATE_MESSAGE)
    return day


class LogForm(FormModel):
    """Mark a habit completed or not for one calendar day."""

    habit_id: int = Field(alias="habitId", ge=1)
    day: date = Field(alias="date")
    completed: StrictBool

    @field_validator("day", mode="before")
    @classmethod
    def parse_day(cls, value: Any) -> Any:
        return _parse_day(value)


class LogRangeQuery(FormModel):
    """Optional ``startDate``/``endDate`` query parameters."""

    start: Optional[date] = Field(default=None, alias="startDate")
    end: Optional[date] = Field(default=None, alias="endDate")

    @field_validator("start", "end", mode="before")
    @classmethod
    def parse_days(cls, value: Any) -> Any:
        if value == "":
            return None
        return _parse_day(value)

    @model_validator(mode="after")
    def ensure_order(self) -> "LogRangeQuery":
        if self.start and self.end and self.start > self.end:
            raise ValueError("startDate must not be after endDate")
        return self


__all__ = ["LogForm", "LogRangeQuery"]
