"""Streak computation over per-day completion records.

Everything here is a pure function of its inputs. Callers fetch the records
and decide what "today" is; nothing in this module reads the clock.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Hashable, TypeVar

from ..logging_config import get_logger

logger = get_logger(__name__)

# Upper bound on the backward walk of the current streak (two years).
MAX_STREAK_DAYS = 730

_DAY_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

K = TypeVar("K", bound=Hashable)


@dataclass(frozen=True, slots=True)
class StreakResult:
    """Current and longest streak for a single habit."""

    current: int = 0
    longest: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"current": self.current, "longest": self.longest}


def to_day(value: Any) -> date | None:
    """Normalize ``value`` to a calendar day.

    Accepts ``date``, ``datetime`` (time is dropped) and ``YYYY-MM-DD``
    strings. Anything else, including impossible dates such as
    ``2024-02-30``, yields ``None``.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not _DAY_KEY_RE.match(text):
            return None
        try:
            return date.fromisoformat(text)
        except ValueError:
            return None
    return None


def day_key(value: Any) -> str:
    """Return the canonical ``YYYY-MM-DD`` key for ``value``."""

    day = to_day(value)
    if day is None:
        raise ValueError(f"Not a calendar day: {value!r}")
    return day.isoformat()


def _require_today(today: Any) -> date:
    day = to_day(today)
    if day is None:
        raise ValueError(f"today must be a calendar day, got {today!r}")
    return day


def _normalize_days(days: Iterable[Any]) -> set[date]:
    normalized: set[date] = set()
    for raw in days:
        day = to_day(raw)
        if day is None:
            logger.debug("Skipping malformed day value: %r", raw)
            continue
        normalized.add(day)
    return normalized


def _record_fields(record: Any) -> tuple[Any, Any]:
    """Return (day, completed) from an ORM row, DTO or mapping."""

    if isinstance(record, Mapping):
        raw_day = record.get("day", record.get("date"))
        return raw_day, record.get("completed", False)
    raw_day = getattr(record, "day", None)
    if raw_day is None:
        raw_day = getattr(record, "date", None)
    return raw_day, getattr(record, "completed", False)


def completed_days(records: Iterable[Any]) -> set[date]:
    """Collect the days marked completed, skipping malformed records."""

    days: set[date] = set()
    for record in records:
        raw_day, completed = _record_fields(record)
        if not completed:
            continue
        day = to_day(raw_day)
        if day is None:
            logger.debug("Skipping completion record with malformed day: %r", raw_day)
            continue
        days.add(day)
    return days


def current_streak(days: Iterable[Any], *, today: Any) -> int:
    """Count consecutive completed days ending at ``today`` (inclusive).

    Returns 0 when ``today`` itself is not completed, even if yesterday was.
    The walk stops after ``MAX_STREAK_DAYS`` days.
    """

    completed = _normalize_days(days)
    cursor = _require_today(today)

    streak = 0
    while streak < MAX_STREAK_DAYS and cursor in completed:
        streak += 1
        try:
            cursor -= timedelta(days=1)
        except OverflowError:
            break
    return streak


def longest_streak(days: Iterable[Any]) -> int:
    """Return the longest run of consecutive calendar days anywhere in history."""

    ordered = sorted(_normalize_days(days))
    if not ordered:
        return 0

    longest = 0
    run = 1
    for previous, day in zip(ordered, ordered[1:]):
        if (day - previous).days == 1:
            run += 1
        else:
            longest = max(longest, run)
            run = 1
    # The final run is never flushed inside the loop.
    return max(longest, run)


def compute_streaks(records: Iterable[Any], *, today: Any) -> StreakResult:
    """Return the current and longest streak for one habit's records."""

    days = completed_days(records)
    return StreakResult(
        current=current_streak(days, today=today),
        longest=longest_streak(days),
    )


def streaks_for_habits(
    records_by_habit: Mapping[K, Iterable[Any]], *, today: Any
) -> dict[K, StreakResult]:
    """Compute streaks independently for every habit in the mapping."""

    reference = _require_today(today)
    return {
        habit_id: compute_streaks(records, today=reference)
        for habit_id, records in records_by_habit.items()
    }


__all__ = [
    "MAX_STREAK_DAYS",
    "StreakResult",
    "completed_days",
    "compute_streaks",
    "current_streak",
    "day_key",
    "longest_streak",
    "streaks_for_habits",
    "to_day",
]
