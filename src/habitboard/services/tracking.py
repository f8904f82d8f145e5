"""Daily tracking, streak and badge aggregation for a user's habits.

Fetching happens here; the arithmetic lives in :mod:`.streaks` and
:mod:`.badges`. When the store cannot be read the functions fall back to
empty streaks rather than failing the request.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from ..domain.repositories import HabitRepository
from ..logging_config import get_logger
from ..models.habit import Habit, HabitLog
from .badges import (
    BadgeMilestone,
    NextBadge,
    badge_progress,
    badges_for_habits,
    earned_badges,
    next_badge,
)
from .errors import HabitNotFoundError
from .streaks import StreakResult, streaks_for_habits, to_day

logger = get_logger(__name__)


@dataclass(slots=True)
class HabitProgress:
    """Streak, badges and next milestone for one habit."""

    habit_id: int
    name: str
    icon: str
    streak: StreakResult
    badges: list[BadgeMilestone] = field(default_factory=list)
    next_badge: NextBadge | None = None
    progress: int = 0

    @classmethod
    def for_habit(cls, habit: Habit, streak: StreakResult) -> "HabitProgress":
        return cls(
            habit_id=habit.id,
            name=habit.name,
            icon=habit.icon,
            streak=streak,
            badges=earned_badges(streak),
            next_badge=next_badge(streak),
            progress=badge_progress(streak),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "habitId": self.habit_id,
            "name": self.name,
            "icon": self.icon,
            "currentStreak": self.streak.current,
            "longestStreak": self.streak.longest,
            "badges": [badge.to_dict() for badge in self.badges],
            "nextBadge": self.next_badge.to_dict() if self.next_badge else None,
            "progress": self.progress,
        }


@dataclass(slots=True)
class CompletionStats:
    """Dashboard summary over a trailing window of days."""

    total_habits: int
    streaks: dict[int, StreakResult]
    badges: dict[int, list[BadgeMilestone]]
    completion_rate: int
    completed: int
    total: int
    window_days: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalHabits": self.total_habits,
            "streaks": {str(habit_id): s.current for habit_id, s in self.streaks.items()},
            "longestStreaks": {str(habit_id): s.longest for habit_id, s in self.streaks.items()},
            "badges": {
                str(habit_id): [badge.to_dict() for badge in earned]
                for habit_id, earned in self.badges.items()
            },
            "completionRate": self.completion_rate,
            "window": {
                "days": self.window_days,
                "completed": self.completed,
                "total": self.total,
            },
        }


def record_completion(
    repo: HabitRepository,
    *,
    user_id: int,
    habit_id: int,
    day: date | str,
    completed: bool,
) -> tuple[HabitLog, bool]:
    """Mark a habit done (or not done) for a day. Returns (log, created)."""

    normalized = to_day(day)
    if normalized is None:
        raise ValueError("Date must be in YYYY-MM-DD format")
    if repo.get(habit_id, user_id=user_id) is None:
        raise HabitNotFoundError(habit_id)

    log, created = repo.upsert_log(
        habit_id=habit_id, day=normalized, completed=completed, user_id=user_id
    )
    logger.info(
        "Completion recorded",
        extra={
            "habit_id": habit_id,
            "user_id": user_id,
            "day": normalized.isoformat(),
            "completed": completed,
            "created": created,
        },
    )
    return log, created


def streaks_for_user(repo: HabitRepository, *, user_id: int, today: date) -> dict[int, StreakResult]:
    """Current/longest streak for each of the user's habits.

    Every habit maps to a zero streak when the logs cannot be loaded.
    """

    try:
        logs_by_habit = repo.completed_logs_by_habit(user_id=user_id)
    except SQLAlchemyError:
        logger.warning(
            "Could not load completion logs; reporting zero streaks",
            exc_info=True,
            extra={"user_id": user_id},
        )
        return {habit.id: StreakResult() for habit in repo.list_for_user(user_id=user_id)}
    return streaks_for_habits(logs_by_habit, today=today)


def progress_for_user(repo: HabitRepository, *, user_id: int, today: date) -> list[HabitProgress]:
    """One :class:`HabitProgress` per habit, oldest habit first."""

    habits = repo.list_for_user(user_id=user_id)
    streaks = streaks_for_user(repo, user_id=user_id, today=today)
    return [
        HabitProgress.for_habit(habit, streaks.get(habit.id, StreakResult()))
        for habit in habits
    ]


def _percent(part: int, whole: int) -> int:
    """Round-half-up percentage clamped to [0, 100]."""

    if whole <= 0:
        return 0
    return max(0, min(100, (200 * part + whole) // (2 * whole)))


def completion_stats(
    repo: HabitRepository,
    *,
    user_id: int,
    today: date,
    window_days: int = 30,
) -> CompletionStats:
    """Streaks, badges and the completion rate over the trailing window."""

    habits = repo.list_for_user(user_id=user_id)
    streaks = streaks_for_user(repo, user_id=user_id, today=today)
    for habit in habits:
        streaks.setdefault(habit.id, StreakResult())

    window_start = today - timedelta(days=window_days - 1)
    try:
        logs = repo.logs_between(window_start, today, user_id=user_id)
    except SQLAlchemyError:
        logger.warning(
            "Could not load logs for completion stats",
            exc_info=True,
            extra={"user_id": user_id},
        )
        logs = []

    completed = sum(1 for log in logs if log.completed)
    total = len(habits) * window_days
    return CompletionStats(
        total_habits=len(habits),
        streaks=streaks,
        badges=badges_for_habits(streaks),
        completion_rate=_percent(completed, total),
        completed=completed,
        total=total,
        window_days=window_days,
    )


__all__ = [
    "CompletionStats",
    "HabitProgress",
    "completion_stats",
    "progress_for_user",
    "record_completion",
    "streaks_for_user",
]
