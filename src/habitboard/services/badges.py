"""Milestone badges derived from the current streak.

Badges are never stored. They are recomputed from the streak on every call,
so a habit whose streak resets loses the badges it had.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Hashable, TypeVar, Union

from .streaks import StreakResult

K = TypeVar("K", bound=Hashable)
StreakLike = Union[int, StreakResult]


@dataclass(frozen=True, slots=True)
class BadgeMilestone:
    """A named streak threshold, in days."""

    days: int
    name: str
    icon: str
    description: str

    def to_dict(self) -> dict:
        return {
            "days": self.days,
            "name": self.name,
            "icon": self.icon,
            "description": self.description,
        }


@dataclass(frozen=True, slots=True)
class NextBadge:
    """The closest unmet milestone and how far away it is."""

    milestone: BadgeMilestone
    days_remaining: int

    def to_dict(self) -> dict:
        payload = self.milestone.to_dict()
        payload["daysRemaining"] = self.days_remaining
        return payload


# Ordered by ascending threshold.
BADGE_MILESTONES: tuple[BadgeMilestone, ...] = (
    BadgeMilestone(3, "3-Day Warrior", "🔥", "Completed 3 days in a row"),
    BadgeMilestone(7, "Week Champion", "⭐", "Completed 7 days in a row"),
    BadgeMilestone(14, "Two-Week Hero", "💎", "Completed 14 days in a row"),
    BadgeMilestone(21, "21-Day Master", "👑", "Completed 21 days in a row"),
    BadgeMilestone(30, "Month Legend", "🏆", "Completed 30 days in a row"),
    BadgeMilestone(90, "Quarter King", "🎖️", "Completed 90 days in a row"),
    BadgeMilestone(180, "Half-Year Titan", "🌟", "Completed 180 days in a row"),
    BadgeMilestone(365, "Year Conqueror", "👑", "Completed 365 days in a row"),
)


def _streak_days(streak: StreakLike) -> int:
    value = streak.current if isinstance(streak, StreakResult) else int(streak)
    return max(value, 0)


def earned_badges(streak: StreakLike) -> list[BadgeMilestone]:
    """Return every milestone whose threshold the streak meets (>=)."""

    days = _streak_days(streak)
    return [milestone for milestone in BADGE_MILESTONES if days >= milestone.days]


def next_badge(streak: StreakLike) -> NextBadge | None:
    """Return the lowest milestone above the streak, or None when all are earned."""

    days = _streak_days(streak)
    for milestone in BADGE_MILESTONES:
        if days < milestone.days:
            return NextBadge(milestone=milestone, days_remaining=milestone.days - days)
    return None


def badge_progress(streak: StreakLike) -> int:
    """Percent progress from the last met threshold towards the next one."""

    days = _streak_days(streak)
    upcoming = next_badge(days)
    if upcoming is None:
        return 100

    met = max((m.days for m in BADGE_MILESTONES if m.days <= days), default=0)
    span = upcoming.milestone.days - met
    return (100 * (days - met)) // span


def badges_for_habits(streaks: Mapping[K, StreakLike]) -> dict[K, list[BadgeMilestone]]:
    """Map each habit to its own earned badges."""

    return {habit_id: earned_badges(streak) for habit_id, streak in streaks.items()}


def next_badges_for_habits(streaks: Mapping[K, StreakLike]) -> dict[K, NextBadge | None]:
    return {habit_id: next_badge(streak) for habit_id, streak in streaks.items()}


__all__ = [
    "BADGE_MILESTONES",
    "BadgeMilestone",
    "NextBadge",
    "badge_progress",
    "badges_for_habits",
    "earned_badges",
    "next_badge",
    "next_badges_for_habits",
]
