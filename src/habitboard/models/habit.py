"""Habit and daily completion log tables."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Habit(SQLModel, table=True):
    """A user-defined habit tracked once per calendar day."""

    __tablename__: ClassVar[str] = "habit"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=100, index=True)
    icon: str = Field(nullable=False, max_length=10)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "icon": self.icon,
            "createdAt": self.created_at.isoformat(),
        }


class HabitLog(SQLModel, table=True):
    """Completion record for one habit on one calendar day.

    At most one row exists per (habit, day); rewriting the same day replaces
    ``completed``.
    """

    __tablename__: ClassVar[str] = "habit_log"

    habit_id: int = Field(foreign_key="habit.id", primary_key=True)
    day: date = Field(primary_key=True, index=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    completed: bool = Field(default=False, nullable=False)
    updated_at: datetime = Field(default_factory=_utcnow, nullable=False)

    def to_dict(self) -> dict:
        return {
            "habitId": self.habit_id,
            "userId": self.user_id,
            "date": self.day.isoformat(),
            "completed": self.completed,
            "updatedAt": self.updated_at.isoformat(),
        }


# Starter habits created for every new account.
DEFAULT_HABITS: tuple[dict[str, str], ...] = (
    {"name": "Wake up early", "icon": "🌅"},
    {"name": "No snoozing", "icon": "⏰"},
    {"name": "Drink water", "icon": "💧"},
    {"name": "Gym", "icon": "💪"},
    {"name": "Stretching", "icon": "🧘"},
    {"name": "Reading", "icon": "📚"},
    {"name": "Meditation", "icon": "🧘‍♂️"},
    {"name": "Study", "icon": "📖"},
    {"name": "Skincare", "icon": "✨"},
    {"name": "Limit social media", "icon": "📱"},
    {"name": "No alcohol", "icon": "🚫"},
    {"name": "Track expenses", "icon": "💰"},
)
