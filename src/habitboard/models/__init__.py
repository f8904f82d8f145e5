"""SQLModel table exports."""

from .habit import DEFAULT_HABITS, Habit, HabitLog
from .user import User

__all__ = [
    "DEFAULT_HABITS",
    "Habit",
    "HabitLog",
    "User",
]
