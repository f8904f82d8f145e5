"""Domain errors raised by services and translated by the blueprints."""

from __future__ import annotations


class HabitBoardError(ValueError):
    """Base class for expected, user-facing failures."""


class HabitNotFoundError(HabitBoardError):
    """The habit does not exist or belongs to another user."""

    def __init__(self, habit_id: int) -> None:
        super().__init__("Habit not found or you do not have permission to access it")
        self.habit_id = habit_id


class DuplicateHabitError(HabitBoardError):
    """The user already has a habit with this name."""


class DuplicateUserError(HabitBoardError):
    """An account with this email already exists."""
