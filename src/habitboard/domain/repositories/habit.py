"""Habit repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ...models.habit import Habit, HabitLog


class HabitRepository(Protocol):
    """Persistence contract for habits and their daily logs."""

    def list_for_user(self, *, user_id: int) -> list[Habit]:
        """List a user's habits, oldest first."""
        ...

    def get(self, habit_id: int, *, user_id: int) -> Optional[Habit]:
        """Retrieve a habit owned by the user."""
        ...

    def get_by_name(self, name: str, *, user_id: int) -> Optional[Habit]:
        """Retrieve a habit by name, ignoring case."""
        ...

    def create(self, habit: Habit, *, user_id: int) -> Habit:
        ...

    def delete(self, habit_id: int, *, user_id: int) -> bool:
        """Delete a habit and all of its logs. Returns False when not found."""
        ...

    def upsert_log(
        self, *, habit_id: int, day: date, completed: bool, user_id: int
    ) -> tuple[HabitLog, bool]:
        """Insert or overwrite the log for (habit, day). Returns (log, created)."""
        ...

    def logs_between(self, start: date, end: date, *, user_id: int) -> list[HabitLog]:
        """All of a user's logs within [start, end], newest first."""
        ...

    def completed_logs_by_habit(self, *, user_id: int) -> dict[int, list[HabitLog]]:
        """Completed logs for every habit of the user, keyed by habit id."""
        ...
