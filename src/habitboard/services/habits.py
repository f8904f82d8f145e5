"""Habit management: creation, deletion and starter habits."""

from __future__ import annotations

from ..domain.repositories import HabitRepository
from ..logging_config import get_logger
from ..models.habit import DEFAULT_HABITS, Habit
from .errors import DuplicateHabitError, HabitNotFoundError

logger = get_logger(__name__)


def create_habit(repo: HabitRepository, *, user_id: int, name: str, icon: str) -> Habit:
    """Create a habit, rejecting names the user already has (case-insensitive)."""

    name = name.strip()
    if repo.get_by_name(name, user_id=user_id) is not None:
        raise DuplicateHabitError("You already have a habit with this name")
    habit = repo.create(Habit(name=name, icon=icon.strip(), user_id=user_id), user_id=user_id)
    logger.info("Habit created", extra={"habit_id": habit.id, "user_id": user_id})
    return habit


def delete_habit(repo: HabitRepository, *, user_id: int, habit_id: int) -> None:
    """Delete a habit and every completion log attached to it."""

    if not repo.delete(habit_id, user_id=user_id):
        raise HabitNotFoundError(habit_id)
    logger.info("Habit deleted", extra={"habit_id": habit_id, "user_id": user_id})


def seed_default_habits(repo: HabitRepository, *, user_id: int) -> list[Habit]:
    """Give a new account the starter habit list."""

    return [
        repo.create(Habit(name=item["name"], icon=item["icon"], user_id=user_id), user_id=user_id)
        for item in DEFAULT_HABITS
    ]


__all__ = ["create_habit", "delete_habit", "seed_default_habits"]
