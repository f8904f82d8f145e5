"""SQLModel implementation of the habit repository."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from ...logging_config import get_logger
from ...models.habit import Habit, HabitLog
from ..database import SessionFactory

logger = get_logger(__name__)


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation.

    Every query is scoped by ``user_id``; rows are expunged before returning
    so callers can use them after the session closes.
    """

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def list_for_user(self, *, user_id: int) -> list[Habit]:
        with self.session_factory() as session:
            statement = (
                select(Habit)
                .where(Habit.user_id == user_id)
                .order_by(Habit.created_at, Habit.id)  # type: ignore[arg-type]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def get(self, habit_id: int, *, user_id: int) -> Optional[Habit]:
        with self.session_factory() as session:
            obj = session.exec(
                select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def get_by_name(self, name: str, *, user_id: int) -> Optional[Habit]:
        with self.session_factory() as session:
            statement = select(Habit).where(
                Habit.user_id == user_id,
                func.lower(Habit.name) == name.strip().lower(),
            )
            obj = session.exec(statement).first()
            if obj:
                session.expunge(obj)
            return obj

    def create(self, habit: Habit, *, user_id: int) -> Habit:
        with self.session_factory() as session:
            habit.user_id = user_id
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def delete(self, habit_id: int, *, user_id: int) -> bool:
        """Delete a habit together with all of its logs."""
        with self.session_factory() as session:
            habit = session.exec(
                select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if habit is None:
                return False

            logs = session.exec(select(HabitLog).where(HabitLog.habit_id == habit_id)).all()
            for log in logs:
                session.delete(log)
            session.delete(habit)
            session.commit()
            return True

    def upsert_log(
        self, *, habit_id: int, day: date, completed: bool, user_id: int
    ) -> tuple[HabitLog, bool]:
        """Insert or overwrite the log for (habit, day); last write wins.

        A concurrent writer may insert the same (habit, day) between our read
        and our insert. The unique key rejects our row and we overwrite theirs.
        """
        with self.session_factory() as session:
            existing = self._find_log(session, habit_id=habit_id, day=day, user_id=user_id)

            if existing is None:
                log = HabitLog(habit_id=habit_id, day=day, completed=completed, user_id=user_id)
                session.add(log)
                try:
                    session.commit()
                except IntegrityError:
                    session.rollback()
                    logger.info(
                        "Log inserted concurrently; overwriting",
                        extra={"habit_id": habit_id, "day": day.isoformat()},
                    )
                    existing = self._find_log(
                        session, habit_id=habit_id, day=day, user_id=user_id
                    )
                    if existing is None:
                        raise
                else:
                    session.refresh(log)
                    session.expunge(log)
                    return log, True

            existing.completed = completed
            existing.updated_at = datetime.now(timezone.utc)
            session.add(existing)
            session.commit()
            session.refresh(existing)
            session.expunge(existing)
            return existing, False

    @staticmethod
    def _find_log(session, *, habit_id: int, day: date, user_id: int) -> Optional[HabitLog]:
        return session.exec(
            select(HabitLog)
            .where(HabitLog.user_id == user_id)
            .where(HabitLog.habit_id == habit_id)
            .where(HabitLog.day == day)
        ).first()

    def logs_between(self, start: date, end: date, *, user_id: int) -> list[HabitLog]:
        with self.session_factory() as session:
            statement = (
                select(HabitLog)
                .where(HabitLog.user_id == user_id)
                .where(HabitLog.day >= start)
                .where(HabitLog.day <= end)
                .order_by(HabitLog.day.desc(), HabitLog.habit_id)  # type: ignore[attr-defined]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def completed_logs_by_habit(self, *, user_id: int) -> dict[int, list[HabitLog]]:
        """Completed logs for every habit of the user; habits without logs map to []."""
        with self.session_factory() as session:
            habit_ids = session.exec(select(Habit.id).where(Habit.user_id == user_id)).all()
            grouped: dict[int, list[HabitLog]] = {habit_id: [] for habit_id in habit_ids}

            statement = (
                select(HabitLog)
                .where(HabitLog.user_id == user_id)
                .where(HabitLog.completed == True)  # noqa: E712 - SQLAlchemy comparison
                .order_by(HabitLog.day)  # type: ignore[arg-type]
            )
            for log in session.exec(statement).all():
                grouped.setdefault(log.habit_id, []).append(log)
            session.expunge_all()
            return grouped
