"""Tests for tracking workflows: recording completions and aggregating progress."""

from __future__ import annotations

from datetime import date, timedelta

import pytest
from sqlalchemy.exc import OperationalError

from habitboard.infra.repositories import SQLModelHabitRepository
from habitboard.services import tracking
from habitboard.services.errors import HabitNotFoundError
from habitboard.services.streaks import StreakResult

T = date(2024, 3, 15)


class _UnreachableLogsRepository(SQLModelHabitRepository):
    """Habits load fine but every log query fails."""

    def completed_logs_by_habit(self, *, user_id):
        raise OperationalError("SELECT habit_log", {}, Exception("database is locked"))

    def logs_between(self, start, end, *, user_id):
        raise OperationalError("SELECT habit_log", {}, Exception("database is locked"))


class TestRecordCompletion:
    def test_creates_then_updates(self, session_factory, habit_factory):
        habit = habit_factory()
        repo = SQLModelHabitRepository(session_factory)

        _, created = tracking.record_completion(
            repo, user_id=habit.user_id, habit_id=habit.id, day="2024-03-15", completed=True
        )
        log, created_again = tracking.record_completion(
            repo, user_id=habit.user_id, habit_id=habit.id, day=T, completed=False
        )

        assert created is True
        assert created_again is False
        assert log.day == T
        assert log.completed is False

    def test_unknown_habit_raises(self, session_factory, user):
        repo = SQLModelHabitRepository(session_factory)

        with pytest.raises(HabitNotFoundError):
            tracking.record_completion(repo, user_id=user.id, habit_id=42, day=T, completed=True)

    def test_foreign_habit_raises(self, session_factory, habit_factory, user_factory):
        habit = habit_factory()
        intruder = user_factory(name="Mallory", email="mallory@example.com")
        repo = SQLModelHabitRepository(session_factory)

        with pytest.raises(HabitNotFoundError):
            tracking.record_completion(
                repo, user_id=intruder.id, habit_id=habit.id, day=T, completed=True
            )

    def test_invalid_day_raises(self, session_factory, habit_factory):
        habit = habit_factory()
        repo = SQLModelHabitRepository(session_factory)

        with pytest.raises(ValueError, match="YYYY-MM-DD"):
            tracking.record_completion(
                repo, user_id=habit.user_id, habit_id=habit.id, day="2024-02-30", completed=True
            )


class TestProgress:
    def test_progress_per_habit(self, session_factory, habit_factory, log_factory):
        reading = habit_factory(name="Reading")
        gym = habit_factory(name="Gym")
        for offset in range(3):
            log_factory(reading, T - timedelta(days=offset))
        repo = SQLModelHabitRepository(session_factory)

        progress = tracking.progress_for_user(repo, user_id=reading.user_id, today=T)

        assert [item.habit_id for item in progress] == [reading.id, gym.id]
        first, second = progress
        assert first.streak == StreakResult(current=3, longest=3)
        assert [badge.name for badge in first.badges] == ["3-Day Warrior"]
        assert first.next_badge.milestone.name == "Week Champion"
        assert first.next_badge.days_remaining == 4
        assert first.progress == 0
        assert second.streak == StreakResult()
        assert second.badges == []
        assert second.next_badge.days_remaining == 3

    def test_progress_to_dict(self, session_factory, habit_factory, log_factory):
        habit = habit_factory(name="Reading", icon="📚")
        log_factory(habit, T)
        repo = SQLModelHabitRepository(session_factory)

        (item,) = tracking.progress_for_user(repo, user_id=habit.user_id, today=T)
        payload = item.to_dict()

        assert payload["habitId"] == habit.id
        assert payload["icon"] == "📚"
        assert payload["currentStreak"] == 1
        assert payload["longestStreak"] == 1
        assert payload["badges"] == []
        assert payload["nextBadge"]["daysRemaining"] == 2
        assert payload["progress"] == 33

    def test_streaks_for_user(self, session_factory, habit_factory, log_factory):
        habit = habit_factory()
        log_factory(habit, T - timedelta(days=1))
        log_factory(habit, T - timedelta(days=2))
        repo = SQLModelHabitRepository(session_factory)

        streaks = tracking.streaks_for_user(repo, user_id=habit.user_id, today=T)

        assert streaks == {habit.id: StreakResult(current=0, longest=2)}


class TestCompletionStats:
    def test_rate_over_window(self, session_factory, habit_factory, log_factory):
        reading = habit_factory(name="Reading")
        gym = habit_factory(name="Gym")
        for offset in range(3):
            log_factory(reading, T - timedelta(days=offset))
        log_factory(gym, T)
        log_factory(gym, T - timedelta(days=4))
        log_factory(gym, T - timedelta(days=1), completed=False)
        log_factory(gym, T - timedelta(days=10))  # outside a 10-day window
        repo = SQLModelHabitRepository(session_factory)

        stats = tracking.completion_stats(repo, user_id=reading.user_id, today=T, window_days=10)

        assert stats.total_habits == 2
        assert stats.completed == 5
        assert stats.total == 20
        assert stats.completion_rate == 25
        assert stats.streaks[reading.id] == StreakResult(3, 3)
        assert [badge.name for badge in stats.badges[reading.id]] == ["3-Day Warrior"]
        assert stats.badges[gym.id] == []

    def test_rate_rounds_half_up(self, session_factory, habit_factory, log_factory):
        habit = habit_factory(name="Reading")
        habit_factory(name="Gym")
        log_factory(habit, T)
        repo = SQLModelHabitRepository(session_factory)

        stats = tracking.completion_stats(repo, user_id=habit.user_id, today=T, window_days=4)

        # 1 of 8 possible completions = 12.5%
        assert stats.completion_rate == 13

    def test_no_habits(self, session_factory, user):
        repo = SQLModelHabitRepository(session_factory)

        stats = tracking.completion_stats(repo, user_id=user.id, today=T)

        assert stats.total_habits == 0
        assert stats.completion_rate == 0
        assert stats.to_dict()["window"] == {"days": 30, "completed": 0, "total": 0}

    def test_to_dict_uses_string_keys(self, session_factory, habit_factory, log_factory):
        habit = habit_factory()
        log_factory(habit, T)
        repo = SQLModelHabitRepository(session_factory)

        payload = tracking.completion_stats(repo, user_id=habit.user_id, today=T).to_dict()

        assert payload["streaks"] == {str(habit.id): 1}
        assert payload["longestStreaks"] == {str(habit.id): 1}
        assert payload["badges"] == {str(habit.id): []}


class TestStorageFailures:
    def test_streaks_fall_back_to_zero_per_habit(self, session_factory, habit_factory, caplog):
        reading = habit_factory(name="Reading")
        gym = habit_factory(name="Gym")
        repo = _UnreachableLogsRepository(session_factory)

        streaks = tracking.streaks_for_user(repo, user_id=reading.user_id, today=T)

        assert streaks == {reading.id: StreakResult(0, 0), gym.id: StreakResult(0, 0)}
        assert "zero streaks" in caplog.text

    def test_progress_defaults_to_zero(self, session_factory, habit_factory):
        habit = habit_factory()
        repo = _UnreachableLogsRepository(session_factory)

        (item,) = tracking.progress_for_user(repo, user_id=habit.user_id, today=T)

        assert item.streak == StreakResult(0, 0)
        assert item.badges == []

    def test_stats_default_to_zero(self, session_factory, habit_factory):
        habit = habit_factory()
        repo = _UnreachableLogsRepository(session_factory)

        stats = tracking.completion_stats(repo, user_id=habit.user_id, today=T)

        assert stats.total_habits == 1
        assert stats.streaks == {habit.id: StreakResult()}
        assert stats.completion_rate == 0
