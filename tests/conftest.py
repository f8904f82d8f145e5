"""Pytest configuration and shared fixtures for HabitBoard tests.

Provides an isolated database per test, factories for users, habits and logs,
and a Flask client whose notion of "today" is pinned to ``FIXED_TODAY``.
"""

from __future__ import annotations

import tempfile
from datetime import date
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from habitboard import create_app
from habitboard.infra.database import create_session_factory
from habitboard.models import Habit, HabitLog, User

FIXED_TODAY = date(2024, 3, 15)


@pytest.fixture(autouse=True)
def _isolated_data_dir(tmp_path, monkeypatch):
    """Keep log files and any SQLite file out of the working tree."""

    monkeypatch.setenv("HABITBOARD_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("HABITBOARD_DATABASE_URL", raising=False)


@pytest.fixture
def today() -> date:
    return FIXED_TODAY


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine with all tables created
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Session for arranging test data directly."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching what repositories and services expect."""
    return create_session_factory(db_engine)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def user_factory(db_session):
    def _create_user(name: str = "Tester", email: str = "tester@example.com") -> User:
        user = User(name=name, email=email, password_hash="dummy-hash")
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _create_user


@pytest.fixture
def user(user_factory) -> User:
    """Default owner for scoping data."""
    return user_factory()


@pytest.fixture
def habit_factory(db_session, user):
    """Factory for creating persisted habits.

    Returns:
        Callable: Function that creates and persists Habit instances
    """

    def _create_habit(name: str = "Test Habit", icon: str = "✅", owner: User | None = None) -> Habit:
        owner = owner or user
        habit = Habit(user_id=owner.id, name=name, icon=icon)
        db_session.add(habit)
        db_session.commit()
        db_session.refresh(habit)
        return habit

    return _create_habit


@pytest.fixture
def log_factory(db_session):
    """Factory for creating completion logs for an existing habit."""

    def _create_log(habit: Habit, day: date, completed: bool = True) -> HabitLog:
        log = HabitLog(habit_id=habit.id, user_id=habit.user_id, day=day, completed=completed)
        db_session.add(log)
        db_session.commit()
        db_session.refresh(log)
        return log

    return _create_log


# =============================================================================
# Flask Fixtures
# =============================================================================


@pytest.fixture
def app():
    app = create_app("testing")
    app.config["TODAY_PROVIDER"] = lambda: FIXED_TODAY
    yield app
    app.extensions["habitboard"]["engine"].dispose()


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def register(client):
    """POST a registration; keyword overrides change the payload."""

    def _register(*, name: str = "Ada", email: str = "ada@example.com", password: str = "Secret123"):
        return client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password},
        )

    return _register


@pytest.fixture
def auth_client(client, register):
    """Client logged in as a freshly registered user."""

    response = register()
    assert response.status_code == 201
    return client
