"""Database wiring for the Flask application."""

from __future__ import annotations

from flask import Flask, current_app

from .config import BaseConfig
from .infra.database import SessionFactory, create_db_engine, create_session_factory, init_database
from .infra.repositories import SQLModelHabitRepository

_EXTENSION_KEY = "habitboard"


def init_db(app: Flask) -> None:
    """Create the engine, ensure the schema exists and attach a session factory."""

    config: BaseConfig = app.config["HABITBOARD_CONFIG"]
    engine = create_db_engine(config)
    init_database(engine)
    # TODO(@habitboard): replace create_all with Alembic migrations before the first schema change.
    app.extensions[_EXTENSION_KEY] = {
        "engine": engine,
        "session_factory": create_session_factory(engine),
    }


def get_engine():
    """Return the engine bound to the current app."""

    try:
        return current_app.extensions[_EXTENSION_KEY]["engine"]
    except KeyError as exc:  # pragma: no cover - misconfigured app
        raise RuntimeError("Database engine not initialized") from exc


def get_session_factory() -> SessionFactory:
    try:
        return current_app.extensions[_EXTENSION_KEY]["session_factory"]
    except KeyError as exc:  # pragma: no cover - misconfigured app
        raise RuntimeError("Database engine not initialized") from exc


def get_habit_repository() -> SQLModelHabitRepository:
    return SQLModelHabitRepository(get_session_factory())
