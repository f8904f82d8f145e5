"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from sqlalchemy.pool import StaticPool

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "HabitBoard"
    DB_FILENAME = "habitboard.db"
    TESTING = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("HABITBOARD_SECRET_KEY", "replace-me")
        self.DEV_MODE = _env_bool("HABITBOARD_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        self.DATABASE_URL = os.getenv("HABITBOARD_DATABASE_URL", self._build_sqlite_url())
        self.STATS_WINDOW_DAYS = _env_int("HABITBOARD_STATS_WINDOW_DAYS", 30)
        self.SESSION_COOKIE_HTTPONLY = True
        self.SESSION_COOKIE_SAMESITE = "Lax"
        self.SESSION_COOKIE_SECURE = not self.DEV_MODE
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("HABITBOARD_SECRET_KEY must be set in non-dev mode.")
        if self.STATS_WINDOW_DAYS < 1:
            raise ValueError("HABITBOARD_STATS_WINDOW_DAYS must be at least 1.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("HABITBOARD_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {"pool_pre_ping": True}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Isolated in-memory database for the test suite."""

    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.DATABASE_URL = "sqlite://"
        self.SECRET_KEY = "test-secret"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        # A single shared connection keeps the in-memory schema alive across sessions.
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
