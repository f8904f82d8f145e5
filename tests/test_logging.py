"""Tests for structured logging functionality."""

from __future__ import annotations

import json
import logging
import logging.handlers

import pytest

from habitboard.config import BaseConfig
from habitboard.logging_config import JSONFormatter, get_logger, setup_logging


def _record(**kwargs) -> logging.LogRecord:
    record = logging.LogRecord(
        name="habitboard.test",
        level=kwargs.pop("level", logging.INFO),
        pathname="test.py",
        lineno=42,
        msg=kwargs.pop("msg", "Test message"),
        args=(),
        exc_info=kwargs.pop("exc_info", None),
    )
    record.module = "test_module"
    record.funcName = "test_function"
    for key, value in kwargs.items():
        setattr(record, key, value)
    return record


def test_json_formatter():
    log_data = json.loads(JSONFormatter().format(_record()))

    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "habitboard.test"
    assert log_data["message"] == "Test message"
    assert log_data["module"] == "test_module"
    assert log_data["function"] == "test_function"
    assert log_data["line"] == 42
    assert "timestamp" in log_data
    assert "extra" not in log_data


def test_json_formatter_with_exception():
    """Exceptions are serialized with type, message and traceback."""
    try:
        raise ValueError("Test error")
    except ValueError:
        import sys

        exc_info = sys.exc_info()

    log_data = json.loads(
        JSONFormatter().format(_record(level=logging.ERROR, msg="Error occurred", exc_info=exc_info))
    )

    assert log_data["exception"]["type"] == "ValueError"
    assert "Test error" in log_data["exception"]["message"]
    assert log_data["exception"]["traceback"]


def test_json_formatter_includes_extra_fields():
    log_data = json.loads(JSONFormatter().format(_record(habit_id=7, day="2024-03-15")))

    assert log_data["extra"] == {"habit_id": 7, "day": "2024-03-15"}


def test_setup_logging(tmp_path):
    """Logging setup creates a JSON log file next to the data."""
    config = BaseConfig()
    config.DATA_DIR = str(tmp_path)
    config.DEV_MODE = False

    logger = setup_logging(config)

    assert logger.name == "habitboard"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 2  # Console + File

    log_file = tmp_path / "logs" / "habitboard.log"
    assert log_file.exists()

    logger.warning("Test warning message", extra={"user_id": 1})
    for handler in logger.handlers:
        handler.flush()

    lines = [line for line in log_file.read_text(encoding="utf-8").splitlines() if line.strip()]
    assert len(lines) >= 2
    entries = [json.loads(line) for line in lines]
    assert entries[0]["message"] == "Logging initialized"
    assert entries[-1]["extra"] == {"user_id": 1}


def test_setup_logging_twice_does_not_duplicate_handlers(tmp_path):
    config = BaseConfig()
    config.DATA_DIR = str(tmp_path)

    setup_logging(config)
    logger = setup_logging(config)

    assert len(logger.handlers) == 2


def test_get_logger():
    """Loggers are namespaced under the application logger."""
    logger1 = get_logger("module1")
    logger2 = get_logger("module2")

    assert logger1.name == "habitboard.module1"
    assert logger2.name == "habitboard.module2"
    assert logger1 != logger2


def test_get_logger_keeps_module_names():
    assert get_logger("habitboard.services.streaks").name == "habitboard.services.streaks"
    assert get_logger("habitboard").name == "habitboard"


@pytest.mark.parametrize("dev_mode", [True, False])
def test_logging_levels_by_mode(tmp_path, dev_mode):
    """Console logging is quieter outside dev mode."""
    config = BaseConfig()
    config.DATA_DIR = str(tmp_path)
    config.DEV_MODE = dev_mode

    logger = setup_logging(config)

    console_handler = next(
        handler
        for handler in logger.handlers
        if isinstance(handler, logging.StreamHandler)
        and not isinstance(handler, logging.handlers.RotatingFileHandler)
    )

    expected_level = logging.INFO if dev_mode else logging.WARNING
    assert console_handler.level == expected_level
    assert logger.level == (logging.DEBUG if dev_mode else logging.INFO)
