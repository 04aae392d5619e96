"""Unit tests for structured logging configuration."""

from __future__ import annotations

from structlog.testing import capture_logs

from core.logging_config import get_logger


def test_get_logger_binds_logger_name() -> None:
    """Events should carry the module logger name and structured fields."""
    with capture_logs() as logs:
        get_logger("tests.logging").info("row_saved", entity="users", row_id=3)

    assert logs == [
        {
            "event": "row_saved",
            "entity": "users",
            "row_id": 3,
            "logger": "tests.logging",
            "log_level": "info",
        }
    ]
