"""Structured logging configuration.

Storage events are rendered as one JSON object per line carrying the
entity filename and row id, so a data file's history can be grepped
or fed to a log pipeline without parsing free text.
"""

from __future__ import annotations

from typing import Any

import structlog

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.JSONRenderer(sort_keys=True),
    ],
    cache_logger_on_first_use=True,
)


def get_logger(name: str) -> Any:
    """Return a module logger bound to its module name.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger with structured JSON output.
    """
    return structlog.get_logger(name).bind(logger=name)
