"""
catgraph.log - structlog configuration

Library modules only call structlog.get_logger(__name__); the CLI calls
configure_logging() once with values from the [logging] config section.
"""

from __future__ import annotations

import logging
import sys

import structlog

LOG_FORMATS = ("text", "json")


def configure_logging(level: str = "WARNING", fmt: str = "text") -> None:
    """Configure structlog for the process.

    Args:
        level: Standard level name (DEBUG, INFO, WARNING, ERROR).
        fmt: "json" for one JSON object per line, "text" for console output.

    Raises:
        ValueError: If the level or format is not recognised.
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")
    if fmt not in LOG_FORMATS:
        raise ValueError(f"Unknown log format: {fmt} (expected one of {', '.join(LOG_FORMATS)})")

    renderer = (
        structlog.processors.JSONRenderer()
        if fmt == "json"
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


__all__ = ["LOG_FORMATS", "configure_logging"]
