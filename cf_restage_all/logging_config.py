"""Structured diagnostic logging setup."""

from __future__ import annotations

import logging
import sys

import structlog


def configure_logging(level: str = "WARNING", json_output: bool = False) -> None:
    """Configure structlog to write diagnostic events to stderr.

    User-facing sweep lines go to stdout through the console reporter, so
    diagnostics never interleave with them on the same stream.

    Args:
        level: Minimum log level name.
        json_output: Render events as JSON lines instead of console key/value text.

    Returns:
        None: Configures global structlog state as side effect.

    Raises:
        ValueError: Raised when level name is unknown.
    """

    level_value = logging.getLevelName(level.strip().upper())
    if not isinstance(level_value, int):
        raise ValueError(f"unknown log level: {level}")

    renderer: structlog.typing.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
