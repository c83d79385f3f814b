"""
Structured Logging

The index facade logs through structlog and never configures logging on
import; the host application owns that. ``configure_logging`` is an
opt-in helper for scripts that have no logging setup of their own.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from libsql_vector.core.config import settings

LIBRARY_LOGGER = "libsql_vector"

_handler: logging.Handler | None = None


def add_library_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Tag entries emitted by this package's loggers."""
    event_dict.setdefault("library", LIBRARY_LOGGER)
    return event_dict


def configure_logging(level: str | None = None, json_output: bool | None = None) -> None:
    """
    Configure structured logging for the ``libsql_vector`` loggers

    Output goes to a stderr handler attached to the package logger only;
    the root logger and its handlers are left alone.

    Args:
        level: Log level name (defaults to settings.log_level)
        json_output: Render JSON instead of console output
            (defaults to settings.log_json)
    """
    level_name = level or settings.log_level
    use_json = settings.log_json if json_output is None else json_output

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_library_context,
    ]

    if use_json:
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level_name)),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    global _handler
    package_logger = logging.getLogger(LIBRARY_LOGGER)
    package_logger.setLevel(level_name)
    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter("%(message)s"))
        package_logger.addHandler(_handler)
    package_logger.propagate = False


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance

    Usage:
        logger = get_logger(__name__)
        logger.info("records_upserted", table="movies", count=3)
    """
    return structlog.get_logger(name)
