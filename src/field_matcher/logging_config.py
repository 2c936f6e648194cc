"""
Structured logging configuration using structlog.

The engine only emits events through ``structlog.get_logger(__name__)``; the
embedding application calls ``setup_logging()`` once to choose rendering.
Fill passes bind their own context (pass id, field index) through
structlog context variables so every event of one pass can be correlated.
"""

import logging
from typing import Optional

import structlog

from .config import settings


def setup_logging(level: Optional[str] = None, json_output: Optional[bool] = None) -> None:
    """
    Configure structlog processors and rendering.

    Args:
        level: Minimum log level name (default: settings.log_level)
        json_output: Render JSON lines instead of console output
            (default: settings.log_json)
    """
    level = level or settings.log_level
    if json_output is None:
        json_output = settings.log_json

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            (
                structlog.processors.JSONRenderer()
                if json_output
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def bind_fill_context(**context) -> None:
    """Attach key/value context to every event logged in the current task."""
    structlog.contextvars.bind_contextvars(**context)


def clear_fill_context(*keys: str) -> None:
    """
    Drop context bound by ``bind_fill_context``.

    Args:
        keys: Keys to unbind; all context variables when omitted
    """
    if keys:
        structlog.contextvars.unbind_contextvars(*keys)
    else:
        structlog.contextvars.clear_contextvars()
