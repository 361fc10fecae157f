"""
Structured logging configuration using structlog.

This module sets up structlog for JSON-based structured logging with context binding,
and provides the trace sinks accepted by the decoding components. Decoding code never
writes to a logger on its own; callers opt in by passing a trace sink.
"""

import logging
from typing import Any, Callable, Optional

import structlog

from . import config
from .config import Settings

# trace(event, **fields)
TraceSink = Callable[..., None]


def setup_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure structlog for structured JSON logging.

    Level and renderer come from settings (the global instance by default). Trace
    events are logged at debug level, so they only show with LOG_LEVEL=DEBUG.

    Sets up processors for:
    - Context variable merging
    - Log level addition
    - Exception info rendering
    - Timestamp addition
    - JSON or console rendering based on settings
    """
    settings = settings or config.settings
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            (
                structlog.processors.JSONRenderer()
                if settings.log_json
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(settings.log_level)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a logger instance with the given name.

    Args:
        name: Logger name (usually __name__)

    Returns:
        structlog BoundLogger instance
    """
    return structlog.get_logger(name)


def null_trace(event: str, **fields: Any) -> None:
    """Trace sink that discards everything."""


def get_trace(name: str) -> TraceSink:
    """
    Get a trace sink that forwards events to a structlog logger at debug level.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Callable accepting an event name and keyword fields
    """
    return get_logger(name).debug
