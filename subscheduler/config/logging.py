"""
Structured logging setup.

Every module logs through ``get_logger(__name__)``. Per-request fields such as
``request_id`` are bound with ``bind_request_context`` and merged into each
event emitted while the request is being served.
"""

import logging
import sys
from typing import Any, List

import structlog

from subscheduler.config.settings import settings

_QUIET_LOGGERS = (
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "asyncio",
    "httpx",
    "httpcore",
    # Requests are already logged by LoggingMiddleware
    "uvicorn.access",
)


def _use_json() -> bool:
    if settings.LOG_JSON is not None:
        return settings.LOG_JSON
    return settings.ENVIRONMENT in ("production", "staging")


def _processors() -> List[Any]:
    renderer = (
        structlog.processors.JSONRenderer()
        if _use_json()
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


def configure_logging() -> None:
    """Configure structlog on top of the stdlib root logger."""
    structlog.configure(
        processors=_processors(),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL),
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_request_context(**fields: Any) -> None:
    """Attach fields to every log event for the current request."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**fields)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def get_logger(name: str = None) -> structlog.BoundLogger:
    """Get a structured logger."""
    return structlog.get_logger(name)
