"""
Configuration package.
"""

from .database import (
    create_engine,
    get_async_session_factory,
    get_database_url,
    get_default_session_factory,
)
from .logging import (
    bind_request_context,
    clear_request_context,
    configure_logging,
    get_logger,
)
from .settings import Settings, settings

__all__ = [
    "Settings",
    "settings",

    # Database
    "get_database_url",
    "create_engine",
    "get_async_session_factory",
    "get_default_session_factory",

    # Logging
    "bind_request_context",
    "clear_request_context",
    "configure_logging",
    "get_logger",
]
