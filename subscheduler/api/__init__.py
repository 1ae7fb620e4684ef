"""
API package.
"""

from .app import create_app
from .middleware import ErrorHandlerMiddleware, LoggingMiddleware
from .routes import (
    assignments_router,
    health_router,
    phases_router,
    scheduler_router,
)

__all__ = [
    "create_app",

    # Middleware
    "ErrorHandlerMiddleware",
    "LoggingMiddleware",

    # Routes
    "assignments_router",
    "health_router",
    "phases_router",
    "scheduler_router",
]
