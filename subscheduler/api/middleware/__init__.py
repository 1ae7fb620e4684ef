"""
API middleware package.
"""

from .error_handler import ErrorHandlerMiddleware, add_error_handlers
from .logging import LoggingMiddleware

__all__ = [
    "ErrorHandlerMiddleware",
    "add_error_handlers",
    "LoggingMiddleware",
]
