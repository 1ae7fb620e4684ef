"""
API routes package.
"""

from .assignments import router as assignments_router
from .health import router as health_router
from .phases import router as phases_router
from .scheduler import router as scheduler_router

__all__ = [
    "assignments_router",
    "health_router",
    "phases_router",
    "scheduler_router",
]
