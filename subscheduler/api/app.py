"""
FastAPI application factory.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from subscheduler.api.middleware.error_handler import ErrorHandlerMiddleware
from subscheduler.api.middleware.logging import LoggingMiddleware
from subscheduler.api.routes import assignments, health, phases, scheduler
from subscheduler.application.interfaces.services import JobChangeFeedInterface
from subscheduler.application.use_cases.assignment_decision import (
    DecisionInFlightGuard,
)
from subscheduler.config.logging import get_logger
from subscheduler.config.settings import settings
from subscheduler.infrastructure.realtime.change_feed import create_change_feed

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Application startup", environment=settings.ENVIRONMENT)
    try:
        yield
    finally:
        logger.info("Application shutdown")
        try:
            await app.state.change_feed.close()
        except Exception as e:
            logger.error("Error closing change feed", error=str(e))


def create_app(change_feed: Optional[JobChangeFeedInterface] = None) -> FastAPI:
    """Create and configure FastAPI application."""

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Subcontractor job scheduling and assignment decisions",
        openapi_url=f"{settings.API_PREFIX}/openapi.json" if settings.DEBUG else None,
        docs_url=f"{settings.API_PREFIX}/docs" if settings.DEBUG else None,
        redoc_url=f"{settings.API_PREFIX}/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    # Process-wide state shared by requests
    app.state.change_feed = change_feed or create_change_feed(
        settings.REALTIME_BACKEND,
        redis_url=settings.REDIS_URL,
        channel=settings.REALTIME_CHANNEL,
    )
    app.state.decision_guard = DecisionInFlightGuard()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    ErrorHandlerMiddleware(app)
    LoggingMiddleware(app)

    app.include_router(health.router, prefix=settings.API_PREFIX)
    app.include_router(scheduler.router, prefix=settings.API_PREFIX)
    app.include_router(assignments.router, prefix=settings.API_PREFIX)
    app.include_router(phases.router, prefix=settings.API_PREFIX)

    return app
