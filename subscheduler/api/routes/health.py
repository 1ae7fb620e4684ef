"""
Health check endpoints for the application.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from subscheduler.api.dependencies import ChangeFeedDep, get_db_session
from subscheduler.config.logging import get_logger
from subscheduler.infrastructure.monitoring.health_checks import HealthChecker
from subscheduler.infrastructure.monitoring.metrics import (
    get_metrics,
    get_metrics_content_type,
)

logger = get_logger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


async def get_health_checker(
    change_feed: ChangeFeedDep,
    db: AsyncSession = Depends(get_db_session),
) -> HealthChecker:
    """Get health checker instance."""
    return HealthChecker(db, change_feed=change_feed)


@router.get("/")
async def health_check(
    health_checker: HealthChecker = Depends(get_health_checker),
) -> Dict[str, Any]:
    """Overall status with per-component detail."""
    return await health_checker.check_readiness()


@router.get("/ready")
async def readiness_check(
    health_checker: HealthChecker = Depends(get_health_checker),
) -> Dict[str, Any]:
    """Readiness check for Kubernetes."""
    readiness = await health_checker.check_readiness()

    if readiness["status"] != "healthy":
        logger.warning("Service not ready", components=readiness["components"])
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not ready",
        )

    return {"status": "ready", "timestamp": readiness["timestamp"]}


@router.get("/live")
async def liveness_check() -> Dict[str, Any]:
    """Liveness check for Kubernetes."""
    return {"status": "alive", "timestamp": _now()}


@router.get("/metrics")
async def prometheus_metrics() -> Response:
    """Prometheus metrics endpoint."""
    logger.debug("Prometheus metrics requested")
    return Response(content=get_metrics(), media_type=get_metrics_content_type())
