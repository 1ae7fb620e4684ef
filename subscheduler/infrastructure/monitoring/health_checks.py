"""
Health check implementations for the application.
"""

import time
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from subscheduler.application.interfaces.services import JobChangeFeedInterface
from subscheduler.config.logging import get_logger

logger = get_logger(__name__)


class HealthChecker:
    """Health checker for application components."""

    def __init__(
        self,
        db_session: AsyncSession,
        change_feed: Optional[JobChangeFeedInterface] = None,
    ):
        self.db_session = db_session
        self.change_feed = change_feed
        self.checks: Dict[str, Callable[[], Awaitable[Dict[str, Any]]]] = {
            "database": self._check_database,
        }
        if change_feed is not None:
            self.checks["realtime"] = self._check_realtime

    async def run_health_checks(self) -> Dict[str, Dict[str, Any]]:
        """Run all health checks."""
        results = {}

        for check_name, check_func in self.checks.items():
            start_time = time.time()
            try:
                results[check_name] = await check_func()
            except Exception as e:
                logger.error("Health check failed", check_name=check_name, error=str(e))
                results[check_name] = {"status": "unhealthy", "error": str(e)}
            results[check_name]["response_time_ms"] = (time.time() - start_time) * 1000

        return results

    async def _check_database(self) -> Dict[str, Any]:
        result = await self.db_session.execute(text("SELECT 1"))
        result.scalar_one()
        return {"status": "healthy"}

    async def _check_realtime(self) -> Dict[str, Any]:
        reachable = await self.change_feed.ping()
        return {"status": "healthy" if reachable else "unhealthy"}

    async def check_readiness(self) -> Dict[str, Any]:
        """Overall status; healthy only when every component is."""
        components = await self.run_health_checks()
        is_healthy = all(c.get("status") == "healthy" for c in components.values())

        return {
            "status": "healthy" if is_healthy else "unhealthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "components": components,
        }
