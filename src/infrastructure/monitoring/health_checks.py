"""
Component health checks backing the /health routes.
"""

import asyncio
import time
from typing import Any, Awaitable, Callable, Dict, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.logging import get_logger
from src.infrastructure.realtime.redis_publisher import RedisRealtimePublisher

logger = get_logger(__name__)

HEALTHY = "healthy"
UNHEALTHY = "unhealthy"


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class HealthChecker:
    """Checks the dispatch service's dependencies.

    The database is always checked. The realtime backend is pinged only when
    it is Redis; the in-process hub cannot be unreachable. The distance
    provider is reported but never called, so health checks do not spend
    routing quota.
    """

    def __init__(
        self,
        db_session: AsyncSession,
        realtime_publisher: Optional[Any] = None,
        distance_ranker: Optional[Any] = None,
        timeout: float = 5.0,
    ):
        self.db_session = db_session
        self.timeout = timeout
        self.realtime_publisher = realtime_publisher
        self.distance_ranker = distance_ranker

        self.checks: Dict[str, Callable[[], Awaitable[Dict[str, Any]]]] = {
            "database": self._check_database,
        }
        if realtime_publisher is not None:
            self.checks["realtime"] = self._check_realtime
        if distance_ranker is not None:
            self.checks["distance_provider"] = self._check_distance_provider

    async def run_health_checks(self) -> Dict[str, Dict[str, Any]]:
        results: Dict[str, Dict[str, Any]] = {}
        for name, check in self.checks.items():
            try:
                results[name] = await asyncio.wait_for(check(), timeout=self.timeout)
            except asyncio.TimeoutError:
                logger.error("Health check timed out", check_name=name, timeout=self.timeout)
                results[name] = {"status": UNHEALTHY, "error": "timed out"}
            except Exception as e:
                logger.error("Health check failed", check_name=name, error=str(e))
                results[name] = {"status": UNHEALTHY, "error": str(e)}
        return results

    async def check_readiness(self) -> bool:
        results = await self.run_health_checks()
        return all(result["status"] == HEALTHY for result in results.values())

    async def _check_database(self) -> Dict[str, Any]:
        started = time.perf_counter()
        await self.db_session.execute(text("SELECT 1"))
        return {"status": HEALTHY, "response_time_ms": _elapsed_ms(started)}

    async def _check_realtime(self) -> Dict[str, Any]:
        if not isinstance(self.realtime_publisher, RedisRealtimePublisher):
            return {"status": HEALTHY, "backend": "memory"}

        started = time.perf_counter()
        await self.realtime_publisher.ping()
        return {
            "status": HEALTHY,
            "backend": "redis",
            "response_time_ms": _elapsed_ms(started),
        }

    async def _check_distance_provider(self) -> Dict[str, Any]:
        provider = self.distance_ranker.distance_provider
        return {
            "status": HEALTHY,
            "provider": provider.name if provider is not None else "haversine",
        }
