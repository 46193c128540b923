"""
Health check endpoints for the application.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import get_db_session
from src.config.logging import get_logger
from src.config.settings import settings
from src.infrastructure.monitoring.health_checks import HealthChecker
from src.infrastructure.monitoring.metrics import get_metrics, get_metrics_content_type

logger = get_logger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


async def get_health_checker(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> HealthChecker:
    state = request.app.state
    return HealthChecker(
        db,
        realtime_publisher=getattr(state, "realtime_publisher", None),
        distance_ranker=getattr(state, "distance_ranker", None),
        timeout=settings.HEALTH_CHECK_TIMEOUT_SECONDS,
    )


@router.get("")
async def health_check(
    health_checker: HealthChecker = Depends(get_health_checker),
) -> Dict[str, Any]:
    """Basic health check endpoint."""
    components = await health_checker.run_health_checks()
    is_healthy = all(c.get("status") == "healthy" for c in components.values())

    return {
        "status": "healthy" if is_healthy else "unhealthy",
        "components": components,
        "timestamp": _now(),
    }


@router.get("/ready")
async def readiness_check(
    health_checker: HealthChecker = Depends(get_health_checker),
) -> Dict[str, Any]:
    """Readiness check for Kubernetes."""
    if not await health_checker.check_readiness():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not ready",
        )

    return {"status": "ready", "timestamp": _now()}


@router.get("/live")
async def liveness_check() -> Dict[str, Any]:
    """Liveness check for Kubernetes."""
    return {"status": "alive", "timestamp": _now()}


@router.get("/metrics")
async def prometheus_metrics() -> Response:
    """Prometheus metrics endpoint."""
    logger.debug("Prometheus metrics requested")
    return Response(content=get_metrics(), media_type=get_metrics_content_type())
