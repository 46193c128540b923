"""
FastAPI application factory.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.middleware.error_handler import ErrorHandlerMiddleware
from src.api.middleware.logging import LoggingMiddleware
from src.api.routes import admin, engineers, health, jobs, realtime
from src.api.security import HeaderSessionResolver
from src.application.interfaces.services import (
    DistanceProviderInterface,
    NotificationChannelInterface,
)
from src.application.services.distance_ranker import DistanceRanker
from src.application.services.notification_dispatcher import NotificationDispatcher
from src.application.services.permissions import RolePermissionChecker
from src.application.services.realtime_broadcaster import RealtimeBroadcaster
from src.config.logging import configure_logging, get_logger
from src.config.settings import Settings, settings
from src.infrastructure.external.distance_matrix import GoogleDistanceMatrixProvider
from src.infrastructure.notifications.channels import (
    LoggingNotificationChannel,
    PushGatewayNotificationChannel,
)
from src.infrastructure.realtime.memory_hub import InMemoryRealtimeHub
from src.infrastructure.realtime.redis_publisher import RedisRealtimePublisher

logger = get_logger(__name__)


def build_notification_channel(config: Settings) -> NotificationChannelInterface:
    """Notification channel selected by NOTIFICATION_CHANNEL."""
    if config.NOTIFICATION_CHANNEL == "push_gateway":
        return PushGatewayNotificationChannel(
            url=config.PUSH_GATEWAY_URL,
            token=config.PUSH_GATEWAY_TOKEN,
            timeout=config.NOTIFICATION_TIMEOUT_SECONDS,
        )
    return LoggingNotificationChannel()


def build_distance_provider(config: Settings) -> Optional[DistanceProviderInterface]:
    """Routing provider, or None to rank by haversine only."""
    if not config.GOOGLE_MAPS_API_KEY:
        return None
    return GoogleDistanceMatrixProvider(
        api_key=config.GOOGLE_MAPS_API_KEY,
        url=config.DISTANCE_MATRIX_URL,
        timeout=config.DISTANCE_PROVIDER_TIMEOUT_SECONDS,
    )


def configure_dispatch_services(app: FastAPI, config: Settings) -> None:
    """Build the process-wide dispatch collaborators onto ``app.state``."""
    if config.REALTIME_BACKEND == "redis":
        publisher = RedisRealtimePublisher(config.REDIS_URL)
        app.state.realtime_hub = None
    else:
        publisher = InMemoryRealtimeHub(queue_size=config.REALTIME_SUBSCRIBER_QUEUE_SIZE)
        app.state.realtime_hub = publisher

    app.state.realtime_publisher = publisher
    app.state.broadcaster = RealtimeBroadcaster(publisher)
    app.state.notification_dispatcher = NotificationDispatcher(
        build_notification_channel(config),
        timeout_seconds=config.NOTIFICATION_TIMEOUT_SECONDS,
    )
    app.state.distance_ranker = DistanceRanker(build_distance_provider(config))
    app.state.session_resolver = HeaderSessionResolver()
    app.state.permission_checker = RolePermissionChecker()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Application startup", environment=settings.ENVIRONMENT)

    yield

    logger.info("Application shutdown")
    await app.state.broadcaster.drain()
    if isinstance(app.state.realtime_publisher, RedisRealtimePublisher):
        await app.state.realtime_publisher.close()


def create_app(config: Optional[Settings] = None) -> FastAPI:
    """Create and configure FastAPI application."""
    config = config or settings
    configure_logging(config)

    app = FastAPI(
        title=config.APP_NAME,
        version=config.APP_VERSION,
        description="Field-service job dispatch: candidate ranking and engineer assignment",
        openapi_url=f"{config.API_PREFIX}/openapi.json" if config.DEBUG else None,
        docs_url=f"{config.API_PREFIX}/docs" if config.DEBUG else None,
        redoc_url=f"{config.API_PREFIX}/redoc" if config.DEBUG else None,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add custom middleware
    ErrorHandlerMiddleware(app)
    LoggingMiddleware(app)

    configure_dispatch_services(app, config)

    # Add routes
    app.include_router(health.router, prefix=config.API_PREFIX, tags=["health"])
    app.include_router(jobs.router, prefix=config.API_PREFIX, tags=["jobs"])
    app.include_router(
        engineers.router, prefix=config.API_PREFIX, tags=["engineers"]
    )
    app.include_router(realtime.router, prefix=config.API_PREFIX, tags=["realtime"])

    if config.ENABLE_DEBUG_ROUTES:
        app.include_router(admin.router, prefix=config.API_PREFIX, tags=["admin"])

    return app
