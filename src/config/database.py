"""
Async engine and session wiring.

The API uses one process-wide session factory; background tasks build a
task-local engine through ``create_engine`` so an engine is never shared
between event loops.
"""

from functools import lru_cache
from typing import AsyncGenerator, Optional

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from src.config.logging import get_logger
from src.config.settings import settings

logger = get_logger(__name__)


def get_database_url() -> str:
    return str(settings.DATABASE_URL)


def _pool_options(url: str) -> dict:
    # SQLite files and test runs get a connection per checkout
    if settings.ENVIRONMENT == "test" or make_url(url).get_backend_name() == "sqlite":
        return {"poolclass": NullPool}
    return {
        "pool_size": settings.DATABASE_POOL_SIZE,
        "max_overflow": settings.DATABASE_MAX_OVERFLOW,
        "pool_timeout": settings.DATABASE_POOL_TIMEOUT,
        "pool_recycle": settings.DATABASE_POOL_RECYCLE,
        "pool_pre_ping": True,
    }


def create_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """Build an async engine for ``database_url`` or the configured URL."""
    url = database_url or get_database_url()
    return create_async_engine(url, echo=settings.DATABASE_ECHO, **_pool_options(url))


def get_async_session_factory(
    database_url: Optional[str] = None,
) -> async_sessionmaker[AsyncSession]:
    # Entities are read back after the coordinator's commits
    return async_sessionmaker(
        create_engine(database_url),
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@lru_cache(maxsize=1)
def get_default_session_factory() -> async_sessionmaker[AsyncSession]:
    """Process-wide session factory, created on first use."""
    logger.info("Creating database session factory")
    return get_async_session_factory()


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session; anything left uncommitted is rolled back."""
    async with get_default_session_factory()() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
