"""
Pytest configuration and fixtures.
"""

from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from src.api.app import create_app
from src.application.interfaces.repositories import (
    EngineerRepositoryInterface,
    JobRepositoryInterface,
)
from src.application.services.notification_dispatcher import NotificationDispatcher
from src.application.services.permissions import RolePermissionChecker
from src.application.services.realtime_broadcaster import RealtimeBroadcaster
from src.config.database import get_db_session
from src.config.settings import Settings
from src.domain.entities.job import Job
from src.domain.value_objects.actor import Actor, UserRole
from src.infrastructure.database.models import Base
from src.infrastructure.database.repositories import (
    EngineerRepository,
    JobRepository,
    TransactionService,
)
from tests.factories import AGENCY_ID, make_engineer, make_job


@pytest.fixture
def test_settings(tmp_path):
    """Test settings configuration."""
    return Settings(
        ENVIRONMENT="test",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'dispatch.db'}",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENABLE_DEBUG_ROUTES=True,
        NOTIFICATION_CHANNEL="log",
        REALTIME_BACKEND="memory",
        GOOGLE_MAPS_API_KEY=None,
    )


@pytest_asyncio.fixture
async def test_engine(test_settings):
    """Create test database engine with the schema in place."""
    engine = create_async_engine(test_settings.DATABASE_URL, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def persisted(session_factory):
    """Persist entities through the repositories and commit."""

    async def _persist(*entities):
        saved = []
        async with session_factory() as session:
            jobs = JobRepository(session)
            engineers = EngineerRepository(session)
            for entity in entities:
                if isinstance(entity, Job):
                    saved.append(await jobs.create(entity))
                else:
                    saved.append(await engineers.create(entity))
            await TransactionService(session).commit()
        return saved

    return _persist


@pytest_asyncio.fixture
async def reload(session_factory):
    """Read the committed state of a job or engineer in a fresh session."""

    async def _reload(entity):
        async with session_factory() as session:
            if isinstance(entity, Job):
                return await JobRepository(session).get_by_id(entity.id)
            return await EngineerRepository(session).get_by_id(entity.id)

    return _reload


@pytest.fixture
def admin_actor():
    """Admin of the test agency."""
    return Actor(id=uuid4(), role=UserRole.ADMIN, agency_id=AGENCY_ID)


@pytest.fixture
def manager_actor():
    """Manager of the test agency."""
    return Actor(id=uuid4(), role=UserRole.MANAGER, agency_id=AGENCY_ID)


@pytest.fixture
def sample_job():
    """Sample pending job."""
    return make_job()


@pytest.fixture
def sample_engineer():
    """Sample available engineer."""
    return make_engineer()


@pytest.fixture
def mock_job_repository():
    """Mock job repository."""
    mock_repo = AsyncMock(spec=JobRepositoryInterface)

    mock_repo.get_by_id = AsyncMock()
    mock_repo.conditional_update = AsyncMock(return_value=True)
    mock_repo.find_assigned_active = AsyncMock(return_value=[])
    mock_repo.find_active_for_engineer = AsyncMock(return_value=[])

    return mock_repo


@pytest.fixture
def mock_engineer_repository():
    """Mock engineer repository."""
    mock_repo = AsyncMock(spec=EngineerRepositoryInterface)

    mock_repo.get_by_id = AsyncMock()
    mock_repo.conditional_update = AsyncMock(return_value=True)
    mock_repo.find_available_by_agency = AsyncMock(return_value=[])
    mock_repo.find_by_availability = AsyncMock(return_value=[])

    return mock_repo


@pytest.fixture
def mock_transaction_service():
    """Mock transaction service."""
    return AsyncMock(spec=TransactionService)


@pytest.fixture
def permission_checker():
    """Real role matrix."""
    return RolePermissionChecker()


@pytest.fixture
def mock_notification_dispatcher():
    """Mock notification dispatcher reporting delivery."""
    dispatcher = AsyncMock(spec=NotificationDispatcher)
    dispatcher.notify = AsyncMock(return_value=True)
    return dispatcher


@pytest.fixture
def mock_broadcaster():
    """Mock realtime broadcaster."""
    return MagicMock(spec=RealtimeBroadcaster)


@pytest.fixture
def app(test_settings, session_factory):
    """Application wired to the test database."""
    application = create_app(test_settings)

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db_session] = override_get_db_session
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client talking to the app in-process."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
    await app.state.broadcaster.drain()
