"""
FastAPI dependency injection container.

Process-wide collaborators (realtime hub, broadcaster, notification
dispatcher, distance ranker, session resolver, permission checker) are built
once by the app factory and kept on ``app.state``; repositories and use cases
are built per request around the request's database session.
"""

from typing import Annotated, Callable
from uuid import UUID

from fastapi import Depends, Request
from fastapi.requests import HTTPConnection
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.services import (
    PermissionCheckerInterface,
    SessionResolverInterface,
)
from src.application.services.distance_ranker import DistanceRanker
from src.application.services.notification_dispatcher import NotificationDispatcher
from src.application.services.realtime_broadcaster import RealtimeBroadcaster
from src.application.use_cases.assign_engineer import AssignmentCoordinator
from src.application.use_cases.audit_assignments import AuditAssignmentsUseCase
from src.application.use_cases.rank_candidates import RankCandidatesUseCase
from src.application.use_cases.update_engineer_location import (
    UpdateEngineerLocationUseCase,
)
from src.config.database import get_db_session
from src.config.logging import get_logger
from src.config.settings import settings
from src.domain.exceptions.auth_error import UnauthorizedError
from src.domain.exceptions.validation_error import InvalidIdError
from src.domain.value_objects.actor import Actor
from src.infrastructure.database.repositories.engineer_repository import (
    EngineerRepository,
)
from src.infrastructure.database.repositories.job_repository import JobRepository
from src.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)

logger = get_logger(__name__)


# Path parameters
def parse_job_id(job_id: str) -> UUID:
    """Parse the job id path parameter."""
    try:
        return UUID(job_id)
    except ValueError:
        raise InvalidIdError("job", job_id)


def parse_engineer_id(engineer_id: str) -> UUID:
    """Parse the engineer id path parameter."""
    try:
        return UUID(engineer_id)
    except ValueError:
        raise InvalidIdError("engineer", engineer_id)


# App-scoped collaborators
def get_session_resolver(connection: HTTPConnection) -> SessionResolverInterface:
    return connection.app.state.session_resolver


def get_permission_checker(connection: HTTPConnection) -> PermissionCheckerInterface:
    return connection.app.state.permission_checker


def get_broadcaster(request: Request) -> RealtimeBroadcaster:
    return request.app.state.broadcaster


def get_notification_dispatcher(request: Request) -> NotificationDispatcher:
    return request.app.state.notification_dispatcher


def get_distance_ranker(request: Request) -> DistanceRanker:
    return request.app.state.distance_ranker


# Session Dependencies
async def get_current_actor(
    connection: HTTPConnection,
    resolver: SessionResolverInterface = Depends(get_session_resolver),
) -> Actor:
    """Resolve the acting user or fail with UNAUTHORIZED."""
    actor = await resolver.resolve(connection.headers)
    if actor is None:
        raise UnauthorizedError()
    return actor


def require_permission(permission: str) -> Callable:
    """Dependency factory asserting the actor's role grants ``permission``."""

    async def dependency(
        actor: Actor = Depends(get_current_actor),
        checker: PermissionCheckerInterface = Depends(get_permission_checker),
    ) -> Actor:
        checker.assert_permission(actor.role, permission)
        return actor

    return dependency


# Database Dependencies
async def get_job_repository(
    db: AsyncSession = Depends(get_db_session),
) -> JobRepository:
    """Get job repository instance."""
    return JobRepository(db)


async def get_engineer_repository(
    db: AsyncSession = Depends(get_db_session),
) -> EngineerRepository:
    """Get engineer repository instance."""
    return EngineerRepository(db)


async def get_transaction_service(
    db: AsyncSession = Depends(get_db_session),
) -> TransactionService:
    """Get transaction service instance."""
    return TransactionService(db)


# Use Case Dependencies
async def get_assignment_coordinator(
    job_repo: JobRepository = Depends(get_job_repository),
    engineer_repo: EngineerRepository = Depends(get_engineer_repository),
    transaction_service: TransactionService = Depends(get_transaction_service),
    permission_checker: PermissionCheckerInterface = Depends(get_permission_checker),
    notification_dispatcher: NotificationDispatcher = Depends(
        get_notification_dispatcher
    ),
    broadcaster: RealtimeBroadcaster = Depends(get_broadcaster),
) -> AssignmentCoordinator:
    """Get assignment coordinator instance."""
    return AssignmentCoordinator(
        job_repo=job_repo,
        engineer_repo=engineer_repo,
        transaction_service=transaction_service,
        permission_checker=permission_checker,
        notification_dispatcher=notification_dispatcher,
        broadcaster=broadcaster,
    )


async def get_rank_candidates_use_case(
    job_repo: JobRepository = Depends(get_job_repository),
    engineer_repo: EngineerRepository = Depends(get_engineer_repository),
    permission_checker: PermissionCheckerInterface = Depends(get_permission_checker),
    ranker: DistanceRanker = Depends(get_distance_ranker),
) -> RankCandidatesUseCase:
    """Get rank candidates use case instance."""
    return RankCandidatesUseCase(
        job_repo=job_repo,
        engineer_repo=engineer_repo,
        permission_checker=permission_checker,
        ranker=ranker,
    )


async def get_update_location_use_case(
    engineer_repo: EngineerRepository = Depends(get_engineer_repository),
    transaction_service: TransactionService = Depends(get_transaction_service),
    permission_checker: PermissionCheckerInterface = Depends(get_permission_checker),
) -> UpdateEngineerLocationUseCase:
    """Get update engineer location use case instance."""
    return UpdateEngineerLocationUseCase(
        engineer_repo=engineer_repo,
        transaction_service=transaction_service,
        permission_checker=permission_checker,
    )


async def get_audit_use_case(
    job_repo: JobRepository = Depends(get_job_repository),
    engineer_repo: EngineerRepository = Depends(get_engineer_repository),
) -> AuditAssignmentsUseCase:
    """Get audit assignments use case instance."""
    return AuditAssignmentsUseCase(
        job_repo=job_repo,
        engineer_repo=engineer_repo,
        batch_size=settings.AUDIT_BATCH_SIZE,
    )


# Type aliases for cleaner dependency injection
JobIdDep = Annotated[UUID, Depends(parse_job_id)]
EngineerIdDep = Annotated[UUID, Depends(parse_engineer_id)]
ActorDep = Annotated[Actor, Depends(get_current_actor)]
JobRepositoryDep = Annotated[JobRepository, Depends(get_job_repository)]
EngineerRepositoryDep = Annotated[EngineerRepository, Depends(get_engineer_repository)]
PermissionCheckerDep = Annotated[
    PermissionCheckerInterface, Depends(get_permission_checker)
]
AssignmentCoordinatorDep = Annotated[
    AssignmentCoordinator, Depends(get_assignment_coordinator)
]
RankCandidatesUseCaseDep = Annotated[
    RankCandidatesUseCase, Depends(get_rank_candidates_use_case)
]
UpdateLocationUseCaseDep = Annotated[
    UpdateEngineerLocationUseCase, Depends(get_update_location_use_case)
]
AuditUseCaseDep = Annotated[AuditAssignmentsUseCase, Depends(get_audit_use_case)]
