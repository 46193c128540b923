"""Assign engineer use case."""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Awaitable, Dict, Mapping, Optional, TypeVar
from uuid import UUID

from src.application.interfaces.repositories import (
    EngineerRepositoryInterface,
    JobRepositoryInterface,
)
from src.application.interfaces.services import PermissionCheckerInterface
from src.application.services.notification_dispatcher import NotificationDispatcher
from src.application.services.permissions import JOB_ASSIGN
from src.application.services.realtime_broadcaster import RealtimeBroadcaster
from src.config.logging import get_logger
from src.domain.entities.engineer import Engineer
from src.domain.entities.job import Job
from src.domain.events.job_changed import JobChanged, JobChangeType
from src.domain.exceptions.auth_error import ForbiddenError
from src.domain.exceptions.conflict_error import (
    ConflictError,
    EngineerUnavailableError,
    JobAlreadyAssignedError,
)
from src.domain.exceptions.dispatch_error import DispatchError
from src.domain.exceptions.not_found_error import NotFoundError
from src.domain.exceptions.storage_error import ReconciliationError, StorageError
from src.domain.value_objects.actor import Actor
from src.domain.value_objects.availability_status import AvailabilityStatus
from src.domain.value_objects.job_status import JobStatus
from src.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from src.infrastructure.monitoring.metrics import (
    ASSIGNMENT_COMPENSATIONS,
    ASSIGNMENT_DURATION,
    ASSIGNMENTS_TOTAL,
    RECONCILIATION_ERRORS,
    track_duration,
)

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass
class AssignEngineerRequest:
    """Request for assigning an engineer to a job."""

    job_id: UUID
    engineer_id: UUID
    actor: Actor


@dataclass
class AssignmentRecord:
    """Who assigned the job and when."""

    assigned_at: datetime
    assigned_by: UUID


@dataclass
class AssignEngineerResult:
    """Result of a successful assignment."""

    job: Job
    engineer: Engineer
    assignment: AssignmentRecord
    notification_sent: bool


class AssignmentCoordinator:
    """Binds an available engineer to an unassigned job.

    The job and the engineer are written in two separately committed steps,
    each one a conditional update:

    1. job: ``assigned_engineer_id IS NULL`` -> engineer, status ``assigned``
    2. engineer: ``availability_status = available`` -> ``on_job``

    Losing the race on step 1 is a conflict with no side effects. If step 2
    fails or loses its race, step 1 is undone with a compensating write
    guarded on ``assigned_engineer_id = engineer``. A compensation that does
    not apply leaves the pair inconsistent and raises ReconciliationError.
    Notification and realtime broadcast run only after both commits.
    """

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        engineer_repo: EngineerRepositoryInterface,
        transaction_service: TransactionService,
        permission_checker: PermissionCheckerInterface,
        notification_dispatcher: NotificationDispatcher,
        broadcaster: RealtimeBroadcaster,
    ):
        self.job_repo = job_repo
        self.engineer_repo = engineer_repo
        self.transaction_service = transaction_service
        self.permission_checker = permission_checker
        self.notification_dispatcher = notification_dispatcher
        self.broadcaster = broadcaster

    @track_duration(ASSIGNMENT_DURATION)
    async def execute(self, request: AssignEngineerRequest) -> AssignEngineerResult:
        """Assign ``request.engineer_id`` to ``request.job_id`` on behalf of the actor."""
        log = logger.bind(
            job_id=str(request.job_id),
            engineer_id=str(request.engineer_id),
            actor_id=str(request.actor.id),
        )
        try:
            result = await self._assign(request)
        except DispatchError as e:
            ASSIGNMENTS_TOTAL.labels(outcome=e.code.lower()).inc()
            log.info("Assignment rejected", code=e.code, reason=e.message)
            raise

        ASSIGNMENTS_TOTAL.labels(outcome="success").inc()
        log.info(
            "Engineer assigned to job",
            job_number=result.job.job_number,
            notification_sent=result.notification_sent,
        )
        return result

    async def _assign(self, request: AssignEngineerRequest) -> AssignEngineerResult:
        actor = request.actor
        self.permission_checker.assert_permission(actor.role, JOB_ASSIGN)

        job = await self._read(
            self.job_repo.get_by_id(request.job_id), "Failed to fetch job details"
        )
        if job is None:
            raise NotFoundError("Job", str(request.job_id))
        if not actor.belongs_to(job.assigned_agency_id):
            raise ForbiddenError("You do not have access to this job")
        if job.is_assigned:
            raise JobAlreadyAssignedError(str(job.id))
        if job.is_terminal:
            raise ConflictError(
                f"Job is {job.status.value} and cannot be assigned",
                details={"job": [f"Job status is '{job.status.value}'"]},
            )

        engineer = await self._read(
            self.engineer_repo.get_by_id(request.engineer_id),
            "Failed to fetch engineer details",
        )
        if engineer is None:
            raise NotFoundError("Engineer", str(request.engineer_id))
        if engineer.agency_id != job.assigned_agency_id:
            raise ForbiddenError("Engineer does not belong to the assigned agency")
        if not engineer.is_available:
            raise EngineerUnavailableError(
                str(engineer.id), engineer.availability_status.value
            )

        assigned_at = datetime.now(timezone.utc)
        primary_write = {
            "status": JobStatus.ASSIGNED,
            "assigned_engineer_id": engineer.id,
            "assigned_at": assigned_at,
            "updated_at": assigned_at,
        }
        try:
            won = await self._write_and_commit(
                self.job_repo,
                job.id,
                expected={"assigned_engineer_id": None, "status": job.status},
                values=primary_write,
            )
        except StorageError as e:
            raise StorageError(
                "Failed to assign engineer to job", operation="assign_job"
            ) from e
        if not won:
            logger.info(
                "Lost job assignment race",
                job_id=str(job.id),
                engineer_id=str(engineer.id),
            )
            raise JobAlreadyAssignedError(str(job.id))

        try:
            engineer_claimed = await self._write_and_commit(
                self.engineer_repo,
                engineer.id,
                expected={"availability_status": AvailabilityStatus.AVAILABLE},
                values={
                    "availability_status": AvailabilityStatus.ON_JOB,
                    "updated_at": assigned_at,
                },
            )
        except StorageError as e:
            logger.error(
                "Engineer availability update failed, compensating job assignment",
                job_id=str(job.id),
                engineer_id=str(engineer.id),
                error=str(e),
            )
            await self._compensate(job, engineer, primary_write, "engineer_write_failed")
            raise StorageError(
                "Failed to update engineer availability", operation="assign_engineer"
            ) from e

        if not engineer_claimed:
            logger.info(
                "Engineer claimed concurrently, compensating job assignment",
                job_id=str(job.id),
                engineer_id=str(engineer.id),
            )
            await self._compensate(job, engineer, primary_write, "engineer_unavailable")
            raise EngineerUnavailableError(
                str(engineer.id), await self._current_availability(engineer.id)
            )

        assigned_job = replace(
            job,
            status=JobStatus.ASSIGNED,
            assigned_engineer_id=engineer.id,
            assigned_at=assigned_at,
            updated_at=assigned_at,
        )
        assigned_engineer = replace(
            engineer,
            availability_status=AvailabilityStatus.ON_JOB,
            updated_at=assigned_at,
        )

        self.broadcaster.broadcast(
            JobChanged(
                event_type=JobChangeType.JOB_ASSIGNED,
                job_id=assigned_job.id,
                agency_id=assigned_job.assigned_agency_id,
                job_number=assigned_job.job_number,
                status=assigned_job.status.value,
                changed_by=actor.id,
                engineer_id=engineer.id,
                occurred_at=assigned_at,
            )
        )
        notification_sent = await self.notification_dispatcher.notify(
            engineer_id=engineer.id,
            job_id=assigned_job.id,
            job_number=assigned_job.job_number,
            client_name=assigned_job.client_name,
        )

        return AssignEngineerResult(
            job=assigned_job,
            engineer=assigned_engineer,
            assignment=AssignmentRecord(assigned_at=assigned_at, assigned_by=actor.id),
            notification_sent=notification_sent,
        )

    async def _read(self, lookup: Awaitable[T], failure_message: str) -> T:
        try:
            return await lookup
        except StorageError as e:
            raise StorageError(failure_message, operation=e.operation) from e

    async def _write_and_commit(
        self,
        repo: Any,
        record_id: UUID,
        expected: Mapping[str, Any],
        values: Mapping[str, Any],
    ) -> bool:
        """Conditional update committed on its own; rolled back if not applied."""
        try:
            applied = await repo.conditional_update(
                record_id, expected=expected, values=values
            )
            if applied:
                await self.transaction_service.commit()
            else:
                await self.transaction_service.rollback()
        except StorageError:
            await self._rollback_quietly()
            raise
        return applied

    async def _compensate(
        self,
        job: Job,
        engineer: Engineer,
        primary_write: Dict[str, Any],
        reason: str,
    ) -> None:
        """Undo the job assignment written for ``engineer``."""
        compensating_write = {
            "status": job.status,
            "assigned_engineer_id": None,
            "assigned_at": None,
            "updated_at": datetime.now(timezone.utc),
        }

        cause: Optional[StorageError] = None
        try:
            reverted = await self._write_and_commit(
                self.job_repo,
                job.id,
                expected={
                    "assigned_engineer_id": engineer.id,
                    "status": JobStatus.ASSIGNED,
                },
                values=compensating_write,
            )
        except StorageError as e:
            reverted = False
            cause = e

        if reverted:
            ASSIGNMENT_COMPENSATIONS.labels(result="applied").inc()
            logger.warning(
                "Job assignment compensated",
                job_id=str(job.id),
                engineer_id=str(engineer.id),
                reason=reason,
            )
            return

        ASSIGNMENT_COMPENSATIONS.labels(result="failed").inc()
        RECONCILIATION_ERRORS.inc()
        error = ReconciliationError(
            job_id=str(job.id),
            engineer_id=str(engineer.id),
            primary_write=_describe(primary_write),
            compensating_write=_describe(compensating_write),
            reason=reason,
        )
        logger.critical(
            "Assignment left inconsistent, manual reconciliation required",
            alert=True,
            compensation_error=str(cause) if cause else None,
            **error.repair_context(),
        )
        raise error from cause

    async def _current_availability(self, engineer_id: UUID) -> str:
        """Status that beat our engineer write; assume on_job if it cannot be read."""
        try:
            current = await self.engineer_repo.get_by_id(engineer_id)
        except StorageError as e:
            logger.warning(
                "Could not re-read engineer after lost claim",
                engineer_id=str(engineer_id),
                error=str(e),
            )
            current = None
        if current is None:
            return AvailabilityStatus.ON_JOB.value
        return current.availability_status.value

    async def _rollback_quietly(self) -> None:
        try:
            await self.transaction_service.rollback()
        except StorageError as e:
            logger.warning("Rollback failed", error=str(e))


def _describe(values: Mapping[str, Any]) -> Dict[str, Any]:
    """JSON-friendly view of a write for logs and repair tooling."""
    described = {}
    for key, value in values.items():
        if value is None or isinstance(value, (bool, int, float)):
            described[key] = value
        elif isinstance(value, datetime):
            described[key] = value.isoformat()
        elif hasattr(value, "value"):
            described[key] = value.value
        else:
            described[key] = str(value)
    return described
