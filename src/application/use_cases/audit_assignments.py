"""Audit assignments use case."""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import UUID

from src.application.interfaces.repositories import (
    EngineerRepositoryInterface,
    JobRepositoryInterface,
)
from src.config.logging import get_logger
from src.domain.value_objects.availability_status import AvailabilityStatus
from src.infrastructure.monitoring.metrics import AUDIT_VIOLATIONS

logger = get_logger(__name__)

JOB_ENGINEER_NOT_ON_JOB = "job_engineer_not_on_job"
ENGINEER_MULTIPLE_ACTIVE_JOBS = "engineer_multiple_active_jobs"
ENGINEER_ON_JOB_WITHOUT_JOB = "engineer_on_job_without_job"


@dataclass
class AssignmentViolation:
    """One broken Job/Engineer invariant."""

    kind: str
    engineer_id: UUID
    job_ids: List[UUID] = field(default_factory=list)
    engineer_status: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "engineer_id": str(self.engineer_id),
            "job_ids": [str(job_id) for job_id in self.job_ids],
            "engineer_status": self.engineer_status,
        }


@dataclass
class AuditReport:
    """Outcome of one audit sweep."""

    checked_jobs: int
    checked_engineers: int
    violations: List[AssignmentViolation]
    audited_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_consistent(self) -> bool:
        return not self.violations

    def to_dict(self) -> Dict[str, Any]:
        return {
            "checked_jobs": self.checked_jobs,
            "checked_engineers": self.checked_engineers,
            "consistent": self.is_consistent,
            "violations": [v.to_dict() for v in self.violations],
            "audited_at": self.audited_at.isoformat(),
        }


class AuditAssignmentsUseCase:
    """Detects Job/Engineer pairs left inconsistent, e.g. by a failed compensation.

    Read-only: repair is an operator decision.
    """

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        engineer_repo: EngineerRepositoryInterface,
        batch_size: int = 500,
    ):
        self.job_repo = job_repo
        self.engineer_repo = engineer_repo
        self.batch_size = batch_size

    async def execute(self) -> AuditReport:
        assigned_jobs = await self.job_repo.find_assigned_active(limit=self.batch_size)
        on_job_engineers = await self.engineer_repo.find_by_availability(
            AvailabilityStatus.ON_JOB, limit=self.batch_size
        )

        jobs_by_engineer: Dict[UUID, List[UUID]] = defaultdict(list)
        for job in assigned_jobs:
            jobs_by_engineer[job.assigned_engineer_id].append(job.id)

        on_job_ids = {engineer.id for engineer in on_job_engineers}
        violations: List[AssignmentViolation] = []

        for engineer_id, job_ids in jobs_by_engineer.items():
            if len(job_ids) > 1:
                violations.append(
                    AssignmentViolation(
                        kind=ENGINEER_MULTIPLE_ACTIVE_JOBS,
                        engineer_id=engineer_id,
                        job_ids=job_ids,
                    )
                )
            if engineer_id not in on_job_ids:
                engineer = await self.engineer_repo.get_by_id(engineer_id)
                violations.append(
                    AssignmentViolation(
                        kind=JOB_ENGINEER_NOT_ON_JOB,
                        engineer_id=engineer_id,
                        job_ids=job_ids,
                        engineer_status=engineer.availability_status.value
                        if engineer
                        else None,
                    )
                )

        for engineer in on_job_engineers:
            if engineer.id in jobs_by_engineer:
                continue
            # The batch may not cover every assigned job; confirm before flagging
            active_jobs = await self.job_repo.find_active_for_engineer(engineer.id)
            if not active_jobs:
                violations.append(
                    AssignmentViolation(
                        kind=ENGINEER_ON_JOB_WITHOUT_JOB,
                        engineer_id=engineer.id,
                        engineer_status=engineer.availability_status.value,
                    )
                )

        for violation in violations:
            AUDIT_VIOLATIONS.labels(kind=violation.kind).inc()
            logger.error("Assignment invariant violated", **violation.to_dict())

        report = AuditReport(
            checked_jobs=len(assigned_jobs),
            checked_engineers=len(on_job_engineers),
            violations=violations,
        )
        logger.info(
            "Assignment audit completed",
            checked_jobs=report.checked_jobs,
            checked_engineers=report.checked_engineers,
            violations=len(violations),
        )
        return report
