"""Job repository implementation."""

from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional
from uuid import UUID

from sqlalchemy import and_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories import JobRepositoryInterface
from src.config.logging import get_logger
from src.domain.entities.job import Job
from src.domain.value_objects.geo_location import GeoPoint, SiteLocation
from src.domain.value_objects.job_status import JobStatus
from src.infrastructure.database.models.job import JobModel

from .helpers import build_conditions, normalize_values, storage_errors

logger = get_logger(__name__)


class JobRepository(JobRepositoryInterface):
    """Job repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, job_id: UUID) -> Optional[Job]:
        """Get job by ID."""
        stmt = (
            select(JobModel)
            .where(JobModel.id == job_id)
            .execution_options(populate_existing=True)
        )
        with storage_errors("get_job"):
            result = await self.db.execute(stmt)
            model = result.scalar_one_or_none()

        return self._model_to_entity(model) if model else None

    async def get_by_job_number(self, job_number: str) -> Optional[Job]:
        """Get job by its human-readable number."""
        stmt = (
            select(JobModel)
            .where(JobModel.job_number == job_number)
            .execution_options(populate_existing=True)
        )
        with storage_errors("get_job_by_number"):
            result = await self.db.execute(stmt)
            model = result.scalar_one_or_none()

        return self._model_to_entity(model) if model else None

    async def create(self, job: Job) -> Job:
        """Create a new job."""
        site = job.site_location
        job_model = JobModel(
            id=job.id,
            job_number=job.job_number,
            assigned_agency_id=job.assigned_agency_id,
            client_name=job.client_name,
            client_phone=job.client_phone,
            site_latitude=site.point.latitude,
            site_longitude=site.point.longitude,
            site_address=site.address,
            site_city=site.city,
            site_state=site.state,
            site_postal_code=site.postal_code,
            required_skill_level=job.required_skill_level,
            scheduled_time=job.scheduled_time,
            urgency=job.urgency.value,
            status=job.status.value,
            assigned_engineer_id=job.assigned_engineer_id,
            assigned_at=job.assigned_at,
            accepted_at=job.accepted_at,
            started_at=job.started_at,
            completed_at=job.completed_at,
            cancelled_at=job.cancelled_at,
            created_at=job.created_at,
            updated_at=job.updated_at,
        )

        with storage_errors("create_job"):
            self.db.add(job_model)
            # Use flush instead of commit to maintain transaction atomicity
            await self.db.flush()
            await self.db.refresh(job_model)

        return self._model_to_entity(job_model)

    async def conditional_update(
        self, job_id: UUID, expected: Mapping[str, Any], values: Mapping[str, Any]
    ) -> bool:
        """Update the job only if its persisted state matches ``expected``.

        Runs as one UPDATE ... WHERE statement; the affected row count tells
        whether this caller won.
        """
        stmt = (
            update(JobModel)
            .where(and_(JobModel.id == job_id, *build_conditions(JobModel, expected)))
            .values(**normalize_values(JobModel, values))
            .execution_options(synchronize_session=False)
        )
        with storage_errors("update_job"):
            result = await self.db.execute(stmt)

        applied = result.rowcount == 1
        logger.debug(
            "Conditional job update",
            job_id=str(job_id),
            expected=list(expected),
            applied=applied,
        )
        return applied

    async def find_by_status(
        self,
        agency_id: UUID,
        statuses: Iterable[JobStatus],
        completed_since: Optional[datetime] = None,
        limit: int = 100,
    ) -> List[Job]:
        """Find an agency's jobs by status, optionally completed on/after a time."""
        conditions = [
            JobModel.assigned_agency_id == agency_id,
            JobModel.status.in_([JobStatus(s).value for s in statuses]),
        ]
        if completed_since is not None:
            conditions.append(JobModel.completed_at >= completed_since)

        stmt = (
            select(JobModel)
            .where(and_(*conditions))
            .order_by(JobModel.created_at.desc())
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        with storage_errors("find_jobs_by_status"):
            result = await self.db.execute(stmt)
            models = result.scalars().all()

        return [self._model_to_entity(model) for model in models]

    async def find_active_for_engineer(self, engineer_id: UUID) -> List[Job]:
        """Find non-terminal jobs held by an engineer."""
        stmt = (
            select(JobModel)
            .where(
                and_(
                    JobModel.assigned_engineer_id == engineer_id,
                    JobModel.status.in_([s.value for s in JobStatus.non_terminal()]),
                )
            )
            .execution_options(populate_existing=True)
        )
        with storage_errors("find_active_jobs_for_engineer"):
            result = await self.db.execute(stmt)
            models = result.scalars().all()

        return [self._model_to_entity(model) for model in models]

    async def find_assigned_active(self, limit: int = 500) -> List[Job]:
        """Find non-terminal jobs that have an assigned engineer."""
        stmt = (
            select(JobModel)
            .where(
                and_(
                    JobModel.assigned_engineer_id.is_not(None),
                    JobModel.status.in_([s.value for s in JobStatus.non_terminal()]),
                )
            )
            .order_by(JobModel.assigned_at)
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        with storage_errors("find_assigned_active_jobs"):
            result = await self.db.execute(stmt)
            models = result.scalars().all()

        return [self._model_to_entity(model) for model in models]

    def _model_to_entity(self, model: JobModel) -> Job:
        """Convert SQLAlchemy model to domain entity."""
        site_location = SiteLocation(
            point=GeoPoint(latitude=model.site_latitude, longitude=model.site_longitude),
            address=model.site_address,
            city=model.site_city,
            state=model.site_state,
            postal_code=model.site_postal_code,
        )

        return Job(
            id=model.id,
            job_number=model.job_number,
            assigned_agency_id=model.assigned_agency_id,
            client_name=model.client_name,
            client_phone=model.client_phone,
            site_location=site_location,
            required_skill_level=model.required_skill_level,
            status=JobStatus(model.status),
            urgency=model.urgency,
            scheduled_time=model.scheduled_time,
            assigned_engineer_id=model.assigned_engineer_id,
            assigned_at=model.assigned_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
            accepted_at=model.accepted_at,
            started_at=model.started_at,
            completed_at=model.completed_at,
            cancelled_at=model.cancelled_at,
        )
