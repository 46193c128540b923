"""Job-related API endpoints."""

from datetime import datetime
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import (
    AssignmentCoordinatorDep,
    JobIdDep,
    JobRepositoryDep,
    RankCandidatesUseCaseDep,
    require_permission,
)
from src.api.schemas.job import (
    AssignJobRequest,
    AssignJobResponse,
    AssignmentSchema,
    CandidateListResponse,
    CandidateResponse,
    EngineerSummarySchema,
    JobListResponse,
    JobResponse,
)
from src.application.services.permissions import ENGINEER_READ, JOB_ASSIGN, JOB_READ
from src.application.use_cases.assign_engineer import AssignEngineerRequest
from src.application.use_cases.rank_candidates import RankCandidatesRequest
from src.config.logging import get_logger
from src.config.settings import settings
from src.domain.exceptions.auth_error import ForbiddenError
from src.domain.exceptions.not_found_error import NotFoundError
from src.domain.value_objects.actor import Actor
from src.domain.value_objects.job_status import JobStatus

logger = get_logger(__name__)
router = APIRouter(prefix="/jobs", tags=["jobs"])

JobReader = Annotated[Actor, Depends(require_permission(JOB_READ))]
EngineerReader = Annotated[Actor, Depends(require_permission(ENGINEER_READ))]
JobAssigner = Annotated[Actor, Depends(require_permission(JOB_ASSIGN))]


@router.get("", response_model=JobListResponse)
async def list_jobs(
    actor: JobReader,
    job_repository: JobRepositoryDep,
    status: Annotated[Optional[List[JobStatus]], Query()] = None,
    completed_since: Optional[datetime] = None,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    """List the actor's agency jobs by status."""
    jobs = await job_repository.find_by_status(
        actor.agency_id,
        statuses=status or list(JobStatus),
        completed_since=completed_since,
        limit=limit,
    )
    return JobListResponse(
        items=[JobResponse.from_entity(job) for job in jobs], total=len(jobs)
    )


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(
    job_uuid: JobIdDep,
    actor: JobReader,
    job_repository: JobRepositoryDep,
):
    """Get a job by ID."""
    job = await job_repository.get_by_id(job_uuid)
    if job is None:
        raise NotFoundError("Job", str(job_uuid))
    if not actor.belongs_to(job.assigned_agency_id):
        raise ForbiddenError("You do not have access to this job")

    return JobResponse.from_entity(job)


@router.get("/{job_id}/candidates", response_model=CandidateListResponse)
async def get_candidates(
    job_uuid: JobIdDep,
    actor: EngineerReader,
    use_case: RankCandidatesUseCaseDep,
):
    """Available engineers of the job's agency, nearest first."""
    result = await use_case.execute(
        RankCandidatesRequest(
            job_id=job_uuid, actor=actor, limit=settings.CANDIDATE_LIMIT
        )
    )
    ranking = result.ranking

    return CandidateListResponse(
        job_id=result.job.id,
        candidates=[CandidateResponse.from_ranked(c) for c in ranking.candidates],
        total=len(ranking.candidates),
        unlocated_engineers=ranking.unlocated_count,
        distance_calculation_method=ranking.method,
    )


@router.post("/{job_id}/assign", response_model=AssignJobResponse)
async def assign_job(
    job_uuid: JobIdDep,
    actor: JobAssigner,
    payload: AssignJobRequest,
    coordinator: AssignmentCoordinatorDep,
):
    """Assign an engineer to a job."""
    result = await coordinator.execute(
        AssignEngineerRequest(
            job_id=job_uuid, engineer_id=payload.engineer_id, actor=actor
        )
    )

    return AssignJobResponse(
        job=JobResponse.from_entity(result.job),
        engineer=EngineerSummarySchema(**result.engineer.summary()),
        assignment=AssignmentSchema(
            assigned_at=result.assignment.assigned_at,
            assigned_by=result.assignment.assigned_by,
        ),
        notification_sent=result.notification_sent,
    )
