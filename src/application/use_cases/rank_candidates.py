"""Rank candidates use case."""

from dataclasses import dataclass
from uuid import UUID

from src.application.interfaces.repositories import (
    EngineerRepositoryInterface,
    JobRepositoryInterface,
)
from src.application.interfaces.services import PermissionCheckerInterface
from src.application.services.distance_ranker import DistanceRanker, RankingResult
from src.application.services.permissions import ENGINEER_READ
from src.config.logging import get_logger
from src.domain.entities.job import Job
from src.domain.exceptions.auth_error import ForbiddenError
from src.domain.exceptions.not_found_error import NotFoundError
from src.domain.value_objects.actor import Actor

logger = get_logger(__name__)


@dataclass
class RankCandidatesRequest:
    """Request for ranking engineers for a job."""

    job_id: UUID
    actor: Actor
    limit: int = 50


@dataclass
class RankCandidatesResult:
    """Ranked engineers for a job."""

    job: Job
    ranking: RankingResult


class RankCandidatesUseCase:
    """Lists the job agency's available, qualified engineers nearest first."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        engineer_repo: EngineerRepositoryInterface,
        permission_checker: PermissionCheckerInterface,
        ranker: DistanceRanker,
    ):
        self.job_repo = job_repo
        self.engineer_repo = engineer_repo
        self.permission_checker = permission_checker
        self.ranker = ranker

    async def execute(self, request: RankCandidatesRequest) -> RankCandidatesResult:
        self.permission_checker.assert_permission(request.actor.role, ENGINEER_READ)

        job = await self.job_repo.get_by_id(request.job_id)
        if job is None:
            raise NotFoundError("Job", str(request.job_id))
        if not request.actor.belongs_to(job.assigned_agency_id):
            raise ForbiddenError("You do not have access to this job")

        engineers = await self.engineer_repo.find_available_by_agency(
            job.assigned_agency_id,
            min_skill_level=job.required_skill_level,
            limit=request.limit,
        )
        ranking = await self.ranker.rank(job.site_location.point, engineers)

        logger.info(
            "Ranked candidates for job",
            job_id=str(job.id),
            candidates=len(ranking.candidates),
            unlocated=ranking.unlocated_count,
            method=ranking.method,
        )
        return RankCandidatesResult(job=job, ranking=ranking)
