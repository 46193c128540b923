"""
Unit tests for RankCandidatesUseCase.
"""

from uuid import uuid4

import pytest

from src.application.services.distance_ranker import HAVERSINE_METHOD, DistanceRanker
from src.application.use_cases.rank_candidates import (
    RankCandidatesRequest,
    RankCandidatesUseCase,
)
from src.domain.exceptions.auth_error import ForbiddenError
from src.domain.exceptions.not_found_error import NotFoundError
from src.domain.value_objects.actor import Actor, UserRole
from tests.factories import AGENCY_ID, OTHER_AGENCY_ID, make_engineer, make_job


class TestRankCandidatesUseCase:
    """Test cases for RankCandidatesUseCase."""

    @pytest.fixture
    def use_case(self, mock_job_repository, mock_engineer_repository, permission_checker):
        return RankCandidatesUseCase(
            job_repo=mock_job_repository,
            engineer_repo=mock_engineer_repository,
            permission_checker=permission_checker,
            ranker=DistanceRanker(),
        )

    @pytest.mark.asyncio
    async def test_ranks_available_engineers(
        self, use_case, manager_actor, mock_job_repository, mock_engineer_repository
    ):
        job = make_job(required_skill_level=4)
        engineers = [make_engineer(name="A"), make_engineer(name="B", current_location=None)]
        mock_job_repository.get_by_id.return_value = job
        mock_engineer_repository.find_available_by_agency.return_value = engineers

        result = await use_case.execute(
            RankCandidatesRequest(job_id=job.id, actor=manager_actor, limit=10)
        )

        assert result.job is job
        assert [c.engineer.name for c in result.ranking.candidates] == ["A"]
        assert result.ranking.unlocated_count == 1
        assert result.ranking.method == HAVERSINE_METHOD
        mock_engineer_repository.find_available_by_agency.assert_awaited_once_with(
            AGENCY_ID, min_skill_level=4, limit=10
        )

    @pytest.mark.asyncio
    async def test_engineer_role_cannot_list_candidates(
        self, use_case, mock_job_repository
    ):
        actor = Actor(id=uuid4(), role=UserRole.ENGINEER, agency_id=AGENCY_ID)

        with pytest.raises(ForbiddenError):
            await use_case.execute(RankCandidatesRequest(job_id=uuid4(), actor=actor))

        mock_job_repository.get_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_job_not_found(self, use_case, manager_actor, mock_job_repository):
        mock_job_repository.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await use_case.execute(
                RankCandidatesRequest(job_id=uuid4(), actor=manager_actor)
            )

    @pytest.mark.asyncio
    async def test_other_agency_job_is_forbidden(
        self, use_case, manager_actor, mock_job_repository, mock_engineer_repository
    ):
        mock_job_repository.get_by_id.return_value = make_job(agency_id=OTHER_AGENCY_ID)

        with pytest.raises(ForbiddenError):
            await use_case.execute(
                RankCandidatesRequest(job_id=uuid4(), actor=manager_actor)
            )

        mock_engineer_repository.find_available_by_agency.assert_not_awaited()
