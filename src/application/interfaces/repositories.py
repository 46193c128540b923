"""
Repository interfaces for dependency inversion.

Both repositories expose ``conditional_update``: a single atomic
``UPDATE ... WHERE`` that applies only if every ``expected`` field currently
holds the given value (``None`` matches NULL). It returns whether a row was
changed. This is the only mutual-exclusion mechanism the dispatch core relies
on; callers must never emulate it with a read followed by a write.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional
from uuid import UUID

from src.domain.entities.engineer import Engineer
from src.domain.entities.job import Job
from src.domain.value_objects.availability_status import AvailabilityStatus
from src.domain.value_objects.geo_location import GeoPoint
from src.domain.value_objects.job_status import JobStatus


class JobRepositoryInterface(ABC):
    """Job repository interface."""

    @abstractmethod
    async def get_by_id(self, job_id: UUID) -> Optional[Job]:
        """Get job by ID."""
        pass

    @abstractmethod
    async def get_by_job_number(self, job_number: str) -> Optional[Job]:
        """Get job by its human-readable number."""
        pass

    @abstractmethod
    async def create(self, job: Job) -> Job:
        """Create a new job."""
        pass

    @abstractmethod
    async def conditional_update(
        self, job_id: UUID, expected: Mapping[str, Any], values: Mapping[str, Any]
    ) -> bool:
        """Update the job only if its persisted state matches ``expected``."""
        pass

    @abstractmethod
    async def find_by_status(
        self,
        agency_id: UUID,
        statuses: Iterable[JobStatus],
        completed_since: Optional[datetime] = None,
        limit: int = 100,
    ) -> List[Job]:
        """Find an agency's jobs by status, optionally completed on/after a time."""
        pass

    @abstractmethod
    async def find_active_for_engineer(self, engineer_id: UUID) -> List[Job]:
        """Find non-terminal jobs held by an engineer."""
        pass

    @abstractmethod
    async def find_assigned_active(self, limit: int = 500) -> List[Job]:
        """Find non-terminal jobs that have an assigned engineer."""
        pass


class EngineerRepositoryInterface(ABC):
    """Engineer repository interface."""

    @abstractmethod
    async def get_by_id(self, engineer_id: UUID) -> Optional[Engineer]:
        """Get engineer by ID."""
        pass

    @abstractmethod
    async def create(self, engineer: Engineer) -> Engineer:
        """Create a new engineer."""
        pass

    @abstractmethod
    async def conditional_update(
        self, engineer_id: UUID, expected: Mapping[str, Any], values: Mapping[str, Any]
    ) -> bool:
        """Update the engineer only if its persisted state matches ``expected``."""
        pass

    @abstractmethod
    async def update_location(
        self, engineer_id: UUID, location: GeoPoint, recorded_at: datetime
    ) -> Optional[Engineer]:
        """Store the engineer's latest position; None if the engineer is gone."""
        pass

    @abstractmethod
    async def find_available_by_agency(
        self, agency_id: UUID, min_skill_level: int = 1, limit: int = 50
    ) -> List[Engineer]:
        """Find an agency's available engineers at or above a skill level."""
        pass

    @abstractmethod
    async def find_by_availability(
        self, status: AvailabilityStatus, limit: int = 500
    ) -> List[Engineer]:
        """Find engineers in a given availability status."""
        pass
