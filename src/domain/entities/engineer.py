"""
Engineer domain entity.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from src.domain.value_objects.availability_status import AvailabilityStatus
from src.domain.value_objects.geo_location import GeoPoint


@dataclass
class Engineer:
    """Engineer entity representing a field technician of an agency."""

    agency_id: UUID
    name: str
    phone: str
    skill_level: int
    id: UUID = field(default_factory=uuid4)
    email: Optional[str] = None
    availability_status: AvailabilityStatus = AvailabilityStatus.AVAILABLE
    current_location: Optional[GeoPoint] = None
    last_location_update: Optional[datetime] = None

    # Performance counters, mutated only by job completion handlers
    total_jobs_completed: int = 0
    average_rating: float = 0.0
    success_rate: float = 0.0

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate engineer data."""
        if not self.name or not self.name.strip():
            raise ValueError("Engineer name is required")
        if not 1 <= self.skill_level <= 5:
            raise ValueError("Skill level must be between 1 and 5")

        self.availability_status = AvailabilityStatus(self.availability_status)

        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)
        if not self.updated_at:
            self.updated_at = datetime.now(timezone.utc)

    @property
    def is_available(self) -> bool:
        """Check if engineer can take a job."""
        return self.availability_status.can_take_job()

    @property
    def has_location(self) -> bool:
        """Check if a current location is known."""
        return self.current_location is not None

    def summary(self, availability_status: Optional[AvailabilityStatus] = None) -> dict:
        """Minimal public view of the engineer."""
        status = availability_status or self.availability_status
        return {
            "id": str(self.id),
            "name": self.name,
            "phone": self.phone,
            "availability_status": status.value,
        }

    def to_dict(self) -> dict:
        """Convert engineer to dictionary."""
        return {
            "id": str(self.id),
            "agency_id": str(self.agency_id),
            "name": self.name,
            "phone": self.phone,
            "email": self.email,
            "skill_level": self.skill_level,
            "availability_status": self.availability_status.value,
            "current_location": self.current_location.to_dict()
            if self.current_location
            else None,
            "total_jobs_completed": self.total_jobs_completed,
            "average_rating": self.average_rating,
            "success_rate": self.success_rate,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
