"""Job domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from src.domain.value_objects.geo_location import SiteLocation
from src.domain.value_objects.job_status import JobStatus, JobUrgency


@dataclass
class Job:
    """Job domain entity."""

    job_number: str
    assigned_agency_id: UUID
    client_name: str
    client_phone: str
    site_location: SiteLocation
    required_skill_level: int
    id: UUID = field(default_factory=uuid4)
    status: JobStatus = JobStatus.PENDING
    urgency: JobUrgency = JobUrgency.NORMAL
    scheduled_time: Optional[datetime] = None

    # Assignment back-reference
    assigned_engineer_id: Optional[UUID] = None
    assigned_at: Optional[datetime] = None

    # Lifecycle timestamps
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    accepted_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate job data."""
        if not self.job_number or not self.job_number.strip():
            raise ValueError("Job number is required")
        if not self.client_name or not self.client_name.strip():
            raise ValueError("Client name is required")
        if not 1 <= self.required_skill_level <= 5:
            raise ValueError("Required skill level must be between 1 and 5")

        self.status = JobStatus(self.status)
        self.urgency = JobUrgency(self.urgency)

        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)
        if not self.updated_at:
            self.updated_at = datetime.now(timezone.utc)

    @property
    def is_assigned(self) -> bool:
        """Check if an engineer holds this job."""
        return self.assigned_engineer_id is not None

    @property
    def is_terminal(self) -> bool:
        """Check if the job reached a terminal status."""
        return self.status.is_terminal()

    def can_be_assigned(self) -> bool:
        """Check if the job may move to 'assigned'."""
        return not self.is_assigned and not self.is_terminal

    def to_dict(self) -> Dict[str, Any]:
        """Convert job to dictionary."""
        return {
            "id": str(self.id),
            "job_number": self.job_number,
            "assigned_agency_id": str(self.assigned_agency_id),
            "client_name": self.client_name,
            "client_phone": self.client_phone,
            "site_location": self.site_location.to_dict(),
            "required_skill_level": self.required_skill_level,
            "status": self.status.value,
            "urgency": self.urgency.value,
            "scheduled_time": _iso(self.scheduled_time),
            "assigned_engineer_id": str(self.assigned_engineer_id)
            if self.assigned_engineer_id
            else None,
            "assigned_at": _iso(self.assigned_at),
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
            "accepted_at": _iso(self.accepted_at),
            "started_at": _iso(self.started_at),
            "completed_at": _iso(self.completed_at),
            "cancelled_at": _iso(self.cancelled_at),
        }


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None
