"""
Job changed domain event.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional
from uuid import UUID


def agency_channel(agency_id: UUID) -> str:
    """Tenant-scoped channel name."""
    return f"agency:{agency_id}"


class JobChangeType(str, Enum):
    """Kinds of committed job mutation broadcast to subscribers."""

    JOB_ASSIGNED = "job_assigned"
    JOB_STATUS_CHANGED = "job_status_changed"


@dataclass
class JobChanged:
    """Event raised after a job mutation has been committed."""

    event_type: JobChangeType
    job_id: UUID
    agency_id: UUID
    job_number: str
    status: str
    changed_by: UUID
    engineer_id: Optional[UUID] = None
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def channel(self) -> str:
        """Tenant-scoped channel name."""
        return agency_channel(self.agency_id)

    def to_payload(self) -> Dict[str, Any]:
        """Serialize for subscribers."""
        return {
            "event": self.event_type.value,
            "job_id": str(self.job_id),
            "agency_id": str(self.agency_id),
            "job_number": self.job_number,
            "status": self.status,
            "engineer_id": str(self.engineer_id) if self.engineer_id else None,
            "changed_by": str(self.changed_by),
            "timestamp": self.occurred_at.isoformat(),
        }
