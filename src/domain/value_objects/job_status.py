"""
Job status value object.
"""

from enum import Enum


class JobStatus(str, Enum):
    """Job lifecycle status enumeration."""

    PENDING = "pending"
    ASSIGNED = "assigned"
    ACCEPTED = "accepted"
    TRAVELLING = "travelling"
    ONSITE = "onsite"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    def is_terminal(self) -> bool:
        """Check if status is terminal (no further transitions)."""
        return self in [JobStatus.COMPLETED, JobStatus.CANCELLED]

    def can_be_assigned(self) -> bool:
        """Check if status allows the pending -> assigned transition."""
        return self == JobStatus.PENDING

    @classmethod
    def non_terminal(cls) -> list["JobStatus"]:
        """Get all statuses that are not terminal."""
        return [status for status in cls if not status.is_terminal()]


class JobUrgency(str, Enum):
    """Job urgency classes."""

    EMERGENCY = "emergency"
    URGENT = "urgent"
    NORMAL = "normal"
    SCHEDULED = "scheduled"
