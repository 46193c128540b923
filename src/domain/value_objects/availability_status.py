"""
Engineer availability status value object.
"""

from enum import Enum


class AvailabilityStatus(str, Enum):
    """Engineer availability status enumeration."""

    AVAILABLE = "available"
    ON_JOB = "on_job"
    OFFLINE = "offline"
    ON_LEAVE = "on_leave"

    def can_take_job(self) -> bool:
        """Check if engineer can be assigned a new job."""
        return self == AvailabilityStatus.AVAILABLE
