"""
Domain value objects package.
"""

from .actor import Actor, UserRole
from .availability_status import AvailabilityStatus
from .geo_location import GeoPoint, SiteLocation
from .job_status import JobStatus, JobUrgency

__all__ = [
    "Actor",
    "AvailabilityStatus",
    "GeoPoint",
    "JobStatus",
    "JobUrgency",
    "SiteLocation",
    "UserRole",
]
