"""
Domain package.
"""

from .entities import *
from .events import *
from .exceptions import *
from .value_objects import *

__all__ = [
    # Entities
    "Engineer",
    "Job",

    # Events
    "JobChangeType",
    "JobChanged",

    # Exceptions
    "ConflictError",
    "DispatchError",
    "ForbiddenError",
    "NotFoundError",
    "ReconciliationError",
    "StorageError",
    "UnauthorizedError",
    "ValidationError",

    # Value Objects
    "Actor",
    "AvailabilityStatus",
    "GeoPoint",
    "JobStatus",
    "SiteLocation",
    "UserRole",
]
