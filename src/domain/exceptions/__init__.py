"""
Domain exceptions package.
"""

from .auth_error import AuthError, ForbiddenError, PermissionDeniedError, UnauthorizedError
from .conflict_error import ConflictError, EngineerUnavailableError, JobAlreadyAssignedError
from .dispatch_error import DispatchError
from .not_found_error import NotFoundError
from .storage_error import ReconciliationError, StorageError
from .validation_error import InvalidIdError, ValidationError

__all__ = [
    "AuthError",
    "ConflictError",
    "DispatchError",
    "EngineerUnavailableError",
    "ForbiddenError",
    "InvalidIdError",
    "JobAlreadyAssignedError",
    "NotFoundError",
    "PermissionDeniedError",
    "ReconciliationError",
    "StorageError",
    "UnauthorizedError",
    "ValidationError",
]
