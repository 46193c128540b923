"""
Storage-related domain exceptions.

Messages on these exceptions are public; driver-level text stays on the
chained ``__cause__`` and in the logs.
"""

from typing import Any, Dict, Optional

from .dispatch_error import DispatchError


class StorageError(DispatchError):
    """Raised when a read or write against the entity store fails."""

    code = "DATABASE_ERROR"
    status_code = 500

    def __init__(self, message: str = "A database error occurred", operation: Optional[str] = None):
        self.operation = operation
        super().__init__(message)


class ReconciliationError(StorageError):
    """Raised when compensation failed and Job/Engineer are left inconsistent.

    Carries everything needed for offline repair: both record ids and the
    writes that were attempted.
    """

    def __init__(
        self,
        job_id: str,
        engineer_id: str,
        primary_write: Dict[str, Any],
        compensating_write: Dict[str, Any],
        reason: str,
    ):
        self.job_id = job_id
        self.engineer_id = engineer_id
        self.primary_write = primary_write
        self.compensating_write = compensating_write
        self.reason = reason
        super().__init__(
            "Failed to update engineer availability", operation="compensate_assignment"
        )

    def repair_context(self) -> Dict[str, Any]:
        """Structured context for the alert log entry."""
        return {
            "job_id": self.job_id,
            "engineer_id": self.engineer_id,
            "primary_write": self.primary_write,
            "compensating_write": self.compensating_write,
            "reason": self.reason,
        }
