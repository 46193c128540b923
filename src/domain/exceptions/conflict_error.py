"""
Conflict domain exceptions: a precondition failed or a race was lost.
"""

from typing import Any, Dict, Optional

from .dispatch_error import DispatchError


class ConflictError(DispatchError):
    """Base exception for actionable conflicts."""

    code = "CONFLICT"
    status_code = 409


class JobAlreadyAssignedError(ConflictError):
    """Raised when the job already has an engineer."""

    def __init__(self, job_id: str, details: Optional[Dict[str, Any]] = None):
        self.job_id = job_id
        super().__init__(
            "Job is already assigned to an engineer",
            details=details or {"job": ["This job has already been assigned"]},
        )


class EngineerUnavailableError(ConflictError):
    """Raised when the engineer is not available for assignment."""

    def __init__(self, engineer_id: str, current_status: str):
        self.engineer_id = engineer_id
        self.current_status = current_status
        super().__init__(
            f"Engineer is not available for assignment. Current status: {current_status}",
            details={
                "engineer_id": [
                    f"Engineer availability status is '{current_status}', must be 'available'"
                ]
            },
        )
