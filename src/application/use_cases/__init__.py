"""
Application use cases package.
"""

from .assign_engineer import (
    AssignEngineerRequest,
    AssignEngineerResult,
    AssignmentCoordinator,
    AssignmentRecord,
)
from .audit_assignments import AssignmentViolation, AuditAssignmentsUseCase, AuditReport
from .rank_candidates import (
    RankCandidatesRequest,
    RankCandidatesResult,
    RankCandidatesUseCase,
)
from .update_engineer_location import (
    UpdateEngineerLocationRequest,
    UpdateEngineerLocationUseCase,
)

__all__ = [
    "AssignEngineerRequest",
    "AssignEngineerResult",
    "AssignmentCoordinator",
    "AssignmentRecord",
    "AssignmentViolation",
    "AuditAssignmentsUseCase",
    "AuditReport",
    "RankCandidatesRequest",
    "RankCandidatesResult",
    "RankCandidatesUseCase",
    "UpdateEngineerLocationRequest",
    "UpdateEngineerLocationUseCase",
]
