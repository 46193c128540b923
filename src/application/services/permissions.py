"""
Role-based permission checks.
"""

from typing import Dict, FrozenSet

from src.application.interfaces.services import PermissionCheckerInterface
from src.domain.exceptions.auth_error import PermissionDeniedError
from src.domain.value_objects.actor import UserRole

JOB_READ = "job:read"
JOB_WRITE = "job:write"
JOB_ASSIGN = "job:assign"
JOB_DELETE = "job:delete"
ENGINEER_READ = "engineer:read"
ENGINEER_WRITE = "engineer:write"
ENGINEER_LOCATION_UPDATE = "engineer:location:update"
AGENCY_READ = "agency:read"
AGENCY_WRITE = "agency:write"
AUDIT_READ = "audit:read"

ROLE_PERMISSIONS: Dict[UserRole, FrozenSet[str]] = {
    UserRole.ADMIN: frozenset(
        {
            JOB_READ,
            JOB_WRITE,
            JOB_ASSIGN,
            JOB_DELETE,
            ENGINEER_READ,
            ENGINEER_WRITE,
            ENGINEER_LOCATION_UPDATE,
            AGENCY_READ,
            AGENCY_WRITE,
            AUDIT_READ,
        }
    ),
    UserRole.MANAGER: frozenset(
        {JOB_READ, JOB_WRITE, ENGINEER_READ, ENGINEER_LOCATION_UPDATE, AGENCY_READ}
    ),
    UserRole.VIEWER: frozenset({JOB_READ, ENGINEER_READ, AGENCY_READ}),
    UserRole.ENGINEER: frozenset({JOB_READ, JOB_WRITE, ENGINEER_LOCATION_UPDATE}),
}


class RolePermissionChecker(PermissionCheckerInterface):
    """Static role x action matrix."""

    def __init__(self, matrix: Dict[UserRole, FrozenSet[str]] = ROLE_PERMISSIONS):
        self.matrix = matrix

    def has_permission(self, role: UserRole, permission: str) -> bool:
        return permission in self.matrix.get(UserRole(role), frozenset())

    def assert_permission(self, role: UserRole, permission: str) -> None:
        if not self.has_permission(role, permission):
            raise PermissionDeniedError(UserRole(role).value, permission)
