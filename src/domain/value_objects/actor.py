"""
Actor value object: the authenticated caller of an operation.
"""

from dataclasses import dataclass
from enum import Enum
from uuid import UUID


class UserRole(str, Enum):
    """Roles issued by the session provider."""

    ADMIN = "admin"
    MANAGER = "manager"
    VIEWER = "viewer"
    ENGINEER = "engineer"


@dataclass(frozen=True)
class Actor:
    """Resolved session: who is acting, in which role, for which agency."""

    id: UUID
    role: UserRole
    agency_id: UUID

    def belongs_to(self, agency_id: UUID) -> bool:
        """Check tenant ownership."""
        return self.agency_id == agency_id
