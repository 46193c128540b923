"""
Session resolution from gateway-issued headers.
"""

from typing import Mapping, Optional
from uuid import UUID

from src.application.interfaces.services import SessionResolverInterface
from src.config.logging import get_logger
from src.domain.value_objects.actor import Actor, UserRole

logger = get_logger(__name__)

ACTOR_ID_HEADER = "X-Actor-Id"
ACTOR_ROLE_HEADER = "X-Actor-Role"
AGENCY_ID_HEADER = "X-Agency-Id"


class HeaderSessionResolver(SessionResolverInterface):
    """Trusts identity headers set by the authenticating gateway."""

    async def resolve(self, headers: Mapping[str, str]) -> Optional[Actor]:
        actor_id = headers.get(ACTOR_ID_HEADER)
        role = headers.get(ACTOR_ROLE_HEADER)
        agency_id = headers.get(AGENCY_ID_HEADER)

        if not (actor_id and role and agency_id):
            return None

        try:
            return Actor(
                id=UUID(actor_id),
                role=UserRole(role.lower()),
                agency_id=UUID(agency_id),
            )
        except ValueError:
            logger.warning("Malformed session headers", role=role)
            return None
