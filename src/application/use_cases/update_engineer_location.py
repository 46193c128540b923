"""Update engineer location use case."""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID

from src.application.interfaces.repositories import EngineerRepositoryInterface
from src.application.interfaces.services import PermissionCheckerInterface
from src.application.services.permissions import ENGINEER_LOCATION_UPDATE
from src.config.logging import get_logger
from src.domain.entities.engineer import Engineer
from src.domain.exceptions.auth_error import ForbiddenError
from src.domain.exceptions.not_found_error import NotFoundError
from src.domain.exceptions.storage_error import StorageError
from src.domain.value_objects.actor import Actor, UserRole
from src.domain.value_objects.geo_location import GeoPoint
from src.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)

logger = get_logger(__name__)


@dataclass
class UpdateEngineerLocationRequest:
    """A position report for one engineer."""

    engineer_id: UUID
    location: GeoPoint
    actor: Actor


class UpdateEngineerLocationUseCase:
    """Records an engineer's latest position for distance ranking.

    Engineers may only report their own position; admins and managers may
    correct any engineer of their agency.
    """

    def __init__(
        self,
        engineer_repo: EngineerRepositoryInterface,
        transaction_service: TransactionService,
        permission_checker: PermissionCheckerInterface,
    ):
        self.engineer_repo = engineer_repo
        self.transaction_service = transaction_service
        self.permission_checker = permission_checker

    async def execute(self, request: UpdateEngineerLocationRequest) -> Engineer:
        actor = request.actor
        self.permission_checker.assert_permission(actor.role, ENGINEER_LOCATION_UPDATE)

        engineer = await self.engineer_repo.get_by_id(request.engineer_id)
        if engineer is None:
            raise NotFoundError("Engineer", str(request.engineer_id))
        if not actor.belongs_to(engineer.agency_id):
            raise ForbiddenError("You do not have access to this engineer")
        if actor.role == UserRole.ENGINEER and actor.id != engineer.id:
            raise ForbiddenError(
                "You do not have permission to update this engineer location"
            )

        recorded_at = datetime.now(timezone.utc)
        try:
            updated = await self.engineer_repo.update_location(
                engineer.id, request.location, recorded_at
            )
            await self.transaction_service.commit()
        except StorageError:
            await self.transaction_service.rollback()
            raise

        if updated is None:
            raise NotFoundError("Engineer", str(engineer.id))

        logger.debug(
            "Engineer location updated",
            engineer_id=str(engineer.id),
            recorded_at=recorded_at.isoformat(),
        )
        return updated
