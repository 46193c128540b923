"""Engineer-related API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import (
    EngineerIdDep,
    UpdateLocationUseCaseDep,
    require_permission,
)
from src.api.schemas.engineer import (
    EngineerLocationResponse,
    EngineerLocationUpdateRequest,
)
from src.application.services.permissions import ENGINEER_LOCATION_UPDATE
from src.application.use_cases.update_engineer_location import (
    UpdateEngineerLocationRequest,
)
from src.domain.value_objects.actor import Actor
from src.domain.value_objects.geo_location import GeoPoint

router = APIRouter(prefix="/engineers", tags=["engineers"])

LocationReporter = Annotated[Actor, Depends(require_permission(ENGINEER_LOCATION_UPDATE))]


@router.patch("/{engineer_id}/location", response_model=EngineerLocationResponse)
async def update_engineer_location(
    engineer_uuid: EngineerIdDep,
    actor: LocationReporter,
    payload: EngineerLocationUpdateRequest,
    use_case: UpdateLocationUseCaseDep,
):
    """Record an engineer's current position."""
    engineer = await use_case.execute(
        UpdateEngineerLocationRequest(
            engineer_id=engineer_uuid,
            location=GeoPoint(latitude=payload.latitude, longitude=payload.longitude),
            actor=actor,
        )
    )
    return EngineerLocationResponse.from_entity(engineer)
