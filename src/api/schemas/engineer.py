"""
Engineer-related API schemas.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.api.schemas.job import LocationSchema
from src.domain.entities.engineer import Engineer


class EngineerLocationUpdateRequest(BaseModel):
    """Position report body."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class EngineerLocationResponse(BaseModel):
    """Engineer position after an update."""

    id: UUID
    availability_status: str
    current_location: Optional[LocationSchema] = None
    last_location_update: Optional[datetime] = None

    @classmethod
    def from_entity(cls, engineer: Engineer) -> "EngineerLocationResponse":
        location = engineer.current_location
        return cls(
            id=engineer.id,
            availability_status=engineer.availability_status.value,
            current_location=(
                LocationSchema(**location.to_dict()) if location is not None else None
            ),
            last_location_update=engineer.last_location_update,
        )
