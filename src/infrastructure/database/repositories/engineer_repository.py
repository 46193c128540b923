"""Engineer repository implementation."""

from datetime import datetime
from typing import Any, List, Mapping, Optional
from uuid import UUID

from sqlalchemy import and_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories import EngineerRepositoryInterface
from src.config.logging import get_logger
from src.domain.entities.engineer import Engineer
from src.domain.value_objects.availability_status import AvailabilityStatus
from src.domain.value_objects.geo_location import GeoPoint
from src.infrastructure.database.models.engineer import EngineerModel

from .helpers import build_conditions, normalize_values, storage_errors

logger = get_logger(__name__)


class EngineerRepository(EngineerRepositoryInterface):
    """Engineer repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, engineer_id: UUID) -> Optional[Engineer]:
        """Get engineer by ID."""
        stmt = (
            select(EngineerModel)
            .where(EngineerModel.id == engineer_id)
            .execution_options(populate_existing=True)
        )
        with storage_errors("get_engineer"):
            result = await self.db.execute(stmt)
            model = result.scalar_one_or_none()

        return self._model_to_entity(model) if model else None

    async def create(self, engineer: Engineer) -> Engineer:
        """Create a new engineer."""
        location = engineer.current_location
        engineer_model = EngineerModel(
            id=engineer.id,
            agency_id=engineer.agency_id,
            name=engineer.name,
            phone=engineer.phone,
            email=engineer.email,
            skill_level=engineer.skill_level,
            availability_status=engineer.availability_status.value,
            current_latitude=location.latitude if location else None,
            current_longitude=location.longitude if location else None,
            last_location_update=engineer.last_location_update,
            total_jobs_completed=engineer.total_jobs_completed,
            average_rating=engineer.average_rating,
            success_rate=engineer.success_rate,
            created_at=engineer.created_at,
            updated_at=engineer.updated_at,
        )

        with storage_errors("create_engineer"):
            self.db.add(engineer_model)
            await self.db.flush()
            await self.db.refresh(engineer_model)

        return self._model_to_entity(engineer_model)

    async def conditional_update(
        self, engineer_id: UUID, expected: Mapping[str, Any], values: Mapping[str, Any]
    ) -> bool:
        """Update the engineer only if its persisted state matches ``expected``."""
        stmt = (
            update(EngineerModel)
            .where(
                and_(
                    EngineerModel.id == engineer_id,
                    *build_conditions(EngineerModel, expected),
                )
            )
            .values(**normalize_values(EngineerModel, values))
            .execution_options(synchronize_session=False)
        )
        with storage_errors("update_engineer"):
            result = await self.db.execute(stmt)

        applied = result.rowcount == 1
        logger.debug(
            "Conditional engineer update",
            engineer_id=str(engineer_id),
            expected=list(expected),
            applied=applied,
        )
        return applied

    async def update_location(
        self, engineer_id: UUID, location: GeoPoint, recorded_at: datetime
    ) -> Optional[Engineer]:
        """Overwrite the last known position and its timestamp."""
        stmt = (
            update(EngineerModel)
            .where(EngineerModel.id == engineer_id)
            .values(
                current_latitude=location.latitude,
                current_longitude=location.longitude,
                last_location_update=recorded_at,
                updated_at=recorded_at,
            )
            .execution_options(synchronize_session=False)
        )
        with storage_errors("update_engineer_location"):
            result = await self.db.execute(stmt)

        if result.rowcount != 1:
            return None
        return await self.get_by_id(engineer_id)

    async def find_available_by_agency(
        self, agency_id: UUID, min_skill_level: int = 1, limit: int = 50
    ) -> List[Engineer]:
        """Find an agency's available engineers at or above a skill level."""
        stmt = (
            select(EngineerModel)
            .where(
                and_(
                    EngineerModel.agency_id == agency_id,
                    EngineerModel.availability_status
                    == AvailabilityStatus.AVAILABLE.value,
                    EngineerModel.skill_level >= min_skill_level,
                )
            )
            .order_by(EngineerModel.skill_level.desc(), EngineerModel.name)
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        with storage_errors("find_available_engineers"):
            result = await self.db.execute(stmt)
            models = result.scalars().all()

        return [self._model_to_entity(model) for model in models]

    async def find_by_availability(
        self, status: AvailabilityStatus, limit: int = 500
    ) -> List[Engineer]:
        """Find engineers in a given availability status."""
        stmt = (
            select(EngineerModel)
            .where(
                EngineerModel.availability_status == AvailabilityStatus(status).value
            )
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        with storage_errors("find_engineers_by_availability"):
            result = await self.db.execute(stmt)
            models = result.scalars().all()

        return [self._model_to_entity(model) for model in models]

    def _model_to_entity(self, model: EngineerModel) -> Engineer:
        """Convert SQLAlchemy model to domain entity."""
        location = None
        if model.current_latitude is not None and model.current_longitude is not None:
            location = GeoPoint(
                latitude=model.current_latitude, longitude=model.current_longitude
            )

        return Engineer(
            id=model.id,
            agency_id=model.agency_id,
            name=model.name,
            phone=model.phone,
            email=model.email,
            skill_level=model.skill_level,
            availability_status=AvailabilityStatus(model.availability_status),
            current_location=location,
            last_location_update=model.last_location_update,
            total_jobs_completed=model.total_jobs_completed or 0,
            average_rating=model.average_rating or 0.0,
            success_rate=model.success_rate or 0.0,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
