#!/usr/bin/env python3
"""
Seed database with demo dispatch data for development.

Creates one agency's worth of engineers around Bengaluru and a handful of
pending jobs. Idempotent: does nothing when jobs already exist.
"""

import asyncio
import os
import sys
from pathlib import Path
from uuid import UUID

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.config.database import create_engine
from src.config.logging import configure_logging, get_logger
from src.domain.entities.engineer import Engineer
from src.domain.entities.job import Job
from src.domain.value_objects.availability_status import AvailabilityStatus
from src.domain.value_objects.geo_location import GeoPoint, SiteLocation
from src.domain.value_objects.job_status import JobUrgency
from src.infrastructure.database.models import JobModel
from src.infrastructure.database.repositories import (
    EngineerRepository,
    JobRepository,
    TransactionService,
)

logger = get_logger(__name__)

DEMO_AGENCY_ID = UUID("5a1c0b6e-0000-4000-8000-000000000001")

ENGINEERS = [
    ("Ravi Kumar", "+919800000001", 4, AvailabilityStatus.AVAILABLE, (12.9716, 77.5946), 4.6),
    ("Anita Rao", "+919800000002", 5, AvailabilityStatus.AVAILABLE, (12.9352, 77.6245), 4.9),
    ("Suresh Patil", "+919800000003", 3, AvailabilityStatus.AVAILABLE, (13.0358, 77.5970), 4.1),
    ("Meena Iyer", "+919800000004", 2, AvailabilityStatus.OFFLINE, (12.9141, 77.6411), 3.8),
    ("Vikram Shah", "+919800000005", 4, AvailabilityStatus.AVAILABLE, None, 4.3),
]

JOBS = [
    ("JOB-2026-0001", "Lakeview Apartments", "+918000000001", 3, JobUrgency.URGENT,
     (12.9591, 77.6974), "12 Outer Ring Road, Marathahalli"),
    ("JOB-2026-0002", "Green Leaf Cafe", "+918000000002", 2, JobUrgency.NORMAL,
     (12.9719, 77.6412), "80 Feet Road, Indiranagar"),
    ("JOB-2026-0003", "City Hospital", "+918000000003", 5, JobUrgency.EMERGENCY,
     (12.9279, 77.6271), "Hosur Road, Koramangala"),
]


async def seed_database() -> None:
    """Seed database with demo data."""
    engine = create_engine(os.getenv("MIGRATION_DATABASE_URL"))
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    try:
        async with session_factory() as session:
            existing = await session.execute(select(func.count()).select_from(JobModel))
            if existing.scalar() > 0:
                logger.info("Database already has data, skipping seed")
                return

            engineer_repo = EngineerRepository(session)
            job_repo = JobRepository(session)
            transaction_service = TransactionService(session)

            for name, phone, skill, status, location, rating in ENGINEERS:
                await engineer_repo.create(
                    Engineer(
                        agency_id=DEMO_AGENCY_ID,
                        name=name,
                        phone=phone,
                        skill_level=skill,
                        availability_status=status,
                        current_location=GeoPoint(*location) if location else None,
                        average_rating=rating,
                    )
                )

            for number, client, phone, skill, urgency, point, address in JOBS:
                await job_repo.create(
                    Job(
                        job_number=number,
                        assigned_agency_id=DEMO_AGENCY_ID,
                        client_name=client,
                        client_phone=phone,
                        site_location=SiteLocation(
                            point=GeoPoint(*point),
                            address=address,
                            city="Bengaluru",
                            state="Karnataka",
                        ),
                        required_skill_level=skill,
                        urgency=urgency,
                    )
                )

            await transaction_service.commit()
            logger.info(
                "Database seeded",
                agency_id=str(DEMO_AGENCY_ID),
                engineers=len(ENGINEERS),
                jobs=len(JOBS),
            )
    finally:
        await engine.dispose()


if __name__ == "__main__":
    configure_logging()
    asyncio.run(seed_database())
