"""
Entity builders and request helpers shared by the test suite.
"""

from typing import Dict, Optional
from uuid import UUID, uuid4

from src.domain.entities.engineer import Engineer
from src.domain.entities.job import Job
from src.domain.value_objects.actor import UserRole
from src.domain.value_objects.geo_location import GeoPoint, SiteLocation

AGENCY_ID = UUID("5a1c0b6e-0000-4000-8000-000000000001")
OTHER_AGENCY_ID = UUID("5a1c0b6e-0000-4000-8000-000000000002")

SITE = GeoPoint(latitude=12.9591, longitude=77.6974)


def make_job(agency_id: UUID = AGENCY_ID, **overrides) -> Job:
    """Build a pending job entity."""
    fields = {
        "job_number": f"JOB-{uuid4().hex[:8].upper()}",
        "assigned_agency_id": agency_id,
        "client_name": "Lakeview Apartments",
        "client_phone": "+918000000001",
        "site_location": SiteLocation(
            point=SITE, address="12 Outer Ring Road", city="Bengaluru"
        ),
        "required_skill_level": 3,
    }
    fields.update(overrides)
    return Job(**fields)


def make_engineer(agency_id: UUID = AGENCY_ID, **overrides) -> Engineer:
    """Build an available, located engineer entity."""
    fields = {
        "agency_id": agency_id,
        "name": "Ravi Kumar",
        "phone": "+919800000001",
        "skill_level": 4,
        "current_location": GeoPoint(latitude=12.9716, longitude=77.5946),
        "average_rating": 4.5,
    }
    fields.update(overrides)
    return Engineer(**fields)


def actor_headers(
    role: UserRole = UserRole.ADMIN,
    agency_id: UUID = AGENCY_ID,
    actor_id: Optional[UUID] = None,
) -> Dict[str, str]:
    """Gateway session headers for a request."""
    return {
        "X-Actor-Id": str(actor_id or uuid4()),
        "X-Actor-Role": role.value,
        "X-Agency-Id": str(agency_id),
    }
