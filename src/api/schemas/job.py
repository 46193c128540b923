"""
Job-related API schemas.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.application.services.distance_ranker import RankedCandidate
from src.domain.entities.engineer import Engineer
from src.domain.entities.job import Job

from .common import TimestampMixin


class SiteLocationSchema(BaseModel):
    """Job site schema."""

    lat: float
    lng: float
    address: str
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None


class JobResponse(TimestampMixin):
    """Job response schema."""

    id: UUID
    job_number: str
    assigned_agency_id: UUID
    client_name: str
    client_phone: str
    site_location: SiteLocationSchema
    required_skill_level: int = Field(..., ge=1, le=5)
    status: str = Field(..., description="Current job status")
    urgency: str
    scheduled_time: Optional[datetime] = None
    assigned_engineer_id: Optional[UUID] = None
    assigned_at: Optional[datetime] = None
    accepted_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, job: Job) -> "JobResponse":
        return cls.model_validate(job.to_dict())


class JobListResponse(BaseModel):
    """Job listing schema."""

    items: List[JobResponse]
    total: int


class AssignJobRequest(BaseModel):
    """Job assignment request schema."""

    engineer_id: UUID = Field(..., description="Engineer to assign")


class EngineerSummarySchema(BaseModel):
    """Minimal engineer view returned with an assignment."""

    id: UUID
    name: str
    phone: str
    availability_status: str


class AssignmentSchema(BaseModel):
    """Assignment record schema."""

    assigned_at: datetime
    assigned_by: UUID


class AssignJobResponse(BaseModel):
    """Job assignment response schema."""

    job: JobResponse
    engineer: EngineerSummarySchema
    assignment: AssignmentSchema
    notification_sent: bool


class LocationSchema(BaseModel):
    """Coordinates schema."""

    lat: float
    lng: float


class CandidateResponse(BaseModel):
    """Ranked engineer schema."""

    id: UUID
    name: str
    phone: str
    skill_level: int
    average_rating: float
    total_jobs_completed: int
    current_location: LocationSchema
    distance_km: float
    duration_minutes: Optional[int] = None
    distance_method: str

    @classmethod
    def from_ranked(cls, candidate: RankedCandidate) -> "CandidateResponse":
        engineer: Engineer = candidate.engineer
        return cls(
            id=engineer.id,
            name=engineer.name,
            phone=engineer.phone,
            skill_level=engineer.skill_level,
            average_rating=engineer.average_rating,
            total_jobs_completed=engineer.total_jobs_completed,
            current_location=LocationSchema(**engineer.current_location.to_dict()),
            distance_km=round(candidate.distance_km, 2),
            duration_minutes=candidate.duration_minutes,
            distance_method=candidate.method,
        )


class CandidateListResponse(BaseModel):
    """Ranked candidates for a job."""

    job_id: UUID
    candidates: List[CandidateResponse]
    total: int
    unlocated_engineers: int
    distance_calculation_method: str
