"""
Job SQLAlchemy model.
"""

from sqlalchemy import Column, DateTime, Float, Index, Integer, String, Uuid

from .base import BaseModel


class JobModel(BaseModel):
    """Job database model."""

    __tablename__ = "jobs"

    job_number = Column(String(50), nullable=False, unique=True)

    # Owning agency (tenant)
    assigned_agency_id = Column(Uuid(as_uuid=True), nullable=False, index=True)

    # Client information
    client_name = Column(String(255), nullable=False)
    client_phone = Column(String(20), nullable=False)

    # Site location
    site_latitude = Column(Float, nullable=False)
    site_longitude = Column(Float, nullable=False)
    site_address = Column(String(500), nullable=False)
    site_city = Column(String(100))
    site_state = Column(String(100))
    site_postal_code = Column(String(20))

    required_skill_level = Column(Integer, nullable=False)

    # Scheduling
    scheduled_time = Column(DateTime(timezone=True))
    urgency = Column(String(20), nullable=False, default="normal")

    # Status & assignment
    status = Column(String(20), nullable=False, default="pending", index=True)
    assigned_engineer_id = Column(Uuid(as_uuid=True), nullable=True, index=True)
    assigned_at = Column(DateTime(timezone=True))

    # Lifecycle timestamps
    accepted_at = Column(DateTime(timezone=True))
    started_at = Column(DateTime(timezone=True))
    completed_at = Column(DateTime(timezone=True))
    cancelled_at = Column(DateTime(timezone=True))

    __table_args__ = (
        Index("ix_jobs_agency_status", "assigned_agency_id", "status"),
    )

    def __repr__(self) -> str:
        return f"<Job(id={self.id}, job_number={self.job_number}, status={self.status})>"
