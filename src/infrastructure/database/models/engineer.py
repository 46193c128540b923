"""
Engineer SQLAlchemy model.
"""

from sqlalchemy import Column, DateTime, Float, Index, Integer, String, Uuid

from .base import BaseModel


class EngineerModel(BaseModel):
    """Engineer database model."""

    __tablename__ = "engineers"

    agency_id = Column(Uuid(as_uuid=True), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=False)
    email = Column(String(255))

    skill_level = Column(Integer, nullable=False)
    availability_status = Column(
        String(20), nullable=False, default="available", index=True
    )

    # Best-effort location, refreshed by the mobile client
    current_latitude = Column(Float)
    current_longitude = Column(Float)
    last_location_update = Column(DateTime(timezone=True))

    # Performance counters
    total_jobs_completed = Column(Integer, nullable=False, default=0)
    average_rating = Column(Float, nullable=False, default=0.0)
    success_rate = Column(Float, nullable=False, default=0.0)

    __table_args__ = (
        Index("ix_engineers_agency_availability", "agency_id", "availability_status"),
    )

    def __repr__(self) -> str:
        return f"<Engineer(id={self.id}, name={self.name}, agency_id={self.agency_id})>"
