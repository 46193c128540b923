"""
Unit tests for domain entities and events.
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from src.domain.events.job_changed import JobChanged, JobChangeType, agency_channel
from src.domain.value_objects.availability_status import AvailabilityStatus
from src.domain.value_objects.job_status import JobStatus
from tests.factories import AGENCY_ID, make_engineer, make_job


class TestJob:
    """Test Job entity."""

    def test_defaults(self):
        job = make_job()

        assert job.status == JobStatus.PENDING
        assert job.assigned_engineer_id is None
        assert job.is_assigned is False
        assert job.can_be_assigned() is True
        assert job.created_at is not None

    def test_coerces_raw_status(self):
        job = make_job(status="assigned", assigned_engineer_id=uuid4())
        assert job.status is JobStatus.ASSIGNED
        assert job.is_assigned is True
        assert job.can_be_assigned() is False

    def test_terminal_job_cannot_be_assigned(self):
        job = make_job(status=JobStatus.CANCELLED)
        assert job.is_terminal is True
        assert job.can_be_assigned() is False

    @pytest.mark.parametrize("skill", [0, 6])
    def test_rejects_invalid_skill_level(self, skill):
        with pytest.raises(ValueError, match="Required skill level"):
            make_job(required_skill_level=skill)

    def test_requires_job_number(self):
        with pytest.raises(ValueError, match="Job number is required"):
            make_job(job_number=" ")

    def test_to_dict(self):
        job = make_job()
        data = job.to_dict()

        assert data["id"] == str(job.id)
        assert data["assigned_agency_id"] == str(AGENCY_ID)
        assert data["status"] == "pending"
        assert data["site_location"]["lat"] == job.site_location.point.latitude
        assert data["assigned_engineer_id"] is None
        assert data["assigned_at"] is None


class TestEngineer:
    """Test Engineer entity."""

    def test_availability(self):
        assert make_engineer().is_available is True
        assert make_engineer(availability_status="on_job").is_available is False

    def test_has_location(self):
        assert make_engineer().has_location is True
        assert make_engineer(current_location=None).has_location is False

    def test_summary_can_override_status(self):
        engineer = make_engineer()
        summary = engineer.summary(AvailabilityStatus.ON_JOB)

        assert summary == {
            "id": str(engineer.id),
            "name": "Ravi Kumar",
            "phone": "+919800000001",
            "availability_status": "on_job",
        }

    def test_rejects_invalid_skill_level(self):
        with pytest.raises(ValueError, match="Skill level"):
            make_engineer(skill_level=9)


class TestJobChanged:
    """Test JobChanged event."""

    def test_channel_is_agency_scoped(self):
        event = JobChanged(
            event_type=JobChangeType.JOB_ASSIGNED,
            job_id=uuid4(),
            agency_id=AGENCY_ID,
            job_number="JOB-1",
            status="assigned",
            changed_by=uuid4(),
        )
        assert event.channel == f"agency:{AGENCY_ID}"
        assert event.channel == agency_channel(AGENCY_ID)

    def test_payload(self):
        job_id, engineer_id, actor_id = uuid4(), uuid4(), uuid4()
        occurred_at = datetime(2026, 1, 5, 10, 30, tzinfo=timezone.utc)
        event = JobChanged(
            event_type=JobChangeType.JOB_ASSIGNED,
            job_id=job_id,
            agency_id=AGENCY_ID,
            job_number="JOB-1",
            status="assigned",
            changed_by=actor_id,
            engineer_id=engineer_id,
            occurred_at=occurred_at,
        )

        assert event.to_payload() == {
            "event": "job_assigned",
            "job_id": str(job_id),
            "agency_id": str(AGENCY_ID),
            "job_number": "JOB-1",
            "status": "assigned",
            "engineer_id": str(engineer_id),
            "changed_by": str(actor_id),
            "timestamp": "2026-01-05T10:30:00+00:00",
        }
