"""
Integration tests for the periodic assignment audit task.
"""

from unittest.mock import AsyncMock, patch

import pytest

from src.background.tasks.audit_assignments import (
    audit_assignments_task,
    run_assignment_audit,
)
from src.domain.value_objects.availability_status import AvailabilityStatus
from tests.factories import make_engineer


class TestRunAssignmentAudit:
    """Test cases for run_assignment_audit."""

    @pytest.mark.asyncio
    async def test_reports_stranded_engineer(self, test_settings, persisted):
        (engineer,) = await persisted(
            make_engineer(availability_status=AvailabilityStatus.ON_JOB)
        )

        report = await run_assignment_audit(test_settings.DATABASE_URL)

        assert report["consistent"] is False
        assert report["checked_engineers"] == 1
        assert report["violations"][0]["kind"] == "engineer_on_job_without_job"
        assert report["violations"][0]["engineer_id"] == str(engineer.id)


class TestAuditAssignmentsTask:
    """Test cases for the Celery task wrapper."""

    def test_returns_report(self):
        report = {
            "checked_jobs": 3,
            "checked_engineers": 3,
            "consistent": True,
            "violations": [],
            "audited_at": "2026-01-01T00:00:00+00:00",
        }

        with patch(
            "src.background.tasks.audit_assignments.run_assignment_audit",
            AsyncMock(return_value=report),
        ):
            result = audit_assignments_task.apply().get()

        assert result["status"] == "success"
        assert result["checked_jobs"] == 3
        assert result["consistent"] is True
