"""
Periodic audit of Job/Engineer assignment invariants.
"""

import asyncio
from typing import Any, Dict, Optional

from src.background.celery_app import celery_app
from src.config.logging import get_logger

logger = get_logger(__name__)


def run_async_in_new_loop(coro):
    """
    Run an async coroutine in a new event loop.

    Each Celery task gets its own event loop so async engines are never
    shared between loops.
    """
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


async def run_assignment_audit(database_url: Optional[str] = None) -> Dict[str, Any]:
    """Run one audit sweep with a task-local engine."""
    # Import here to avoid circular imports
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from src.application.use_cases.audit_assignments import AuditAssignmentsUseCase
    from src.config.database import create_engine
    from src.config.settings import settings
    from src.infrastructure.database.repositories.engineer_repository import (
        EngineerRepository,
    )
    from src.infrastructure.database.repositories.job_repository import (
        JobRepository,
    )

    engine = create_engine(database_url)
    session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )
    try:
        async with session_factory() as session:
            use_case = AuditAssignmentsUseCase(
                job_repo=JobRepository(session),
                engineer_repo=EngineerRepository(session),
                batch_size=settings.AUDIT_BATCH_SIZE,
            )
            report = await use_case.execute()
            return report.to_dict()
    finally:
        await engine.dispose()


@celery_app.task(bind=True, max_retries=2, name="audit_assignments_task")
def audit_assignments_task(self) -> Dict[str, Any]:
    """Detect Job/Engineer pairs left inconsistent; never repairs them."""
    logger.info(
        "Starting assignment audit task",
        attempt=self.request.retries + 1,
        max_retries=self.max_retries,
    )

    try:
        report = run_async_in_new_loop(run_assignment_audit())
    except Exception as e:
        logger.error(
            "Assignment audit task failed",
            error=str(e),
            attempt=self.request.retries + 1,
        )
        raise self.retry(exc=e, countdown=60)

    if report["violations"]:
        logger.error(
            "Assignment audit found violations",
            violations=len(report["violations"]),
            alert=True,
        )

    return {"status": "success", **report}
