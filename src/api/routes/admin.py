"""
Admin routes for operational checks.
"""

from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends

from src.api.dependencies import AuditUseCaseDep, require_permission
from src.application.services.permissions import AUDIT_READ
from src.config.logging import get_logger
from src.domain.value_objects.actor import Actor

logger = get_logger(__name__)
router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/assignments/audit")
async def audit_assignments(
    actor: Annotated[Actor, Depends(require_permission(AUDIT_READ))],
    use_case: AuditUseCaseDep,
) -> Dict[str, Any]:
    """Report Job/Engineer pairs that violate the assignment invariants."""
    report = await use_case.execute()

    logger.info(
        "Assignment audit requested",
        actor_id=str(actor.id),
        violations=len(report.violations),
    )
    return report.to_dict()
