"""Assignment Routes — read-only consistency report across both stores."""

from fastapi import APIRouter, Depends

from hr_records.api.deps import get_coordinator
from hr_records.schemas.assignment import ConsistencyReportResponse
from hr_records.services.assignment_coordinator import AssignmentCoordinator

router = APIRouter(prefix="/api/v1/assignments", tags=["assignments"])


@router.get("/consistency", response_model=ConsistencyReportResponse)
async def consistency_report(
    coordinator: AssignmentCoordinator = Depends(get_coordinator),
):
    """Employees and entries whose two views of an assignment disagree."""
    return await coordinator.consistency_report()
