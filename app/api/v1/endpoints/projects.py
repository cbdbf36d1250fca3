"""Project-level assignment audit API."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import get_assignment_service, get_organization_id
from app.application.use_cases.assignments import TaskAssignmentService
from app.schemas.assignment import ProjectAssignmentConflictResponse

router = APIRouter()


@router.get(
    "/{project_id}/assignment-conflicts",
    response_model=list[ProjectAssignmentConflictResponse],
)
async def get_project_assignment_conflicts(
    project_id: str,
    organization_id: Annotated[str, Depends(get_organization_id)],
    service: Annotated[TaskAssignmentService, Depends(get_assignment_service)],
):
    """List project tasks with no assignment (empty list when every task is assigned)."""
    conflicts = await service.check_project_assignment_conflicts(organization_id, project_id)
    return [ProjectAssignmentConflictResponse.model_validate(c) for c in conflicts]
