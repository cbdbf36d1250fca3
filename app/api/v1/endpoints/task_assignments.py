"""Task assignment API: thin routes delegating to TaskAssignmentService.

The request body is the assignment form state (active tab, picked users,
picked team); build_assignment_options turns it into AssignmentOptions for
the acting user. Preview never writes; PUT and DELETE run in one transaction.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.v1.dependencies import (
    get_acting_user,
    get_assignment_service,
    get_assignment_service_for_write,
    get_organization_id,
)
from app.application.dtos.user import UserResult
from app.application.use_cases.assignments import (
    TaskAssignmentService,
    build_assignment_options,
)
from app.core.config import get_settings
from app.schemas.assignment import (
    AssignmentCommitResponse,
    AssignmentHistoryItemResponse,
    AssignmentPreviewResponse,
    AssignmentSelectionRequest,
    CurrentAssignmentResponse,
)

router = APIRouter()


@router.get("/{task_id}/assignment", response_model=CurrentAssignmentResponse)
async def get_task_assignment(
    task_id: str,
    organization_id: Annotated[str, Depends(get_organization_id)],
    service: Annotated[TaskAssignmentService, Depends(get_assignment_service)],
):
    """Return the task's current assignment and its display text."""
    current = await service.get_current_assignment(organization_id, task_id)
    return CurrentAssignmentResponse.model_validate(current)


@router.post("/{task_id}/assignment/preview", response_model=AssignmentPreviewResponse)
async def preview_task_assignment(
    task_id: str,
    body: AssignmentSelectionRequest,
    organization_id: Annotated[str, Depends(get_organization_id)],
    acting_user: Annotated[UserResult, Depends(get_acting_user)],
    service: Annotated[TaskAssignmentService, Depends(get_assignment_service)],
):
    """Dry-run the assignment: current vs. proposed, changes, conflicts, warnings."""
    options = build_assignment_options(
        body.to_selection(),
        task_id=task_id,
        organization_id=organization_id,
        acting_user=acting_user,
    )
    preview = await service.preview_assignment(options)
    return AssignmentPreviewResponse.model_validate(preview)


@router.put("/{task_id}/assignment", response_model=AssignmentCommitResponse)
async def assign_task(
    task_id: str,
    body: AssignmentSelectionRequest,
    organization_id: Annotated[str, Depends(get_organization_id)],
    acting_user: Annotated[UserResult, Depends(get_acting_user)],
    service: Annotated[TaskAssignmentService, Depends(get_assignment_service_for_write)],
):
    """Assign the task and append one history record. 400 on missing fields, 409 on conflicts."""
    options = build_assignment_options(
        body.to_selection(),
        task_id=task_id,
        organization_id=organization_id,
        acting_user=acting_user,
    )
    success = await service.assign_task(options)
    current = await service.get_current_assignment(organization_id, task_id)
    return AssignmentCommitResponse(
        success=success,
        assignment=CurrentAssignmentResponse.model_validate(current),
    )


@router.delete("/{task_id}/assignment", response_model=AssignmentCommitResponse)
async def unassign_task(
    task_id: str,
    organization_id: Annotated[str, Depends(get_organization_id)],
    acting_user: Annotated[UserResult, Depends(get_acting_user)],
    service: Annotated[TaskAssignmentService, Depends(get_assignment_service_for_write)],
    notes: str | None = Query(None, max_length=2000),
):
    """Clear the task's assignment and append an 'unassigned' history record."""
    success = await service.unassign_task(
        task_id, organization_id, acting_user.id, notes=notes
    )
    current = await service.get_current_assignment(organization_id, task_id)
    return AssignmentCommitResponse(
        success=success,
        assignment=CurrentAssignmentResponse.model_validate(current),
    )


@router.get(
    "/{task_id}/assignment/history",
    response_model=list[AssignmentHistoryItemResponse],
)
async def get_task_assignment_history(
    task_id: str,
    organization_id: Annotated[str, Depends(get_organization_id)],
    service: Annotated[TaskAssignmentService, Depends(get_assignment_service)],
    limit: int = Query(100, ge=1),
):
    """Return the task's assignment history, newest first (limit capped by HISTORY_MAX_LIMIT)."""
    limit = min(limit, get_settings().history_max_limit)
    records = await service.get_assignment_history(organization_id, task_id, limit=limit)
    return [AssignmentHistoryItemResponse.model_validate(r) for r in records]
