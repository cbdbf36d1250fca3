"""Pydantic request/response schemas for the API."""

from app.schemas.assignment import (
    AssignmentCommitResponse,
    AssignmentHistoryItemResponse,
    AssignmentPreviewResponse,
    AssignmentSelectionRequest,
    CurrentAssignmentResponse,
    ProjectAssignmentConflictResponse,
)
from app.schemas.health import HealthResponse

__all__ = [
    "AssignmentCommitResponse",
    "AssignmentHistoryItemResponse",
    "AssignmentPreviewResponse",
    "AssignmentSelectionRequest",
    "CurrentAssignmentResponse",
    "HealthResponse",
    "ProjectAssignmentConflictResponse",
]
