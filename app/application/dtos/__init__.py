"""Application DTOs (no ORM dependency)."""

from app.application.dtos.assignment import (
    AssigneeRef,
    AssignmentDescriptor,
    AssignmentHistoryCreate,
    AssignmentHistoryRecord,
    AssignmentOptions,
    AssignmentPreview,
    AssignmentSelection,
    AssignmentValidation,
    CurrentAssignment,
    ProjectAssignmentConflict,
    SelectedUser,
)
from app.application.dtos.task import TaskResult
from app.application.dtos.team import TeamResult
from app.application.dtos.user import UserResult

__all__ = [
    "AssigneeRef",
    "AssignmentDescriptor",
    "AssignmentHistoryCreate",
    "AssignmentHistoryRecord",
    "AssignmentOptions",
    "AssignmentPreview",
    "AssignmentSelection",
    "AssignmentValidation",
    "CurrentAssignment",
    "ProjectAssignmentConflict",
    "SelectedUser",
    "TaskResult",
    "TeamResult",
    "UserResult",
]
