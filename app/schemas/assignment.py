"""Task assignment API schemas (form selection in; preview, current state and history out)."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.application.dtos.assignment import AssignmentSelection, SelectedUser
from app.domain.enums import AssignmentType


class SelectedUserRequest(BaseModel):
    """A user picked in the assignment form."""

    id: str = Field(..., min_length=1, max_length=64)
    email: str = Field(..., min_length=1, max_length=320)
    name: str | None = Field(default=None, max_length=255)


class AssignmentSelectionRequest(BaseModel):
    """Assignment form state: active tab, picked users, picked team."""

    mode: Literal["individual", "multiple", "team"] = Field(
        ..., description="Active assignment tab"
    )
    selected_users: list[SelectedUserRequest] = Field(default_factory=list)
    team_id: str | None = Field(default=None, max_length=64)
    team_name: str | None = Field(default=None, max_length=255)
    notes: str | None = Field(default=None, max_length=2000)

    def to_selection(self) -> AssignmentSelection:
        """Convert to the application-layer selection value."""
        return AssignmentSelection(
            mode=AssignmentType(self.mode),
            selected_users=tuple(
                SelectedUser(id=u.id, email=u.email, name=u.name)
                for u in self.selected_users
            ),
            team_id=self.team_id,
            team_name=self.team_name,
            notes=self.notes,
        )


class AssigneeRefResponse(BaseModel):
    """Id/name pair (user or team)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


class AssignmentDescriptorResponse(BaseModel):
    """Who holds (or would hold) the task."""

    model_config = ConfigDict(from_attributes=True)

    source: str
    individual: list[AssigneeRefResponse] | None = None
    team: AssigneeRefResponse | None = None


class AssignmentPreviewResponse(BaseModel):
    """Preview dialog payload. can_confirm is False whenever conflicts is non-empty."""

    model_config = ConfigDict(from_attributes=True)

    current_assignments: AssignmentDescriptorResponse
    proposed_assignments: AssignmentDescriptorResponse
    changes: list[str]
    conflicts: list[str]
    warnings: list[str]
    can_confirm: bool


class CurrentAssignmentResponse(BaseModel):
    """Current assignment of a task."""

    model_config = ConfigDict(from_attributes=True)

    task_id: str
    assignment_type: str
    assignments: AssignmentDescriptorResponse
    display_text: str

    @field_validator("assignment_type", mode="before")
    @classmethod
    def _enum_to_str(cls, v: Any) -> str:
        """Accept HistoryAssignmentType from DTO; serialize to str for JSON."""
        return v.value if hasattr(v, "value") else v


class AssignmentCommitResponse(BaseModel):
    """Result of assign/unassign."""

    success: bool
    assignment: CurrentAssignmentResponse


class AssignmentHistoryItemResponse(BaseModel):
    """One assignment history record."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    task_id: str
    assignment_type: str
    assignment_source: str
    assigned_by: str
    assigned_by_user: dict[str, Any]
    previous_assignment: dict[str, Any] | None = None
    new_assignment: dict[str, Any] | None = None
    notes: str | None = None
    created_at: datetime


class ProjectAssignmentConflictResponse(BaseModel):
    """Task flagged by the project assignment audit."""

    model_config = ConfigDict(from_attributes=True)

    task_id: str
    task_title: str
    conflict: str
    type: str
