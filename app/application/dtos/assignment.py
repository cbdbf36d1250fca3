"""DTOs for task assignment: request options, preview, and history records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from app.domain.enums import AssignmentSource, AssignmentType, HistoryAssignmentType


@dataclass(frozen=True)
class SelectedUser:
    """A user picked in the assignment form."""

    id: str
    email: str
    name: str | None = None


@dataclass(frozen=True)
class AssignmentSelection:
    """Form state of the assignment UI (active tab, picked users, picked team)."""

    mode: AssignmentType
    selected_users: tuple[SelectedUser, ...] = ()
    team_id: str | None = None
    team_name: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class AssignmentOptions:
    """Normalized assignment request handed to TaskAssignmentService.

    In team mode user_ids/user_names are None (never empty); otherwise
    team_id/team_name are None.
    """

    task_id: str
    assignment_type: AssignmentType
    organization_id: str
    assigned_by: str
    assignment_source: AssignmentSource = AssignmentSource.MANUAL
    user_ids: tuple[str, ...] | None = None
    user_names: tuple[str, ...] | None = None
    team_id: str | None = None
    team_name: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class AssigneeRef:
    """Id/name pair shown in preview descriptors."""

    id: str
    name: str


@dataclass(frozen=True)
class AssignmentDescriptor:
    """One side of a preview: who holds (or would hold) the task."""

    source: str
    individual: tuple[AssigneeRef, ...] | None = None
    team: AssigneeRef | None = None


@dataclass(frozen=True)
class AssignmentValidation:
    """Outcome of validate_assignment. Conflicts block; warnings do not."""

    conflicts: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    # Stored name of the validated team, if one was loaded.
    team_name: str | None = None

    @property
    def is_valid(self) -> bool:
        return not self.conflicts


@dataclass(frozen=True)
class AssignmentPreview:
    """Dry-run result: current vs. proposed, with diff lines and conflicts."""

    current_assignments: AssignmentDescriptor
    proposed_assignments: AssignmentDescriptor
    changes: tuple[str, ...]
    conflicts: tuple[str, ...]
    warnings: tuple[str, ...] = ()

    @property
    def can_confirm(self) -> bool:
        """Commit is allowed only when there are no conflicts."""
        return not self.conflicts


@dataclass(frozen=True)
class AssignmentHistoryCreate:
    """Input for appending one assignment history record. Append-only."""

    organization_id: str
    task_id: str
    assignment_type: HistoryAssignmentType
    assignment_source: str
    assigned_by: str
    assigned_by_user: dict[str, Any]
    previous_assignment: dict[str, Any] | None
    new_assignment: dict[str, Any] | None
    notes: str | None


@dataclass(frozen=True)
class AssignmentHistoryRecord:
    """Stored assignment history row (read-model)."""

    id: str
    organization_id: str
    task_id: str
    assignment_type: str
    assignment_source: str
    assigned_by: str
    assigned_by_user: dict[str, Any]
    previous_assignment: dict[str, Any] | None
    new_assignment: dict[str, Any] | None
    notes: str | None
    created_at: datetime
    sequence: int = 0


@dataclass(frozen=True)
class ProjectAssignmentConflict:
    """A project task flagged by the project assignment audit."""

    task_id: str
    task_title: str
    conflict: str
    type: str = "no_assignment"


@dataclass(frozen=True)
class CurrentAssignment:
    """Current assignment of one task, ready for display."""

    task_id: str
    assignment_type: HistoryAssignmentType
    assignments: AssignmentDescriptor
    display_text: str
