"""Turn assignment form state into a normalized AssignmentOptions value."""

from __future__ import annotations

from app.application.dtos.assignment import AssignmentOptions, AssignmentSelection
from app.application.dtos.user import UserResult
from app.domain.enums import AssignmentSource, AssignmentType


def resolve_assignment_type(selection: AssignmentSelection) -> AssignmentType:
    """Team is decided by the tab; individual vs. multiple by how many users are picked."""
    if selection.mode == AssignmentType.TEAM:
        return AssignmentType.TEAM
    if len(selection.selected_users) > 1:
        return AssignmentType.MULTIPLE
    return AssignmentType.INDIVIDUAL


def build_assignment_options(
    selection: AssignmentSelection,
    *,
    task_id: str,
    organization_id: str,
    acting_user: UserResult,
) -> AssignmentOptions:
    """Build the request the assignment service accepts. Pure; never fails.

    Team mode leaves user_ids/user_names as None (not empty tuples); other
    modes leave team_id/team_name as None.
    """
    assignment_type = resolve_assignment_type(selection)
    notes = selection.notes or f"Manual assignment by {acting_user.display_name}"

    if assignment_type == AssignmentType.TEAM:
        return AssignmentOptions(
            task_id=task_id,
            assignment_type=assignment_type,
            assignment_source=AssignmentSource.MANUAL,
            organization_id=organization_id,
            assigned_by=acting_user.id,
            team_id=selection.team_id,
            team_name=selection.team_name,
            notes=notes,
        )

    users = selection.selected_users
    return AssignmentOptions(
        task_id=task_id,
        assignment_type=assignment_type,
        assignment_source=AssignmentSource.MANUAL,
        organization_id=organization_id,
        assigned_by=acting_user.id,
        user_ids=tuple(u.id for u in users),
        user_names=tuple(u.name or u.email for u in users),
        notes=notes,
    )
