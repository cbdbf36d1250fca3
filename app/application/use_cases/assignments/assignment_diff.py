"""Preview helpers: describe current/proposed assignment and diff them.

Pure functions over domain assignment values; no repository access.
"""

from __future__ import annotations

from app.application.dtos.assignment import (
    AssigneeRef,
    AssignmentDescriptor,
    AssignmentOptions,
)
from app.domain.enums import AssignmentType
from app.domain.value_objects.assignment import (
    UNKNOWN_NAME,
    UNKNOWN_TEAM_NAME,
    Assignment,
    Individuals,
    Team,
    Unassigned,
)


def proposed_assignment(options: AssignmentOptions) -> Assignment | None:
    """Return the state options would produce, or None when options are not constructible."""
    try:
        if options.assignment_type == AssignmentType.TEAM:
            if not options.team_id:
                return None
            return Team(
                team_id=options.team_id,
                team_name=options.team_name or UNKNOWN_TEAM_NAME,
            )
        if not options.user_ids:
            return None
        return Individuals.from_lists(options.user_ids, options.user_names)
    except ValueError:
        return None


def describe_assignment(assignment: Assignment, source: str) -> AssignmentDescriptor:
    """Descriptor for a stored assignment state."""
    if isinstance(assignment, Team):
        return AssignmentDescriptor(
            source=source,
            team=AssigneeRef(id=assignment.team_id, name=assignment.team_name),
        )
    if isinstance(assignment, Individuals):
        return AssignmentDescriptor(
            source=source,
            individual=tuple(
                AssigneeRef(id=uid, name=name) for uid, name in assignment.members()
            ),
        )
    return AssignmentDescriptor(source=source, individual=())


def describe_options(options: AssignmentOptions) -> AssignmentDescriptor:
    """Descriptor for what options request, even when they are invalid."""
    source = options.assignment_source.value
    team = (
        AssigneeRef(id=options.team_id, name=options.team_name or UNKNOWN_TEAM_NAME)
        if options.team_id
        else None
    )
    if options.user_ids is None:
        return AssignmentDescriptor(source=source, team=team)
    names = list(options.user_names or ())
    individual = tuple(
        AssigneeRef(id=uid, name=names[i] if i < len(names) and names[i] else UNKNOWN_NAME)
        for i, uid in enumerate(options.user_ids)
    )
    return AssignmentDescriptor(source=source, individual=individual, team=team)


def compute_changes(current: Assignment, proposed: Assignment) -> list[str]:
    """Human-readable diff lines from current to proposed.

    Empty when both name the same team id or the same set of user ids.
    """
    changes: list[str] = []

    if isinstance(current, Team) and isinstance(proposed, Team):
        if current.team_id != proposed.team_id:
            changes.append(
                f"Team changed from {current.team_name} to {proposed.team_name}"
            )
        return changes

    if isinstance(current, Individuals) and isinstance(proposed, Individuals):
        if current.same_users(proposed):
            return changes
        proposed_ids = set(proposed.user_ids)
        current_ids = set(current.user_ids)
        for uid, name in current.members():
            if uid not in proposed_ids:
                changes.append(f"Removed user {name}")
        for uid, name in proposed.members():
            if uid not in current_ids:
                changes.append(f"Added user {name}")
        return changes

    if isinstance(current, Team):
        changes.append(f"Removed team assignment: {current.team_name}")
    elif isinstance(current, Individuals):
        for _, name in current.members():
            changes.append(f"Removed user {name}")

    if isinstance(proposed, Team):
        changes.append(f"Assigned to team {proposed.team_name}")
    elif isinstance(proposed, Individuals):
        for _, name in proposed.members():
            changes.append(f"Added user {name}")
    elif isinstance(proposed, Unassigned) and not isinstance(current, Unassigned):
        changes.append("Task will be unassigned")
    return changes


def assignment_display_text(assignment: Assignment) -> str:
    """Short label for task lists: team, member count, single name, or Unassigned."""
    if isinstance(assignment, Team):
        return f"Team: {assignment.team_name}"
    if isinstance(assignment, Individuals):
        names = list(assignment.user_names)
        if len(names) > 1:
            suffix = "..." if len(names) > 2 else ""
            return f"{len(names)} members: {', '.join(names[:2])}{suffix}"
        return names[0]
    return "Unassigned"
