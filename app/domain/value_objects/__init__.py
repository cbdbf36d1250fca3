"""Domain value objects: task assignment state."""

from app.domain.value_objects.assignment import (
    Assignment,
    Individuals,
    Team,
    Unassigned,
    assignment_from_fields,
    assignment_kind,
    assignment_snapshot,
)

__all__ = [
    "Assignment",
    "Individuals",
    "Team",
    "Unassigned",
    "assignment_from_fields",
    "assignment_kind",
    "assignment_snapshot",
]
