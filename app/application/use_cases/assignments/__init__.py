"""Task assignment use cases: options builder, preview diff, and assignment service."""

from app.application.use_cases.assignments.assignment_diff import (
    assignment_display_text,
    compute_changes,
    describe_assignment,
    describe_options,
    proposed_assignment,
)
from app.application.use_cases.assignments.assignment_service import (
    TaskAssignmentService,
    required_field_errors,
)
from app.application.use_cases.assignments.options_builder import (
    build_assignment_options,
    resolve_assignment_type,
)

__all__ = [
    "TaskAssignmentService",
    "assignment_display_text",
    "build_assignment_options",
    "compute_changes",
    "describe_assignment",
    "describe_options",
    "proposed_assignment",
    "required_field_errors",
    "resolve_assignment_type",
]
