"""Domain layer: assignment value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import AssignmentSource, AssignmentType, HistoryAssignmentType
from app.domain.exceptions import (
    AssignmentConflictException,
    AssignmentHistoryWriteException,
    AuthenticationException,
    OpsDeskException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    ValidationException,
)
from app.domain.value_objects import Assignment, Individuals, Team, Unassigned

__all__ = [
    # Enums
    "AssignmentSource",
    "AssignmentType",
    "HistoryAssignmentType",
    # Exceptions
    "AssignmentConflictException",
    "AssignmentHistoryWriteException",
    "AuthenticationException",
    "OpsDeskException",
    "ResourceNotFoundException",
    "SqlNotConfiguredException",
    "ValidationException",
    # Value objects
    "Assignment",
    "Individuals",
    "Team",
    "Unassigned",
]
