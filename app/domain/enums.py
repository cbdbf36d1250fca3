"""Domain enumerations for task assignment.

Enums represent fixed sets of domain values (assignment kinds and sources).
"""

from enum import Enum


class AssignmentType(str, Enum):
    """Kind of assignment requested for a task.

    TEAM is mutually exclusive with INDIVIDUAL and MULTIPLE; MULTIPLE is used
    when more than one user is selected.
    """

    INDIVIDUAL = "individual"
    MULTIPLE = "multiple"
    TEAM = "team"


class AssignmentSource(str, Enum):
    """Where an assignment came from (manual pick or inherited from project/team)."""

    MANUAL = "manual"
    PROJECT_INHERITED = "project_inherited"
    TEAM_INHERITED = "team_inherited"


class HistoryAssignmentType(str, Enum):
    """assignment_type recorded on a history row (adds UNASSIGNED)."""

    INDIVIDUAL = "individual"
    MULTIPLE = "multiple"
    TEAM = "team"
    UNASSIGNED = "unassigned"
