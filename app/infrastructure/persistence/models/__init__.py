"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.assignment_history import (
    TaskAssignmentHistory,
)
from app.infrastructure.persistence.models.mixins import (
    CuidMixin,
    OrganizationMixin,
    OrganizationScopedModel,
    TimestampMixin,
)
from app.infrastructure.persistence.models.task import Task
from app.infrastructure.persistence.models.team import Team
from app.infrastructure.persistence.models.user import User

__all__ = [
    "CuidMixin",
    "OrganizationMixin",
    "OrganizationScopedModel",
    "Task",
    "TaskAssignmentHistory",
    "Team",
    "TimestampMixin",
    "User",
]
