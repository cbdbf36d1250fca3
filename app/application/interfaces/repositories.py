"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain values only; no infrastructure imports.
Together they form the persistence gateway the assignment service calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.assignment import (
        AssignmentHistoryCreate,
        AssignmentHistoryRecord,
    )
    from app.application.dtos.task import TaskResult
    from app.application.dtos.team import TeamResult
    from app.application.dtos.user import UserResult
    from app.domain.value_objects.assignment import Assignment


class ITaskRepository(Protocol):
    """Protocol for task assignment reads and writes (DIP)."""

    async def get_by_id_and_organization(
        self, task_id: str, organization_id: str
    ) -> TaskResult | None:
        """Return task with its current assignment, or None if not in organization."""

    async def update_assignment(
        self, task_id: str, organization_id: str, assignment: Assignment
    ) -> TaskResult | None:
        """Overwrite all assignment columns from assignment. None if task not found."""

    async def list_by_project(
        self, organization_id: str, project_id: str
    ) -> list[TaskResult]:
        """Return tasks of a project in the organization."""


class IUserRepository(Protocol):
    """Protocol for user lookups (assignees and acting user)."""

    async def get_by_id_and_organization(
        self, user_id: str, organization_id: str
    ) -> UserResult | None:
        """Return user by id if they belong to the organization."""

    async def get_by_ids(
        self, organization_id: str, user_ids: list[str]
    ) -> list[UserResult]:
        """Return users of the organization among user_ids (missing ids skipped)."""


class ITeamRepository(Protocol):
    """Protocol for team lookups."""

    async def get_by_id_and_organization(
        self, team_id: str, organization_id: str
    ) -> TeamResult | None:
        """Return team by id if it belongs to the organization."""


class IAssignmentHistoryRepository(Protocol):
    """Protocol for the append-only assignment history log."""

    async def append(self, entry: AssignmentHistoryCreate) -> AssignmentHistoryRecord:
        """Append one history record; return the stored row."""

    async def list_by_task(
        self,
        organization_id: str,
        task_id: str,
        *,
        skip: int = 0,
        limit: int = 100,
    ) -> list[AssignmentHistoryRecord]:
        """Return history for task, newest first (created_at, then sequence)."""

    async def get_latest(
        self, organization_id: str, task_id: str
    ) -> AssignmentHistoryRecord | None:
        """Return the most recent history record for task, or None."""
