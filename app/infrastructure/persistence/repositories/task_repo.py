"""Task repository: read and overwrite task assignment columns."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.task import TaskResult
from app.domain.value_objects.assignment import (
    Assignment,
    Individuals,
    Team,
    assignment_from_fields,
)
from app.infrastructure.persistence.models.task import Task
from app.infrastructure.persistence.repositories.base import BaseRepository, gateway_errors


def _to_result(t: Task) -> TaskResult:
    """Map Task ORM to TaskResult DTO (assignment columns folded into one state)."""
    return TaskResult(
        id=t.id,
        organization_id=t.organization_id,
        project_id=t.project_id,
        title=t.title,
        status=t.status,
        assignment=assignment_from_fields(
            assigned_to_id=t.assigned_to_id,
            assigned_to_name=t.assigned_to_name,
            assigned_to_ids=t.assigned_to_ids,
            assigned_to_names=t.assigned_to_names,
            assigned_to_team_id=t.assigned_to_team_id,
            assigned_to_team_name=t.assigned_to_team_name,
            task_id=t.id,
        ),
        created_at=t.created_at,
        updated_at=t.updated_at,
    )


def _apply_assignment(task: Task, assignment: Assignment) -> None:
    """Write every assignment column so only one variant's columns are set."""
    task.assigned_to_id = None
    task.assigned_to_name = None
    task.assigned_to_ids = None
    task.assigned_to_names = None
    task.assigned_to_team_id = None
    task.assigned_to_team_name = None
    if isinstance(assignment, Team):
        task.assigned_to_team_id = assignment.team_id
        task.assigned_to_team_name = assignment.team_name
    elif isinstance(assignment, Individuals):
        task.assigned_to_ids = list(assignment.user_ids)
        task.assigned_to_names = list(assignment.user_names)
        if len(assignment.user_ids) == 1:
            task.assigned_to_id = assignment.user_ids[0]
            task.assigned_to_name = assignment.user_names[0]


class TaskRepository(BaseRepository[Task]):
    """Task repository. Implements ITaskRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Task)

    async def get_by_id_and_organization(
        self, task_id: str, organization_id: str
    ) -> TaskResult | None:
        """Return task with folded assignment, or None."""
        with gateway_errors("task.get"):
            task = await self._get_scoped(task_id, organization_id)
        return _to_result(task) if task else None

    async def update_assignment(
        self, task_id: str, organization_id: str, assignment: Assignment
    ) -> TaskResult | None:
        """Overwrite assignment columns; return updated task or None if not found."""
        with gateway_errors("task.update_assignment"):
            task = await self._get_scoped(task_id, organization_id)
            if task is None:
                return None
            _apply_assignment(task, assignment)
            await self.db.flush()
            await self.db.refresh(task)
        return _to_result(task)

    async def list_by_project(
        self, organization_id: str, project_id: str
    ) -> list[TaskResult]:
        """Return tasks of project in organization, oldest first."""
        stmt = (
            select(Task)
            .where(Task.organization_id == organization_id, Task.project_id == project_id)
            .order_by(Task.created_at.asc(), Task.id.asc())
        )
        with gateway_errors("task.list_by_project"):
            result = await self.db.execute(stmt)
            rows = list(result.scalars().all())
        return [_to_result(t) for t in rows]
