"""Assignment history repository. Append-only; implements IAssignmentHistoryRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.assignment import (
    AssignmentHistoryCreate,
    AssignmentHistoryRecord,
)
from app.infrastructure.persistence.models.assignment_history import (
    TaskAssignmentHistory,
)
from app.infrastructure.persistence.repositories.base import gateway_errors
from app.shared.utils.datetime import ensure_utc, utc_now
from app.shared.utils.generators import generate_cuid


def _orm_to_result(row: TaskAssignmentHistory) -> AssignmentHistoryRecord:
    """Map ORM to application DTO."""
    return AssignmentHistoryRecord(
        id=row.id,
        organization_id=row.organization_id,
        task_id=row.task_id,
        assignment_type=row.assignment_type,
        assignment_source=row.assignment_source,
        assigned_by=row.assigned_by,
        assigned_by_user=dict(row.assigned_by_user or {}),
        previous_assignment=row.previous_assignment,
        new_assignment=row.new_assignment,
        notes=row.notes,
        created_at=ensure_utc(row.created_at),
        sequence=row.sequence,
    )


class AssignmentHistoryRepository:
    """Append-only assignment history. No update/delete."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def append(self, entry: AssignmentHistoryCreate) -> AssignmentHistoryRecord:
        """Append one history record; return created row."""
        row = TaskAssignmentHistory(
            id=generate_cuid(),
            organization_id=entry.organization_id,
            task_id=entry.task_id,
            assignment_type=entry.assignment_type.value,
            assignment_source=entry.assignment_source,
            assigned_by=entry.assigned_by,
            assigned_by_user=entry.assigned_by_user,
            previous_assignment=entry.previous_assignment,
            new_assignment=entry.new_assignment,
            notes=entry.notes,
            created_at=utc_now(),
        )
        with gateway_errors("assignment_history.append"):
            self.db.add(row)
            await self.db.flush()
            await self.db.refresh(row)
        return _orm_to_result(row)

    async def list_by_task(
        self,
        organization_id: str,
        task_id: str,
        *,
        skip: int = 0,
        limit: int = 100,
    ) -> list[AssignmentHistoryRecord]:
        """List history for task, newest first (created_at desc, sequence desc)."""
        stmt = (
            select(TaskAssignmentHistory)
            .where(
                TaskAssignmentHistory.organization_id == organization_id,
                TaskAssignmentHistory.task_id == task_id,
            )
            .order_by(
                TaskAssignmentHistory.created_at.desc(),
                TaskAssignmentHistory.sequence.desc(),
            )
            .offset(skip)
            .limit(limit)
        )
        with gateway_errors("assignment_history.list"):
            result = await self.db.execute(stmt)
            rows = list(result.scalars().all())
        return [_orm_to_result(r) for r in rows]

    async def get_latest(
        self, organization_id: str, task_id: str
    ) -> AssignmentHistoryRecord | None:
        rows = await self.list_by_task(organization_id, task_id, skip=0, limit=1)
        return rows[0] if rows else None
