"""DTOs for tasks as seen by the assignment service (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from app.domain.value_objects.assignment import Assignment


@dataclass(frozen=True)
class TaskResult:
    """Task read-model with its assignment folded into a tagged union."""

    id: str
    organization_id: str
    project_id: str | None
    title: str
    status: str
    assignment: Assignment
    created_at: datetime | None = None
    updated_at: datetime | None = None
