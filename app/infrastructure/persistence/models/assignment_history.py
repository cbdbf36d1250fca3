"""Task assignment history ORM model. Append-only log of assign/unassign calls."""

from datetime import datetime
from typing import Any

from sqlalchemy import (
    BigInteger,
    Connection,
    DateTime,
    ForeignKey,
    Identity,
    Index,
    String,
    Text,
    event,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, Mapper, mapped_column

from app.infrastructure.persistence.database import Base
from app.shared.utils.datetime import utc_now
from app.shared.utils.generators import generate_cuid


class TaskAssignmentHistory(Base):
    """One assignment change and its actor. No update/delete."""

    __tablename__ = "task_assignment_history"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_cuid)
    # Monotonic tiebreak when two rows share created_at.
    sequence: Mapped[int] = mapped_column(
        BigInteger, Identity(always=True), nullable=False, unique=True
    )
    organization_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    task_id: Mapped[str] = mapped_column(
        String, ForeignKey("task.id", ondelete="CASCADE"), nullable=False
    )
    assignment_type: Mapped[str] = mapped_column(String(32), nullable=False)
    assignment_source: Mapped[str] = mapped_column(String(32), nullable=False)
    assigned_by: Mapped[str] = mapped_column(String, nullable=False)
    assigned_by_user: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False)
    previous_assignment: Mapped[dict[str, Any] | None] = mapped_column(
        JSONB, nullable=True
    )
    new_assignment: Mapped[dict[str, Any] | None] = mapped_column(JSONB, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )

    __table_args__ = (
        Index(
            "ix_task_assignment_history_task_created",
            "organization_id",
            "task_id",
            "created_at",
        ),
    )


@event.listens_for(TaskAssignmentHistory, "before_update")
def _prevent_history_updates(
    _mapper: Mapper[Any], _connection: Connection, _target: TaskAssignmentHistory
) -> None:
    """History entries are append-only; updates are forbidden."""
    raise ValueError("Assignment history entries are immutable and cannot be updated.")


@event.listens_for(TaskAssignmentHistory, "before_delete")
def _prevent_history_deletes(
    _mapper: Mapper[Any], _connection: Connection, _target: TaskAssignmentHistory
) -> None:
    """History entries cannot be deleted."""
    raise ValueError("Assignment history entries cannot be deleted.")
