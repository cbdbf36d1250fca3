"""Task ORM model. Assignable to one user, several users, or one team."""

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import OrganizationScopedModel


class Task(OrganizationScopedModel, Base):
    """Task. Table: task.

    Assignment columns are mutually exclusive: either the user columns or the
    team columns are set, never both. assigned_to_id/assigned_to_name mirror
    a single-user assignment for older readers. User ids are not foreign keys:
    assignee names are denormalized and unknown users are only a warning.
    """

    __tablename__ = "task"

    project_id: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default="open", server_default="open"
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    assigned_to_id: Mapped[str | None] = mapped_column(String, nullable=True)
    assigned_to_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    assigned_to_ids: Mapped[list[str] | None] = mapped_column(JSONB, nullable=True)
    assigned_to_names: Mapped[list[str] | None] = mapped_column(JSONB, nullable=True)
    assigned_to_team_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("team.id", ondelete="SET NULL"), nullable=True
    )
    assigned_to_team_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    __table_args__ = (
        Index("ix_task_organization_project", "organization_id", "project_id"),
        Index("ix_task_assigned_team", "organization_id", "assigned_to_team_id"),
        CheckConstraint(
            "assigned_to_team_id IS NULL OR "
            "(assigned_to_id IS NULL AND assigned_to_ids IS NULL)",
            name="ck_task_assignment_exclusive",
        ),
    )
