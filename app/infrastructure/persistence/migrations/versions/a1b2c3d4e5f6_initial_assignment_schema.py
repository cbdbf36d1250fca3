"""initial schema: app_user, team, task, task_assignment_history

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19

Task assignment columns are mutually exclusive (users or team). The history
table is append-only with a monotonic identity column for ordering ties.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "a1b2c3d4e5f6"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "app_user",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("organization_id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("organization_id", "email", name="uq_organization_email"),
    )
    op.create_index("ix_app_user_organization_id", "app_user", ["organization_id"])

    op.create_table(
        "team",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("organization_id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_team_organization_id", "team", ["organization_id"])

    op.create_table(
        "task",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("organization_id", sa.String(length=64), nullable=False),
        sa.Column("project_id", sa.String(), nullable=True),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="open"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("assigned_to_id", sa.String(), nullable=True),
        sa.Column("assigned_to_name", sa.String(length=255), nullable=True),
        sa.Column("assigned_to_ids", postgresql.JSONB(), nullable=True),
        sa.Column("assigned_to_names", postgresql.JSONB(), nullable=True),
        sa.Column("assigned_to_team_id", sa.String(), nullable=True),
        sa.Column("assigned_to_team_name", sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["assigned_to_team_id"], ["team.id"], ondelete="SET NULL"),
        sa.CheckConstraint(
            "assigned_to_team_id IS NULL OR "
            "(assigned_to_id IS NULL AND assigned_to_ids IS NULL)",
            name="ck_task_assignment_exclusive",
        ),
    )
    op.create_index("ix_task_organization_id", "task", ["organization_id"])
    op.create_index("ix_task_project_id", "task", ["project_id"])
    op.create_index(
        "ix_task_organization_project", "task", ["organization_id", "project_id"]
    )
    op.create_index(
        "ix_task_assigned_team", "task", ["organization_id", "assigned_to_team_id"]
    )

    op.create_table(
        "task_assignment_history",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("sequence", sa.BigInteger(), sa.Identity(always=True), nullable=False),
        sa.Column("organization_id", sa.String(length=64), nullable=False),
        sa.Column("task_id", sa.String(), nullable=False),
        sa.Column("assignment_type", sa.String(length=32), nullable=False),
        sa.Column("assignment_source", sa.String(length=32), nullable=False),
        sa.Column("assigned_by", sa.String(), nullable=False),
        sa.Column("assigned_by_user", postgresql.JSONB(), nullable=False),
        sa.Column("previous_assignment", postgresql.JSONB(), nullable=True),
        sa.Column("new_assignment", postgresql.JSONB(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("sequence"),
        sa.ForeignKeyConstraint(["task_id"], ["task.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "ix_task_assignment_history_organization_id",
        "task_assignment_history",
        ["organization_id"],
    )
    op.create_index(
        "ix_task_assignment_history_task_created",
        "task_assignment_history",
        ["organization_id", "task_id", "created_at"],
    )


def downgrade() -> None:
    op.drop_index("ix_task_assignment_history_task_created", table_name="task_assignment_history")
    op.drop_index("ix_task_assignment_history_organization_id", table_name="task_assignment_history")
    op.drop_table("task_assignment_history")
    op.drop_index("ix_task_assigned_team", table_name="task")
    op.drop_index("ix_task_organization_project", table_name="task")
    op.drop_index("ix_task_project_id", table_name="task")
    op.drop_index("ix_task_organization_id", table_name="task")
    op.drop_table("task")
    op.drop_index("ix_team_organization_id", table_name="team")
    op.drop_table("team")
    op.drop_index("ix_app_user_organization_id", table_name="app_user")
    op.drop_table("app_user")
