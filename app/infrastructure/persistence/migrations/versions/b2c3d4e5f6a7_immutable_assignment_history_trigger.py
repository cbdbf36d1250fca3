"""Add trigger to block UPDATE on task_assignment_history.

Revision ID: b2c3d4e5f6a7
Revises: a1b2c3d4e5f6
Create Date: 2026-10-19

History rows are append-only. UPDATE is rejected at the database level in
addition to the ORM listener. DELETE stays allowed so ON DELETE CASCADE from
task still works; the ORM forbids direct deletes.
"""

from typing import Sequence, Union

from alembic import op

revision: str = "b2c3d4e5f6a7"
down_revision: Union[str, Sequence[str], None] = "a1b2c3d4e5f6"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _trigger_function() -> str:
    """Return SQL for trigger function that blocks history UPDATE."""
    return """
    CREATE OR REPLACE FUNCTION prevent_assignment_history_update()
    RETURNS TRIGGER
    LANGUAGE plpgsql
    AS $$
    BEGIN
        RAISE EXCEPTION 'task_assignment_history rows are append-only and cannot be updated'
            USING ERRCODE = 'integrity_constraint_violation';
    END;
    $$
    """


def upgrade() -> None:
    op.execute(_trigger_function())
    op.execute(
        "CREATE TRIGGER prevent_assignment_history_update "
        "BEFORE UPDATE ON task_assignment_history "
        "FOR EACH ROW EXECUTE PROCEDURE prevent_assignment_history_update()"
    )


def downgrade() -> None:
    op.execute(
        "DROP TRIGGER IF EXISTS prevent_assignment_history_update ON task_assignment_history"
    )
    op.execute("DROP FUNCTION IF EXISTS prevent_assignment_history_update()")
