"""Initial choose-state tables.

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_initial"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Create the workflow catalog, resource and choose-state tables."""
    op.create_table(
        "workflows",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "workflow_states",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("workflow_id", sa.BigInteger(), nullable=False),
        sa.Column("is_initial_state", sa.Boolean(), nullable=False, default=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["workflow_id"], ["workflows.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_workflow_states_workflow_id", "workflow_states", ["workflow_id"])

    op.create_table(
        "workflow_actions",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("workflow_id", sa.BigInteger(), nullable=True),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["workflow_id"], ["workflows.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "workflow_tasks",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("task_type", sa.String(length=255), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("action_id", sa.BigInteger(), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["action_id"], ["workflow_actions.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_workflow_tasks_action_id", "workflow_tasks", ["action_id"])

    op.create_table(
        "workflow_resource_workflows",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("resource_id", sa.BigInteger(), nullable=False),
        sa.Column("resource_type", sa.String(length=255), nullable=False),
        sa.Column("workflow_id", sa.BigInteger(), nullable=False),
        sa.Column("state_id", sa.BigInteger(), nullable=True),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["workflow_id"], ["workflows.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["state_id"], ["workflow_states.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_resource_workflows_resource_key",
        "workflow_resource_workflows",
        ["resource_id", "resource_type", "workflow_id"],
        unique=True,
    )

    op.create_table(
        "workflow_resource_history",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("resource_id", sa.BigInteger(), nullable=False),
        sa.Column("resource_type", sa.String(length=255), nullable=False),
        sa.Column("action_id", sa.BigInteger(), nullable=False),
        sa.Column("workflow_id", sa.BigInteger(), nullable=True),
        sa.Column("creation_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("user_access_code", sa.String(length=255), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["action_id"], ["workflow_actions.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["workflow_id"], ["workflows.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_resource_history_resource",
        "workflow_resource_history",
        ["resource_id", "resource_type"],
    )
    op.create_index("ix_resource_history_workflow_id", "workflow_resource_history", ["workflow_id"])

    op.create_table(
        "choose_state_task_configs",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("task_id", sa.BigInteger(), nullable=False),
        sa.Column("controller_name", sa.String(length=255), nullable=False),
        sa.Column("id_state_ok", sa.Integer(), nullable=False),
        sa.Column("id_state_ko", sa.Integer(), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_choose_state_task_configs_task_id",
        "choose_state_task_configs",
        ["task_id"],
        unique=True,
    )

    op.create_table(
        "choose_state_task_information",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("history_id", sa.BigInteger(), nullable=False),
        sa.Column("task_id", sa.BigInteger(), nullable=False),
        sa.Column("new_state", sa.String(length=255), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["history_id"], ["workflow_resource_history.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_choose_state_task_information_history_task",
        "choose_state_task_information",
        ["history_id", "task_id"],
        unique=True,
    )
    op.create_index(
        "ix_choose_state_task_information_task_id",
        "choose_state_task_information",
        ["task_id"],
    )


def downgrade() -> None:
    """Drop choose-state tables."""
    op.drop_table("choose_state_task_information")
    op.drop_table("choose_state_task_configs")
    op.drop_table("workflow_resource_history")
    op.drop_table("workflow_resource_workflows")
    op.drop_table("workflow_tasks")
    op.drop_table("workflow_actions")
    op.drop_table("workflow_states")
    op.drop_table("workflows")
