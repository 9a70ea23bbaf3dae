"""SQLAlchemy models for choose-state persistence.

This module defines the database models the choose-state task works with:
- WorkflowModel, WorkflowStateModel, WorkflowActionModel, WorkflowTaskModel:
  the workflow catalog, read only for the task
- ResourceWorkflowModel: the current state of each resource in a workflow
- ResourceHistoryModel: the append-only resource history
- ChooseStateTaskConfigModel: per-task configuration
- ChooseStateTaskInformationModel: which task produced which history entry
"""

from __future__ import annotations

from datetime import datetime

from advanced_alchemy.base import BigIntAuditBase
from sqlalchemy import BigInteger, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from litestar_choose_state.core.types import AUTOMATIC_USER, UNSET_STATE_ID

__all__ = [
    "ChooseStateTaskConfigModel",
    "ChooseStateTaskInformationModel",
    "ResourceHistoryModel",
    "ResourceWorkflowModel",
    "WorkflowActionModel",
    "WorkflowModel",
    "WorkflowStateModel",
    "WorkflowTaskModel",
]


class WorkflowModel(BigIntAuditBase):
    """A workflow of the host engine.

    Attributes:
        name: Display name of the workflow.
        states: States of the workflow.
    """

    __tablename__ = "workflows"

    name: Mapped[str] = mapped_column(String(255))

    # Relationships
    states: Mapped[list[WorkflowStateModel]] = relationship(
        back_populates="workflow",
        lazy="noload",
    )


class WorkflowStateModel(BigIntAuditBase):
    """A state of a workflow.

    Attributes:
        name: Display name of the state.
        workflow_id: Foreign key to the owning workflow.
        is_initial_state: Whether new resources start in this state.
    """

    __tablename__ = "workflow_states"
    __table_args__ = (Index("ix_workflow_states_workflow_id", "workflow_id"),)

    name: Mapped[str] = mapped_column(String(255))
    workflow_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("workflows.id", ondelete="CASCADE"),
    )
    is_initial_state: Mapped[bool] = mapped_column(default=False)

    # Relationships
    workflow: Mapped[WorkflowModel] = relationship(
        back_populates="states",
        lazy="noload",
    )


class WorkflowActionModel(BigIntAuditBase):
    """A workflow action tasks are bound to.

    Attributes:
        name: Display name of the action.
        workflow_id: Foreign key to the owning workflow.
        workflow: The owning workflow.
    """

    __tablename__ = "workflow_actions"

    name: Mapped[str] = mapped_column(String(255))
    workflow_id: Mapped[int | None] = mapped_column(
        BigInteger,
        ForeignKey("workflows.id", ondelete="CASCADE"),
        nullable=True,
    )

    # Relationships
    workflow: Mapped[WorkflowModel | None] = relationship(lazy="joined")


class WorkflowTaskModel(BigIntAuditBase):
    """A task instance bound to an action.

    Attributes:
        task_type: Key of the task kind (e.g. "taskChooseState").
        title: Display title.
        action_id: Foreign key to the action.
        action: The action the task is bound to.
    """

    __tablename__ = "workflow_tasks"
    __table_args__ = (Index("ix_workflow_tasks_action_id", "action_id"),)

    task_type: Mapped[str] = mapped_column(String(255))
    title: Mapped[str] = mapped_column(String(255), default="")
    action_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("workflow_actions.id", ondelete="CASCADE"),
    )

    # Relationships
    action: Mapped[WorkflowActionModel] = relationship(lazy="joined")


class ResourceWorkflowModel(BigIntAuditBase):
    """The current state of one resource in one workflow.

    Attributes:
        resource_id: Identifier of the resource.
        resource_type: Type of the resource.
        workflow_id: Foreign key to the workflow.
        state_id: Foreign key to the current state.
        state: The current state.
    """

    __tablename__ = "workflow_resource_workflows"
    __table_args__ = (
        Index(
            "ix_resource_workflows_resource_key",
            "resource_id",
            "resource_type",
            "workflow_id",
            unique=True,
        ),
    )

    resource_id: Mapped[int] = mapped_column(BigInteger)
    resource_type: Mapped[str] = mapped_column(String(255))
    workflow_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("workflows.id", ondelete="CASCADE"),
    )
    state_id: Mapped[int | None] = mapped_column(
        BigInteger,
        ForeignKey("workflow_states.id", ondelete="SET NULL"),
        nullable=True,
    )

    # Relationships
    state: Mapped[WorkflowStateModel | None] = relationship(lazy="joined")


class ResourceHistoryModel(BigIntAuditBase):
    """Append-only record of a workflow event for a resource.

    Attributes:
        resource_id: Identifier of the resource.
        resource_type: Type of the resource.
        action_id: Foreign key to the action taken.
        workflow_id: Foreign key to the workflow.
        creation_date: When the event happened.
        user_access_code: Acting user, "auto" for automatic events.
    """

    __tablename__ = "workflow_resource_history"
    __table_args__ = (
        Index("ix_resource_history_resource", "resource_id", "resource_type"),
        Index("ix_resource_history_workflow_id", "workflow_id"),
    )

    resource_id: Mapped[int] = mapped_column(BigInteger)
    resource_type: Mapped[str] = mapped_column(String(255))
    action_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("workflow_actions.id", ondelete="CASCADE"),
    )
    workflow_id: Mapped[int | None] = mapped_column(
        BigInteger,
        ForeignKey("workflows.id", ondelete="CASCADE"),
        nullable=True,
    )
    creation_date: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    user_access_code: Mapped[str] = mapped_column(String(255), default=AUTOMATIC_USER)

    # Relationships
    action: Mapped[WorkflowActionModel] = relationship(lazy="joined")
    workflow: Mapped[WorkflowModel | None] = relationship(lazy="joined")


class ChooseStateTaskConfigModel(BigIntAuditBase):
    """Configuration of a choose-state task.

    Attributes:
        task_id: The task the configuration belongs to.
        controller_name: Name of the controller to evaluate.
        id_state_ok: Target state when the controller returns True.
        id_state_ko: Target state when the controller returns False.
    """

    __tablename__ = "choose_state_task_configs"
    __table_args__ = (Index("ix_choose_state_task_configs_task_id", "task_id", unique=True),)

    task_id: Mapped[int] = mapped_column(BigInteger)
    controller_name: Mapped[str] = mapped_column(String(255), default="")
    id_state_ok: Mapped[int] = mapped_column(Integer, default=UNSET_STATE_ID)
    id_state_ko: Mapped[int] = mapped_column(Integer, default=UNSET_STATE_ID)


class ChooseStateTaskInformationModel(BigIntAuditBase):
    """Links a history entry to the choose-state task that produced it.

    Attributes:
        history_id: Foreign key to the history record.
        task_id: The task that performed the transition.
        new_state: Display name of the state reached.
    """

    __tablename__ = "choose_state_task_information"
    __table_args__ = (
        Index("ix_choose_state_task_information_history_task", "history_id", "task_id", unique=True),
        Index("ix_choose_state_task_information_task_id", "task_id"),
    )

    history_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("workflow_resource_history.id", ondelete="CASCADE"),
    )
    task_id: Mapped[int] = mapped_column(BigInteger)
    new_state: Mapped[str] = mapped_column(String(255))
