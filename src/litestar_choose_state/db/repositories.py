"""Repository implementations for choose-state persistence.

This module provides async repositories for CRUD operations on the
choose-state models using advanced-alchemy's repository pattern.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from advanced_alchemy.repository import SQLAlchemyAsyncRepository
from sqlalchemy import and_, delete, select

from litestar_choose_state.db.models import (
    ChooseStateTaskConfigModel,
    ChooseStateTaskInformationModel,
    ResourceHistoryModel,
    ResourceWorkflowModel,
    WorkflowActionModel,
    WorkflowStateModel,
    WorkflowTaskModel,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = [
    "ChooseStateTaskConfigRepository",
    "ChooseStateTaskInformationRepository",
    "ResourceHistoryRepository",
    "ResourceWorkflowRepository",
    "WorkflowActionRepository",
    "WorkflowStateRepository",
    "WorkflowTaskRepository",
]


class WorkflowStateRepository(SQLAlchemyAsyncRepository[WorkflowStateModel]):
    """Repository for workflow states."""

    model_type = WorkflowStateModel

    async def list_by_workflow(self, workflow_id: int) -> Sequence[WorkflowStateModel]:
        """List the states of a workflow.

        Args:
            workflow_id: The workflow ID.

        Returns:
            List of states ordered by id.
        """
        stmt = (
            select(WorkflowStateModel)
            .where(WorkflowStateModel.workflow_id == workflow_id)
            .order_by(WorkflowStateModel.id)
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()


class WorkflowActionRepository(SQLAlchemyAsyncRepository[WorkflowActionModel]):
    """Repository for workflow actions."""

    model_type = WorkflowActionModel


class WorkflowTaskRepository(SQLAlchemyAsyncRepository[WorkflowTaskModel]):
    """Repository for workflow tasks."""

    model_type = WorkflowTaskModel


class ResourceWorkflowRepository(SQLAlchemyAsyncRepository[ResourceWorkflowModel]):
    """Repository for resource state assignments."""

    model_type = ResourceWorkflowModel

    async def get_by_key(
        self,
        resource_id: int,
        resource_type: str,
        workflow_id: int,
    ) -> ResourceWorkflowModel | None:
        """Get the assignment of a resource in a workflow.

        Args:
            resource_id: The resource ID.
            resource_type: The resource type.
            workflow_id: The workflow ID.

        Returns:
            The assignment or None if the resource is not in the workflow.
        """
        stmt = select(ResourceWorkflowModel).where(
            and_(
                ResourceWorkflowModel.resource_id == resource_id,
                ResourceWorkflowModel.resource_type == resource_type,
                ResourceWorkflowModel.workflow_id == workflow_id,
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()


class ResourceHistoryRepository(SQLAlchemyAsyncRepository[ResourceHistoryModel]):
    """Repository for resource history records."""

    model_type = ResourceHistoryModel

    async def find_by_resource(
        self,
        resource_id: int,
        resource_type: str,
        workflow_id: int | None = None,
    ) -> Sequence[ResourceHistoryModel]:
        """Find the history of a resource.

        Args:
            resource_id: The resource ID.
            resource_type: The resource type.
            workflow_id: Optional workflow filter.

        Returns:
            History records ordered by creation date.
        """
        conditions = [
            ResourceHistoryModel.resource_id == resource_id,
            ResourceHistoryModel.resource_type == resource_type,
        ]

        if workflow_id is not None:
            conditions.append(ResourceHistoryModel.workflow_id == workflow_id)

        stmt = (
            select(ResourceHistoryModel)
            .where(and_(*conditions))
            .order_by(ResourceHistoryModel.creation_date, ResourceHistoryModel.id)
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()


class ChooseStateTaskConfigRepository(SQLAlchemyAsyncRepository[ChooseStateTaskConfigModel]):
    """Repository for choose-state task configurations."""

    model_type = ChooseStateTaskConfigModel

    async def get_by_task_id(self, task_id: int) -> ChooseStateTaskConfigModel | None:
        """Get the configuration of a task.

        Args:
            task_id: The task ID.

        Returns:
            The configuration or None.
        """
        stmt = select(ChooseStateTaskConfigModel).where(ChooseStateTaskConfigModel.task_id == task_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_by_task_id(self, task_id: int) -> None:
        """Delete the configuration of a task, if any."""
        await self.session.execute(
            delete(ChooseStateTaskConfigModel).where(ChooseStateTaskConfigModel.task_id == task_id)
        )


class ChooseStateTaskInformationRepository(SQLAlchemyAsyncRepository[ChooseStateTaskInformationModel]):
    """Repository for choose-state task information records."""

    model_type = ChooseStateTaskInformationModel

    async def get_by_history_and_task(
        self,
        history_id: int,
        task_id: int,
    ) -> ChooseStateTaskInformationModel | None:
        """Get what a task recorded for a history entry.

        Args:
            history_id: The history record ID.
            task_id: The task ID.

        Returns:
            The task information or None.
        """
        stmt = select(ChooseStateTaskInformationModel).where(
            and_(
                ChooseStateTaskInformationModel.history_id == history_id,
                ChooseStateTaskInformationModel.task_id == task_id,
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_by_task(self, task_id: int) -> None:
        """Delete all information records of a task."""
        await self.session.execute(
            delete(ChooseStateTaskInformationModel).where(ChooseStateTaskInformationModel.task_id == task_id)
        )
