"""SQLAlchemy-backed stores for the choose-state task.

The stores in this module adapt the repositories to the store protocols the
task consumes, converting models to the core dataclasses. They only flush;
committing is left to the transaction scope returned by
:meth:`SQLAlchemyTransaction.__call__`, so the writes of one transition
commit or roll back together.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import replace
from typing import TYPE_CHECKING

from litestar_choose_state.core.models import (
    Action,
    ChooseStateTaskConfig,
    ChooseStateTaskInformation,
    ResourceHistory,
    ResourceWorkflow,
    Task,
    Workflow,
    WorkflowState,
)
from litestar_choose_state.db.models import (
    ChooseStateTaskConfigModel,
    ChooseStateTaskInformationModel,
    ResourceHistoryModel,
    WorkflowStateModel,
)
from litestar_choose_state.db.repositories import (
    ChooseStateTaskConfigRepository,
    ChooseStateTaskInformationRepository,
    ResourceHistoryRepository,
    ResourceWorkflowRepository,
    WorkflowActionRepository,
    WorkflowStateRepository,
    WorkflowTaskRepository,
)
from litestar_choose_state.stores.base import ChooseStateStores

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Sequence

    from sqlalchemy.ext.asyncio import AsyncSession

    from litestar_choose_state.db.models import (
        ResourceWorkflowModel,
        WorkflowActionModel,
        WorkflowModel,
        WorkflowTaskModel,
    )

__all__ = [
    "SQLAlchemyResourceHistoryService",
    "SQLAlchemyResourceWorkflowService",
    "SQLAlchemyTaskConfigService",
    "SQLAlchemyTaskInformationService",
    "SQLAlchemyTransaction",
    "SQLAlchemyWorkflowCatalog",
    "create_sqlalchemy_stores",
]

logger = logging.getLogger(__name__)


def _to_workflow(model: WorkflowModel | None) -> Workflow | None:
    if model is None:
        return None
    return Workflow(id=model.id, name=model.name)


def _to_state(model: WorkflowStateModel) -> WorkflowState:
    return WorkflowState(id=model.id, name=model.name, workflow_id=model.workflow_id)


def _to_action(model: WorkflowActionModel) -> Action:
    return Action(id=model.id, name=model.name, workflow=_to_workflow(model.workflow))


def _to_task(model: WorkflowTaskModel) -> Task:
    return Task(id=model.id, action=_to_action(model.action), title=model.title)


def _to_resource_workflow(model: ResourceWorkflowModel) -> ResourceWorkflow:
    return ResourceWorkflow(
        resource_id=model.resource_id,
        resource_type=model.resource_type,
        workflow_id=model.workflow_id,
        state=_to_state(model.state) if model.state else None,
    )


def _to_history(model: ResourceHistoryModel) -> ResourceHistory:
    return ResourceHistory(
        id=model.id,
        resource_id=model.resource_id,
        resource_type=model.resource_type,
        action=_to_action(model.action),
        workflow=_to_workflow(model.workflow),
        creation_date=model.creation_date,
        user_access_code=model.user_access_code,
    )


def _to_config(model: ChooseStateTaskConfigModel) -> ChooseStateTaskConfig:
    return ChooseStateTaskConfig(
        task_id=model.task_id,
        controller_name=model.controller_name,
        id_state_ok=model.id_state_ok,
        id_state_ko=model.id_state_ko,
    )


def _to_information(model: ChooseStateTaskInformationModel) -> ChooseStateTaskInformation:
    return ChooseStateTaskInformation(
        history_id=model.history_id,
        task_id=model.task_id,
        new_state=model.new_state,
    )


class SQLAlchemyTransaction:
    """Transaction scope over an async session.

    Commits when the block exits normally and rolls back when it raises.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @asynccontextmanager
    async def __call__(self) -> AsyncIterator[None]:
        try:
            yield
        except Exception:
            await self.session.rollback()
            logger.debug("choose_state_transaction_rolled_back")
            raise
        await self.session.commit()


class SQLAlchemyWorkflowCatalog:
    """Action, task and state catalog read from the database."""

    def __init__(self, session: AsyncSession) -> None:
        self._actions = WorkflowActionRepository(session=session)
        self._tasks = WorkflowTaskRepository(session=session)
        self._states = WorkflowStateRepository(session=session)

    async def find_action(self, action_id: int) -> Action | None:
        model = await self._actions.get_one_or_none(id=action_id)
        return _to_action(model) if model else None

    async def find_task(self, task_id: int) -> Task | None:
        model = await self._tasks.get_one_or_none(id=task_id)
        return _to_task(model) if model else None

    async def find_state(self, state_id: int) -> WorkflowState | None:
        model = await self._states.get_one_or_none(id=state_id)
        return _to_state(model) if model else None

    async def list_states(self, workflow_id: int) -> Sequence[WorkflowState]:
        return [_to_state(model) for model in await self._states.list_by_workflow(workflow_id)]


class SQLAlchemyResourceHistoryService:
    """Resource history stored in the database."""

    def __init__(self, session: AsyncSession) -> None:
        self._repo = ResourceHistoryRepository(session=session)

    async def create(self, history: ResourceHistory) -> ResourceHistory:
        model = ResourceHistoryModel(
            resource_id=history.resource_id,
            resource_type=history.resource_type,
            action_id=history.action.id,
            workflow_id=history.workflow.id if history.workflow else None,
            creation_date=history.creation_date,
            user_access_code=history.user_access_code,
        )
        model = await self._repo.add(model)
        return replace(history, id=model.id)

    async def find_by_id(self, history_id: int) -> ResourceHistory | None:
        model = await self._repo.get_one_or_none(id=history_id)
        return _to_history(model) if model else None


class SQLAlchemyResourceWorkflowService:
    """Resource state assignments stored in the database."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self._repo = ResourceWorkflowRepository(session=session)

    async def find_by_key(
        self,
        resource_id: int,
        resource_type: str,
        workflow_id: int,
    ) -> ResourceWorkflow | None:
        model = await self._repo.get_by_key(resource_id, resource_type, workflow_id)
        return _to_resource_workflow(model) if model else None

    async def update(self, resource_workflow: ResourceWorkflow) -> None:
        model = await self._repo.get_by_key(*resource_workflow.key)
        if model is None:
            msg = f"No workflow assignment for resource {resource_workflow.key}"
            raise LookupError(msg)
        state = resource_workflow.state
        model.state = await self.session.get(WorkflowStateModel, state.id) if state else None
        await self.session.flush()


class SQLAlchemyTaskConfigService:
    """Choose-state task configurations stored in the database."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self._repo = ChooseStateTaskConfigRepository(session=session)

    async def find_by_task_id(self, task_id: int) -> ChooseStateTaskConfig | None:
        model = await self._repo.get_by_task_id(task_id)
        return _to_config(model) if model else None

    async def create(self, config: ChooseStateTaskConfig) -> None:
        await self._repo.add(
            ChooseStateTaskConfigModel(
                task_id=config.task_id,
                controller_name=config.controller_name,
                id_state_ok=config.id_state_ok,
                id_state_ko=config.id_state_ko,
            )
        )

    async def update(self, config: ChooseStateTaskConfig) -> None:
        model = await self._repo.get_by_task_id(config.task_id)
        if model is None:
            msg = f"No configuration for task {config.task_id}"
            raise LookupError(msg)
        model.controller_name = config.controller_name
        model.id_state_ok = config.id_state_ok
        model.id_state_ko = config.id_state_ko
        await self.session.flush()

    async def remove(self, task_id: int) -> None:
        await self._repo.delete_by_task_id(task_id)


class SQLAlchemyTaskInformationService:
    """Choose-state task information stored in the database."""

    def __init__(self, session: AsyncSession) -> None:
        self._repo = ChooseStateTaskInformationRepository(session=session)

    async def create(self, information: ChooseStateTaskInformation) -> None:
        await self._repo.add(
            ChooseStateTaskInformationModel(
                history_id=information.history_id,
                task_id=information.task_id,
                new_state=information.new_state,
            )
        )

    async def find(self, history_id: int, task_id: int) -> ChooseStateTaskInformation | None:
        model = await self._repo.get_by_history_and_task(history_id, task_id)
        return _to_information(model) if model else None

    async def remove_by_task(self, task_id: int) -> None:
        await self._repo.delete_by_task(task_id)


def create_sqlalchemy_stores(session: AsyncSession) -> ChooseStateStores:
    """Create a store bundle backed by an async SQLAlchemy session.

    Args:
        session: The session every store of the bundle uses.

    Returns:
        The store bundle.

    Example:
        >>> async with session_maker() as session:
        ...     stores = create_sqlalchemy_stores(session)
        ...     service = ChooseStateTaskService(registry, stores, runner)
    """
    catalog = SQLAlchemyWorkflowCatalog(session)
    return ChooseStateStores(
        actions=catalog,
        tasks=catalog,
        states=catalog,
        history=SQLAlchemyResourceHistoryService(session),
        resource_workflows=SQLAlchemyResourceWorkflowService(session),
        task_configs=SQLAlchemyTaskConfigService(session),
        task_information=SQLAlchemyTaskInformationService(session),
        transaction=SQLAlchemyTransaction(session),
    )
