"""In-memory stores for the choose-state task.

These stores keep everything in process memory. They suit tests,
development, and hosts that keep their workflow data in memory. Records are
copied on the way in and out so that callers never share mutable state with
the store.
"""

from __future__ import annotations

import itertools
from dataclasses import replace
from typing import TYPE_CHECKING

from advanced_alchemy.exceptions import DuplicateKeyError

from litestar_choose_state.stores.base import ChooseStateStores

if TYPE_CHECKING:
    from collections.abc import Sequence

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
    from litestar_choose_state.core.types import ResourceKey

__all__ = [
    "InMemoryResourceHistoryService",
    "InMemoryResourceWorkflowService",
    "InMemoryTaskConfigService",
    "InMemoryTaskInformationService",
    "InMemoryWorkflowCatalog",
    "create_memory_stores",
]


class InMemoryWorkflowCatalog:
    """Workflows, states, actions and tasks held in memory.

    Implements the action, task and state catalog protocols.
    """

    def __init__(self) -> None:
        self._workflows: dict[int, Workflow] = {}
        self._states: dict[int, WorkflowState] = {}
        self._actions: dict[int, Action] = {}
        self._tasks: dict[int, Task] = {}

    def add_workflow(self, workflow: Workflow) -> Workflow:
        self._workflows[workflow.id] = workflow
        return workflow

    def add_state(self, state: WorkflowState) -> WorkflowState:
        self._states[state.id] = state
        return state

    def add_action(self, action: Action) -> Action:
        self._actions[action.id] = action
        return action

    def add_task(self, task: Task) -> Task:
        self._tasks[task.id] = task
        return task

    def remove_state(self, state_id: int) -> None:
        self._states.pop(state_id, None)

    def remove_action(self, action_id: int) -> None:
        self._actions.pop(action_id, None)

    async def find_action(self, action_id: int) -> Action | None:
        return self._actions.get(action_id)

    async def find_task(self, task_id: int) -> Task | None:
        return self._tasks.get(task_id)

    async def find_state(self, state_id: int) -> WorkflowState | None:
        return self._states.get(state_id)

    async def list_states(self, workflow_id: int) -> Sequence[WorkflowState]:
        return sorted(
            (state for state in self._states.values() if state.workflow_id == workflow_id),
            key=lambda state: state.id,
        )


class InMemoryResourceHistoryService:
    """Append-only resource history held in memory."""

    def __init__(self) -> None:
        self._records: dict[int, ResourceHistory] = {}
        self._ids = itertools.count(1)

    @property
    def records(self) -> list[ResourceHistory]:
        """All history records in creation order."""
        return list(self._records.values())

    async def create(self, history: ResourceHistory) -> ResourceHistory:
        stored = replace(history, id=next(self._ids))
        self._records[stored.id] = stored  # type: ignore[index]
        return stored

    async def find_by_id(self, history_id: int) -> ResourceHistory | None:
        return self._records.get(history_id)


class InMemoryResourceWorkflowService:
    """Resource state assignments held in memory."""

    def __init__(self) -> None:
        self._assignments: dict[ResourceKey, ResourceWorkflow] = {}

    def add(self, resource_workflow: ResourceWorkflow) -> None:
        """Seed an assignment, replacing any existing one for the same key."""
        self._assignments[resource_workflow.key] = replace(resource_workflow)

    async def find_by_key(
        self,
        resource_id: int,
        resource_type: str,
        workflow_id: int,
    ) -> ResourceWorkflow | None:
        resource_workflow = self._assignments.get((resource_id, resource_type, workflow_id))
        return replace(resource_workflow) if resource_workflow else None

    async def update(self, resource_workflow: ResourceWorkflow) -> None:
        if resource_workflow.key not in self._assignments:
            msg = f"No workflow assignment for resource {resource_workflow.key}"
            raise KeyError(msg)
        self._assignments[resource_workflow.key] = replace(resource_workflow)


class InMemoryTaskConfigService:
    """Choose-state task configurations held in memory."""

    def __init__(self) -> None:
        self._configs: dict[int, ChooseStateTaskConfig] = {}

    async def find_by_task_id(self, task_id: int) -> ChooseStateTaskConfig | None:
        config = self._configs.get(task_id)
        return replace(config) if config else None

    async def create(self, config: ChooseStateTaskConfig) -> None:
        if config.task_id in self._configs:
            msg = f"Configuration of task {config.task_id} already exists"
            raise DuplicateKeyError(msg)
        self._configs[config.task_id] = replace(config)

    async def update(self, config: ChooseStateTaskConfig) -> None:
        self._configs[config.task_id] = replace(config)

    async def remove(self, task_id: int) -> None:
        self._configs.pop(task_id, None)


class InMemoryTaskInformationService:
    """Choose-state task information held in memory."""

    def __init__(self) -> None:
        self._information: dict[tuple[int, int], ChooseStateTaskInformation] = {}

    @property
    def records(self) -> list[ChooseStateTaskInformation]:
        return list(self._information.values())

    async def create(self, information: ChooseStateTaskInformation) -> None:
        self._information[(information.history_id, information.task_id)] = information

    async def find(self, history_id: int, task_id: int) -> ChooseStateTaskInformation | None:
        return self._information.get((history_id, task_id))

    async def remove_by_task(self, task_id: int) -> None:
        for key in [key for key in self._information if key[1] == task_id]:
            del self._information[key]


def create_memory_stores(catalog: InMemoryWorkflowCatalog | None = None) -> ChooseStateStores:
    """Create a store bundle backed by process memory.

    Args:
        catalog: Optional catalog to share; a new empty one otherwise.

    Returns:
        The store bundle.
    """
    catalog = catalog or InMemoryWorkflowCatalog()
    return ChooseStateStores(
        actions=catalog,
        tasks=catalog,
        states=catalog,
        history=InMemoryResourceHistoryService(),
        resource_workflows=InMemoryResourceWorkflowService(),
        task_configs=InMemoryTaskConfigService(),
        task_information=InMemoryTaskInformationService(),
    )
