"""Store bundle consumed by the choose-state task."""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable
    from contextlib import AbstractAsyncContextManager

    from litestar_choose_state.core.protocols import (
        ActionService,
        ResourceHistoryService,
        ResourceWorkflowService,
        StateService,
        TaskConfigService,
        TaskInformationService,
        TaskService,
    )

__all__ = ["ChooseStateStores", "no_transaction"]


@asynccontextmanager
async def no_transaction() -> AsyncIterator[None]:
    """Transaction scope for stores that write immediately."""
    yield


@dataclass
class ChooseStateStores:
    """The stores a choose-state task reads and writes.

    Attributes:
        actions: Action catalog.
        tasks: Task catalog.
        states: State catalog.
        history: Resource history store.
        resource_workflows: Resource state assignment store.
        task_configs: Task configuration store.
        task_information: Task information store.
        transaction: Factory of the scope the transition writes run in.
            The scope commits when the block exits normally and rolls back
            when it raises, if the stores support it.
    """

    actions: ActionService
    tasks: TaskService
    states: StateService
    history: ResourceHistoryService
    resource_workflows: ResourceWorkflowService
    task_configs: TaskConfigService
    task_information: TaskInformationService
    transaction: Callable[[], AbstractAsyncContextManager[Any]] = no_transaction
