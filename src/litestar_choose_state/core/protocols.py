"""Core protocols for litestar-choose-state.

This module defines the Protocol-based interfaces of the controllers and of
the stores the choose-state task consumes. The host workflow engine owns the
catalog, the resource stores and the reflexive-action cascade; this library
only needs the narrow contract below.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from litestar_choose_state.core.models import (
        Action,
        ChooseStateTaskConfig,
        ChooseStateTaskInformation,
        ResourceHistory,
        ResourceWorkflow,
        Task,
        WorkflowState,
    )

__all__ = [
    "ActionService",
    "ChooseStateController",
    "EventBus",
    "ReflexiveActionRunner",
    "ResourceHistoryService",
    "ResourceWorkflowService",
    "StateService",
    "TaskConfigService",
    "TaskInformationService",
    "TaskService",
]


@runtime_checkable
class ChooseStateController(Protocol):
    """Protocol for the named predicates that pick between two states.

    Attributes:
        name: Stable name the controller is registered and configured under.

    Example:
        >>> class IsPaid:
        ...     name = "is-paid"
        ...
        ...     async def control(self, resource_id: int, resource_type: str) -> bool:
        ...         return await invoices.is_paid(resource_id)
    """

    name: str

    async def control(self, resource_id: int, resource_type: str) -> bool:
        """Evaluate the predicate for a resource.

        Args:
            resource_id: Identifier of the resource.
            resource_type: Type of the resource.

        Returns:
            True to select the OK state, False to select the KO state.
        """
        ...


class ActionService(Protocol):
    """Read access to the action catalog."""

    async def find_action(self, action_id: int) -> Action | None: ...


class TaskService(Protocol):
    """Read access to the task catalog."""

    async def find_task(self, task_id: int) -> Task | None: ...


class StateService(Protocol):
    """Read access to the state catalog."""

    async def find_state(self, state_id: int) -> WorkflowState | None: ...

    async def list_states(self, workflow_id: int) -> Sequence[WorkflowState]:
        """List the states of a workflow ordered by id."""
        ...


class ResourceHistoryService(Protocol):
    """Append-only resource history store."""

    async def create(self, history: ResourceHistory) -> ResourceHistory:
        """Persist a history record.

        Returns:
            The stored record, carrying its assigned id.
        """
        ...

    async def find_by_id(self, history_id: int) -> ResourceHistory | None: ...


class ResourceWorkflowService(Protocol):
    """Store of resource to workflow-state assignments."""

    async def find_by_key(
        self,
        resource_id: int,
        resource_type: str,
        workflow_id: int,
    ) -> ResourceWorkflow | None: ...

    async def update(self, resource_workflow: ResourceWorkflow) -> None: ...


class TaskConfigService(Protocol):
    """Store of choose-state task configurations."""

    async def find_by_task_id(self, task_id: int) -> ChooseStateTaskConfig | None: ...

    async def create(self, config: ChooseStateTaskConfig) -> None:
        """Store a new configuration.

        Raises:
            DuplicateKeyError: If the task already has a configuration.
        """
        ...

    async def update(self, config: ChooseStateTaskConfig) -> None: ...

    async def remove(self, task_id: int) -> None: ...


class TaskInformationService(Protocol):
    """Store of choose-state task information records."""

    async def create(self, information: ChooseStateTaskInformation) -> None: ...

    async def find(self, history_id: int, task_id: int) -> ChooseStateTaskInformation | None: ...

    async def remove_by_task(self, task_id: int) -> None: ...


class ReflexiveActionRunner(Protocol):
    """Entry point of the host engine's automatic reflexive actions."""

    async def run_automatic_reflexive_actions(
        self,
        resource_id: int,
        resource_type: str,
        state_id: int,
        locale: str,
    ) -> None:
        """Run the automatic reflexive actions bound to a state.

        Reflexive actions act in place: they run their tasks without routing
        through the state-changing action pipeline.

        Args:
            resource_id: Identifier of the resource.
            resource_type: Type of the resource.
            state_id: The state the resource just entered.
            locale: Locale for any user-facing text.
        """
        ...


class EventBus(Protocol):
    """Anything that can publish named events."""

    async def emit(self, event_name: str, **kwargs: Any) -> None: ...
