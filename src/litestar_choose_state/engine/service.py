"""Choose-state task service.

This module exposes what the host workflow engine and the REST API need from
the choose-state task: selectable states, configuration access, the composed
evaluate-and-transition operation and history lookups.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from advanced_alchemy.exceptions import DuplicateKeyError

from litestar_choose_state.core.events import TRANSITION_SKIPPED, TransitionSkipped
from litestar_choose_state.core.models import ChooseStateTaskConfig, ReferenceItem
from litestar_choose_state.core.types import DEFAULT_LOCALE, UNSET_STATE_ID, SkipReason
from litestar_choose_state.engine.decision import make_decision
from litestar_choose_state.engine.executor import TransitionExecutor
from litestar_choose_state.exceptions import ControllerNotFoundError, InvalidTaskConfigError, TaskNotFoundError

if TYPE_CHECKING:
    from litestar_choose_state.core.models import (
        ChooseStateTaskInformation,
        ResourceWorkflow,
        Task,
        TransitionResult,
    )
    from litestar_choose_state.core.protocols import EventBus, ReflexiveActionRunner
    from litestar_choose_state.core.types import ResourceKey
    from litestar_choose_state.engine.locks import KeyedLock
    from litestar_choose_state.engine.registry import ControllerRegistry
    from litestar_choose_state.stores.base import ChooseStateStores

__all__ = ["ChooseStateTaskService"]

logger = logging.getLogger(__name__)


class ChooseStateTaskService:
    """Service behind the choose-state task.

    Attributes:
        registry: Registry the configured controllers are resolved from.
        stores: The stores the task reads and writes.
        executor: Applies the decided transitions.
        default_locale: Locale used when a caller does not pass one.
        event_bus: Optional event bus for emitting events.
    """

    def __init__(
        self,
        registry: ControllerRegistry,
        stores: ChooseStateStores,
        reflexive_actions: ReflexiveActionRunner,
        *,
        default_locale: str = DEFAULT_LOCALE,
        event_bus: EventBus | None = None,
        locks: KeyedLock[ResourceKey] | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            registry: The controller registry.
            stores: The stores the task reads and writes.
            reflexive_actions: The host engine's reflexive-action cascade.
            default_locale: Locale used when a caller does not pass one.
            event_bus: Optional event bus for events.
            locks: Optional per-resource locks shared with other services.
        """
        self.registry = registry
        self.stores = stores
        self.default_locale = default_locale
        self.event_bus = event_bus
        self.executor = TransitionExecutor(
            stores,
            reflexive_actions,
            event_bus=event_bus,
            locks=locks,
        )

    async def list_selectable_states(self, action_id: int) -> list[ReferenceItem]:
        """List the states a task of an action may target.

        Args:
            action_id: The action the task is bound to.

        Returns:
            An unset entry followed by the states of the action's workflow,
            or an empty list if the action or its workflow is unknown.
        """
        action = await self.stores.actions.find_action(action_id)
        if action is None or action.workflow is None:
            return []

        states = await self.stores.states.list_states(action.workflow.id)
        return [
            ReferenceItem(code=UNSET_STATE_ID, name=""),
            *(ReferenceItem(code=state.id, name=state.name) for state in states),
        ]

    def list_controllers(self) -> list[str]:
        """List the names a task configuration may refer to."""
        return self.registry.list_names()

    async def load_or_init_config(self, task_id: int) -> ChooseStateTaskConfig:
        """Load the configuration of a task, creating it if missing.

        The first call for a task writes the default configuration (no
        controller, both targets unset); later calls only read. When another
        caller creates the configuration first, the stored one is returned.

        Args:
            task_id: The task identifier.

        Returns:
            The task configuration.
        """
        config = await self.stores.task_configs.find_by_task_id(task_id)
        if config is not None:
            return config

        config = ChooseStateTaskConfig(task_id=task_id)
        try:
            async with self.stores.transaction():
                await self.stores.task_configs.create(config)
        except DuplicateKeyError:
            existing = await self.stores.task_configs.find_by_task_id(task_id)
            if existing is None:
                raise
            logger.debug("choose_state_config_created_concurrently", extra={"task_id": task_id})
            return existing
        logger.debug("choose_state_config_created", extra={"task_id": task_id})
        return config

    async def save_config(self, config: ChooseStateTaskConfig) -> ChooseStateTaskConfig:
        """Validate and store a task configuration.

        Args:
            config: The configuration to store.

        Returns:
            The stored configuration.

        Raises:
            ControllerNotFoundError: If a non-empty controller name is not registered.
            InvalidTaskConfigError: If a target state is unknown or belongs to
                another workflow than the task's action.
        """
        if config.controller_name and not self.registry.has_controller(config.controller_name):
            raise ControllerNotFoundError(config.controller_name)
        await self._check_targets(config)

        async with self.stores.transaction():
            existing = await self.stores.task_configs.find_by_task_id(config.task_id)
            if existing is None:
                await self.stores.task_configs.create(config)
            else:
                await self.stores.task_configs.update(config)
        return config

    async def _check_targets(self, config: ChooseStateTaskConfig) -> None:
        workflow_id = None
        task = await self.stores.tasks.find_task(config.task_id)
        if task is not None:
            action = await self.stores.actions.find_action(task.action.id)
            if action is not None and action.workflow is not None:
                workflow_id = action.workflow.id

        for state_id in (config.id_state_ok, config.id_state_ko):
            if state_id == UNSET_STATE_ID:
                continue
            state = await self.stores.states.find_state(state_id)
            if state is None:
                raise InvalidTaskConfigError(config.task_id, state_id, "unknown state")
            if workflow_id is not None and state.workflow_id != workflow_id:
                raise InvalidTaskConfigError(config.task_id, state_id, f"not a state of workflow '{workflow_id}'")

    async def remove_config(self, task_id: int) -> None:
        """Remove the configuration and task information of a deleted task."""
        async with self.stores.transaction():
            await self.stores.task_information.remove_by_task(task_id)
            await self.stores.task_configs.remove(task_id)

    async def evaluate_and_transition(
        self,
        resource_id: int,
        resource_type: str,
        task: Task,
        config: ChooseStateTaskConfig,
        workflow_id: int,
        current_state_id: int | None,
        locale: str | None = None,
    ) -> TransitionResult | None:
        """Evaluate a task's controller and apply the resulting transition.

        Args:
            resource_id: Identifier of the resource.
            resource_type: Type of the resource.
            task: The task being run.
            config: The task configuration.
            workflow_id: Identifier of the workflow.
            current_state_id: State the resource currently sits in.
            locale: Locale for the reflexive cascade, default locale if None.

        Returns:
            The transition result, or None if the resource stays where it is.

        Raises:
            StateTransitionError: If a store write fails during the transition.
        """
        decision = await make_decision(self.registry, resource_id, resource_type, config, current_state_id)
        if decision.target_state_id is None:
            await self._skipped(task, resource_id, resource_type, config, decision.reason)
            return None

        return await self.executor.apply(
            task,
            resource_id,
            resource_type,
            workflow_id,
            decision.target_state_id,
            locale or self.default_locale,
        )

    async def lookup_assignment_for_history(self, history_id: int, workflow_id: int) -> ResourceWorkflow | None:
        """Find the resource assignment a history record refers to.

        Args:
            history_id: Identifier of the history record.
            workflow_id: Identifier of the workflow.

        Returns:
            The assignment, or None if the history or the assignment is missing.
        """
        history = await self.stores.history.find_by_id(history_id)
        if history is None:
            return None
        return await self.stores.resource_workflows.find_by_key(
            history.resource_id,
            history.resource_type,
            workflow_id,
        )

    async def get_task_information(self, history_id: int, task_id: int) -> ChooseStateTaskInformation | None:
        """Get what a task recorded for a history entry, if anything."""
        return await self.stores.task_information.find(history_id, task_id)

    async def process_task(
        self,
        history_id: int,
        task: Task,
        locale: str | None = None,
    ) -> TransitionResult | None:
        """Run a choose-state task for the resource of a history record.

        This is what the host engine calls when the task's action has been
        performed on a resource.

        Args:
            history_id: The history record of the action being performed.
            task: The task to run.
            locale: Locale for the reflexive cascade, default locale if None.

        Returns:
            The transition result, or None if the resource stays where it is.
        """
        config = await self.load_or_init_config(task.id)

        action = await self.stores.actions.find_action(task.action.id)
        if action is None or action.workflow is None:
            logger.warning(
                "choose_state_task_without_workflow",
                extra={"task_id": task.id, "action_id": task.action.id},
            )
            return None

        resource_workflow = await self.lookup_assignment_for_history(history_id, action.workflow.id)
        if resource_workflow is None:
            logger.warning(
                "choose_state_resource_not_found",
                extra={"task_id": task.id, "history_id": history_id, "workflow_id": action.workflow.id},
            )
            return None

        return await self.evaluate_and_transition(
            resource_workflow.resource_id,
            resource_workflow.resource_type,
            task,
            config,
            resource_workflow.workflow_id,
            resource_workflow.state.id if resource_workflow.state else None,
            locale,
        )

    async def process_task_by_id(
        self,
        history_id: int,
        task_id: int,
        locale: str | None = None,
    ) -> TransitionResult | None:
        """Run a choose-state task looked up by id.

        Raises:
            TaskNotFoundError: If the task is unknown.
        """
        task = await self.stores.tasks.find_task(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return await self.process_task(history_id, task, locale)

    async def _skipped(
        self,
        task: Task,
        resource_id: int,
        resource_type: str,
        config: ChooseStateTaskConfig,
        reason: SkipReason | None,
    ) -> None:
        if reason == SkipReason.NO_CONTROLLER and config.controller_name:
            logger.warning(
                "choose_state_controller_not_registered",
                extra={"task_id": task.id, "controller": config.controller_name},
            )
        else:
            logger.debug(
                "choose_state_no_transition",
                extra={"task_id": task.id, "resource_id": resource_id, "reason": str(reason)},
            )

        if self.event_bus:
            await self.event_bus.emit(
                TRANSITION_SKIPPED,
                event=TransitionSkipped(
                    task_id=task.id,
                    resource_id=resource_id,
                    resource_type=resource_type,
                    timestamp=datetime.now(timezone.utc),
                    reason=reason,  # type: ignore[arg-type]
                    detail=config.controller_name or None,
                ),
            )
