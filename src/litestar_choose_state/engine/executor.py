"""Transition executor for the choose-state task.

This module performs a decided state change: it records history, moves the
resource to its new state, notes which task did it, and finally runs the
automatic reflexive actions bound to the new state.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from litestar_choose_state.core.events import (
    STATE_TRANSITIONED,
    TRANSITION_SKIPPED,
    StateTransitioned,
    TransitionSkipped,
)
from litestar_choose_state.core.models import (
    ChooseStateTaskInformation,
    ResourceHistory,
    TransitionResult,
)
from litestar_choose_state.core.types import AUTOMATIC_USER, SkipReason
from litestar_choose_state.engine.locks import KeyedLock
from litestar_choose_state.exceptions import StateTransitionError

if TYPE_CHECKING:
    from litestar_choose_state.core.models import Task
    from litestar_choose_state.core.protocols import EventBus, ReflexiveActionRunner
    from litestar_choose_state.core.types import ResourceKey
    from litestar_choose_state.stores.base import ChooseStateStores

__all__ = ["TransitionExecutor"]

logger = logging.getLogger(__name__)


class TransitionExecutor:
    """Applies state changes decided by a choose-state task.

    Transitions on the same ``(resource_id, resource_type, workflow_id)`` are
    serialized, and the history, state and task information writes run in a
    single store transaction. The reflexive cascade runs once the lock is
    released, since it may evaluate further choose-state tasks on the same
    resource.

    Attributes:
        stores: The stores transitions read and write.
        reflexive_actions: The host engine's reflexive-action cascade.
        event_bus: Optional event bus for emitting transition events.
        locks: Per-resource locks shared by every transition of this executor.
    """

    def __init__(
        self,
        stores: ChooseStateStores,
        reflexive_actions: ReflexiveActionRunner,
        event_bus: EventBus | None = None,
        locks: KeyedLock[ResourceKey] | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            stores: The stores transitions read and write.
            reflexive_actions: The host engine's reflexive-action cascade.
            event_bus: Optional event bus for events.
            locks: Optional lock set, to share serialization between executors.
        """
        self.stores = stores
        self.reflexive_actions = reflexive_actions
        self.event_bus = event_bus
        self.locks: KeyedLock[ResourceKey] = locks if locks is not None else KeyedLock()

    async def apply(
        self,
        task: Task,
        resource_id: int,
        resource_type: str,
        workflow_id: int,
        target_state_id: int,
        locale: str,
    ) -> TransitionResult | None:
        """Move a resource to a new state.

        Nothing is written when the target state, the task's action or the
        resource assignment cannot be found, or when the target state belongs
        to another workflow.

        Args:
            task: The task performing the transition.
            resource_id: Identifier of the resource.
            resource_type: Type of the resource.
            workflow_id: Identifier of the workflow.
            target_state_id: The state to move the resource to.
            locale: Locale for the reflexive cascade.

        Returns:
            The transition result, or None if nothing was done.

        Raises:
            StateTransitionError: If a store write fails.
        """
        state = await self.stores.states.find_state(target_state_id)
        if state is None:
            await self._skipped(task, resource_id, resource_type, SkipReason.STATE_NOT_FOUND, str(target_state_id))
            return None
        if state.workflow_id != workflow_id:
            await self._skipped(
                task, resource_id, resource_type, SkipReason.STATE_OUTSIDE_WORKFLOW, str(target_state_id)
            )
            return None

        action = await self.stores.actions.find_action(task.action.id)
        if action is None:
            await self._skipped(task, resource_id, resource_type, SkipReason.ACTION_NOT_FOUND, str(task.action.id))
            return None

        async with self.locks.acquire((resource_id, resource_type, workflow_id)):
            resource_workflow = await self.stores.resource_workflows.find_by_key(
                resource_id,
                resource_type,
                workflow_id,
            )
            if resource_workflow is None:
                await self._skipped(task, resource_id, resource_type, SkipReason.RESOURCE_NOT_FOUND)
                return None

            previous_state_id = resource_workflow.state.id if resource_workflow.state else None
            if previous_state_id == state.id:
                # Another transition got there while we waited for the lock
                await self._skipped(task, resource_id, resource_type, SkipReason.SAME_STATE, str(state.id))
                return None

            try:
                async with self.stores.transaction():
                    history = await self.stores.history.create(
                        ResourceHistory(
                            resource_id=resource_id,
                            resource_type=resource_type,
                            action=action,
                            workflow=action.workflow,
                            creation_date=datetime.now(timezone.utc),
                            user_access_code=AUTOMATIC_USER,
                        )
                    )

                    resource_workflow.state = state
                    await self.stores.resource_workflows.update(resource_workflow)

                    await self.stores.task_information.create(
                        ChooseStateTaskInformation(
                            history_id=history.id,  # type: ignore[arg-type]
                            task_id=task.id,
                            new_state=state.name,
                        )
                    )
            except Exception as e:
                logger.exception(
                    "choose_state_transition_failed",
                    extra={
                        "task_id": task.id,
                        "resource_id": resource_id,
                        "resource_type": resource_type,
                        "workflow_id": workflow_id,
                        "target_state_id": state.id,
                    },
                )
                raise StateTransitionError(task.id, resource_id, e) from e

        result = TransitionResult(
            history_id=history.id,  # type: ignore[arg-type]
            task_id=task.id,
            resource_id=resource_id,
            resource_type=resource_type,
            workflow_id=workflow_id,
            previous_state_id=previous_state_id,
            new_state=state,
        )

        logger.info(
            "choose_state_transitioned",
            extra={
                "task_id": task.id,
                "resource_id": resource_id,
                "resource_type": resource_type,
                "workflow_id": workflow_id,
                "history_id": result.history_id,
                "previous_state_id": previous_state_id,
                "new_state_id": state.id,
            },
        )

        if self.event_bus:
            await self.event_bus.emit(
                STATE_TRANSITIONED,
                event=StateTransitioned(
                    task_id=task.id,
                    resource_id=resource_id,
                    resource_type=resource_type,
                    timestamp=datetime.now(timezone.utc),
                    workflow_id=workflow_id,
                    history_id=result.history_id,
                    previous_state_id=previous_state_id,
                    new_state_id=state.id,
                    new_state_name=state.name,
                ),
            )

        # Reflexive actions run the new state's tasks without changing state
        await self.reflexive_actions.run_automatic_reflexive_actions(
            resource_id,
            resource_type,
            state.id,
            locale,
        )

        return result

    async def _skipped(
        self,
        task: Task,
        resource_id: int,
        resource_type: str,
        reason: SkipReason,
        detail: str | None = None,
    ) -> None:
        log = logger.debug if reason == SkipReason.SAME_STATE else logger.warning
        log(
            "choose_state_transition_aborted",
            extra={
                "task_id": task.id,
                "resource_id": resource_id,
                "resource_type": resource_type,
                "reason": str(reason),
                "detail": detail,
            },
        )
        if self.event_bus:
            await self.event_bus.emit(
                TRANSITION_SKIPPED,
                event=TransitionSkipped(
                    task_id=task.id,
                    resource_id=resource_id,
                    resource_type=resource_type,
                    timestamp=datetime.now(timezone.utc),
                    reason=reason,
                    detail=detail,
                ),
            )
