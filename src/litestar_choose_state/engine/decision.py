"""Transition decision for the choose-state task.

A choose-state task evaluates one controller and maps its boolean outcome to
one of two configured states. Unset targets and transitions to the state the
resource already sits in are suppressed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from litestar_choose_state.core.types import UNSET_STATE_ID, SkipReason

if TYPE_CHECKING:
    from litestar_choose_state.core.models import ChooseStateTaskConfig
    from litestar_choose_state.engine.registry import ControllerRegistry

__all__ = ["Decision", "decide", "make_decision"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Decision:
    """Result of evaluating a choose-state configuration.

    Attributes:
        target_state_id: State to move to, or None for no transition.
        outcome: The controller result, None if no controller was evaluated.
        reason: Why there is no target, None when there is one.
    """

    target_state_id: int | None
    outcome: bool | None = None
    reason: SkipReason | None = None

    @property
    def should_transition(self) -> bool:
        return self.target_state_id is not None


async def make_decision(
    registry: ControllerRegistry,
    resource_id: int,
    resource_type: str,
    config: ChooseStateTaskConfig,
    current_state_id: int | None,
) -> Decision:
    """Evaluate a configuration and explain the result.

    Args:
        registry: Registry to resolve the configured controller from.
        resource_id: Identifier of the resource.
        resource_type: Type of the resource.
        config: The task configuration.
        current_state_id: State the resource currently sits in.

    Returns:
        The decision, with the skip reason when no transition is due.
    """
    controller = registry.resolve(config.controller_name)
    if controller is None:
        return Decision(None, reason=SkipReason.NO_CONTROLLER)

    outcome = bool(await controller.control(resource_id, resource_type))
    candidate = config.target_for(outcome)

    logger.debug(
        "choose_state_controller_evaluated",
        extra={
            "controller": controller.name,
            "resource_id": resource_id,
            "resource_type": resource_type,
            "outcome": outcome,
            "candidate_state_id": candidate,
        },
    )

    if candidate == UNSET_STATE_ID:
        return Decision(None, outcome=outcome, reason=SkipReason.UNSET_TARGET)
    if candidate == current_state_id:
        return Decision(None, outcome=outcome, reason=SkipReason.SAME_STATE)
    return Decision(candidate, outcome=outcome)


async def decide(
    registry: ControllerRegistry,
    resource_id: int,
    resource_type: str,
    config: ChooseStateTaskConfig,
    current_state_id: int | None,
) -> int | None:
    """Compute the state a resource should move to.

    Args:
        registry: Registry to resolve the configured controller from.
        resource_id: Identifier of the resource.
        resource_type: Type of the resource.
        config: The task configuration.
        current_state_id: State the resource currently sits in.

    Returns:
        The target state id, or None when no transition is due.

    Example:
        >>> config = ChooseStateTaskConfig(task_id=1, controller_name="always-true", id_state_ok=5, id_state_ko=3)
        >>> await decide(registry, 42, "invoice", config, current_state_id=3)
        5
    """
    decision = await make_decision(registry, resource_id, resource_type, config, current_state_id)
    return decision.target_state_id
