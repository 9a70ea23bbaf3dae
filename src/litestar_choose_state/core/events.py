"""Domain events for the choose-state task.

These events are published on the optional event bus so that hosts can
monitor transitions and spot misconfigured tasks.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from litestar_choose_state.core.types import SkipReason

__all__ = [
    "STATE_TRANSITIONED",
    "TRANSITION_SKIPPED",
    "ChooseStateEvent",
    "StateTransitioned",
    "TransitionSkipped",
]

STATE_TRANSITIONED = "choose_state.transitioned"
TRANSITION_SKIPPED = "choose_state.skipped"


@dataclass
class ChooseStateEvent:
    """Base class for all choose-state events.

    Attributes:
        task_id: Identifier of the task that was evaluated.
        resource_id: Identifier of the resource.
        resource_type: Type of the resource.
        timestamp: When the event occurred.
    """

    task_id: int
    resource_id: int
    resource_type: str
    timestamp: datetime


@dataclass
class StateTransitioned(ChooseStateEvent):
    """Event emitted after a resource was moved to a new state.

    Attributes:
        workflow_id: Identifier of the workflow.
        history_id: Identifier of the history record written.
        previous_state_id: State the resource left, if known.
        new_state_id: State the resource entered.
        new_state_name: Display name of the state entered.

    Example:
        >>> event = StateTransitioned(
        ...     task_id=7,
        ...     resource_id=42,
        ...     resource_type="invoice",
        ...     timestamp=datetime.now(timezone.utc),
        ...     workflow_id=1,
        ...     history_id=1001,
        ...     previous_state_id=3,
        ...     new_state_id=5,
        ...     new_state_name="Paid",
        ... )
    """

    workflow_id: int
    history_id: int
    previous_state_id: int | None
    new_state_id: int
    new_state_name: str


@dataclass
class TransitionSkipped(ChooseStateEvent):
    """Event emitted when an evaluation did not change the resource state.

    Attributes:
        reason: Why no transition happened.
        detail: Name or id of the item involved (controller, state, action).
    """

    reason: SkipReason
    detail: str | None = None
