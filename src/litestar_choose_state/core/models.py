"""Domain models for the choose-state task.

The catalog entities (workflows, states, actions, tasks) are reference data
owned by the host workflow engine. The resource entities and the task's own
records are what a transition reads and writes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from litestar_choose_state.core.types import AUTOMATIC_USER, UNSET_STATE_ID

__all__ = [
    "Action",
    "ChooseStateTaskConfig",
    "ChooseStateTaskInformation",
    "ReferenceItem",
    "ResourceHistory",
    "ResourceWorkflow",
    "Task",
    "TransitionResult",
    "Workflow",
    "WorkflowState",
]


@dataclass(frozen=True)
class Workflow:
    """A workflow of the host engine.

    Attributes:
        id: Workflow identifier.
        name: Display name.
    """

    id: int
    name: str = ""


@dataclass(frozen=True)
class WorkflowState:
    """A state of a workflow.

    Attributes:
        id: State identifier, unique within the workflow.
        name: Display name.
        workflow_id: Identifier of the owning workflow.
    """

    id: int
    name: str
    workflow_id: int


@dataclass(frozen=True)
class Action:
    """A workflow action that tasks are bound to.

    Attributes:
        id: Action identifier.
        name: Display name.
        workflow: The owning workflow, if the catalog knows it.
    """

    id: int
    name: str = ""
    workflow: Workflow | None = None


@dataclass(frozen=True)
class Task:
    """A task instance bound to an action.

    Attributes:
        id: Task identifier, also the key of its configuration.
        action: The action the task is bound to.
        title: Display title.
    """

    id: int
    action: Action
    title: str = ""


@dataclass
class ChooseStateTaskConfig:
    """Per-task settings of the choose-state task.

    Attributes:
        task_id: The task this configuration belongs to.
        controller_name: Name of the controller to evaluate.
        id_state_ok: Target state when the controller returns True.
        id_state_ko: Target state when the controller returns False.
    """

    task_id: int
    controller_name: str = ""
    id_state_ok: int = UNSET_STATE_ID
    id_state_ko: int = UNSET_STATE_ID

    def target_for(self, outcome: bool) -> int:
        """Return the configured target state id for a controller outcome."""
        return self.id_state_ok if outcome else self.id_state_ko


@dataclass
class ResourceWorkflow:
    """The current state of one resource in one workflow.

    At most one exists per ``(resource_id, resource_type, workflow_id)``.

    Attributes:
        resource_id: Identifier of the resource.
        resource_type: Type of the resource.
        workflow_id: Identifier of the workflow.
        state: The state the resource currently sits in.
        metadata: Extra attributes carried by the host engine.
    """

    resource_id: int
    resource_type: str
    workflow_id: int
    state: WorkflowState | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def key(self) -> tuple[int, str, int]:
        return (self.resource_id, self.resource_type, self.workflow_id)


@dataclass(frozen=True)
class ResourceHistory:
    """Append-only record of one workflow event for a resource.

    Attributes:
        resource_id: Identifier of the resource.
        resource_type: Type of the resource.
        action: The action that was taken.
        workflow: The workflow the action belongs to.
        creation_date: When the event happened.
        user_access_code: Acting user, ``"auto"`` for automatic events.
        id: Identifier assigned by the history store on creation.
    """

    resource_id: int
    resource_type: str
    action: Action
    workflow: Workflow | None
    creation_date: datetime
    user_access_code: str = AUTOMATIC_USER
    id: int | None = None


@dataclass(frozen=True)
class ChooseStateTaskInformation:
    """Links a history record to the choose-state task that produced it.

    Attributes:
        history_id: Identifier of the history record.
        task_id: Identifier of the task.
        new_state: Display name of the state reached.
    """

    history_id: int
    task_id: int
    new_state: str


@dataclass(frozen=True)
class ReferenceItem:
    """A code/label pair for building selectors."""

    code: int
    name: str


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of a state change performed by a choose-state task.

    Attributes:
        history_id: Identifier of the history record written.
        task_id: Identifier of the task.
        resource_id: Identifier of the resource.
        resource_type: Type of the resource.
        workflow_id: Identifier of the workflow.
        previous_state_id: State the resource was in, if any.
        new_state: State the resource moved to.
    """

    history_id: int
    task_id: int
    resource_id: int
    resource_type: str
    workflow_id: int
    previous_state_id: int | None
    new_state: WorkflowState
