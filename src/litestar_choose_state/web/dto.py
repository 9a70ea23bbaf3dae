"""Data Transfer Objects for the choose-state web API.

This module defines DTOs for serializing and deserializing choose-state data
in REST API requests and responses.
"""

from __future__ import annotations

from dataclasses import dataclass

from litestar_choose_state.core.types import UNSET_STATE_ID

__all__ = [
    "ProcessTaskDTO",
    "ReferenceItemDTO",
    "ResourceWorkflowDTO",
    "TaskConfigDTO",
    "TaskInformationDTO",
    "TransitionResultDTO",
    "UpdateTaskConfigDTO",
]


@dataclass
class ReferenceItemDTO:
    """DTO for a selector entry.

    Attributes:
        code: Value of the entry (state id, -1 for none).
        name: Label of the entry.
    """

    code: int
    name: str


@dataclass
class TaskConfigDTO:
    """DTO for a choose-state task configuration.

    Attributes:
        task_id: The task the configuration belongs to.
        controller_name: Name of the controller to evaluate.
        id_state_ok: Target state when the controller returns True.
        id_state_ko: Target state when the controller returns False.
    """

    task_id: int
    controller_name: str
    id_state_ok: int
    id_state_ko: int


@dataclass
class UpdateTaskConfigDTO:
    """DTO for updating a choose-state task configuration.

    Attributes:
        controller_name: Name of the controller to evaluate, empty for none.
        id_state_ok: Target state when the controller returns True.
        id_state_ko: Target state when the controller returns False.
    """

    controller_name: str = ""
    id_state_ok: int = UNSET_STATE_ID
    id_state_ko: int = UNSET_STATE_ID


@dataclass
class ProcessTaskDTO:
    """DTO for running a choose-state task.

    Attributes:
        history_id: History record of the action being performed.
        locale: Optional locale for the reflexive cascade.
    """

    history_id: int
    locale: str | None = None


@dataclass
class TransitionResultDTO:
    """DTO for the outcome of running a choose-state task.

    Attributes:
        transitioned: Whether the resource changed state.
        history_id: History record written by the transition.
        previous_state_id: State the resource left.
        new_state_id: State the resource entered.
        new_state_name: Display name of the state entered.
    """

    transitioned: bool
    history_id: int | None = None
    previous_state_id: int | None = None
    new_state_id: int | None = None
    new_state_name: str | None = None


@dataclass
class ResourceWorkflowDTO:
    """DTO for the state of a resource in a workflow.

    Attributes:
        resource_id: Identifier of the resource.
        resource_type: Type of the resource.
        workflow_id: Identifier of the workflow.
        state_id: Current state, if any.
        state_name: Display name of the current state.
    """

    resource_id: int
    resource_type: str
    workflow_id: int
    state_id: int | None = None
    state_name: str | None = None


@dataclass
class TaskInformationDTO:
    """DTO for what a choose-state task recorded for a history entry.

    Attributes:
        history_id: Identifier of the history record.
        task_id: Identifier of the task.
        new_state: Display name of the state reached.
    """

    history_id: int
    task_id: int
    new_state: str
