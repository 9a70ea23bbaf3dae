"""Core domain module for litestar-choose-state.

This module exports the domain models, protocols, events and constants of the
choose-state task.
"""

from __future__ import annotations

from litestar_choose_state.core.events import (
    STATE_TRANSITIONED,
    TRANSITION_SKIPPED,
    ChooseStateEvent,
    StateTransitioned,
    TransitionSkipped,
)
from litestar_choose_state.core.models import (
    Action,
    ChooseStateTaskConfig,
    ChooseStateTaskInformation,
    ReferenceItem,
    ResourceHistory,
    ResourceWorkflow,
    Task,
    TransitionResult,
    Workflow,
    WorkflowState,
)
from litestar_choose_state.core.protocols import (
    ActionService,
    ChooseStateController,
    EventBus,
    ReflexiveActionRunner,
    ResourceHistoryService,
    ResourceWorkflowService,
    StateService,
    TaskConfigService,
    TaskInformationService,
    TaskService,
)
from litestar_choose_state.core.types import (
    AUTOMATIC_USER,
    DEFAULT_LOCALE,
    UNSET_STATE_ID,
    ResourceKey,
    SkipReason,
)

__all__ = [
    "AUTOMATIC_USER",
    "DEFAULT_LOCALE",
    "STATE_TRANSITIONED",
    "TRANSITION_SKIPPED",
    "UNSET_STATE_ID",
    "Action",
    "ActionService",
    "ChooseStateController",
    "ChooseStateEvent",
    "ChooseStateTaskConfig",
    "ChooseStateTaskInformation",
    "EventBus",
    "ReferenceItem",
    "ReflexiveActionRunner",
    "ResourceHistory",
    "ResourceHistoryService",
    "ResourceKey",
    "ResourceWorkflow",
    "ResourceWorkflowService",
    "SkipReason",
    "StateService",
    "StateTransitioned",
    "Task",
    "TaskConfigService",
    "TaskInformationService",
    "TaskService",
    "TransitionResult",
    "TransitionSkipped",
    "Workflow",
    "WorkflowState",
]
