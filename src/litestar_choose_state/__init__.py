"""Litestar Choose State - controller-driven state transitions for Litestar workflows.

This package provides the "choose state" workflow task: when run for a
resource, it evaluates a named controller and moves the resource to the state
configured for the controller's outcome, recording history and running the
automatic reflexive actions of the new state.

Key Features:
    - Pluggable controllers registered by name
    - OK/KO target states per task, unset and self transitions suppressed
    - Serialized, transactional transitions per resource
    - In-memory and SQLAlchemy stores
    - Litestar plugin with a REST API for task configuration

Example:
    >>> from litestar_choose_state import ChooseStateTaskConfig, ConstantController, ControllerRegistry, decide
    >>>
    >>> registry = ControllerRegistry([ConstantController("always-true", True)])
    >>> config = ChooseStateTaskConfig(task_id=1, controller_name="always-true", id_state_ok=5, id_state_ko=3)
    >>> await decide(registry, 42, "invoice", config, current_state_id=3)
    5
"""

from __future__ import annotations

from litestar_choose_state.__metadata__ import __project__, __version__
from litestar_choose_state.controllers import (
    BaseChooseStateController,
    CallableController,
    ConstantController,
)
from litestar_choose_state.core import (
    AUTOMATIC_USER,
    UNSET_STATE_ID,
    Action,
    ChooseStateController,
    ChooseStateTaskConfig,
    ChooseStateTaskInformation,
    ReferenceItem,
    ResourceHistory,
    ResourceWorkflow,
    SkipReason,
    StateTransitioned,
    Task,
    TransitionResult,
    TransitionSkipped,
    Workflow,
    WorkflowState,
)
from litestar_choose_state.engine import (
    ChooseStateTaskService,
    ControllerRegistry,
    KeyedLock,
    NoopReflexiveActionRunner,
    TransitionExecutor,
    decide,
)
from litestar_choose_state.exceptions import (
    ChooseStateError,
    ControllerNotFoundError,
    InvalidTaskConfigError,
    StateTransitionError,
    TaskNotFoundError,
)
from litestar_choose_state.plugin import ChooseStatePlugin, ChooseStatePluginConfig
from litestar_choose_state.stores import ChooseStateStores, InMemoryWorkflowCatalog, create_memory_stores

__all__ = (
    "AUTOMATIC_USER",
    "UNSET_STATE_ID",
    "Action",
    "BaseChooseStateController",
    "CallableController",
    "ChooseStateController",
    "ChooseStateError",
    "ChooseStatePlugin",
    "ChooseStatePluginConfig",
    "ChooseStateStores",
    "ChooseStateTaskConfig",
    "ChooseStateTaskInformation",
    "ChooseStateTaskService",
    "ConstantController",
    "ControllerNotFoundError",
    "ControllerRegistry",
    "InMemoryWorkflowCatalog",
    "InvalidTaskConfigError",
    "KeyedLock",
    "NoopReflexiveActionRunner",
    "ReferenceItem",
    "ResourceHistory",
    "ResourceWorkflow",
    "SkipReason",
    "StateTransitionError",
    "StateTransitioned",
    "Task",
    "TaskNotFoundError",
    "TransitionExecutor",
    "TransitionResult",
    "TransitionSkipped",
    "Workflow",
    "WorkflowState",
    "__project__",
    "__version__",
    "create_memory_stores",
    "decide",
)
