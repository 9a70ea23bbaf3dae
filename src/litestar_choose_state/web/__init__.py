"""REST API for the choose-state task.

The controllers are registered by :class:`~litestar_choose_state.plugin.ChooseStatePlugin`
when ``enable_api`` is True (the default). They expect a ``choose_state_service``
dependency, which the plugin provides.

Example:
    Disable API endpoints::

        app = Litestar(
            plugins=[
                ChooseStatePlugin(config=ChooseStatePluginConfig(enable_api=False)),
            ],
        )
"""

from __future__ import annotations

from litestar_choose_state.web.controllers import (
    ChooseStateReferenceController,
    ChooseStateTaskController,
    ResourceHistoryController,
)
from litestar_choose_state.web.dto import (
    ProcessTaskDTO,
    ReferenceItemDTO,
    ResourceWorkflowDTO,
    TaskConfigDTO,
    TaskInformationDTO,
    TransitionResultDTO,
    UpdateTaskConfigDTO,
)
from litestar_choose_state.web.exceptions import choose_state_error_handler, exception_handlers

__all__ = [
    "ChooseStateReferenceController",
    "ChooseStateTaskController",
    "ProcessTaskDTO",
    "ReferenceItemDTO",
    "ResourceHistoryController",
    "ResourceWorkflowDTO",
    "TaskConfigDTO",
    "TaskInformationDTO",
    "TransitionResultDTO",
    "UpdateTaskConfigDTO",
    "choose_state_error_handler",
    "exception_handlers",
]
