"""REST API controllers for the choose-state task.

This module provides three controller classes:
- ChooseStateReferenceController: Selector data (controllers, states)
- ChooseStateTaskController: Task configuration and execution
- ResourceHistoryController: Inspection of transitions by history record
"""

from __future__ import annotations

from typing import ClassVar

from litestar import Controller, delete, get, post, put
from litestar.exceptions import NotFoundException
from litestar.params import Parameter
from litestar.status_codes import HTTP_200_OK

from litestar_choose_state.core.models import ChooseStateTaskConfig
from litestar_choose_state.engine.service import ChooseStateTaskService  # noqa: TC001 - needed for DI
from litestar_choose_state.web.dto import (
    ProcessTaskDTO,
    ReferenceItemDTO,
    ResourceWorkflowDTO,
    TaskConfigDTO,
    TaskInformationDTO,
    TransitionResultDTO,
    UpdateTaskConfigDTO,
)

__all__ = [
    "ChooseStateReferenceController",
    "ChooseStateTaskController",
    "ResourceHistoryController",
]


def _config_dto(config: ChooseStateTaskConfig) -> TaskConfigDTO:
    return TaskConfigDTO(
        task_id=config.task_id,
        controller_name=config.controller_name,
        id_state_ok=config.id_state_ok,
        id_state_ko=config.id_state_ko,
    )


class ChooseStateReferenceController(Controller):
    """API controller for the data a task configuration form needs.

    Tags: Choose State Reference
    """

    path = "/"
    tags: ClassVar[list[str]] = ["Choose State Reference"]

    @get("/controllers")
    async def list_controllers(self, choose_state_service: ChooseStateTaskService) -> list[str]:
        """List the names of the registered controllers.

        Args:
            choose_state_service: Injected choose-state service.

        Returns:
            Sorted controller names.
        """
        return choose_state_service.list_controllers()

    @get("/actions/{action_id:int}/states")
    async def list_states(
        self,
        action_id: int,
        choose_state_service: ChooseStateTaskService,
    ) -> list[ReferenceItemDTO]:
        """List the states a task of an action may target.

        The first entry is the "no transition" entry with code -1.

        Args:
            action_id: The action ID.
            choose_state_service: Injected choose-state service.

        Returns:
            List of selector entries, empty if the action is unknown.
        """
        items = await choose_state_service.list_selectable_states(action_id)
        return [ReferenceItemDTO(code=item.code, name=item.name) for item in items]


class ChooseStateTaskController(Controller):
    """API controller for choose-state task configuration and execution.

    Tags: Choose State Tasks
    """

    path = "/tasks"
    tags: ClassVar[list[str]] = ["Choose State Tasks"]

    @get("/{task_id:int}/config")
    async def get_config(
        self,
        task_id: int,
        choose_state_service: ChooseStateTaskService,
    ) -> TaskConfigDTO:
        """Get the configuration of a task, creating the default one if missing.

        Args:
            task_id: The task ID.
            choose_state_service: Injected choose-state service.

        Returns:
            Task configuration DTO.
        """
        return _config_dto(await choose_state_service.load_or_init_config(task_id))

    @put("/{task_id:int}/config", dto=None, return_dto=None)
    async def update_config(
        self,
        task_id: int,
        data: UpdateTaskConfigDTO,
        choose_state_service: ChooseStateTaskService,
    ) -> TaskConfigDTO:
        """Replace the configuration of a task.

        Args:
            task_id: The task ID.
            data: The new configuration.
            choose_state_service: Injected choose-state service.

        Returns:
            The stored configuration DTO.

        Raises:
            ControllerNotFoundError: If the controller name is not registered.
        """
        config = await choose_state_service.save_config(
            ChooseStateTaskConfig(
                task_id=task_id,
                controller_name=data.controller_name,
                id_state_ok=data.id_state_ok,
                id_state_ko=data.id_state_ko,
            )
        )
        return _config_dto(config)

    @delete("/{task_id:int}/config")
    async def remove_config(
        self,
        task_id: int,
        choose_state_service: ChooseStateTaskService,
    ) -> None:
        """Remove the configuration and task information of a task.

        Args:
            task_id: The task ID.
            choose_state_service: Injected choose-state service.
        """
        await choose_state_service.remove_config(task_id)

    @post("/{task_id:int}/process", dto=None, return_dto=None, status_code=HTTP_200_OK)
    async def process_task(
        self,
        task_id: int,
        data: ProcessTaskDTO,
        choose_state_service: ChooseStateTaskService,
    ) -> TransitionResultDTO:
        """Run a task for the resource of a history record.

        Args:
            task_id: The task ID.
            data: History record and optional locale.
            choose_state_service: Injected choose-state service.

        Returns:
            Transition result DTO; ``transitioned`` is False when the resource
            stayed in its state.

        Raises:
            TaskNotFoundError: If the task is unknown.
        """
        result = await choose_state_service.process_task_by_id(
            data.history_id,
            task_id,
            locale=data.locale,
        )
        if result is None:
            return TransitionResultDTO(transitioned=False)

        return TransitionResultDTO(
            transitioned=True,
            history_id=result.history_id,
            previous_state_id=result.previous_state_id,
            new_state_id=result.new_state.id,
            new_state_name=result.new_state.name,
        )


class ResourceHistoryController(Controller):
    """API controller for inspecting transitions by history record.

    Tags: Choose State History
    """

    path = "/history"
    tags: ClassVar[list[str]] = ["Choose State History"]

    @get("/{history_id:int}/resource")
    async def get_resource(
        self,
        history_id: int,
        choose_state_service: ChooseStateTaskService,
        workflow_id: int = Parameter(
            query="workflow_id",
            description="Workflow the resource state is looked up in",
        ),
    ) -> ResourceWorkflowDTO:
        """Get the current state of the resource a history record refers to.

        Args:
            history_id: The history record ID.
            choose_state_service: Injected choose-state service.
            workflow_id: The workflow ID.

        Returns:
            Resource workflow DTO.

        Raises:
            NotFoundException: If the history record or the resource is not found.
        """
        resource_workflow = await choose_state_service.lookup_assignment_for_history(history_id, workflow_id)
        if resource_workflow is None:
            raise NotFoundException(detail=f"No resource for history {history_id} in workflow {workflow_id}")

        return ResourceWorkflowDTO(
            resource_id=resource_workflow.resource_id,
            resource_type=resource_workflow.resource_type,
            workflow_id=resource_workflow.workflow_id,
            state_id=resource_workflow.state.id if resource_workflow.state else None,
            state_name=resource_workflow.state.name if resource_workflow.state else None,
        )

    @get("/{history_id:int}/tasks/{task_id:int}")
    async def get_task_information(
        self,
        history_id: int,
        task_id: int,
        choose_state_service: ChooseStateTaskService,
    ) -> TaskInformationDTO:
        """Get what a task recorded for a history record.

        Args:
            history_id: The history record ID.
            task_id: The task ID.
            choose_state_service: Injected choose-state service.

        Returns:
            Task information DTO.

        Raises:
            NotFoundException: If the task recorded nothing for this history.
        """
        information = await choose_state_service.get_task_information(history_id, task_id)
        if information is None:
            raise NotFoundException(detail=f"No information of task {task_id} for history {history_id}")

        return TaskInformationDTO(
            history_id=information.history_id,
            task_id=information.task_id,
            new_state=information.new_state,
        )
