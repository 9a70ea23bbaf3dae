"""Exception hierarchy for litestar-choose-state."""

from __future__ import annotations

__all__ = (
    "ChooseStateError",
    "ControllerNotFoundError",
    "InvalidTaskConfigError",
    "StateTransitionError",
    "TaskNotFoundError",
)


class ChooseStateError(Exception):
    """Base exception for all litestar-choose-state errors.

    All exceptions raised by litestar-choose-state inherit from this class so
    callers can catch every library error with a single except clause.
    """


class ControllerNotFoundError(ChooseStateError):
    """Raised when a configuration names a controller that is not registered.

    The decision path never raises this: an unknown controller there simply
    means no transition. It is raised by explicit configuration validation.

    Attributes:
        name: The controller name that could not be resolved.
    """

    def __init__(self, name: str) -> None:
        """Initialize the exception with the controller name.

        Args:
            name: The controller name that could not be resolved.
        """
        self.name = name
        super().__init__(f"Controller '{name}' is not registered")


class InvalidTaskConfigError(ChooseStateError):
    """Raised when a configuration targets a state the task cannot move to.

    Attributes:
        task_id: The ID of the configured task.
        state_id: The offending target state ID.
    """

    def __init__(self, task_id: int, state_id: int, reason: str) -> None:
        """Initialize the exception with the rejected target.

        Args:
            task_id: The ID of the configured task.
            state_id: The offending target state ID.
            reason: Why the state cannot be used.
        """
        self.task_id = task_id
        self.state_id = state_id
        super().__init__(f"Task '{task_id}' cannot target state '{state_id}': {reason}")


class TaskNotFoundError(ChooseStateError):
    """Raised when a task cannot be found in the workflow catalog.

    Attributes:
        task_id: The ID of the task that was not found.
    """

    def __init__(self, task_id: int) -> None:
        """Initialize the exception with task details.

        Args:
            task_id: The ID of the task that was not found.
        """
        self.task_id = task_id
        super().__init__(f"Task '{task_id}' not found")


class StateTransitionError(ChooseStateError):
    """Raised when persisting a state transition fails.

    Wraps the store error raised while writing the history record, the
    resource state or the task information. Records written before the
    failure are not compensated by the in-memory stores; the SQLAlchemy
    stores roll the whole transition back.

    Attributes:
        task_id: The ID of the task performing the transition.
        resource_id: The ID of the resource being transitioned.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, task_id: int, resource_id: int, cause: Exception | None = None) -> None:
        """Initialize the exception with transition details.

        Args:
            task_id: The ID of the task performing the transition.
            resource_id: The ID of the resource being transitioned.
            cause: The underlying exception that caused the failure, if any.
        """
        self.task_id = task_id
        self.resource_id = resource_id
        self.cause = cause
        msg = f"State transition of resource '{resource_id}' by task '{task_id}' failed"
        if cause:
            msg += f": {cause}"
        super().__init__(msg)
