"""Exception handling for choose-state web endpoints.

This module maps the library's exceptions to HTTP responses.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from litestar import Response
from litestar.status_codes import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from litestar_choose_state.exceptions import (
    ChooseStateError,
    ControllerNotFoundError,
    InvalidTaskConfigError,
    StateTransitionError,
    TaskNotFoundError,
)

if TYPE_CHECKING:  # pragma: no cover
    from litestar import Request

__all__ = ["choose_state_error_handler", "exception_handlers"]


def choose_state_error_handler(
    _request: Request,
    exc: ChooseStateError,
) -> Response:
    """Exception handler for ChooseStateError and its subclasses.

    Args:
        _request: The Litestar request object.
        exc: The raised exception.

    Returns:
        JSON response with the error kind and message.
    """
    if isinstance(exc, ControllerNotFoundError):
        error, status_code = "controller_not_found", HTTP_400_BAD_REQUEST
    elif isinstance(exc, InvalidTaskConfigError):
        error, status_code = "invalid_task_config", HTTP_400_BAD_REQUEST
    elif isinstance(exc, TaskNotFoundError):
        error, status_code = "task_not_found", HTTP_404_NOT_FOUND
    elif isinstance(exc, StateTransitionError):
        error, status_code = "state_transition_failed", HTTP_500_INTERNAL_SERVER_ERROR
    else:
        error, status_code = "choose_state_error", HTTP_500_INTERNAL_SERVER_ERROR

    return Response(
        content={"error": error, "message": str(exc)},
        status_code=status_code,
        media_type="application/json",
    )


exception_handlers = {ChooseStateError: choose_state_error_handler}
"""Handlers to register on the application or router."""
