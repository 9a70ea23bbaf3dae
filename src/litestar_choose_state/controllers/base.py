"""Base controller implementations for litestar-choose-state."""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

__all__ = ["BaseChooseStateController", "CallableController", "ConstantController"]


class BaseChooseStateController:
    """Base implementation with common functionality for all controllers.

    Subclass this and override ``control`` to create a controller.
    """

    name: str
    """Name the controller is registered and configured under."""

    description: str = ""
    """Human-readable description of what the controller checks."""

    def __init__(self, name: str, description: str = "") -> None:
        """Initialize the controller.

        Args:
            name: Name the controller is registered under.
            description: Human-readable description.
        """
        self.name = name
        self.description = description

    async def control(self, resource_id: int, resource_type: str) -> bool:
        """Evaluate the controller for a resource.

        Args:
            resource_id: Identifier of the resource.
            resource_type: Type of the resource.

        Returns:
            True to select the OK state, False to select the KO state.

        Raises:
            NotImplementedError: Must be implemented by subclasses.
        """
        msg = f"Controller {self.name} must implement control()"
        raise NotImplementedError(msg)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class ConstantController(BaseChooseStateController):
    """Controller that always returns the same outcome.

    Example:
        >>> always_true = ConstantController("always-true", True)
    """

    def __init__(self, name: str, result: bool, description: str = "") -> None:
        super().__init__(name, description)
        self.result = result

    async def control(self, resource_id: int, resource_type: str) -> bool:
        return self.result


class CallableController(BaseChooseStateController):
    """Controller delegating to a plain or async predicate.

    Example:
        >>> async def is_paid(resource_id: int, resource_type: str) -> bool:
        ...     return await invoices.is_paid(resource_id)
        >>> controller = CallableController("is-paid", is_paid)
    """

    def __init__(
        self,
        name: str,
        predicate: Callable[[int, str], bool | Awaitable[bool]],
        description: str = "",
    ) -> None:
        super().__init__(name, description)
        self.predicate = predicate

    async def control(self, resource_id: int, resource_type: str) -> bool:
        result = self.predicate(resource_id, resource_type)
        if inspect.isawaitable(result):
            result = await result
        return bool(result)
