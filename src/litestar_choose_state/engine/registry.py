"""Controller registry for the choose-state task.

This module provides the registry that maps stable controller names to the
controller instances the decision engine evaluates.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from litestar_choose_state.core.protocols import ChooseStateController

__all__ = ["ControllerRegistry"]

logger = logging.getLogger(__name__)


class ControllerRegistry:
    """Registry for storing and resolving choose-state controllers.

    Controllers are registered once, when the application or plugin is
    initialized. The decision engine only resolves names.

    Attributes:
        _controllers: Map of controller names to controller instances.
    """

    def __init__(self, controllers: Iterable[ChooseStateController] | None = None) -> None:
        """Initialize the registry.

        Args:
            controllers: Optional controllers to register immediately.
        """
        self._controllers: dict[str, ChooseStateController] = {}
        for controller in controllers or ():
            self.register(controller)

    def register(self, controller: ChooseStateController) -> None:
        """Register a controller under its name.

        A controller registered under an existing name replaces the previous
        one.

        Args:
            controller: The controller to register.

        Example:
            >>> registry = ControllerRegistry()
            >>> registry.register(ConstantController("always-true", True))
        """
        if controller.name in self._controllers:
            logger.warning("choose_state_controller_replaced", extra={"controller": controller.name})
        self._controllers[controller.name] = controller

    def resolve(self, name: str | None) -> ChooseStateController | None:
        """Resolve a controller by name.

        Args:
            name: The controller name, possibly empty for unconfigured tasks.

        Returns:
            The controller, or None if no controller has that name.
        """
        if not name:
            return None
        return self._controllers.get(name)

    def unregister(self, name: str) -> None:
        """Remove a controller from the registry.

        Args:
            name: The controller name. Unknown names are ignored.
        """
        self._controllers.pop(name, None)

    def has_controller(self, name: str) -> bool:
        """Check if a controller is registered under a name."""
        return name in self._controllers

    def list_names(self) -> list[str]:
        """List the registered controller names in sorted order."""
        return sorted(self._controllers)

    def __len__(self) -> int:
        return len(self._controllers)
