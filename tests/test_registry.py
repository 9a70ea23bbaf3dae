"""Tests for ControllerRegistry."""

from __future__ import annotations

import logging

import pytest

from litestar_choose_state.controllers import ConstantController
from litestar_choose_state.core.protocols import ChooseStateController
from litestar_choose_state.engine.registry import ControllerRegistry


@pytest.mark.unit
class TestControllerRegistry:
    """Tests for ControllerRegistry."""

    def test_registry_starts_empty(self) -> None:
        """Test a new registry holds no controllers."""
        registry = ControllerRegistry()

        assert len(registry) == 0
        assert registry.list_names() == []

    def test_registry_with_initial_controllers(self, controller_registry: ControllerRegistry) -> None:
        """Test controllers passed to the constructor are registered."""
        assert len(controller_registry) == 2
        assert controller_registry.has_controller("always-true")
        assert controller_registry.has_controller("always-false")

    def test_resolve_registered_controller(self, controller_registry: ControllerRegistry) -> None:
        """Test resolving a controller by name."""
        controller = controller_registry.resolve("always-true")

        assert controller is not None
        assert controller.name == "always-true"
        assert isinstance(controller, ChooseStateController)

    @pytest.mark.parametrize("name", ["", None, "unknown"])
    def test_resolve_missing_controller(self, controller_registry: ControllerRegistry, name: str | None) -> None:
        """Test empty and unknown names resolve to nothing."""
        assert controller_registry.resolve(name) is None

    def test_register_replaces_existing(
        self, controller_registry: ControllerRegistry, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test registering under an existing name replaces the controller."""
        replacement = ConstantController("always-true", False)

        with caplog.at_level(logging.WARNING):
            controller_registry.register(replacement)

        assert controller_registry.resolve("always-true") is replacement
        assert len(controller_registry) == 2
        assert "choose_state_controller_replaced" in caplog.messages

    def test_unregister(self, controller_registry: ControllerRegistry) -> None:
        """Test removing a controller."""
        controller_registry.unregister("always-false")

        assert not controller_registry.has_controller("always-false")
        assert controller_registry.resolve("always-false") is None

    def test_list_names_sorted(self) -> None:
        """Test controller names are listed in sorted order."""
        registry = ControllerRegistry()
        registry.register(ConstantController("zeta", True))
        registry.register(ConstantController("alpha", True))
        registry.register(ConstantController("mid", False))

        assert registry.list_names() == ["alpha", "mid", "zeta"]
