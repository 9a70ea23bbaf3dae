"""Tests for the built-in choose-state controllers."""

from __future__ import annotations

import pytest

from litestar_choose_state.controllers import BaseChooseStateController, CallableController, ConstantController
from litestar_choose_state.core.protocols import ChooseStateController


@pytest.mark.unit
class TestBaseChooseStateController:
    """Tests for BaseChooseStateController."""

    async def test_control_must_be_implemented(self) -> None:
        """Test the base class refuses to evaluate."""
        controller = BaseChooseStateController("abstract")

        with pytest.raises(NotImplementedError, match="abstract"):
            await controller.control(1, "invoice")

    def test_attributes_and_repr(self) -> None:
        """Test name, description and repr."""
        controller = BaseChooseStateController("abstract", description="Does nothing")

        assert controller.name == "abstract"
        assert controller.description == "Does nothing"
        assert repr(controller) == "BaseChooseStateController(name='abstract')"

    async def test_subclass(self) -> None:
        """Test a subclass overriding control() satisfies the protocol."""

        class EvenIdController(BaseChooseStateController):
            async def control(self, resource_id: int, resource_type: str) -> bool:
                return resource_id % 2 == 0

        controller = EvenIdController("even-id")

        assert isinstance(controller, ChooseStateController)
        assert await controller.control(4, "invoice") is True
        assert await controller.control(5, "invoice") is False


@pytest.mark.unit
class TestConstantController:
    """Tests for ConstantController."""

    @pytest.mark.parametrize("result", [True, False])
    async def test_returns_constant(self, result: bool) -> None:
        """Test the configured result is returned for any resource."""
        controller = ConstantController("constant", result)

        assert await controller.control(1, "invoice") is result
        assert await controller.control(2, "order") is result


@pytest.mark.unit
class TestCallableController:
    """Tests for CallableController."""

    async def test_sync_predicate(self) -> None:
        """Test a plain function is called with the resource identity."""
        controller = CallableController("is-invoice", lambda resource_id, resource_type: resource_type == "invoice")

        assert await controller.control(1, "invoice") is True
        assert await controller.control(1, "order") is False

    async def test_async_predicate(self) -> None:
        """Test a coroutine function is awaited."""

        async def is_large(resource_id: int, resource_type: str) -> bool:
            return resource_id > 100

        controller = CallableController("is-large", is_large)

        assert await controller.control(101, "invoice") is True
        assert await controller.control(99, "invoice") is False

    async def test_result_coerced_to_bool(self) -> None:
        """Test truthy predicate results become booleans."""
        controller = CallableController("truthy", lambda resource_id, resource_type: resource_id)

        assert await controller.control(3, "invoice") is True
        assert await controller.control(0, "invoice") is False
