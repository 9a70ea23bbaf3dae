"""Tests for exception hierarchy."""

from __future__ import annotations

import pytest


@pytest.mark.unit
class TestChooseStateError:
    """Tests for base ChooseStateError exception."""

    def test_base_exception_creation(self) -> None:
        """Test creating base ChooseStateError."""
        from litestar_choose_state.exceptions import ChooseStateError

        error = ChooseStateError("Test error message")

        assert str(error) == "Test error message"
        assert isinstance(error, Exception)

    def test_base_exception_can_be_raised(self) -> None:
        """Test ChooseStateError can be raised and caught."""
        from litestar_choose_state.exceptions import ChooseStateError

        with pytest.raises(ChooseStateError, match="test"):
            raise ChooseStateError("test")


@pytest.mark.unit
class TestControllerNotFoundError:
    """Tests for ControllerNotFoundError exception."""

    def test_controller_not_found_error(self) -> None:
        """Test ControllerNotFoundError creation."""
        from litestar_choose_state.exceptions import ChooseStateError, ControllerNotFoundError

        error = ControllerNotFoundError("is-paid")

        assert error.name == "is-paid"
        assert str(error) == "Controller 'is-paid' is not registered"
        assert isinstance(error, ChooseStateError)


@pytest.mark.unit
class TestInvalidTaskConfigError:
    """Tests for InvalidTaskConfigError exception."""

    def test_invalid_task_config_error(self) -> None:
        """Test InvalidTaskConfigError creation."""
        from litestar_choose_state.exceptions import ChooseStateError, InvalidTaskConfigError

        error = InvalidTaskConfigError(100, 99, "unknown state")

        assert error.task_id == 100
        assert error.state_id == 99
        assert str(error) == "Task '100' cannot target state '99': unknown state"
        assert isinstance(error, ChooseStateError)


@pytest.mark.unit
class TestTaskNotFoundError:
    """Tests for TaskNotFoundError exception."""

    def test_task_not_found_error(self) -> None:
        """Test TaskNotFoundError creation."""
        from litestar_choose_state.exceptions import ChooseStateError, TaskNotFoundError

        error = TaskNotFoundError(100)

        assert error.task_id == 100
        assert str(error) == "Task '100' not found"
        assert isinstance(error, ChooseStateError)


@pytest.mark.unit
class TestStateTransitionError:
    """Tests for StateTransitionError exception."""

    def test_without_cause(self) -> None:
        """Test StateTransitionError without cause."""
        from litestar_choose_state.exceptions import StateTransitionError

        error = StateTransitionError(task_id=100, resource_id=42)

        assert error.task_id == 100
        assert error.resource_id == 42
        assert error.cause is None
        assert str(error) == "State transition of resource '42' by task '100' failed"

    def test_with_cause(self) -> None:
        """Test StateTransitionError with cause."""
        from litestar_choose_state.exceptions import StateTransitionError

        cause = LookupError("No workflow assignment")
        error = StateTransitionError(task_id=100, resource_id=42, cause=cause)

        assert error.cause is cause
        assert str(error) == "State transition of resource '42' by task '100' failed: No workflow assignment"
