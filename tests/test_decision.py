"""Tests for the transition decision."""

from __future__ import annotations

import pytest

from litestar_choose_state.controllers import CallableController, ConstantController
from litestar_choose_state.core.models import ChooseStateTaskConfig
from litestar_choose_state.core.types import UNSET_STATE_ID, SkipReason
from litestar_choose_state.engine.decision import Decision, decide, make_decision
from litestar_choose_state.engine.registry import ControllerRegistry
from tests.conftest import RESOURCE_ID, RESOURCE_TYPE, TASK_ID


def _config(controller_name: str = "always-true", ok: int = 5, ko: int = 3) -> ChooseStateTaskConfig:
    return ChooseStateTaskConfig(task_id=TASK_ID, controller_name=controller_name, id_state_ok=ok, id_state_ko=ko)


@pytest.mark.unit
class TestDecide:
    """Tests for decide()."""

    async def test_ok_outcome_selects_ok_state(self, controller_registry: ControllerRegistry) -> None:
        """Test a true outcome moves a resource from 3 to the OK state 5."""
        target = await decide(controller_registry, RESOURCE_ID, RESOURCE_TYPE, _config(), current_state_id=3)

        assert target == 5

    async def test_ko_outcome_selects_ko_state(self, controller_registry: ControllerRegistry) -> None:
        """Test a false outcome selects the KO state."""
        config = _config("always-false", ok=5, ko=7)

        target = await decide(controller_registry, RESOURCE_ID, RESOURCE_TYPE, config, current_state_id=3)

        assert target == 7

    async def test_candidate_equal_to_current_state(self, controller_registry: ControllerRegistry) -> None:
        """Test no transition is due when the resource already sits in the OK state."""
        target = await decide(controller_registry, RESOURCE_ID, RESOURCE_TYPE, _config(), current_state_id=5)

        assert target is None

    async def test_unset_ko_target(self, controller_registry: ControllerRegistry) -> None:
        """Test a false outcome with an unset KO state does not transition."""
        config = _config("always-false", ok=5, ko=UNSET_STATE_ID)

        target = await decide(controller_registry, RESOURCE_ID, RESOURCE_TYPE, config, current_state_id=3)

        assert target is None

    @pytest.mark.parametrize("controller_name", ["", "not-registered"])
    async def test_unresolved_controller(self, controller_registry: ControllerRegistry, controller_name: str) -> None:
        """Test unconfigured and unregistered controllers never transition."""
        config = _config(controller_name)

        target = await decide(controller_registry, RESOURCE_ID, RESOURCE_TYPE, config, current_state_id=3)

        assert target is None

    @pytest.mark.parametrize("controller_name", ["always-true", "always-false"])
    async def test_self_transition_suppressed_for_both_outcomes(
        self, controller_registry: ControllerRegistry, controller_name: str
    ) -> None:
        """Test OK and KO both equal to the current state never transition."""
        config = _config(controller_name, ok=3, ko=3)

        target = await decide(controller_registry, RESOURCE_ID, RESOURCE_TYPE, config, current_state_id=3)

        assert target is None

    async def test_resource_without_state(self, controller_registry: ControllerRegistry) -> None:
        """Test a resource with no current state can enter the OK state."""
        target = await decide(controller_registry, RESOURCE_ID, RESOURCE_TYPE, _config(), current_state_id=None)

        assert target == 5

    async def test_controller_receives_resource(self) -> None:
        """Test the controller is evaluated against the resource identity."""
        seen: list[tuple[int, str]] = []

        def predicate(resource_id: int, resource_type: str) -> bool:
            seen.append((resource_id, resource_type))
            return True

        registry = ControllerRegistry([CallableController("recording", predicate)])

        await decide(registry, RESOURCE_ID, RESOURCE_TYPE, _config("recording"), current_state_id=3)

        assert seen == [(RESOURCE_ID, RESOURCE_TYPE)]

    async def test_controller_not_called_when_unresolved(self) -> None:
        """Test nothing is evaluated for an unconfigured task."""
        calls: list[int] = []
        registry = ControllerRegistry([CallableController("recording", lambda rid, rtype: calls.append(rid))])

        await decide(registry, RESOURCE_ID, RESOURCE_TYPE, _config(""), current_state_id=3)

        assert calls == []


@pytest.mark.unit
class TestMakeDecision:
    """Tests for make_decision() skip reasons."""

    async def test_transition_decision(self, controller_registry: ControllerRegistry) -> None:
        """Test a due transition carries the target and the outcome."""
        decision = await make_decision(controller_registry, RESOURCE_ID, RESOURCE_TYPE, _config(), 3)

        assert decision == Decision(5, outcome=True)
        assert decision.should_transition

    async def test_no_controller_reason(self, controller_registry: ControllerRegistry) -> None:
        """Test an unresolved controller reports NO_CONTROLLER without outcome."""
        decision = await make_decision(controller_registry, RESOURCE_ID, RESOURCE_TYPE, _config("missing"), 3)

        assert decision.reason == SkipReason.NO_CONTROLLER
        assert decision.outcome is None
        assert not decision.should_transition

    async def test_unset_target_reason(self, controller_registry: ControllerRegistry) -> None:
        """Test an unset target reports UNSET_TARGET."""
        config = _config("always-false", ko=UNSET_STATE_ID)

        decision = await make_decision(controller_registry, RESOURCE_ID, RESOURCE_TYPE, config, 3)

        assert decision.reason == SkipReason.UNSET_TARGET
        assert decision.outcome is False

    async def test_same_state_reason(self, controller_registry: ControllerRegistry) -> None:
        """Test a candidate equal to the current state reports SAME_STATE."""
        decision = await make_decision(controller_registry, RESOURCE_ID, RESOURCE_TYPE, _config(), 5)

        assert decision.reason == SkipReason.SAME_STATE
        assert decision.outcome is True

    async def test_outcome_is_coerced_to_bool(self) -> None:
        """Test truthy controller results select the OK state."""
        registry = ControllerRegistry([CallableController("truthy", lambda rid, rtype: "yes")])

        decision = await make_decision(registry, RESOURCE_ID, RESOURCE_TYPE, _config("truthy"), 3)

        assert decision.outcome is True
        assert decision.target_state_id == 5

    async def test_constant_false_selects_ko(self) -> None:
        """Test a KO state different from the current one is selected on false."""
        registry = ControllerRegistry([ConstantController("never", False)])

        decision = await make_decision(registry, RESOURCE_ID, RESOURCE_TYPE, _config("never", ok=5, ko=9), 3)

        assert decision.target_state_id == 9
