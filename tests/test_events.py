"""Tests for choose-state events."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from litestar_choose_state.core.events import (
    STATE_TRANSITIONED,
    TRANSITION_SKIPPED,
    ChooseStateEvent,
    StateTransitioned,
    TransitionSkipped,
)
from litestar_choose_state.core.types import SkipReason


@pytest.mark.unit
class TestEvents:
    """Tests for event dataclasses."""

    def test_event_names(self) -> None:
        """Test events are published under namespaced names."""
        assert STATE_TRANSITIONED == "choose_state.transitioned"
        assert TRANSITION_SKIPPED == "choose_state.skipped"

    def test_state_transitioned(self) -> None:
        """Test StateTransitioned carries the transition details."""
        now = datetime.now(timezone.utc)
        event = StateTransitioned(
            task_id=7,
            resource_id=42,
            resource_type="invoice",
            timestamp=now,
            workflow_id=1,
            history_id=1001,
            previous_state_id=3,
            new_state_id=5,
            new_state_name="Paid",
        )

        assert isinstance(event, ChooseStateEvent)
        assert event.timestamp == now
        assert event.previous_state_id == 3
        assert event.new_state_name == "Paid"

    def test_transition_skipped_defaults(self) -> None:
        """Test TransitionSkipped has no detail by default."""
        event = TransitionSkipped(
            task_id=7,
            resource_id=42,
            resource_type="invoice",
            timestamp=datetime.now(timezone.utc),
            reason=SkipReason.UNSET_TARGET,
        )

        assert isinstance(event, ChooseStateEvent)
        assert event.reason == SkipReason.UNSET_TARGET
        assert event.detail is None
