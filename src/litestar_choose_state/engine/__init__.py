"""Decision and execution of choose-state transitions.

This module exports the controller registry, the decision functions, the
transition executor and the service composing them.
"""

from __future__ import annotations

from litestar_choose_state.engine.decision import Decision, decide, make_decision
from litestar_choose_state.engine.executor import TransitionExecutor
from litestar_choose_state.engine.locks import KeyedLock
from litestar_choose_state.engine.reflexive import NoopReflexiveActionRunner
from litestar_choose_state.engine.registry import ControllerRegistry
from litestar_choose_state.engine.service import ChooseStateTaskService

__all__ = [
    "ChooseStateTaskService",
    "ControllerRegistry",
    "Decision",
    "KeyedLock",
    "NoopReflexiveActionRunner",
    "TransitionExecutor",
    "decide",
    "make_decision",
]
