"""Built-in choose-state controllers."""

from __future__ import annotations

from litestar_choose_state.controllers.base import (
    BaseChooseStateController,
    CallableController,
    ConstantController,
)

__all__ = ["BaseChooseStateController", "CallableController", "ConstantController"]
