"""Core type definitions for litestar-choose-state.

This module defines the constants, enums, and type aliases used throughout
the choose-state task.
"""

from __future__ import annotations

import sys
from enum import Enum
from typing import TypeAlias

# StrEnum backport for Python < 3.11
if sys.version_info >= (3, 11):
    from enum import StrEnum
else:

    class StrEnum(str, Enum):
        """String enumeration compatibility for Python < 3.11."""

        def __str__(self) -> str:
            return str(self.value)


__all__ = [
    "AUTOMATIC_USER",
    "DEFAULT_LOCALE",
    "UNSET_STATE_ID",
    "ResourceKey",
    "SkipReason",
]

UNSET_STATE_ID = -1
"""State id meaning "no transition for this outcome"."""

AUTOMATIC_USER = "auto"
"""User access code recorded on history created without a human actor."""

DEFAULT_LOCALE = "en"
"""Locale used for the reflexive cascade when none is configured."""

ResourceKey: TypeAlias = tuple[int, str, int]
"""(resource id, resource type, workflow id) identifying one assignment."""


class SkipReason(StrEnum):
    """Why an evaluation did not lead to a state change.

    Attributes:
        NO_CONTROLLER: The configured controller name is not registered.
        UNSET_TARGET: The outcome's target state is unset.
        SAME_STATE: The target is the state the resource already sits in.
        STATE_NOT_FOUND: The target state is missing from the catalog.
        STATE_OUTSIDE_WORKFLOW: The target state belongs to another workflow.
        ACTION_NOT_FOUND: The task's action is missing from the catalog.
        RESOURCE_NOT_FOUND: The resource has no assignment in the workflow.
    """

    NO_CONTROLLER = "no_controller"
    UNSET_TARGET = "unset_target"
    SAME_STATE = "same_state"
    STATE_NOT_FOUND = "state_not_found"
    STATE_OUTSIDE_WORKFLOW = "state_outside_workflow"
    ACTION_NOT_FOUND = "action_not_found"
    RESOURCE_NOT_FOUND = "resource_not_found"
