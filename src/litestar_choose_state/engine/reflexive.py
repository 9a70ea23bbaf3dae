"""Reflexive-action runners shipped with the library."""

from __future__ import annotations

import logging

__all__ = ["NoopReflexiveActionRunner"]

logger = logging.getLogger(__name__)


class NoopReflexiveActionRunner:
    """Runner for hosts without automatic reflexive actions.

    It only logs the state that was entered.
    """

    async def run_automatic_reflexive_actions(
        self,
        resource_id: int,
        resource_type: str,
        state_id: int,
        locale: str,
    ) -> None:
        logger.debug(
            "choose_state_reflexive_actions_skipped",
            extra={
                "resource_id": resource_id,
                "resource_type": resource_type,
                "state_id": state_id,
                "locale": locale,
            },
        )
