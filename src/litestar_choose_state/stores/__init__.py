"""Store implementations for litestar-choose-state.

The in-memory stores live here; the SQLAlchemy stores live in
:mod:`litestar_choose_state.db`.
"""

from __future__ import annotations

from litestar_choose_state.stores.base import ChooseStateStores, no_transaction
from litestar_choose_state.stores.memory import (
    InMemoryResourceHistoryService,
    InMemoryResourceWorkflowService,
    InMemoryTaskConfigService,
    InMemoryTaskInformationService,
    InMemoryWorkflowCatalog,
    create_memory_stores,
)

__all__ = [
    "ChooseStateStores",
    "InMemoryResourceHistoryService",
    "InMemoryResourceWorkflowService",
    "InMemoryTaskConfigService",
    "InMemoryTaskInformationService",
    "InMemoryWorkflowCatalog",
    "create_memory_stores",
    "no_transaction",
]
