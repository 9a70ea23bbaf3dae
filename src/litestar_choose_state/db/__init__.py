"""Database persistence layer for litestar-choose-state.

This module provides SQLAlchemy models, repositories and store adapters for
persisting the workflow catalog, resource states and history, and the
choose-state task's own records.
"""

from __future__ import annotations

from litestar_choose_state.db.models import (
    ChooseStateTaskConfigModel,
    ChooseStateTaskInformationModel,
    ResourceHistoryModel,
    ResourceWorkflowModel,
    WorkflowActionModel,
    WorkflowModel,
    WorkflowStateModel,
    WorkflowTaskModel,
)
from litestar_choose_state.db.repositories import (
    ChooseStateTaskConfigRepository,
    ChooseStateTaskInformationRepository,
    ResourceHistoryRepository,
    ResourceWorkflowRepository,
    WorkflowActionRepository,
    WorkflowStateRepository,
    WorkflowTaskRepository,
)
from litestar_choose_state.db.stores import SQLAlchemyTransaction, create_sqlalchemy_stores

__all__ = [
    "ChooseStateTaskConfigModel",
    "ChooseStateTaskConfigRepository",
    "ChooseStateTaskInformationModel",
    "ChooseStateTaskInformationRepository",
    "ResourceHistoryModel",
    "ResourceHistoryRepository",
    "ResourceWorkflowModel",
    "ResourceWorkflowRepository",
    "SQLAlchemyTransaction",
    "WorkflowActionModel",
    "WorkflowActionRepository",
    "WorkflowModel",
    "WorkflowStateModel",
    "WorkflowStateRepository",
    "WorkflowTaskModel",
    "WorkflowTaskRepository",
    "create_sqlalchemy_stores",
]
