"""Shared test fixtures for litestar-choose-state test suite."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from litestar_choose_state.controllers import ConstantController
from litestar_choose_state.core.models import (
    Action,
    ChooseStateTaskConfig,
    ResourceWorkflow,
    Task,
    Workflow,
    WorkflowState,
)
from litestar_choose_state.db.models import (
    ResourceHistoryModel,
    ResourceWorkflowModel,
    WorkflowActionModel,
    WorkflowModel,
    WorkflowStateModel,
    WorkflowTaskModel,
)
from litestar_choose_state.engine.registry import ControllerRegistry
from litestar_choose_state.engine.service import ChooseStateTaskService
from litestar_choose_state.stores.base import ChooseStateStores
from litestar_choose_state.stores.memory import InMemoryWorkflowCatalog, create_memory_stores

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

WORKFLOW_ID = 1
STATE_PENDING = 3
STATE_PAID = 5
STATE_REJECTED = 7
ACTION_ID = 10
TASK_ID = 100
RESOURCE_ID = 42
RESOURCE_TYPE = "invoice"


class RecordingReflexiveActionRunner:
    """Reflexive-action runner that records every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[int, str, int, str]] = []

    async def run_automatic_reflexive_actions(
        self,
        resource_id: int,
        resource_type: str,
        state_id: int,
        locale: str,
    ) -> None:
        self.calls.append((resource_id, resource_type, state_id, locale))


class MockEventBus:
    """Mock event bus for testing."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    async def emit(self, event_type: str, **kwargs: Any) -> None:
        """Record emitted events."""
        self.events.append((event_type, kwargs))

    def of_type(self, event_type: str) -> list[Any]:
        """Return the event payloads emitted under ``event_type``."""
        return [kwargs["event"] for name, kwargs in self.events if name == event_type]


@pytest.fixture
def workflow() -> Workflow:
    return Workflow(id=WORKFLOW_ID, name="Invoicing")


@pytest.fixture
def action(workflow: Workflow) -> Action:
    return Action(id=ACTION_ID, name="Check payment", workflow=workflow)


@pytest.fixture
def task(action: Action) -> Task:
    return Task(id=TASK_ID, action=action, title="Route on payment")


@pytest.fixture
def catalog(workflow: Workflow, action: Action, task: Task) -> InMemoryWorkflowCatalog:
    """Create a catalog with one workflow of three states, one action and one task."""
    catalog = InMemoryWorkflowCatalog()
    catalog.add_workflow(workflow)
    catalog.add_state(WorkflowState(id=STATE_PAID, name="Paid", workflow_id=WORKFLOW_ID))
    catalog.add_state(WorkflowState(id=STATE_PENDING, name="Pending", workflow_id=WORKFLOW_ID))
    catalog.add_state(WorkflowState(id=STATE_REJECTED, name="Rejected", workflow_id=WORKFLOW_ID))
    catalog.add_action(action)
    catalog.add_task(task)
    return catalog


@pytest.fixture
def stores(catalog: InMemoryWorkflowCatalog) -> ChooseStateStores:
    """Create in-memory stores with the invoice sitting in "Pending"."""
    stores = create_memory_stores(catalog)
    stores.resource_workflows.add(  # type: ignore[attr-defined]
        ResourceWorkflow(
            resource_id=RESOURCE_ID,
            resource_type=RESOURCE_TYPE,
            workflow_id=WORKFLOW_ID,
            state=WorkflowState(id=STATE_PENDING, name="Pending", workflow_id=WORKFLOW_ID),
        )
    )
    return stores


@pytest.fixture
def controller_registry() -> ControllerRegistry:
    """Create a registry holding an always-true and an always-false controller."""
    return ControllerRegistry(
        [
            ConstantController("always-true", True),
            ConstantController("always-false", False),
        ]
    )


@pytest.fixture
def reflexive_runner() -> RecordingReflexiveActionRunner:
    return RecordingReflexiveActionRunner()


@pytest.fixture
def mock_event_bus() -> MockEventBus:
    """Create a mock event bus.

    Returns:
        MockEventBus instance
    """
    return MockEventBus()


@pytest.fixture
def service(
    controller_registry: ControllerRegistry,
    stores: ChooseStateStores,
    reflexive_runner: RecordingReflexiveActionRunner,
    mock_event_bus: MockEventBus,
) -> ChooseStateTaskService:
    """Create a service over the in-memory stores.

    Args:
        controller_registry: Controller registry fixture
        stores: In-memory stores fixture
        reflexive_runner: Recording reflexive runner fixture
        mock_event_bus: Mock event bus fixture

    Returns:
        ChooseStateTaskService instance
    """
    return ChooseStateTaskService(
        controller_registry,
        stores,
        reflexive_runner,
        event_bus=mock_event_bus,
    )


@pytest.fixture
def ok_config() -> ChooseStateTaskConfig:
    """Configuration sending the invoice to "Paid" on OK and "Rejected" on KO."""
    return ChooseStateTaskConfig(
        task_id=TASK_ID,
        controller_name="always-true",
        id_state_ok=STATE_PAID,
        id_state_ko=STATE_REJECTED,
    )


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
async def async_engine():
    """Create an async SQLite in-memory engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        future=True,
    )

    # Enable foreign keys for SQLite
    @event.listens_for(engine.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(WorkflowModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def session_maker(async_engine):
    """Create session factory."""
    return async_sessionmaker(
        bind=async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def async_session(session_maker) -> AsyncIterator[AsyncSession]:
    """Create an async session for testing."""
    async with session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def seeded_db(session_maker) -> dict[str, Any]:
    """Seed an invoicing workflow with an invoice sitting in "Pending"."""
    async with session_maker() as session:
        workflow = WorkflowModel(name="Invoicing")
        session.add(workflow)
        await session.flush()

        pending = WorkflowStateModel(name="Pending", workflow_id=workflow.id, is_initial_state=True)
        paid = WorkflowStateModel(name="Paid", workflow_id=workflow.id)
        rejected = WorkflowStateModel(name="Rejected", workflow_id=workflow.id)
        session.add_all([pending, paid, rejected])
        await session.flush()

        action = WorkflowActionModel(name="Check payment", workflow_id=workflow.id)
        session.add(action)
        await session.flush()

        task = WorkflowTaskModel(task_type="taskChooseState", title="Route on payment", action_id=action.id)
        session.add(task)
        session.add(
            ResourceWorkflowModel(
                resource_id=RESOURCE_ID,
                resource_type=RESOURCE_TYPE,
                workflow_id=workflow.id,
                state_id=pending.id,
            )
        )
        await session.flush()

        history = ResourceHistoryModel(
            resource_id=RESOURCE_ID,
            resource_type=RESOURCE_TYPE,
            action_id=action.id,
            workflow_id=workflow.id,
            creation_date=datetime.now(timezone.utc),
            user_access_code="clerk",
        )
        session.add(history)
        await session.commit()

        return {
            "workflow_id": workflow.id,
            "pending_id": pending.id,
            "paid_id": paid.id,
            "rejected_id": rejected.id,
            "action_id": action.id,
            "task_id": task.id,
            "history_id": history.id,
        }


