"""Minimal example of litestar-choose-state integration.

This example keeps an invoicing workflow in memory. Checking the payment of
an invoice runs the "Route on payment" task, which moves the invoice to
"Paid" or "Rejected" depending on the ``is-paid`` controller.

Run with:
    cd examples/minimal
    litestar run

Or:
    uvicorn app:app --reload
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from litestar import Controller, Litestar, get, post
from litestar.exceptions import NotFoundException
from litestar.logging import LoggingConfig

from litestar_choose_state import (
    Action,
    CallableController,
    ChooseStatePlugin,
    ChooseStatePluginConfig,
    ChooseStateTaskConfig,
    ChooseStateTaskService,
    InMemoryWorkflowCatalog,
    ResourceHistory,
    ResourceWorkflow,
    Task,
    Workflow,
    WorkflowState,
    create_memory_stores,
)

logger = logging.getLogger(__name__)

# =============================================================================
# Workflow Catalog
# =============================================================================

INVOICE = "invoice"

invoicing = Workflow(id=1, name="Invoicing")
pending = WorkflowState(id=1, name="Pending", workflow_id=invoicing.id)
paid = WorkflowState(id=2, name="Paid", workflow_id=invoicing.id)
rejected = WorkflowState(id=3, name="Rejected", workflow_id=invoicing.id)
check_payment = Action(id=1, name="Check payment", workflow=invoicing)
route_on_payment = Task(id=1, action=check_payment, title="Route on payment")

catalog = InMemoryWorkflowCatalog()
catalog.add_workflow(invoicing)
for state in (pending, paid, rejected):
    catalog.add_state(state)
catalog.add_action(check_payment)
catalog.add_task(route_on_payment)

stores = create_memory_stores(catalog)
for invoice_id in (1001, 1002, 1003):
    stores.resource_workflows.add(  # type: ignore[attr-defined]
        ResourceWorkflow(resource_id=invoice_id, resource_type=INVOICE, workflow_id=invoicing.id, state=pending)
    )

# =============================================================================
# Controllers and Reflexive Actions
# =============================================================================

paid_invoices: set[int] = set()


def is_paid(resource_id: int, resource_type: str) -> bool:
    """Check whether a payment was registered for an invoice."""
    return resource_type == INVOICE and resource_id in paid_invoices


class LoggingReflexiveActionRunner:
    """Reflexive-action runner that only reports the state entered."""

    async def run_automatic_reflexive_actions(
        self,
        resource_id: int,
        resource_type: str,
        state_id: int,
        locale: str,
    ) -> None:
        logger.info(
            "invoice_state_entered",
            extra={"resource_id": resource_id, "resource_type": resource_type, "state_id": state_id},
        )


# =============================================================================
# API Controllers
# =============================================================================


class InvoiceController(Controller):
    """API for recording payments and checking invoices."""

    path = "/invoices"

    @get("/{invoice_id:int}")
    async def get_invoice(self, invoice_id: int, choose_state_service: ChooseStateTaskService) -> dict[str, Any]:
        """Get the current state of an invoice."""
        resource_workflow = await choose_state_service.stores.resource_workflows.find_by_key(
            invoice_id, INVOICE, invoicing.id
        )
        if resource_workflow is None:
            raise NotFoundException(detail=f"Invoice {invoice_id} not found")
        return {
            "invoice_id": invoice_id,
            "state": resource_workflow.state.name if resource_workflow.state else None,
            "paid": invoice_id in paid_invoices,
        }

    @post("/{invoice_id:int}/payments")
    async def register_payment(self, invoice_id: int) -> dict[str, Any]:
        """Register the payment of an invoice."""
        paid_invoices.add(invoice_id)
        return {"invoice_id": invoice_id, "paid": True}

    @post("/{invoice_id:int}/check")
    async def check_payment(self, invoice_id: int, choose_state_service: ChooseStateTaskService) -> dict[str, Any]:
        """Record a payment check and route the invoice on its outcome."""
        history = await choose_state_service.stores.history.create(
            ResourceHistory(
                resource_id=invoice_id,
                resource_type=INVOICE,
                action=check_payment,
                workflow=invoicing,
                creation_date=datetime.now(timezone.utc),
                user_access_code="clerk",
            )
        )

        result = await choose_state_service.process_task(history.id, route_on_payment)  # type: ignore[arg-type]

        return {
            "invoice_id": invoice_id,
            "history_id": history.id,
            "transitioned": result is not None,
            "state": result.new_state.name if result else None,
        }


@get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


# =============================================================================
# Application Setup
# =============================================================================

choose_state = ChooseStatePlugin(
    config=ChooseStatePluginConfig(
        controllers=[CallableController("is-paid", is_paid, description="Invoice has been paid")],
        stores=stores,
        reflexive_actions=LoggingReflexiveActionRunner(),
    )
)


async def configure_tasks() -> None:
    """Route checked invoices to "Paid" or "Rejected"."""
    await choose_state.service.save_config(
        ChooseStateTaskConfig(
            task_id=route_on_payment.id,
            controller_name="is-paid",
            id_state_ok=paid.id,
            id_state_ko=rejected.id,
        )
    )


app = Litestar(
    route_handlers=[InvoiceController, health_check],
    plugins=[choose_state],
    on_startup=[configure_tasks],
    logging_config=LoggingConfig(
        loggers={
            "litestar_choose_state": {"level": "INFO", "handlers": ["queue_listener"], "propagate": False},
            __name__: {"level": "INFO", "handlers": ["queue_listener"], "propagate": False},
        },
    ),
    debug=True,
)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
