"""Audit field stamping applied to payloads before they are persisted."""

from workallocation.models.common import Action, epoch_millis, new_document_id
from workallocation.models.work_allocation import WorkAllocation
from workallocation.models.work_order import WorkOrder


def enrich_work_order(order: WorkOrder, user_id: str, action: Action) -> None:
    """ADD always assigns a fresh id, so a copied order never keeps its source id."""
    now = epoch_millis()
    if action == Action.ADD:
        order.id = new_document_id()
        order.created_by = user_id
        order.created_at = now
    order.updated_by = user_id
    order.updated_at = now


def enrich_work_allocation(allocation: WorkAllocation, user_id: str) -> None:
    now = epoch_millis()
    if not allocation.created_by:
        allocation.created_by = user_id
        allocation.created_at = now
    allocation.updated_by = user_id
    allocation.updated_at = now
