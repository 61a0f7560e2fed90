"""Payload validation run before any write.

Range checks live on the pydantic models; this module covers the rules
that depend on the action or on several fields at once. Every problem is
collected and reported together in one ValidationFailedError.
"""

from workallocation.models.common import Action
from workallocation.models.work_allocation import WorkAllocation
from workallocation.models.work_order import SearchCriteria, WorkOrder
from workallocation.services.errors import ValidationFailedError

MAX_PAGE_SIZE = 100


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate_work_order(order: WorkOrder | None, action: Action) -> None:
    if order is None:
        raise ValidationFailedError(["Work order object should not be empty"])

    errors: list[str] = []
    if action == Action.UPDATE and _blank(order.id):
        errors.append("Work order id should not be empty")
    if _blank(order.name):
        errors.append("Work order name should not be empty")
    if errors:
        raise ValidationFailedError(errors)


def validate_work_allocation(allocation: WorkAllocation | None) -> None:
    if allocation is None:
        raise ValidationFailedError(["Work allocation object should not be empty"])

    errors: list[str] = []
    if _blank(allocation.work_order_id):
        errors.append("Work order id should not be empty")
    if _blank(allocation.user_id) and _blank(allocation.user_name):
        errors.append("Either user id or user name is required")
    for position, entry in enumerate(allocation.role_competency_list):
        if entry.role_details is None or _blank(entry.role_details.name):
            errors.append(f"Role name is missing for role competency at position {position}")
    if errors:
        raise ValidationFailedError(errors)


def validate_search_criteria(criteria: SearchCriteria | None) -> None:
    if criteria is None:
        raise ValidationFailedError(["Search criteria should not be empty"])

    errors: list[str] = []
    if criteria.page_no < 0:
        errors.append("Page number should not be negative")
    if not 1 <= criteria.page_size <= MAX_PAGE_SIZE:
        errors.append(f"Page size should be between 1 and {MAX_PAGE_SIZE}")
    if errors:
        raise ValidationFailedError(errors)
