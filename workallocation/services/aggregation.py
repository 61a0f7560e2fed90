"""Roll-up counters for a work order, derived from its child allocations."""

import logging
from dataclasses import dataclass

from workallocation.models.work_allocation import WorkAllocation
from workallocation.models.work_order import WorkOrder
from workallocation.repositories.work_allocations import WorkAllocationRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RollUpCounts:
    roles_count: int = 0
    activities_count: int = 0
    competencies_count: int = 0
    error_count: int = 0
    progress: int = 0

    def apply_to(self, order: WorkOrder) -> None:
        order.roles_count = self.roles_count
        order.activities_count = self.activities_count
        order.competencies_count = self.competencies_count
        order.error_count = self.error_count
        order.progress = self.progress


def compute_roll_up(allocations: list[WorkAllocation]) -> RollUpCounts:
    """Sum counters across allocations; progress is the integer mean (0 if none)."""
    roles = activities = competencies = errors = progress = 0
    for allocation in allocations:
        roles += len(allocation.role_competency_list)
        for entry in allocation.role_competency_list:
            if entry.role_details is not None:
                activities += len(entry.role_details.child_nodes)
            competencies += len(entry.competency_details)
        activities += len(allocation.unmapped_activities)
        competencies += len(allocation.unmapped_competencies)
        errors += allocation.error_count
        progress += allocation.progress

    if allocations:
        progress //= len(allocations)

    return RollUpCounts(
        roles_count=roles,
        activities_count=activities,
        competencies_count=competencies,
        error_count=errors,
        progress=progress,
    )


class WorkOrderAggregator:
    """Recomputes a work order's counters from the allocation index."""

    def __init__(self, allocations: WorkAllocationRepository) -> None:
        self._allocations = allocations

    async def update_work_order_count(self, order: WorkOrder) -> RollUpCounts:
        """Write fresh counters onto ``order`` in memory; the caller persists it."""
        children = await self._allocations.list_by_work_order(order.id)
        counts = compute_roll_up(children)
        logger.info(
            "Work order %s: %d allocations, roles=%d activities=%d competencies=%d "
            "errors=%d progress=%d",
            order.id, len(children), counts.roles_count, counts.activities_count,
            counts.competencies_count, counts.error_count, counts.progress,
        )
        counts.apply_to(order)
        return counts
