"""Seed script — load a demo work order into the document store.

Creates:
1. A published work order (Demo Work Order, Planning Division)
2. Two work allocations with FRAC-sourced roles, activities and
   competencies, so no FRAC calls are needed
3. Roll-up counters on the work order, recomputed from the allocations

Idempotent: safe to run multiple times — skips if the demo order exists.

Usage:
    python -m scripts.seed          # against DATABASE_URL from .env
    pytest tests/scripts/test_seed.py  # against aiosqlite in-memory
"""

import asyncio
import sys

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from workallocation.config.logging import configure_logging
from workallocation.config.settings import Settings, get_settings
from workallocation.db.session import build_engine, build_session_factory, unit_of_work
from workallocation.models.common import WorkOrderStatus
from workallocation.models.work_allocation import (
    ChildNode,
    CompetencyDetails,
    Role,
    RoleCompetency,
    WorkAllocation,
)
from workallocation.models.work_order import SearchCriteria, WorkOrder
from workallocation.services.factory import build_allocation_service

logger = structlog.get_logger()

DEMO_USER_ID = "seed-admin"
DEMO_ORDER_NAME = "Demo Work Order"
DEMO_DEPARTMENT = "Planning Division"


def demo_allocations() -> list[WorkAllocation]:
    """Two allocations whose taxonomy entries already carry FRAC ids."""
    planner = RoleCompetency(
        role_details=Role(
            id="RID001", name="Planner", source="FRAC", status="VERIFIED",
            child_nodes=[
                ChildNode(id="AID001", name="Draft annual plan", description="Draft annual plan"),
                ChildNode(id="AID002", name="Review budgets", description="Review budgets"),
            ],
        ),
        competency_details=[
            CompetencyDetails(id="CID001", name="Budgeting", level="Level 2"),
        ],
    )
    analyst = RoleCompetency(
        role_details=Role(
            id="RID002", name="Analyst", source="FRAC", status="VERIFIED",
            child_nodes=[
                ChildNode(id="AID003", name="Prepare reports", description="Prepare reports"),
            ],
        ),
        competency_details=[
            CompetencyDetails(id="CID002", name="Data analysis", level="Level 3"),
            CompetencyDetails(id="CID003", name="Reporting", level="Level 1"),
        ],
    )
    return [
        WorkAllocation(
            user_id="user-001", user_name="Asha Rao", user_position="Planner",
            position_id="PID001", role_competency_list=[planner],
            unmapped_activities=[ChildNode(description="Coordinate vendors")],
            progress=40, error_count=1,
        ),
        WorkAllocation(
            user_id="user-002", user_name="Ben Okafor", user_position="Analyst",
            position_id="PID002", role_competency_list=[analyst],
            progress=60,
        ),
    ]


async def seed_demo(session: AsyncSession, settings: Settings | None = None) -> dict:
    """Seed the demo work order and its allocations.

    Returns a summary dict; ``created`` is False when the demo order
    already existed.
    """
    service = build_allocation_service(session, settings)

    existing = await service.get_work_orders(
        SearchCriteria(query=DEMO_ORDER_NAME, department_name=DEMO_DEPARTMENT),
    )
    for order in existing.data:
        if order.name == DEMO_ORDER_NAME:
            return {"created": False, "work_order_id": order.id}

    added = await service.add_work_order(
        DEMO_USER_ID,
        WorkOrder(name=DEMO_ORDER_NAME, dept_name=DEMO_DEPARTMENT, dept_id="DEPT-01"),
    )
    work_order_id = added.data["id"]

    allocation_ids = []
    for allocation in demo_allocations():
        allocation.work_order_id = work_order_id
        await service.add_work_allocation("", DEMO_USER_ID, allocation)
        allocation_ids.append(allocation.id)

    details = (await service.get_work_order_by_id(work_order_id)).data
    details.status = WorkOrderStatus.PUBLISHED.value
    await service.update_work_order(
        DEMO_USER_ID, WorkOrder.model_validate(details.model_dump(exclude={"users"})),
    )

    return {
        "created": True,
        "work_order_id": work_order_id,
        "allocation_ids": allocation_ids,
        "roles_count": details.roles_count,
        "activities_count": details.activities_count,
        "competencies_count": details.competencies_count,
        "progress": details.progress,
    }


async def _run_seed() -> None:
    """Run the seed against the real database (idempotent)."""
    settings = get_settings()
    configure_logging(settings)

    engine = build_engine(settings)
    try:
        async with unit_of_work(build_session_factory(engine)) as session:
            result = await seed_demo(session, settings)
    finally:
        await engine.dispose()

    if not result["created"]:
        logger.info("demo work order already seeded", work_order_id=result["work_order_id"])
        return

    logger.info(
        "seed complete",
        work_order_id=result["work_order_id"],
        allocations=len(result["allocation_ids"]),
        roles=result["roles_count"],
        activities=result["activities_count"],
        competencies=result["competencies_count"],
        progress=result["progress"],
    )


if __name__ == "__main__":
    asyncio.run(_run_seed())
    sys.exit(0)
