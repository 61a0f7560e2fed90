"""Tests for the seed script — demo work order loads and is idempotent."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from scripts.seed import DEMO_ORDER_NAME, demo_allocations, seed_demo
from workallocation.models.search import IndexQuery
from workallocation.repositories.index_store import IndexStoreGateway
from workallocation.repositories.work_allocations import WorkAllocationRepository
from workallocation.repositories.work_orders import WorkOrderRepository


class TestSeedDemo:

    @pytest.mark.anyio
    async def test_creates_published_order_with_counters(self, db_session: AsyncSession, settings) -> None:
        result = await seed_demo(db_session, settings)

        assert result["created"] is True
        assert result["roles_count"] == 2
        assert result["activities_count"] == 4
        assert result["competencies_count"] == 3
        assert result["progress"] == 50

        orders = WorkOrderRepository(
            IndexStoreGateway(db_session),
            index=settings.WORK_ORDER_INDEX, doc_type=settings.WORK_ORDER_INDEX_TYPE,
        )
        order = await orders.get(result["work_order_id"])
        assert order.name == DEMO_ORDER_NAME
        assert order.status == "Published"
        assert order.error_count == 1
        assert sorted(order.user_ids) == sorted(result["allocation_ids"])

    @pytest.mark.anyio
    async def test_allocations_point_at_order(self, db_session: AsyncSession, settings) -> None:
        result = await seed_demo(db_session, settings)
        allocations = WorkAllocationRepository(
            IndexStoreGateway(db_session),
            index=settings.WORK_ALLOCATION_INDEX, doc_type=settings.WORK_ALLOCATION_INDEX_TYPE,
        )
        children = await allocations.list_by_work_order(result["work_order_id"])
        assert len(children) == len(demo_allocations())
        assert all(c.created_by == "seed-admin" for c in children)

    @pytest.mark.anyio
    async def test_second_run_is_a_no_op(self, db_session: AsyncSession, settings) -> None:
        first = await seed_demo(db_session, settings)
        second = await seed_demo(db_session, settings)

        assert second == {"created": False, "work_order_id": first["work_order_id"]}
        gateway = IndexStoreGateway(db_session)
        orders = await gateway.search(settings.WORK_ORDER_INDEX, settings.WORK_ORDER_INDEX_TYPE, IndexQuery())
        allocations = await gateway.search(
            settings.WORK_ALLOCATION_INDEX, settings.WORK_ALLOCATION_INDEX_TYPE, IndexQuery(),
        )
        assert orders.total == 1
        assert allocations.total == 2
