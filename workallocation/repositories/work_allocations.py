"""Work allocation repository — typed access to the allocation index."""

from workallocation.models.search import ClauseKind, IndexQuery
from workallocation.models.work_allocation import WorkAllocation
from workallocation.repositories.index_store import IndexStoreGateway, WriteStatus


class WorkAllocationRepository:
    def __init__(self, gateway: IndexStoreGateway, *, index: str, doc_type: str) -> None:
        self._gateway = gateway
        self._index = index
        self._doc_type = doc_type

    async def add(self, allocation: WorkAllocation) -> WriteStatus:
        return await self._gateway.add_entity(
            self._index, self._doc_type, allocation.id, allocation.to_document(),
        )

    async def get(self, allocation_id: str) -> WorkAllocation | None:
        document = await self._gateway.read_entity(self._index, self._doc_type, allocation_id)
        if not document:
            return None
        return WorkAllocation.model_validate(document)

    async def list_by_work_order(self, work_order_id: str) -> list[WorkAllocation]:
        """Every allocation whose workOrderId equals ``work_order_id``."""
        query = IndexQuery().add("workOrderId", work_order_id, ClauseKind.TERM)
        result = await self._gateway.search(self._index, self._doc_type, query)
        return [WorkAllocation.model_validate(hit) for hit in result.hits]
