"""Work order repository — typed access to the work order index.

Raw documents never leave this module; callers see WorkOrder records.
"""

from workallocation.models.search import IndexQuery
from workallocation.models.work_order import WorkOrder
from workallocation.repositories.index_store import IndexStoreGateway, WriteStatus


class WorkOrderRepository:
    def __init__(self, gateway: IndexStoreGateway, *, index: str, doc_type: str) -> None:
        self._gateway = gateway
        self._index = index
        self._doc_type = doc_type

    async def add(self, order: WorkOrder) -> WriteStatus:
        return await self._gateway.add_entity(
            self._index, self._doc_type, order.id, order.to_document(),
        )

    async def update(
        self, order: WorkOrder, *, expected_version: int | None = None,
    ) -> WriteStatus | None:
        return await self._gateway.update_entity(
            self._index, self._doc_type, order.id, order.to_document(),
            expected_version=expected_version,
        )

    async def get(self, order_id: str) -> WorkOrder | None:
        document = await self._gateway.read_entity(self._index, self._doc_type, order_id)
        if not document:
            return None
        return WorkOrder.model_validate(document)

    async def get_versioned(self, order_id: str) -> tuple[WorkOrder, int] | None:
        stored = await self._gateway.read_versioned(self._index, self._doc_type, order_id)
        if stored is None:
            return None
        return WorkOrder.model_validate(stored.source), stored.version

    async def search(self, query: IndexQuery) -> tuple[list[WorkOrder], int]:
        result = await self._gateway.search(self._index, self._doc_type, query)
        return [WorkOrder.model_validate(hit) for hit in result.hits], result.total
