"""Allocation service facade — work order and work allocation operations.

Each operation validates, enriches, optionally reconciles taxonomy data
with FRAC, writes through the typed repositories, and answers with a
ServiceResponse envelope. Adding an allocation also recomputes the roll-up
counters of its parent work order under a version check.
"""

import logging
from http import HTTPStatus

from sqlalchemy.exc import SQLAlchemyError

from workallocation.clients.frac import FracClient
from workallocation.clients.user_directory import UserDirectoryClient
from workallocation.models.common import (
    Action,
    ResponseMessage,
    WorkOrderStatus,
    new_document_id,
)
from workallocation.models.response import ServiceResponse
from workallocation.models.search import ClauseKind, IndexQuery
from workallocation.models.work_allocation import WorkAllocation
from workallocation.models.work_order import SearchCriteria, WorkOrder, WorkOrderDetails
from workallocation.repositories.index_store import WriteStatus
from workallocation.repositories.work_allocations import WorkAllocationRepository
from workallocation.repositories.work_orders import WorkOrderRepository
from workallocation.services.aggregation import WorkOrderAggregator
from workallocation.services.enrichment import enrich_work_allocation, enrich_work_order
from workallocation.services.errors import BadRequestError, VersionConflictError
from workallocation.services.reconciliation import TaxonomyReconciler
from workallocation.services.validator import (
    validate_search_criteria,
    validate_work_allocation,
    validate_work_order,
)

logger = logging.getLogger(__name__)


def _message(status: WriteStatus | None) -> ResponseMessage:
    return ResponseMessage.SUCCESSFUL if status else ResponseMessage.FAILED


def _not_found() -> ServiceResponse:
    return ServiceResponse(
        message=ResponseMessage.FAILED, data=None, status=HTTPStatus.NOT_FOUND,
    )


class AllocationService:
    """Facade over validation, enrichment, reconciliation and persistence."""

    def __init__(
        self,
        *,
        work_orders: WorkOrderRepository,
        work_allocations: WorkAllocationRepository,
        frac_client: FracClient,
        user_directory: UserDirectoryClient,
        update_retries: int = 3,
    ) -> None:
        self._work_orders = work_orders
        self._allocations = work_allocations
        self._users = user_directory
        self._reconciler = TaxonomyReconciler(frac_client)
        self._aggregator = WorkOrderAggregator(work_allocations)
        self._update_retries = update_retries

    # ----- Work orders -----

    async def add_work_order(self, user_id: str, order: WorkOrder) -> ServiceResponse:
        validate_work_order(order, Action.ADD)
        enrich_work_order(order, user_id, Action.ADD)
        status = await self._work_orders.add(order)
        return ServiceResponse(message=_message(status), data={"id": order.id})

    async def update_work_order(self, user_id: str, order: WorkOrder) -> ServiceResponse:
        validate_work_order(order, Action.UPDATE)
        enrich_work_order(order, user_id, Action.UPDATE)
        status = await self._work_orders.update(order)
        return ServiceResponse(message=_message(status), data=status)

    async def copy_work_order(self, user_id: str, source: WorkOrder) -> ServiceResponse:
        """Clone a published work order and all of its allocations.

        Raises:
            BadRequestError: empty id, unknown id, or source not published.
        """
        if not source.id or not source.id.strip():
            raise BadRequestError("Work Order Id should not be empty!")
        order = await self._work_orders.get(source.id)
        if order is None:
            raise BadRequestError("No work order found on given Id!")
        if (order.status or "").lower() != WorkOrderStatus.PUBLISHED.lower():
            raise BadRequestError(
                "Can not copy the work order, work order is not in published status!"
            )

        validate_work_order(order, Action.ADD)
        order.status = None
        order.published_pdf_link = None
        order.signed_pdf_link = None
        if source.name and source.name.strip():
            order.name = source.name
        source_allocation_ids = list(order.user_ids)
        enrich_work_order(order, user_id, Action.ADD)

        order.user_ids = []
        for allocation_id in source_allocation_ids:
            allocation = await self._allocations.get(allocation_id)
            if allocation is None:
                logger.warning(
                    "Copy of work order %s: allocation %s not found, skipped",
                    source.id, allocation_id,
                )
                continue
            allocation.created_by = None
            enrich_work_allocation(allocation, user_id)
            allocation.id = new_document_id()
            allocation.work_order_id = order.id
            await self._allocations.add(allocation)
            order.add_user_id(allocation.id)

        status = await self._work_orders.add(order)
        logger.info(
            "Copied work order %s to %s with %d allocations",
            source.id, order.id, len(order.user_ids),
        )
        return ServiceResponse(message=_message(status), data={"id": order.id})

    async def get_work_orders(self, criteria: SearchCriteria) -> ServiceResponse:
        logger.info("Searching work orders")
        validate_search_criteria(criteria)

        query = IndexQuery(
            offset=criteria.page_no * criteria.page_size,
            size=criteria.page_size,
            sort_field="name",
        )
        if criteria.status:
            query.add("status", criteria.status, ClauseKind.MATCH)
        if criteria.department_name:
            query.add("deptName", criteria.department_name, ClauseKind.MATCH)
        if criteria.query:
            query.add("name", criteria.query, ClauseKind.PHRASE_PREFIX)

        try:
            orders, total = await self._work_orders.search(query)
        except SQLAlchemyError:
            logger.exception("Work order search failed")
            orders, total = [], 0

        return ServiceResponse(data=orders, total_hit=total)

    async def get_work_order_by_id(self, work_order_id: str) -> ServiceResponse:
        order = await self._work_orders.get(work_order_id)
        if order is None:
            return _not_found()
        users = (
            await self._allocations.list_by_work_order(work_order_id)
            if order.user_ids else []
        )
        details = WorkOrderDetails.model_validate({**order.model_dump(), "users": users})
        return ServiceResponse(data=details)

    # ----- Work allocations -----

    async def add_work_allocation(
        self, auth_token: str, user_id: str, allocation: WorkAllocation,
    ) -> ServiceResponse:
        logger.info("Adding work allocation %s", allocation.model_dump_json(by_alias=True))
        validate_work_allocation(allocation)
        if await self._work_orders.get(allocation.work_order_id) is None:
            raise BadRequestError("No work order found on given Id!")

        enrich_work_allocation(allocation, user_id)
        if not allocation.id:
            allocation.id = new_document_id()

        report = await self._reconciler.reconcile(auth_token, allocation)
        status = await self._allocations.add(allocation)
        await self._attach_to_work_order(allocation)

        return ServiceResponse(
            message=_message(status),
            data=status,
            warnings=[str(w) for w in report.warnings],
        )

    async def _attach_to_work_order(self, allocation: WorkAllocation) -> None:
        """Append the allocation to its work order and refresh the counters.

        Read-modify-write guarded by the stored version; a concurrent
        writer forces a re-read, up to ``update_retries`` attempts.
        """
        for attempt in range(1, self._update_retries + 1):
            loaded = await self._work_orders.get_versioned(allocation.work_order_id)
            if loaded is None:
                raise BadRequestError("No work order found on given Id!")
            order, version = loaded
            order.add_user_id(allocation.id)
            await self._aggregator.update_work_order_count(order)
            try:
                await self._work_orders.update(order, expected_version=version)
                return
            except VersionConflictError:
                if attempt == self._update_retries:
                    raise
                logger.warning(
                    "Work order %s changed during update (attempt %d/%d), retrying",
                    order.id, attempt, self._update_retries,
                )

    async def get_work_allocation_by_id(self, allocation_id: str) -> ServiceResponse:
        allocation = await self._allocations.get(allocation_id)
        if allocation is None:
            return _not_found()
        return ServiceResponse(data=allocation)

    # ----- Users -----

    async def get_user_basic_details(self, user_id: str) -> ServiceResponse:
        users = await self._users.get_users_by_ids({user_id})
        return ServiceResponse(data=users.get(user_id))
