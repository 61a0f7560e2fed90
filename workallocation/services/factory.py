"""Wiring for AllocationService: settings + session -> ready facade."""

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from workallocation.clients.frac import FracClient
from workallocation.clients.user_directory import UserDirectoryClient
from workallocation.config.settings import Settings, get_settings
from workallocation.repositories.index_store import IndexStoreGateway
from workallocation.repositories.work_allocations import WorkAllocationRepository
from workallocation.repositories.work_orders import WorkOrderRepository
from workallocation.services.allocation_service import AllocationService


def build_allocation_service(
    session: AsyncSession,
    settings: Settings | None = None,
    *,
    frac_transport: httpx.AsyncBaseTransport | None = None,
    user_transport: httpx.AsyncBaseTransport | None = None,
) -> AllocationService:
    """Build a facade bound to one session (one unit of work)."""
    settings = settings or get_settings()
    gateway = IndexStoreGateway(session)
    return AllocationService(
        work_orders=WorkOrderRepository(
            gateway,
            index=settings.WORK_ORDER_INDEX,
            doc_type=settings.WORK_ORDER_INDEX_TYPE,
        ),
        work_allocations=WorkAllocationRepository(
            gateway,
            index=settings.WORK_ALLOCATION_INDEX,
            doc_type=settings.WORK_ALLOCATION_INDEX_TYPE,
        ),
        frac_client=FracClient(
            settings.FRAC_SERVICE_URL,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
            transport=frac_transport,
        ),
        user_directory=UserDirectoryClient(
            settings.USER_SERVICE_URL,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
            transport=user_transport,
        ),
        update_retries=settings.WORK_ORDER_UPDATE_RETRIES,
    )
