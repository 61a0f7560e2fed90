"""Work order records and search criteria."""

from pydantic import Field

from workallocation.models.common import DocumentModel
from workallocation.models.work_allocation import WorkAllocation


class WorkOrder(DocumentModel):
    """A named unit of organisational work.

    The counters (``roles_count`` .. ``progress``) are denormalized from
    the child work allocations listed in ``user_ids`` and are only
    rewritten by a recompute.
    """

    id: str | None = None
    name: str | None = None
    dept_id: str | None = None
    dept_name: str | None = None
    status: str | None = None
    user_ids: list[str] = Field(default_factory=list)
    roles_count: int = 0
    activities_count: int = 0
    competencies_count: int = 0
    error_count: int = 0
    progress: int = 0
    published_pdf_link: str | None = None
    signed_pdf_link: str | None = None
    created_at: int | None = None
    created_by: str | None = None
    updated_at: int | None = None
    updated_by: str | None = None

    def add_user_id(self, allocation_id: str) -> None:
        if allocation_id not in self.user_ids:
            self.user_ids.append(allocation_id)


class WorkOrderDetails(WorkOrder):
    """A work order together with its allocation documents."""

    users: list[WorkAllocation] = Field(default_factory=list)


class SearchCriteria(DocumentModel):
    """Filters and paging for listing work orders. Not stored."""

    status: str | None = None
    department_name: str | None = None
    query: str | None = None
    page_no: int = 0
    page_size: int = 20
