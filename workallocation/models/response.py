"""Uniform response envelope returned by every facade operation."""

from http import HTTPStatus
from typing import Any

from pydantic import Field

from workallocation.models.common import DocumentModel, ResponseMessage


class ServiceResponse(DocumentModel):
    message: ResponseMessage = ResponseMessage.SUCCESSFUL
    data: Any = None
    status: HTTPStatus = HTTPStatus.OK
    total_hit: int | None = None
    warnings: list[str] = Field(
        default_factory=list,
        description="Non-fatal reconciliation problems; the write still happened.",
    )

    @property
    def ok(self) -> bool:
        return self.message == ResponseMessage.SUCCESSFUL
