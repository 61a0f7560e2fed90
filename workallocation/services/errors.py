"""Typed exceptions raised by the work allocation services.

    WorkAllocationError (base)
    |
    +-- BadRequestError           precondition failed, caller's fault
    |   +-- ValidationFailedError payload rejected before any write
    |
    +-- VersionConflictError      optimistic concurrency check lost
"""

from http import HTTPStatus


class WorkAllocationError(Exception):
    """Base class for all work allocation service errors."""

    status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequestError(WorkAllocationError, ValueError):
    status = HTTPStatus.BAD_REQUEST


class ValidationFailedError(BadRequestError):
    """Carries every problem found, not only the first."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = list(errors)


class VersionConflictError(WorkAllocationError):
    status = HTTPStatus.CONFLICT

    def __init__(self, index: str, doc_id: str, expected_version: int) -> None:
        super().__init__(
            f"Document {doc_id} in {index} changed since version {expected_version}"
        )
        self.index = index
        self.doc_id = doc_id
        self.expected_version = expected_version
