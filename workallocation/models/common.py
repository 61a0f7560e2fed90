"""Shared types, enums, and base models used across work allocation records."""

from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from uuid_extensions import uuid7


def utc_now() -> datetime:
    """Return the current UTC timestamp (timezone-aware)."""
    return datetime.now(tz=timezone.utc)


def epoch_millis() -> int:
    """Current UTC time as milliseconds since the epoch (audit timestamps)."""
    return int(utc_now().timestamp() * 1000)


def new_document_id() -> str:
    """Generate a new time-sortable document id (UUID v7 string)."""
    return str(uuid7())


# --- Shared enums ---


class WorkOrderStatus(StrEnum):
    """Known work order lifecycle states. Stored orders may carry others."""

    DRAFT = "Draft"
    PUBLISHED = "Published"


class Action(StrEnum):
    """Write action driving validation and enrichment rules."""

    ADD = "add"
    UPDATE = "update"


class ResponseMessage(StrEnum):
    SUCCESSFUL = "Successful"
    FAILED = "Failed"


# --- Base model ---


class DocumentModel(BaseModel):
    """Base model for indexed documents.

    Attributes are snake_case in Python and camelCase in stored documents.
    Unknown document keys are dropped on load.
    """

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "ignore",
        "protected_namespaces": (),
    }

    def to_document(self) -> dict[str, Any]:
        """Serialize to the stored (camelCase, JSON-safe) representation."""
        return self.model_dump(by_alias=True, mode="json")
