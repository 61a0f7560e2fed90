"""Index query and search result types used by the index store gateway."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class ClauseKind(StrEnum):
    """How a must-clause compares a document field to a value."""

    MATCH = "MATCH"  # case-insensitive equality
    TERM = "TERM"  # exact equality
    PHRASE_PREFIX = "PHRASE_PREFIX"  # case-insensitive word-prefix phrase


class SortOrder(StrEnum):
    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True)
class Clause:
    field: str
    value: str
    kind: ClauseKind = ClauseKind.MATCH


@dataclass
class IndexQuery:
    """Conjunction of clauses plus pagination and sort.

    ``size=None`` returns every matching document.
    """

    must: list[Clause] = field(default_factory=list)
    offset: int = 0
    size: int | None = None
    sort_field: str | None = None
    sort_order: SortOrder = SortOrder.ASC

    def add(self, field_name: str, value: str, kind: ClauseKind = ClauseKind.MATCH) -> "IndexQuery":
        self.must.append(Clause(field=field_name, value=value, kind=kind))
        return self


@dataclass
class SearchResult:
    hits: list[dict[str, Any]]
    total: int


@dataclass(frozen=True)
class StoredDocument:
    """A document body with the version it was read at."""

    doc_id: str
    source: dict[str, Any]
    version: int
