"""Index store gateway — generic document reads, writes and searches.

Documents are addressed by (index name, type, document id) and stored as
JSON bodies in the ``documents`` table. The gateway knows nothing about
work orders or allocations; typed repositories wrap it.

Repositories call add()/flush()/execute() only — never commit().
The session dependency handles commit/rollback (Unit-of-Work).
"""

import logging
from enum import StrEnum
from typing import Any

from sqlalchemy import ColumnElement, and_, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from workallocation.db.tables import DocumentRow
from workallocation.models.common import utc_now
from workallocation.models.search import (
    Clause,
    ClauseKind,
    IndexQuery,
    SearchResult,
    SortOrder,
    StoredDocument,
)
from workallocation.services.errors import VersionConflictError

logger = logging.getLogger(__name__)


class WriteStatus(StrEnum):
    """Outcome of a successful write."""

    CREATED = "CREATED"
    UPDATED = "UPDATED"


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _field(name: str) -> ColumnElement[str]:
    return DocumentRow.body[name].as_string()


def _clause_condition(clause: Clause) -> ColumnElement[bool]:
    column = _field(clause.field)
    if clause.kind == ClauseKind.TERM:
        return column == clause.value
    if clause.kind == ClauseKind.MATCH:
        return func.lower(column) == clause.value.lower()
    # PHRASE_PREFIX: the phrase must start at a word boundary.
    pattern = _escape_like(clause.value.strip().lower())
    lowered = func.lower(column)
    return or_(
        lowered.like(f"{pattern}%", escape="\\"),
        lowered.like(f"% {pattern}%", escape="\\"),
    )


class IndexStoreGateway:
    """Read/add/update/search documents in a named index."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @staticmethod
    def _key(index: str, doc_type: str, doc_id: str) -> ColumnElement[bool]:
        return and_(
            DocumentRow.index_name == index,
            DocumentRow.doc_type == doc_type,
            DocumentRow.doc_id == doc_id,
        )

    async def _get_row(self, index: str, doc_type: str, doc_id: str) -> DocumentRow | None:
        # populate_existing: versioned updates bypass the identity map.
        result = await self._session.execute(
            select(DocumentRow)
            .where(self._key(index, doc_type, doc_id))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def add_entity(
        self, index: str, doc_type: str, doc_id: str, document: dict[str, Any],
    ) -> WriteStatus:
        """Store a document, overwriting any existing one with the same id."""
        now = utc_now()
        row = await self._get_row(index, doc_type, doc_id)
        if row is None:
            self._session.add(DocumentRow(
                index_name=index, doc_type=doc_type, doc_id=doc_id,
                body=document, version=1, created_at=now, updated_at=now,
            ))
            status = WriteStatus.CREATED
        else:
            row.body = document
            row.version = row.version + 1
            row.updated_at = now
            status = WriteStatus.UPDATED
        await self._session.flush()
        return status

    async def update_entity(
        self,
        index: str,
        doc_type: str,
        doc_id: str,
        document: dict[str, Any],
        *,
        expected_version: int | None = None,
    ) -> WriteStatus | None:
        """Replace an existing document.

        Returns None when the document does not exist. When
        ``expected_version`` is given the write only succeeds if the stored
        version still matches; otherwise VersionConflictError is raised.
        """
        stmt = update(DocumentRow).where(self._key(index, doc_type, doc_id))
        if expected_version is not None:
            stmt = stmt.where(DocumentRow.version == expected_version)
        stmt = stmt.values(
            body=document,
            version=DocumentRow.version + 1,
            updated_at=utc_now(),
        ).execution_options(synchronize_session=False)

        result = await self._session.execute(stmt)
        if result.rowcount:
            return WriteStatus.UPDATED

        if await self._get_row(index, doc_type, doc_id) is None:
            logger.warning("Update skipped, no document %s in %s/%s", doc_id, index, doc_type)
            return None
        raise VersionConflictError(index, doc_id, expected_version or 0)

    async def read_entity(self, index: str, doc_type: str, doc_id: str) -> dict[str, Any] | None:
        row = await self._get_row(index, doc_type, doc_id)
        return dict(row.body) if row is not None else None

    async def read_versioned(
        self, index: str, doc_type: str, doc_id: str,
    ) -> StoredDocument | None:
        row = await self._get_row(index, doc_type, doc_id)
        if row is None:
            return None
        return StoredDocument(doc_id=row.doc_id, source=dict(row.body), version=row.version)

    async def search(self, index: str, doc_type: str, query: IndexQuery) -> SearchResult:
        """Run a conjunctive query; ``total`` ignores pagination."""
        conditions = [
            DocumentRow.index_name == index,
            DocumentRow.doc_type == doc_type,
            *(_clause_condition(c) for c in query.must),
        ]

        total = await self._session.scalar(
            select(func.count()).select_from(DocumentRow).where(*conditions)
        )

        stmt = select(DocumentRow).where(*conditions)
        if query.sort_field:
            sort_column = _field(query.sort_field)
            stmt = stmt.order_by(
                sort_column.asc() if query.sort_order == SortOrder.ASC else sort_column.desc()
            )
        stmt = stmt.order_by(DocumentRow.doc_id).offset(query.offset)
        if query.size is not None:
            stmt = stmt.limit(query.size)

        result = await self._session.execute(stmt.execution_options(populate_existing=True))
        hits = [dict(row.body) for row in result.scalars().all()]
        return SearchResult(hits=hits, total=total or 0)
