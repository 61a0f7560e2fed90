"""SQLAlchemy ORM table models for the document index store.

Every logical index (work orders, work allocations) shares one table,
keyed by (index_name, doc_type, doc_id). The document body is stored as
FlexJSON (JSONB on Postgres, JSON on SQLite). ``version`` increments on
every write and backs optimistic concurrency for read-modify-write.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import JSON

from workallocation.db.session import Base

# JSONB on PostgreSQL, plain JSON on SQLite (for tests)
FlexJSON = JSONB().with_variant(JSON(), "sqlite")


class DocumentRow(Base):
    __tablename__ = "documents"

    index_name: Mapped[str] = mapped_column(String(100), primary_key=True)
    doc_type: Mapped[str] = mapped_column(String(100), primary_key=True)
    doc_id: Mapped[str] = mapped_column(String(100), primary_key=True)
    body: Mapped[dict] = mapped_column(FlexJSON, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
