"""Document store — one table backing every index.

Revision ID: 001
Revises:
Create Date: 2026-10-18
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "documents",
        sa.Column("index_name", sa.String(100), primary_key=True),
        sa.Column("doc_type", sa.String(100), primary_key=True),
        sa.Column("doc_id", sa.String(100), primary_key=True),
        sa.Column("body", JSONB, nullable=False),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    # workOrderId lookups drive aggregation and work order detail reads.
    op.execute(
        "CREATE INDEX ix_documents_work_order_id "
        "ON documents ((body ->> 'workOrderId'))"
    )


def downgrade() -> None:
    op.execute("DROP INDEX IF EXISTS ix_documents_work_order_id")
    op.drop_table("documents")
