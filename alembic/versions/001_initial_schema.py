"""Initial schema — complaints with flattened AI analysis.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "complaints",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("title", sa.String(300), nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("submitted_by", sa.String(200), nullable=True),
        sa.Column(
            "created_at", sa.DateTime, nullable=False, server_default=sa.func.now()
        ),
        # aiAnalysis
        sa.Column("ai_summary", sa.Text, nullable=True),
        sa.Column("ai_category", sa.String(50), nullable=True),
        sa.Column("ai_emotion", sa.String(20), nullable=True),
        sa.Column("ai_priority", sa.String(20), nullable=True),
        sa.Column("ai_analyzed_at", sa.BigInteger, nullable=True),
        sa.CheckConstraint(
            "(ai_summary IS NULL AND ai_category IS NULL AND ai_emotion IS NULL"
            " AND ai_priority IS NULL AND ai_analyzed_at IS NULL)"
            " OR (ai_summary IS NOT NULL AND ai_category IS NOT NULL"
            " AND ai_emotion IS NOT NULL AND ai_priority IS NOT NULL"
            " AND ai_analyzed_at IS NOT NULL)",
            name="ck_complaints_ai_analysis_complete",
        ),
    )
    op.create_index("idx_complaints_created_at", "complaints", ["created_at"])


def downgrade() -> None:
    op.drop_index("idx_complaints_created_at", table_name="complaints")
    op.drop_table("complaints")
