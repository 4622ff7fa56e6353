"""SQLAlchemy ORM models — maps to PostgreSQL tables."""

from datetime import datetime

from sqlalchemy import BigInteger, CheckConstraint, DateTime, Index, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from complaint_ai.adapters.persistence.database import Base


class ComplaintModel(Base):
    __tablename__ = "complaints"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str | None] = mapped_column(String(300), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    submitted_by: Mapped[str | None] = mapped_column(String(200), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    # aiAnalysis, flattened; all five columns are set together or not at all
    ai_summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    ai_category: Mapped[str | None] = mapped_column(String(50), nullable=True)
    ai_emotion: Mapped[str | None] = mapped_column(String(20), nullable=True)
    ai_priority: Mapped[str | None] = mapped_column(String(20), nullable=True)
    ai_analyzed_at: Mapped[int | None] = mapped_column(BigInteger, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "(ai_summary IS NULL AND ai_category IS NULL AND ai_emotion IS NULL"
            " AND ai_priority IS NULL AND ai_analyzed_at IS NULL)"
            " OR (ai_summary IS NOT NULL AND ai_category IS NOT NULL"
            " AND ai_emotion IS NOT NULL AND ai_priority IS NOT NULL"
            " AND ai_analyzed_at IS NOT NULL)",
            name="ck_complaints_ai_analysis_complete",
        ),
        Index("idx_complaints_created_at", "created_at"),
    )
