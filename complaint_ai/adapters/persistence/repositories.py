"""SQLAlchemy repository implementations."""

from __future__ import annotations

import uuid

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from complaint_ai.adapters.persistence.models import ComplaintModel
from complaint_ai.application.ports.complaint_repo import ComplaintRepository
from complaint_ai.domain.entities.ai_analysis import AIAnalysis
from complaint_ai.domain.entities.complaint import Complaint
from complaint_ai.domain.value_objects.enums import Category, Emotion, Priority

# ─── Mappers ─────────────────────────────────────────────────────────


def _analysis_to_domain(m: ComplaintModel) -> AIAnalysis | None:
    if m.ai_summary is None:
        return None
    return AIAnalysis(
        summary=m.ai_summary,
        category=Category(m.ai_category),
        emotion=Emotion(m.ai_emotion),
        priority=Priority(m.ai_priority),
        analyzed_at=m.ai_analyzed_at,
    )


def _complaint_to_domain(m: ComplaintModel) -> Complaint:
    return Complaint(
        id=m.id,
        title=m.title,
        description=m.description,
        submitted_by=m.submitted_by,
        created_at=m.created_at,
        ai_analysis=_analysis_to_domain(m),
    )


# A stored summary that is blank does not count as an analysis
_UNANALYZED = or_(
    ComplaintModel.ai_summary.is_(None),
    func.trim(ComplaintModel.ai_summary) == "",
)


# ─── Repositories ────────────────────────────────────────────────────


class SqlComplaintRepository(ComplaintRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, complaint: Complaint) -> Complaint:
        m = ComplaintModel(
            id=complaint.id or uuid.uuid4().hex,
            title=complaint.title,
            description=complaint.description,
            submitted_by=complaint.submitted_by,
        )
        self._s.add(m)
        await self._s.flush()
        await self._s.refresh(m)
        complaint.id = m.id
        complaint.created_at = m.created_at
        return complaint

    async def get_by_id(self, complaint_id: str) -> Complaint | None:
        m = await self._s.get(ComplaintModel, complaint_id, populate_existing=True)
        return _complaint_to_domain(m) if m else None

    async def get_all(self) -> list[Complaint]:
        result = await self._s.execute(
            select(ComplaintModel).order_by(ComplaintModel.created_at.desc())
        )
        return [_complaint_to_domain(m) for m in result.scalars()]

    async def get_unanalyzed(self) -> list[Complaint]:
        result = await self._s.execute(
            select(ComplaintModel)
            .where(_UNANALYZED)
            .order_by(ComplaintModel.created_at)
        )
        return [_complaint_to_domain(m) for m in result.scalars()]

    async def save_analysis(self, complaint_id: str, analysis: AIAnalysis) -> bool:
        # Conditional write: only the first valid analysis lands
        result = await self._s.execute(
            update(ComplaintModel)
            .where(ComplaintModel.id == complaint_id, _UNANALYZED)
            .values(
                ai_summary=analysis.summary,
                ai_category=analysis.category.value,
                ai_emotion=analysis.emotion.value,
                ai_priority=analysis.priority.value,
                ai_analyzed_at=analysis.analyzed_at,
            )
            .execution_options(synchronize_session=False)
        )
        await self._s.flush()
        return result.rowcount == 1

