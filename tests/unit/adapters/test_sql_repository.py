"""Tests for the SQLAlchemy repository against an in-memory SQLite database."""

from contextlib import asynccontextmanager

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from complaint_ai.adapters.persistence.database import Base
from complaint_ai.adapters.persistence.models import ComplaintModel
from complaint_ai.adapters.persistence.repositories import SqlComplaintRepository
from complaint_ai.domain.entities.ai_analysis import AIAnalysis
from complaint_ai.domain.entities.complaint import Complaint
from complaint_ai.domain.value_objects.enums import Category, Emotion, Priority

FIRST = AIAnalysis(
    summary="Order arrived five days late", category=Category.ORDER_ISSUE,
    emotion=Emotion.FRUSTRATED, priority=Priority.MEDIUM, analyzed_at=1,
)
SECOND = AIAnalysis(
    summary="Something else entirely", category=Category.OTHER,
    emotion=Emotion.CALM, priority=Priority.LOW, analyzed_at=2,
)


@asynccontextmanager
async def temp_db():
    """Yield a session factory bound to a fresh in-memory database."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield async_sessionmaker(engine, expire_on_commit=False)
    finally:
        await engine.dispose()


async def _store(factory, complaint):
    async with factory() as session:
        saved = await SqlComplaintRepository(session).save(complaint)
        await session.commit()
    return saved.id


@pytest.mark.asyncio
async def test_save_assigns_id_and_timestamp():
    async with temp_db() as factory:
        async with factory() as session:
            repo = SqlComplaintRepository(session)
            saved = await repo.save(Complaint(id=None, title="Late delivery", description="5 days"))
            assert saved.id
            assert saved.created_at is not None

            loaded = await repo.get_by_id(saved.id)
            assert loaded.title == "Late delivery"
            assert loaded.ai_analysis is None


@pytest.mark.asyncio
async def test_first_analysis_wins():
    async with temp_db() as factory:
        complaint_id = await _store(factory, Complaint(id=None, title="T", description="D"))

        async with factory() as session:
            assert await SqlComplaintRepository(session).save_analysis(complaint_id, FIRST) is True
            await session.commit()

        async with factory() as session:
            repo = SqlComplaintRepository(session)
            assert await repo.save_analysis(complaint_id, SECOND) is False
            await session.commit()
            assert (await repo.get_by_id(complaint_id)).ai_analysis == FIRST


@pytest.mark.asyncio
async def test_blank_stored_summary_can_be_replaced():
    async with temp_db() as factory:
        complaint_id = await _store(factory, Complaint(id=None, title="T", description="D"))
        async with factory() as session:
            model = await session.get(ComplaintModel, complaint_id)
            model.ai_summary = "   "
            model.ai_category = Category.OTHER.value
            model.ai_emotion = Emotion.CALM.value
            model.ai_priority = Priority.LOW.value
            model.ai_analyzed_at = 0
            await session.commit()

        async with factory() as session:
            repo = SqlComplaintRepository(session)
            assert [c.id for c in await repo.get_unanalyzed()] == [complaint_id]
            assert await repo.save_analysis(complaint_id, FIRST) is True
            assert await repo.get_unanalyzed() == []


@pytest.mark.asyncio
async def test_unknown_id_is_not_written():
    async with temp_db() as factory:
        async with factory() as session:
            assert await SqlComplaintRepository(session).save_analysis("ghost", FIRST) is False
