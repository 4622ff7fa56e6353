"""Tests for the complaint-created trigger."""

import pytest

from complaint_ai.application.use_cases.analyze_complaint import AnalyzeComplaintUseCase
from complaint_ai.application.use_cases.complaint_created import (
    ComplaintCreatedUseCase,
    TriggerOutcome,
)
from complaint_ai.domain.entities.complaint import Complaint
from complaint_ai.domain.value_objects.enums import Category, Emotion, Priority
from conftest import FIXED_NOW_MS, FakeLLM, InMemoryComplaintRepository


class ExplodingRepository(InMemoryComplaintRepository):
    async def save_analysis(self, complaint_id, analysis):
        raise RuntimeError("database unavailable")


def _use_case(llm, repo, clock):
    return ComplaintCreatedUseCase(
        analyzer=AnalyzeComplaintUseCase(llm), complaint_repo=repo, clock=clock
    )


@pytest.mark.asyncio
async def test_new_complaint_is_analyzed_and_stored(fake_llm, clock, late_delivery):
    repo = InMemoryComplaintRepository([late_delivery])
    outcome = await _use_case(fake_llm, repo, clock).execute("c1", late_delivery.to_record())

    assert outcome == TriggerOutcome.PERSISTED
    stored = repo.complaints["c1"].ai_analysis
    assert stored.summary
    assert stored.category in Category
    assert stored.emotion in Emotion
    assert stored.priority in Priority
    assert stored.analyzed_at == FIXED_NOW_MS


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"title": "Late delivery"},
        {"description": "Order arrived 5 days late"},
        {"title": "", "description": "x"},
        {"title": "   ", "description": "\n\t"},
        {"title": "Late delivery", "description": 42},
        None,
    ],
)
async def test_missing_fields_are_dropped(fake_llm, clock, payload):
    repo = InMemoryComplaintRepository()
    outcome = await _use_case(fake_llm, repo, clock).execute("c1", payload)
    assert outcome == TriggerOutcome.DROPPED
    assert fake_llm.calls == 0
    assert repo.writes == []


@pytest.mark.asyncio
async def test_already_analyzed_is_skipped(fake_llm, clock):
    payload = {"title": "T", "description": "D", "aiAnalysis": {"summary": "x"}}
    outcome = await _use_case(fake_llm, InMemoryComplaintRepository(), clock).execute("c1", payload)
    assert outcome == TriggerOutcome.SKIPPED
    assert fake_llm.calls == 0


@pytest.mark.asyncio
async def test_analyzer_failure_is_dropped(clock, late_delivery):
    repo = InMemoryComplaintRepository([late_delivery])
    llm = FakeLLM(response="not json")
    outcome = await _use_case(llm, repo, clock).execute("c1", late_delivery)
    assert outcome == TriggerOutcome.DROPPED
    assert repo.complaints["c1"].ai_analysis is None


@pytest.mark.asyncio
async def test_store_errors_never_raise(fake_llm, clock, late_delivery):
    repo = ExplodingRepository([late_delivery])
    outcome = await _use_case(fake_llm, repo, clock).execute("c1", late_delivery)
    assert outcome == TriggerOutcome.DROPPED


@pytest.mark.asyncio
async def test_concurrent_winner_is_kept(fake_llm, clock, late_delivery):
    repo = InMemoryComplaintRepository([late_delivery])
    # Event payload is stale: the store already holds a result from another writer
    first = await _use_case(fake_llm, repo, clock).execute("c1", late_delivery.to_record())
    stale_payload = Complaint(id="c1", title="Late delivery", description="Order arrived 5 days late")
    second = await _use_case(fake_llm, repo, clock).execute("c1", stale_payload)

    assert first == TriggerOutcome.PERSISTED
    assert second == TriggerOutcome.SKIPPED
    assert len(repo.writes) == 1
