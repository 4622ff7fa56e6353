"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from complaint_ai.application.ports.complaint_repo import ComplaintRepository
from complaint_ai.application.ports.llm_port import LLMPort
from complaint_ai.domain.entities.ai_analysis import AIAnalysis
from complaint_ai.domain.entities.complaint import Complaint
from complaint_ai.domain.policies.idempotency import has_valid_analysis

VALID_RESPONSE = (
    '{"summary": "Order arrived five days late", "category": "Order Issue",'
    ' "emotion": "Frustrated", "priority": "Medium"}'
)

FIXED_NOW_MS = 1_760_000_000_000


# ─── In-memory fakes ────────────────────────────────────────────────


class FakeLLM(LLMPort):
    """Returns a canned response (or raises) and records every prompt."""

    def __init__(self, response: str = VALID_RESPONSE, error: Exception | None = None,
                 api_key: str = "sk-test"):
        self._response = response
        self._error = error
        self._api_key = api_key
        self.prompts: list[str] = []

    @property
    def model_name(self) -> str:
        return "fake-model"

    def has_credentials(self) -> bool:
        return bool(self._api_key.strip())

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self._error is not None:
            raise self._error
        return self._response

    @property
    def calls(self) -> int:
        return len(self.prompts)


class InMemoryComplaintRepository(ComplaintRepository):
    def __init__(self, complaints: list[Complaint] | None = None):
        self.complaints: dict[str, Complaint] = {}
        self.writes: list[tuple[str, AIAnalysis]] = []
        for c in complaints or []:
            self.complaints[c.id] = c

    async def save(self, complaint):
        complaint.id = complaint.id or f"c{len(self.complaints) + 1}"
        self.complaints[complaint.id] = complaint
        return complaint

    async def get_by_id(self, complaint_id):
        return self.complaints.get(complaint_id)

    async def get_all(self):
        return list(self.complaints.values())

    async def get_unanalyzed(self):
        return [c for c in self.complaints.values() if not has_valid_analysis(c)]

    async def save_analysis(self, complaint_id, analysis):
        complaint = self.complaints.get(complaint_id)
        if complaint is None or has_valid_analysis(complaint):
            return False
        complaint.ai_analysis = analysis
        self.writes.append((complaint_id, analysis))
        return True


# ─── Fixtures ───────────────────────────────────────────────────────


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def clock():
    return lambda: FIXED_NOW_MS


@pytest.fixture
def late_delivery():
    return Complaint(id="c1", title="Late delivery", description="Order arrived 5 days late")
