"""Shared persistence step for the trigger and callable paths."""

from __future__ import annotations

import time
from collections.abc import Callable

from complaint_ai.application.ports.complaint_repo import ComplaintRepository
from complaint_ai.domain.entities.ai_analysis import AIAnalysis

Clock = Callable[[], int]


def now_ms() -> int:
    return int(time.time() * 1000)


async def save_analysis(
    repo: ComplaintRepository,
    complaint_id: str,
    analysis: AIAnalysis,
    clock: Clock = now_ms,
) -> AIAnalysis | None:
    """Stamp ``analyzed_at`` and write it. None if a valid analysis already existed."""
    stamped = analysis.stamped(clock())
    written = await repo.save_analysis(complaint_id, stamped)
    return stamped if written else None
