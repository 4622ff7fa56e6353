"""AnalyzePendingUseCase — re-run the creation trigger over unanalyzed complaints."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from complaint_ai.application.ports.complaint_repo import ComplaintRepository
from complaint_ai.application.use_cases.complaint_created import TriggerOutcome
from complaint_ai.domain.entities.complaint import Complaint

logger = logging.getLogger(__name__)

# (complaint_id, complaint) -> outcome; must not raise
OnCreated = Callable[[str, Complaint], Awaitable[TriggerOutcome]]


@dataclass
class SweepResult:
    complaint_id: str
    outcome: TriggerOutcome


class AnalyzePendingUseCase:
    """Operator-invoked sweep; complaints are handled one at a time.

    ``on_created`` owns its own unit of work per complaint, so a failed
    write for one complaint does not affect the others.
    """

    def __init__(self, on_created: OnCreated, complaint_repo: ComplaintRepository):
        self._on_created = on_created
        self._complaints = complaint_repo

    async def execute(self) -> list[SweepResult]:
        complaints = await self._complaints.get_unanalyzed()
        logger.info("Sweeping %d unanalyzed complaints", len(complaints))

        results = []
        for complaint in complaints:
            outcome = await self._on_created(complaint.id, complaint)
            results.append(SweepResult(complaint_id=complaint.id, outcome=outcome))

        persisted = sum(1 for r in results if r.outcome == TriggerOutcome.PERSISTED)
        logger.info("Sweep complete: %d/%d analyzed", persisted, len(results))
        return results
