"""ComplaintCreatedUseCase — automatic analysis when a complaint is stored.

There is no caller to report to, so this handler absorbs every failure:
it logs and returns a ``TriggerOutcome`` instead of raising.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum

from complaint_ai.application.ports.complaint_repo import ComplaintRepository
from complaint_ai.application.use_cases.analyze_complaint import AnalyzeComplaintUseCase
from complaint_ai.application.use_cases.save_analysis import Clock, now_ms, save_analysis
from complaint_ai.domain.entities.complaint import Complaint
from complaint_ai.domain.policies.idempotency import should_analyze

logger = logging.getLogger(__name__)


class TriggerOutcome(str, Enum):
    SKIPPED = "skipped"
    DROPPED = "dropped"
    PERSISTED = "persisted"


def _as_complaint(complaint_id: str, payload: Complaint | Mapping | None) -> Complaint:
    if isinstance(payload, Complaint):
        return payload
    payload = payload or {}
    return Complaint(
        id=complaint_id,
        title=payload.get("title"),
        description=payload.get("description"),
    )


class ComplaintCreatedUseCase:
    """Runs guard → analyze → persist for a freshly created complaint."""

    def __init__(
        self,
        analyzer: AnalyzeComplaintUseCase,
        complaint_repo: ComplaintRepository,
        clock: Clock = now_ms,
    ):
        self._analyzer = analyzer
        self._complaints = complaint_repo
        self._clock = clock

    async def execute(
        self, complaint_id: str, payload: Complaint | Mapping | None
    ) -> TriggerOutcome:
        logger.info("New complaint detected: %s", complaint_id)
        try:
            return await self._run(complaint_id, payload)
        except Exception:
            logger.exception("Trigger failed for complaint %s", complaint_id)
            return TriggerOutcome.DROPPED

    async def _run(
        self, complaint_id: str, payload: Complaint | Mapping | None
    ) -> TriggerOutcome:
        complaint = _as_complaint(complaint_id, payload)
        if not complaint.has_text():
            logger.warning("Complaint %s is missing title/description", complaint_id)
            return TriggerOutcome.DROPPED

        if not should_analyze(payload):
            logger.info("Complaint %s already analyzed, skipping", complaint_id)
            return TriggerOutcome.SKIPPED

        outcome = await self._analyzer.execute(complaint.title, complaint.description)
        if not outcome.ok:
            logger.warning(
                "AI unavailable for complaint %s (%s): %s",
                complaint_id, outcome.reason.value, outcome.detail,
            )
            return TriggerOutcome.DROPPED

        saved = await save_analysis(
            self._complaints, complaint_id, outcome.analysis, self._clock
        )
        if saved is None:
            logger.info(
                "Complaint %s was analyzed concurrently, keeping existing result",
                complaint_id,
            )
            return TriggerOutcome.SKIPPED

        logger.info("Auto analysis saved for complaint %s", complaint_id)
        return TriggerOutcome.PERSISTED
