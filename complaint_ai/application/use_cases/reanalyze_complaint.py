"""ReanalyzeComplaintUseCase — on-demand analysis requested by a client.

Unlike the creation trigger, this path has a caller waiting for a result,
so every failure is raised as a ``CallableError``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from complaint_ai.application.errors import CallableError, ErrorCode, FailureReason
from complaint_ai.application.ports.complaint_repo import ComplaintRepository
from complaint_ai.application.use_cases.analyze_complaint import AnalyzeComplaintUseCase
from complaint_ai.application.use_cases.save_analysis import Clock, now_ms, save_analysis
from complaint_ai.domain.entities.ai_analysis import AIAnalysis
from complaint_ai.domain.policies.idempotency import should_analyze

logger = logging.getLogger(__name__)

ANALYSIS_FAILED_MESSAGE = (
    "Failed to analyze complaint. The API key may be invalid, rate limit "
    "exceeded, or there was an error processing the response."
)
RATE_LIMITED_MESSAGE = (
    "AI analysis is temporarily unavailable: the model provider's rate limit "
    "or quota was exceeded. Please try again later."
)


@dataclass
class ReanalyzeResult:
    success: bool
    ai_analysis: AIAnalysis
    cached: bool = False

    def to_dict(self) -> dict:
        data = {"success": self.success, "aiAnalysis": self.ai_analysis.to_record()}
        if self.cached:
            data["cached"] = True
        return data


class ReanalyzeComplaintUseCase:
    """Runs guard → analyze → persist for one complaint id, surfacing errors."""

    def __init__(
        self,
        analyzer: AnalyzeComplaintUseCase,
        complaint_repo: ComplaintRepository,
        clock: Clock = now_ms,
    ):
        self._analyzer = analyzer
        self._complaints = complaint_repo
        self._clock = clock

    async def execute(self, complaint_id: str | None) -> ReanalyzeResult:
        logger.info("Re-analyze request for complaint %r", complaint_id)

        if not complaint_id or not str(complaint_id).strip():
            raise CallableError(ErrorCode.INVALID_ARGUMENT, "complaintId is required")

        complaint = await self._complaints.get_by_id(complaint_id)
        if complaint is None:
            raise CallableError(ErrorCode.NOT_FOUND, "Complaint not found")

        # Read-only fast path: no model call, no write
        if not should_analyze(complaint):
            return ReanalyzeResult(success=True, ai_analysis=complaint.ai_analysis, cached=True)

        if not complaint.has_text():
            raise CallableError(
                ErrorCode.INVALID_ARGUMENT, "Complaint missing title or description"
            )

        outcome = await self._analyzer.execute(complaint.title, complaint.description)
        if not outcome.ok:
            logger.error(
                "Analysis failed for complaint %s (%s): %s",
                complaint_id, outcome.reason.value, outcome.detail,
            )
            if outcome.reason == FailureReason.RATE_LIMITED:
                raise CallableError(ErrorCode.RESOURCE_EXHAUSTED, RATE_LIMITED_MESSAGE)
            raise CallableError(ErrorCode.INTERNAL, ANALYSIS_FAILED_MESSAGE)

        saved = await save_analysis(
            self._complaints, complaint_id, outcome.analysis, self._clock
        )
        if saved is None:
            # A concurrent writer won; report its result instead of ours
            current = await self._complaints.get_by_id(complaint_id)
            if current is None or current.ai_analysis is None:
                raise CallableError(ErrorCode.INTERNAL, ANALYSIS_FAILED_MESSAGE)
            return ReanalyzeResult(success=True, ai_analysis=current.ai_analysis, cached=True)

        logger.info("Re-analysis saved for complaint %s", complaint_id)
        return ReanalyzeResult(success=True, ai_analysis=saved)
