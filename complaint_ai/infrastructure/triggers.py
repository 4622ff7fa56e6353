"""Creation trigger dispatch — runs after the intake request has committed.

Background tasks outlive the request's database session, so each trigger
firing opens and closes its own session.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from complaint_ai.adapters.persistence.repositories import SqlComplaintRepository
from complaint_ai.application.ports.llm_port import LLMPort
from complaint_ai.application.use_cases.analyze_complaint import AnalyzeComplaintUseCase
from complaint_ai.application.use_cases.complaint_created import (
    ComplaintCreatedUseCase,
    TriggerOutcome,
)
from complaint_ai.domain.entities.complaint import Complaint

logger = logging.getLogger(__name__)


class ComplaintCreatedTrigger:
    def __init__(self, llm: LLMPort, session_factory: async_sessionmaker[AsyncSession]):
        self._llm = llm
        self._session_factory = session_factory

    async def __call__(
        self, complaint_id: str, payload: Complaint | Mapping | None
    ) -> TriggerOutcome:
        try:
            async with self._session_factory() as session:
                use_case = ComplaintCreatedUseCase(
                    analyzer=AnalyzeComplaintUseCase(llm=self._llm),
                    complaint_repo=SqlComplaintRepository(session),
                )
                outcome = await use_case.execute(complaint_id, payload)
                if outcome == TriggerOutcome.PERSISTED:
                    await session.commit()
                return outcome
        except Exception:
            logger.exception("Could not complete trigger for complaint %s", complaint_id)
            return TriggerOutcome.DROPPED
