"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from complaint_ai.adapters.llm.openai_adapter import OpenAIAdapter
from complaint_ai.adapters.persistence.database import async_session_factory, get_session
from complaint_ai.adapters.persistence.repositories import SqlComplaintRepository
from complaint_ai.application.ports.llm_port import LLMPort
from complaint_ai.application.use_cases.analyze_complaint import AnalyzeComplaintUseCase
from complaint_ai.application.use_cases.analyze_pending import AnalyzePendingUseCase
from complaint_ai.application.use_cases.reanalyze_complaint import ReanalyzeComplaintUseCase
from complaint_ai.infrastructure.triggers import ComplaintCreatedTrigger

# Singleton adapter (stateless apart from its lazily built client)
_llm_adapter = OpenAIAdapter()


def get_llm() -> LLMPort:
    return _llm_adapter


def get_complaint_repo(session: AsyncSession = Depends(get_session)) -> SqlComplaintRepository:
    return SqlComplaintRepository(session)


def get_analyzer(llm: LLMPort = Depends(get_llm)) -> AnalyzeComplaintUseCase:
    return AnalyzeComplaintUseCase(llm=llm)


def get_reanalyze_uc(
    analyzer: AnalyzeComplaintUseCase = Depends(get_analyzer),
    session: AsyncSession = Depends(get_session),
) -> ReanalyzeComplaintUseCase:
    return ReanalyzeComplaintUseCase(
        analyzer=analyzer,
        complaint_repo=SqlComplaintRepository(session),
    )


_created_trigger = ComplaintCreatedTrigger(llm=_llm_adapter, session_factory=async_session_factory)


def get_created_trigger() -> ComplaintCreatedTrigger:
    return _created_trigger


def get_analyze_pending_uc(
    session: AsyncSession = Depends(get_session),
    trigger: ComplaintCreatedTrigger = Depends(get_created_trigger),
) -> AnalyzePendingUseCase:
    # The request session only lists pending rows; each complaint gets its own
    return AnalyzePendingUseCase(
        on_created=trigger,
        complaint_repo=SqlComplaintRepository(session),
    )
