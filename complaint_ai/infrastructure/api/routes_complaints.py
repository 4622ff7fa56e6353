"""Complaint endpoints — intake, listing, detail, pending sweep."""

from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from complaint_ai.adapters.persistence.database import get_session
from complaint_ai.application.ports.complaint_repo import ComplaintRepository
from complaint_ai.application.use_cases.analyze_pending import AnalyzePendingUseCase
from complaint_ai.application.use_cases.complaint_created import TriggerOutcome
from complaint_ai.domain.entities.complaint import Complaint
from complaint_ai.infrastructure.api.dependencies import (
    get_analyze_pending_uc,
    get_complaint_repo,
    get_created_trigger,
)
from complaint_ai.infrastructure.triggers import ComplaintCreatedTrigger

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/complaints", tags=["complaints"])


class ComplaintCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    description: str = Field(min_length=1)
    submitted_by: str | None = Field(default=None, alias="submittedBy")

    model_config = {"populate_by_name": True, "str_strip_whitespace": True}


@router.post("", status_code=201)
async def create_complaint(
    payload: ComplaintCreateRequest,
    background_tasks: BackgroundTasks,
    repo: ComplaintRepository = Depends(get_complaint_repo),
    session: AsyncSession = Depends(get_session),
    trigger: ComplaintCreatedTrigger = Depends(get_created_trigger),
):
    """Store a complaint; analysis runs after the response is sent."""
    complaint = await repo.save(
        Complaint(
            id=None,
            title=payload.title,
            description=payload.description,
            submitted_by=payload.submitted_by,
        )
    )
    await session.commit()

    record = complaint.to_record()
    background_tasks.add_task(trigger, complaint.id, record)
    return record


@router.get("")
async def list_complaints(
    pending: bool = False,
    repo: ComplaintRepository = Depends(get_complaint_repo),
):
    """List complaints, newest first, or only those still awaiting analysis."""
    complaints = await (repo.get_unanalyzed() if pending else repo.get_all())
    return {
        "total": len(complaints),
        "complaints": [c.to_record() for c in complaints],
    }


@router.post("/analyze-pending")
async def analyze_pending(
    sweep_uc: AnalyzePendingUseCase = Depends(get_analyze_pending_uc),
):
    """Run the creation trigger over every complaint without an analysis."""
    results = await sweep_uc.execute()

    counts = {outcome.value: 0 for outcome in TriggerOutcome}
    for r in results:
        counts[r.outcome.value] += 1

    return {
        "status": "ok",
        "total_processed": len(results),
        **counts,
        "results": [
            {"complaint_id": r.complaint_id, "outcome": r.outcome.value}
            for r in results
        ],
    }


@router.get("/{complaint_id}")
async def get_complaint(
    complaint_id: str,
    repo: ComplaintRepository = Depends(get_complaint_repo),
):
    complaint = await repo.get_by_id(complaint_id)
    if not complaint:
        raise HTTPException(status_code=404, detail="Complaint not found")
    return complaint.to_record()
