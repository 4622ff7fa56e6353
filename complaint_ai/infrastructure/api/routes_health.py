"""Health check endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from complaint_ai.adapters.persistence.database import get_session
from complaint_ai.application.ports.llm_port import LLMPort
from complaint_ai.infrastructure.api.dependencies import get_llm

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(
    session: AsyncSession = Depends(get_session),
    llm: LLMPort = Depends(get_llm),
):
    """Check API, database connectivity and LLM configuration."""
    try:
        result = await session.execute(text("SELECT 1"))
        result.scalar()
        db_status = "connected"
    except Exception as e:
        db_status = f"error: {e}"

    return {
        "status": "ok" if db_status == "connected" else "degraded",
        "database": db_status,
        "llm": "configured" if llm.has_credentials() else "missing-credential",
        "service": "Complaint AI Analyzer",
    }
