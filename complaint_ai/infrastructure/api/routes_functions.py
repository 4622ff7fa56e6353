"""Callable functions — client-invoked procedures with typed errors.

Errors are rendered as ``{"error": {"status": <code>, "message": ...}}``
by ``callable_error_handler`` (registered in the app factory).
"""

from __future__ import annotations

import json

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from complaint_ai.adapters.persistence.database import get_session
from complaint_ai.application.errors import CallableError, ErrorCode
from complaint_ai.application.use_cases.reanalyze_complaint import ReanalyzeComplaintUseCase
from complaint_ai.infrastructure.api.dependencies import get_reanalyze_uc

router = APIRouter(prefix="/functions", tags=["functions"])

HTTP_STATUS_BY_CODE = {
    ErrorCode.INVALID_ARGUMENT: 400,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.RESOURCE_EXHAUSTED: 429,
    ErrorCode.INTERNAL: 500,
}


async def callable_error_handler(request: Request, exc: CallableError) -> JSONResponse:
    return JSONResponse(
        status_code=HTTP_STATUS_BY_CODE[exc.code],
        content={"error": {"status": exc.code.value, "message": exc.message}},
    )


async def _read_payload(request: Request) -> dict:
    """Accept both ``{"complaintId": ...}`` and the ``{"data": {...}}`` envelope."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise CallableError(ErrorCode.INVALID_ARGUMENT, "Request body must be valid JSON")
    if not isinstance(body, dict):
        raise CallableError(ErrorCode.INVALID_ARGUMENT, "Request body must be a JSON object")
    data = body.get("data")
    return data if isinstance(data, dict) else body


@router.post("/reanalyzeComplaint")
async def reanalyze_complaint(
    request: Request,
    reanalyze_uc: ReanalyzeComplaintUseCase = Depends(get_reanalyze_uc),
    session: AsyncSession = Depends(get_session),
):
    """Analyze one complaint on demand (cached if already analyzed)."""
    complaint_id = (await _read_payload(request)).get("complaintId")
    if complaint_id is not None and not isinstance(complaint_id, str):
        raise CallableError(ErrorCode.INVALID_ARGUMENT, "complaintId must be a string")

    result = await reanalyze_uc.execute(complaint_id)
    if not result.cached:
        await session.commit()
    return result.to_dict()
