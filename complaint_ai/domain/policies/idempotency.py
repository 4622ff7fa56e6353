"""Idempotency guard — decides whether a complaint still needs analysis.

The check is advisory: it reads the current state and does not lock it.
Persistence adds a conditional write on top (see ComplaintRepository).
"""

from __future__ import annotations

from collections.abc import Mapping

from complaint_ai.domain.entities.complaint import Complaint


def _summary_of(complaint: Complaint | Mapping | None) -> object:
    if complaint is None:
        return None
    if isinstance(complaint, Complaint):
        return complaint.ai_analysis.summary if complaint.ai_analysis else None

    # Raw event payloads arrive as mappings in the stored wire shape
    analysis = complaint.get("aiAnalysis")
    if isinstance(analysis, Mapping):
        return analysis.get("summary")
    return None


def has_valid_analysis(complaint: Complaint | Mapping | None) -> bool:
    summary = _summary_of(complaint)
    return isinstance(summary, str) and bool(summary.strip())


def should_analyze(complaint: Complaint | Mapping | None) -> bool:
    """Return False (skip) iff the complaint already carries a non-empty summary."""
    return not has_valid_analysis(complaint)
