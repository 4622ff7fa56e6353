"""Complaint entity — a user-submitted issue awaiting AI enrichment."""

from dataclasses import dataclass
from datetime import datetime

from complaint_ai.domain.entities.ai_analysis import AIAnalysis


@dataclass
class Complaint:
    id: str | None
    title: str | None
    description: str | None
    submitted_by: str | None = None
    created_at: datetime | None = None
    ai_analysis: AIAnalysis | None = None

    def has_text(self) -> bool:
        """Both title and description are present and non-blank."""
        return all(
            isinstance(text, str) and text.strip()
            for text in (self.title, self.description)
        )

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "submittedBy": self.submitted_by,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "aiAnalysis": self.ai_analysis.to_record() if self.ai_analysis else None,
        }
