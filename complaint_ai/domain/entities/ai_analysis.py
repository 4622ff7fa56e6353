"""AI analysis result — output from LLM enrichment of a complaint."""

from __future__ import annotations

from dataclasses import dataclass, replace

from complaint_ai.domain.value_objects.enums import Category, Emotion, Priority


@dataclass(frozen=True)
class AIAnalysis:
    summary: str
    category: Category
    emotion: Emotion
    priority: Priority
    analyzed_at: int | None = None  # epoch ms, stamped at persistence time

    def stamped(self, analyzed_at: int) -> AIAnalysis:
        return replace(self, analyzed_at=analyzed_at)

    def to_record(self) -> dict:
        """Wire shape stored under a complaint's ``aiAnalysis`` field."""
        record = {
            "summary": self.summary,
            "category": self.category.value,
            "emotion": self.emotion.value,
            "priority": self.priority.value,
        }
        if self.analyzed_at is not None:
            record["analyzedAt"] = self.analyzed_at
        return record
