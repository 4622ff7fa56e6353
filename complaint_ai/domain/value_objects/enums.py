"""Domain enums — pure Python, no external dependencies."""

from __future__ import annotations

from enum import Enum


def _normalize_label(value: str) -> str:
    """Lowercase and drop whitespace so "Harassment / Misbehavior" matches."""
    return "".join(value.split()).lower()


class _LabelEnum(str, Enum):
    @classmethod
    def from_label(cls, value: object):
        """Match a model-produced label against the enum values, or None."""
        if not isinstance(value, str) or not value.strip():
            return None
        key = _normalize_label(value)
        for member in cls:
            if _normalize_label(member.value) == key:
                return member
        return None


class Category(_LabelEnum):
    ORDER_ISSUE = "Order Issue"
    PAYMENT_ISSUE = "Payment Issue"
    SERVICE_QUALITY = "Service Quality"
    TECHNICAL_PROBLEM = "Technical Problem"
    HARASSMENT = "Harassment/Misbehavior"
    REFUND = "Refund/Cancellation"
    OTHER = "Other"


class Emotion(_LabelEnum):
    CALM = "Calm"
    FRUSTRATED = "Frustrated"
    ANGRY = "Angry"
    DISTRESSED = "Distressed"


class Priority(_LabelEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"
