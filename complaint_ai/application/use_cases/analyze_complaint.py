"""AnalyzeComplaintUseCase — enrich a single complaint via LLM.

This is the failure-absorption boundary of the pipeline: every problem
(missing credential, provider error, malformed output) comes back as a
failed ``AnalysisOutcome``. Nothing raises past ``execute``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from complaint_ai.application.errors import FailureReason
from complaint_ai.application.ports.llm_port import LLMPort
from complaint_ai.application.response_parser import extract_json
from complaint_ai.domain.entities.ai_analysis import AIAnalysis
from complaint_ai.domain.value_objects.enums import Category, Emotion, Priority

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("summary", "category", "emotion", "priority")

PROMPT_TEMPLATE = """\
You are an AI assistant helping customer support managers.

Analyze the following complaint and respond ONLY in valid JSON.

Choose category from:
{categories}

Choose emotion from:
{emotions}

Choose priority from:
{priorities}

Complaint:
Title: {title}
Description: {description}

Respond ONLY with JSON in this format:
{{
  "summary": "Brief summary of the complaint",
  "category": "One of the categories above",
  "emotion": "One of the emotions above",
  "priority": "One of the priorities above"
}}
"""


def build_prompt(title: str, description: str) -> str:
    return PROMPT_TEMPLATE.format(
        categories=", ".join(c.value for c in Category),
        emotions=", ".join(e.value for e in Emotion),
        priorities=", ".join(p.value for p in Priority),
        title=title,
        description=description,
    )


@dataclass(frozen=True)
class AnalysisOutcome:
    """Tagged result: either ``analysis`` is set or ``reason`` is."""

    analysis: AIAnalysis | None = None
    reason: FailureReason | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.analysis is not None

    @classmethod
    def success(cls, analysis: AIAnalysis) -> AnalysisOutcome:
        return cls(analysis=analysis)

    @classmethod
    def failure(cls, reason: FailureReason, detail: str) -> AnalysisOutcome:
        return cls(reason=reason, detail=detail)


def _status_of(exc: BaseException) -> int | None:
    for attr in ("status_code", "status", "code"):
        value = getattr(exc, attr, None)
        if isinstance(value, int):
            return value
    return None


def classify_provider_error(exc: BaseException) -> FailureReason:
    """Heuristically map a provider exception to a FailureReason.

    Uses the HTTP status when the SDK exposes one, otherwise the message.
    """
    status = _status_of(exc)
    message = str(exc).lower()

    if status == 429 or "429" in message or "rate limit" in message or "quota" in message:
        return FailureReason.RATE_LIMITED
    if status in (401, 403) or "api key" in message or "api_key" in message:
        return FailureReason.AUTHENTICATION
    if status == 400:
        return FailureReason.BAD_REQUEST
    return FailureReason.TRANSPORT


def map_to_analysis(parsed: dict) -> AIAnalysis | None:
    """Validate the four-key shape; None if any field is missing or unusable."""
    if not all(parsed.get(key) for key in REQUIRED_KEYS):
        return None

    summary = parsed["summary"]
    if not isinstance(summary, str) or not summary.strip():
        return None

    emotion = Emotion.from_label(parsed["emotion"])
    priority = Priority.from_label(parsed["priority"])
    if emotion is None or priority is None:
        return None

    # Unlisted categories are common drift; "Other" is the catch-all
    category = Category.from_label(parsed["category"]) or Category.OTHER

    return AIAnalysis(
        summary=summary.strip(),
        category=category,
        emotion=emotion,
        priority=priority,
    )


class AnalyzeComplaintUseCase:
    """Orchestrates LLM analysis of a single complaint."""

    def __init__(self, llm: LLMPort):
        self._llm = llm

    async def execute(self, title: str, description: str) -> AnalysisOutcome:
        if not self._llm.has_credentials():
            logger.error("LLM API key is not configured; skipping analysis")
            return AnalysisOutcome.failure(
                FailureReason.CONFIGURATION, "LLM API key is not configured"
            )

        prompt = build_prompt(title, description)
        logger.info(
            "Calling %s for complaint %r (prompt length %d)",
            self._llm.model_name, title, len(prompt),
        )

        try:
            raw_text = await self._llm.generate(prompt)
        except Exception as e:
            reason = classify_provider_error(e)
            logger.exception("LLM call failed (%s)", reason.value)
            return AnalysisOutcome.failure(reason, f"{type(e).__name__}: {e}")

        if not raw_text or not raw_text.strip():
            logger.warning("LLM returned an empty response")
            return AnalysisOutcome.failure(
                FailureReason.EMPTY_RESPONSE, "Model returned an empty response"
            )

        logger.debug("LLM raw output: %s", raw_text)

        parsed = extract_json(raw_text)
        if parsed is None:
            return AnalysisOutcome.failure(
                FailureReason.UNPARSABLE_RESPONSE, "Model returned invalid JSON"
            )

        analysis = map_to_analysis(parsed)
        if analysis is None:
            logger.warning("LLM response missing required fields: %s", parsed)
            return AnalysisOutcome.failure(
                FailureReason.INCOMPLETE_RESPONSE,
                "Model response missing required fields",
            )

        logger.info(
            "Analysis ok: category=%s, emotion=%s, priority=%s",
            analysis.category.value, analysis.emotion.value, analysis.priority.value,
        )
        return AnalysisOutcome.success(analysis)
