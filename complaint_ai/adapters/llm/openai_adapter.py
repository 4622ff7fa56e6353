"""OpenAI adapter — implements LLMPort using the OpenAI API."""

from __future__ import annotations

import logging

from openai import AsyncOpenAI

from complaint_ai.application.ports.llm_port import LLMPort
from complaint_ai.config import settings

logger = logging.getLogger(__name__)

PLACEHOLDER_KEYS = ("your-openai-api-key",)


class OpenAIAdapter(LLMPort):
    """OpenAI implementation of LLMPort.

    The client is built lazily so a missing key never fails at import or
    startup; the analyzer checks ``has_credentials`` before calling.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
    ):
        self._api_key = (api_key if api_key is not None else settings.openai_api_key) or ""
        self._model = model or settings.openai_model
        self._timeout = timeout or settings.openai_timeout
        self._client: AsyncOpenAI | None = None

    @property
    def model_name(self) -> str:
        return self._model

    def has_credentials(self) -> bool:
        key = self._api_key.strip()
        return bool(key) and not any(p in key for p in PLACEHOLDER_KEYS)

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            # Retries are the caller's decision, never the SDK's
            self._client = AsyncOpenAI(
                api_key=self._api_key, max_retries=0, timeout=self._timeout
            )
        return self._client

    async def generate(self, prompt: str) -> str:
        response = await self._get_client().chat.completions.create(
            model=self._model,
            messages=[{"role": "user", "content": prompt}],
            temperature=0.1,
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
