"""Tests for OpenAIAdapter — no network; the SDK client is stubbed."""

from types import SimpleNamespace

import pytest

from complaint_ai.adapters.llm.openai_adapter import OpenAIAdapter


class StubCompletions:
    def __init__(self, content):
        self._content = content
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self._content is None:
            return SimpleNamespace(choices=[])
        message = SimpleNamespace(content=self._content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _adapter_with(content):
    adapter = OpenAIAdapter(api_key="sk-test", model="test-model")
    completions = StubCompletions(content)
    adapter._client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return adapter, completions


@pytest.mark.parametrize(
    "key, expected",
    [("sk-real", True), ("", False), ("   ", False), ("your-openai-api-key", False)],
)
def test_has_credentials(key, expected):
    assert OpenAIAdapter(api_key=key).has_credentials() is expected


def test_model_name():
    assert OpenAIAdapter(api_key="k", model="gpt-test").model_name == "gpt-test"


@pytest.mark.asyncio
async def test_generate_sends_single_user_prompt():
    adapter, completions = _adapter_with('{"summary": "s"}')
    text = await adapter.generate("analyze this")

    assert text == '{"summary": "s"}'
    assert len(completions.calls) == 1
    call = completions.calls[0]
    assert call["model"] == "test-model"
    assert call["messages"] == [{"role": "user", "content": "analyze this"}]


@pytest.mark.asyncio
async def test_generate_without_choices_returns_empty():
    adapter, _ = _adapter_with(None)
    assert await adapter.generate("p") == ""


@pytest.mark.asyncio
async def test_generate_with_null_content_returns_empty():
    adapter, _ = _adapter_with("")
    assert await adapter.generate("p") == ""


def test_client_is_built_lazily_without_retries():
    adapter = OpenAIAdapter(api_key="sk-test")
    assert adapter._client is None
    client = adapter._get_client()
    assert client.max_retries == 0
    assert adapter._get_client() is client
