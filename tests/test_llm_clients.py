from __future__ import annotations

import json

import httpx
import pytest

from roadmap_ai.agents.llm.base import LLMClient
from roadmap_ai.agents.llm.client import get_llm_client
from roadmap_ai.agents.llm.groq import GroqOpenAIClient
from roadmap_ai.agents.llm.ollama import OllamaOpenAIClient
from roadmap_ai.errors import ErrorKind, classify
from roadmap_ai.settings import Settings


class _RecordingLLM(LLMClient):
    def __init__(self) -> None:
        self.seen: list[tuple[str, str]] = []

    async def generate_text(self, *, system: str, user: str, temperature: float | None = None) -> str:
        self.seen.append((system, user))
        return "{}"


def _ollama(handler) -> OllamaOpenAIClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OllamaOpenAIClient("http://ollama.test/v1/", "llama3.1", http_client=http)


@pytest.mark.asyncio
async def test_generate_renders_template_with_literal_braces() -> None:
    llm = _RecordingLLM()

    await llm.generate('Topic "{topic}" -> start with {{ and end with }}', {"topic": "Docker"}, system="sys")

    assert llm.seen == [("sys", 'Topic "Docker" -> start with { and end with }')]


@pytest.mark.asyncio
async def test_ollama_posts_chat_completion() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": '{"ok": true}'}}]})

    text = await _ollama(handler).generate_text(system="s", user="u", temperature=0.1)

    assert text == '{"ok": true}'
    assert seen["url"] == "http://ollama.test/v1/chat/completions"
    assert seen["body"]["model"] == "llama3.1"
    assert seen["body"]["temperature"] == 0.1
    assert seen["body"]["messages"][1] == {"role": "user", "content": "u"}


@pytest.mark.asyncio
async def test_ollama_rate_limit_is_classified() -> None:
    client = _ollama(lambda request: httpx.Response(429, json={"error": "slow down"}))

    with pytest.raises(httpx.HTTPStatusError) as excinfo:
        await client.generate_text(system="s", user="u")

    assert classify(excinfo.value).kind is ErrorKind.RATE_LIMITED


@pytest.mark.asyncio
async def test_ollama_unexpected_shape_is_generation_failure() -> None:
    client = _ollama(lambda request: httpx.Response(200, json={"choices": []}))

    with pytest.raises(RuntimeError) as excinfo:
        await client.generate_text(system="s", user="u")

    assert classify(excinfo.value).kind is ErrorKind.GENERATION_FAILED


@pytest.mark.asyncio
async def test_groq_without_key_is_a_config_error() -> None:
    client = GroqOpenAIClient(api_key=None, base_url="https://api.groq.com/openai/v1", model="m")

    with pytest.raises(RuntimeError) as excinfo:
        await client.generate_text(system="s", user="u")

    classified = classify(excinfo.value)
    assert classified.kind is ErrorKind.CONFIG
    assert classified.retryable is False


def test_provider_is_picked_from_settings() -> None:
    assert isinstance(get_llm_client(Settings(LLM_PROVIDER="ollama")), OllamaOpenAIClient)
    assert isinstance(get_llm_client(Settings(LLM_PROVIDER="groq", GROQ_API_KEY="gsk_test")), GroqOpenAIClient)
