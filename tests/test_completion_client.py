# tests/test_completion_client.py

from __future__ import annotations

from types import SimpleNamespace

import pytest

from taskchat.core.errors import ErrorKind
from taskchat.llm.client import (
    FALLBACK_TEXT,
    SYSTEM_PREFIX,
    CompletionClient,
    LLMConfig,
    OpenAICompatibleBackend,
)
from taskchat.llm.offline import OfflineBackend

from .fakes import FakeBackend


@pytest.mark.asyncio
async def test_prefix_and_fixed_parameters_are_sent(llm_config: LLMConfig) -> None:
    backend = FakeBackend(next_text="answer")
    client = CompletionClient(backend, llm_config)

    result = await client.generate("what is 2+2?")

    assert result.text == "answer"
    assert not result.is_fallback
    assert backend.calls == [
        {
            "prompt": "You are a helpful AI assistant. User input: what is 2+2?",
            "model": "test-model",
            "max_tokens": 64,
            "temperature": 0.5,
            "top_p": 0.8,
        }
    ]


@pytest.mark.asyncio
async def test_backend_failure_becomes_fallback_text(llm_config: LLMConfig) -> None:
    client = CompletionClient(FakeBackend(error=RuntimeError("503")), llm_config)

    result = await client.generate("hello")

    assert result.text == FALLBACK_TEXT
    assert result.error_kind is ErrorKind.UPSTREAM


@pytest.mark.asyncio
async def test_slow_backend_times_out_into_fallback(llm_config: LLMConfig) -> None:
    client = CompletionClient(FakeBackend(delay=1.0), llm_config, timeout_seconds=0.05)

    result = await client.generate("hello")

    assert result.text == FALLBACK_TEXT
    assert result.is_fallback


@pytest.mark.asyncio
async def test_unreachable_openai_backend_falls_back(settings: SimpleNamespace, llm_config: LLMConfig) -> None:
    settings.llm_api_key = "sk-test"
    # Port 9 (discard) on loopback: connection refused.
    backend = OpenAICompatibleBackend(settings)
    client = CompletionClient(backend, llm_config, timeout_seconds=5.0)

    result = await client.generate("hello")

    assert result.text == FALLBACK_TEXT
    assert result.error_kind is ErrorKind.UPSTREAM


def test_openai_backend_requires_api_key(settings: SimpleNamespace) -> None:
    settings.llm_api_key = "  "
    with pytest.raises(RuntimeError, match="API key"):
        OpenAICompatibleBackend(settings)


def test_llm_config_from_settings(settings: SimpleNamespace) -> None:
    cfg = LLMConfig.from_settings(settings)
    assert cfg == LLMConfig(model="test-model", max_tokens=64, temperature=0.5, top_p=0.8)


@pytest.mark.asyncio
async def test_offline_backend_reflects_user_input() -> None:
    text = await OfflineBackend().generate(
        SYSTEM_PREFIX + "ping", model="m", max_tokens=1, temperature=0.0, top_p=1.0
    )
    assert "Offline demo mode" in text
    assert text.endswith("You said: ping")
