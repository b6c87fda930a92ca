# src/taskchat/llm/client.py

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import httpx
import openai
from openai import AsyncOpenAI

from ..core.errors import ErrorKind
from ..core.ports import Completion, GenerationBackend

logger = logging.getLogger(__name__)

SYSTEM_PREFIX = "You are a helpful AI assistant. User input: "
FALLBACK_TEXT = (
    "I apologize, but I encountered an error processing your request. Please try again."
)


@dataclass(frozen=True, slots=True)
class LLMConfig:
    model: str
    max_tokens: int
    temperature: float
    top_p: float

    @classmethod
    def from_settings(cls, settings: Any) -> LLMConfig:
        return cls(
            model=str(settings.llm_model),
            max_tokens=int(settings.llm_max_tokens),
            temperature=float(settings.llm_temperature),
            top_p=float(settings.llm_top_p),
        )


def _is_auth_error(exc: BaseException) -> bool:
    return isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError))


def _is_rate_limit_error(exc: BaseException) -> bool:
    return isinstance(exc, openai.RateLimitError)


def _is_connection_error(exc: BaseException) -> bool:
    return isinstance(exc, (openai.APIConnectionError, httpx.TransportError, TimeoutError))


def _describe_failure(exc: BaseException) -> str:
    if _is_auth_error(exc):
        return "authentication failed"
    if _is_rate_limit_error(exc):
        return "rate-limited"
    if _is_connection_error(exc):
        return "network/timeout error"
    if isinstance(exc, openai.NotFoundError):
        return "model not available (404)"
    return exc.__class__.__name__


class OpenAICompatibleBackend:
    """
    Generation backend speaking the OpenAI chat completions API
    (OpenAI, OpenRouter, vLLM, llama.cpp server, ...).

    - No secrets required at import time; the client is built in __init__.
    - Automatic retries are disabled: a failed call falls back immediately.
    """

    def __init__(self, settings: Any) -> None:
        api_key = getattr(settings, "llm_api_key", None)
        base_url = getattr(settings, "llm_base_url", "") or ""

        if not api_key or not str(api_key).strip():
            raise RuntimeError("LLM API key is not set. Set TASKCHAT_LLM_API_KEY in your .env.")
        if not base_url.strip():
            raise RuntimeError("LLM base URL is not set. Set TASKCHAT_LLM_BASE_URL in your .env.")

        read_s = float(getattr(settings, "llm_timeout_seconds", 30.0))
        connect_s = float(getattr(settings, "llm_connect_timeout_seconds", 5.0))

        self._headers: dict[str, str] = dict(getattr(settings, "extra_headers", {}) or {})
        self._client = AsyncOpenAI(
            base_url=str(base_url),
            api_key=str(api_key),
            timeout=httpx.Timeout(connect=connect_s, read=read_s, write=10.0, pool=connect_s),
            max_retries=0,
        )

    async def generate(
        self,
        prompt: str,
        *,
        model: str,
        max_tokens: int,
        temperature: float,
        top_p: float,
    ) -> str:
        response = await self._client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=max_tokens,
            temperature=temperature,
            top_p=top_p,
            extra_headers=self._headers or None,
        )
        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError):
            content = None
        if not content:
            raise RuntimeError(f"Model returned no content: {model}")
        return content


class CompletionClient:
    """
    Wraps the outbound generation call.

    Adds the fixed system prefix and the process-wide sampling parameters. Any
    backend failure (exception, empty output, timeout) becomes the fallback text;
    the returned Completion records which of the two happened.
    """

    def __init__(
        self,
        backend: GenerationBackend,
        config: LLMConfig,
        *,
        timeout_seconds: float | None = 30.0,
    ) -> None:
        self._backend = backend
        self._config = config
        self._timeout = timeout_seconds

    @property
    def config(self) -> LLMConfig:
        return self._config

    async def generate(self, content: str) -> Completion:
        prompt = SYSTEM_PREFIX + content
        cfg = self._config
        try:
            text = await asyncio.wait_for(
                self._backend.generate(
                    prompt,
                    model=cfg.model,
                    max_tokens=cfg.max_tokens,
                    temperature=cfg.temperature,
                    top_p=cfg.top_p,
                ),
                timeout=self._timeout,
            )
        except Exception as e:
            logger.warning("LLM: %s on model=%s, using fallback", _describe_failure(e), cfg.model)
            logger.debug("LLM failure detail", exc_info=True)
            return Completion(text=FALLBACK_TEXT, error_kind=ErrorKind.UPSTREAM)

        logger.debug("LLM: completed with model=%s len=%d", cfg.model, len(text))
        return Completion(text=text)
