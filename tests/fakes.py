# tests/fakes.py

from __future__ import annotations

import asyncio
from typing import Any

from taskchat.core.ports import Completion


class FakeBackend:
    """
    Deterministic generation backend for unit tests.

    - Captures calls for assertions
    - Returns next_text, or raises `error` when set
    - Optional delay to create a suspension point
    """

    def __init__(self, next_text: str = "ok", *, error: Exception | None = None, delay: float = 0.0) -> None:
        self.next_text = next_text
        self.error = error
        self.delay = delay
        self.calls: list[dict[str, Any]] = []

    async def generate(
        self,
        prompt: str,
        *,
        model: str,
        max_tokens: int,
        temperature: float,
        top_p: float,
    ) -> str:
        self.calls.append(
            {
                "prompt": prompt,
                "model": model,
                "max_tokens": max_tokens,
                "temperature": temperature,
                "top_p": top_p,
            }
        )
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.next_text


class FakeClock:
    """Nanosecond clock that advances by `step` on every read (step=0 freezes it)."""

    def __init__(self, start: int = 1_000_000, step: int = 1) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> int:
        value = self.now
        self.now += self.step
        return value


class ExplodingCompleter:
    """Completer that fails outside the completion client's own safety net."""

    async def generate(self, content: str) -> Completion:
        raise RuntimeError("completer crashed")
