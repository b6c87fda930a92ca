# src/taskchat/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps LLM providers swappable and makes testing easier.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from .errors import ErrorKind

Clock = Callable[[], int]
# Returns nanoseconds (time.time_ns-compatible).


class GenerationBackend(Protocol):
    """Remote text generation: prompt in, completion text out. May raise."""

    async def generate(
            self,
            prompt: str,
            *,
            model: str,
            max_tokens: int,
            temperature: float,
            top_p: float,
    ) -> str: ...


@dataclass(frozen=True, slots=True)
class Completion:
    text: str
    error_kind: ErrorKind | None = None

    @property
    def is_fallback(self) -> bool:
        return self.error_kind is not None


class Completer(Protocol):
    """What the service needs from the completion client."""

    async def generate(self, content: str) -> Completion: ...
