# src/taskchat/llm/offline.py

from __future__ import annotations

from .client import SYSTEM_PREFIX


class OfflineBackend:
    """
    Offline deterministic backend used for demos when no external API is configured.
    Reflects the user input back, no external calls.
    """

    async def generate(
        self,
        prompt: str,
        *,
        model: str,
        max_tokens: int,
        temperature: float,
        top_p: float,
    ) -> str:
        user_text = prompt.removeprefix(SYSTEM_PREFIX)
        return (
            "Offline demo mode: no external LLM is configured.\n"
            "Set TASKCHAT_LLM_API_KEY (and TASKCHAT_LLM_MODEL) to enable real responses.\n\n"
            f"You said: {user_text}"
        )
