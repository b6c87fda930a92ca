# src/taskchat/chat/chat_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class MessageRole(StrEnum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True, slots=True)
class ChatMessage:
    role: MessageRole
    content: str
    timestamp: int  # nanoseconds; also the store key

    @property
    def key(self) -> str:
        return str(self.timestamp)

    def to_dict(self) -> dict[str, Any]:
        return {"role": self.role.value, "content": self.content, "timestamp": self.timestamp}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ChatMessage:
        return cls(
            role=MessageRole(str(data.get("role", "user"))),
            content=str(data.get("content", "")),
            timestamp=int(data["timestamp"]),
        )
