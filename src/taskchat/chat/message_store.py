# src/taskchat/chat/message_store.py

from __future__ import annotations

import logging
import time
from collections.abc import Iterable

from ..core.ports import Clock
from .chat_models import ChatMessage, MessageRole

logger = logging.getLogger(__name__)


class MessageStore:
    """
    In-memory chat transcript keyed by message timestamp (as text).

    - put() is last-write-wins under a key; the key is always str(message.timestamp)
    - append() allocates strictly increasing timestamps, so two messages created
      within one clock tick never share a key
    - no deletion and no size bound
    """

    def __init__(
        self,
        entries: Iterable[tuple[str, ChatMessage]] = (),
        *,
        clock: Clock = time.time_ns,
    ) -> None:
        self._clock = clock
        self._messages: dict[str, ChatMessage] = {}
        self._last_ts = 0
        for key, message in entries:
            self.put(key, message)
        logger.info("MessageStore ready total=%d", len(self._messages))

    def __len__(self) -> int:
        return len(self._messages)

    def _next_timestamp(self) -> int:
        ts = int(self._clock())
        if ts <= self._last_ts:
            ts = self._last_ts + 1
        self._last_ts = ts
        return ts

    def append(self, role: MessageRole, content: str) -> ChatMessage:
        message = ChatMessage(role=role, content=content, timestamp=self._next_timestamp())
        self.put(message.key, message)
        return message

    def put(self, key: str, message: ChatMessage) -> None:
        """Insert or overwrite under `key`, which must be the message's own key."""
        if key != message.key:
            raise ValueError(f"key {key!r} does not match message timestamp {message.timestamp}")
        self._messages[key] = message
        self._last_ts = max(self._last_ts, message.timestamp)
        logger.debug("Message stored key=%s role=%s len=%d", key, message.role.value, len(message.content))

    def get(self, key: str) -> ChatMessage | None:
        return self._messages.get(key)

    def list_all(self) -> list[ChatMessage]:
        """All messages, oldest first."""
        return sorted(self._messages.values(), key=lambda m: m.timestamp)

    def items(self) -> list[tuple[str, ChatMessage]]:
        return list(self._messages.items())
