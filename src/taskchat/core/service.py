# src/taskchat/core/service.py

"""
Public operation surface.

Composes the identity gate, both stores and the completion client. The service is
transport-agnostic: connectors pass the caller identity explicitly.

Key invariants:
- every write checks the gate first and mutates nothing when it refuses
- get_chat_history() and get_all_tasks() are unauthenticated reads
- send_message() is the only operation that suspends; no lock spans the await, so
  concurrent readers may see the user message before the reply exists
"""

from __future__ import annotations

import logging
import time

from ..chat.chat_models import ChatMessage, MessageRole
from ..chat.message_store import MessageStore
from ..tasks.task_models import Task, TaskStatus
from ..tasks.task_store import TaskStore
from .errors import InvalidRequestError, ProcessingError, TaskNotFoundError, UnauthorizedError
from .identity import IdentityGate
from .persistence import StateSnapshot
from .ports import Clock, Completer

logger = logging.getLogger(__name__)


class ChatTaskService:
    def __init__(
        self,
        *,
        identity: IdentityGate,
        messages: MessageStore,
        tasks: TaskStore,
        completion: Completer,
    ) -> None:
        self.identity = identity
        self.messages = messages
        self.tasks = tasks
        self._completion = completion

    # ---- lifecycle ----

    @classmethod
    def from_snapshot(
        cls,
        snap: StateSnapshot | None,
        *,
        owner_id: str,
        completion: Completer,
        clock: Clock = time.time_ns,
    ) -> ChatTaskService:
        snap = snap or StateSnapshot()
        return cls(
            identity=IdentityGate(owner_id, snap.authorized),
            messages=MessageStore(snap.messages, clock=clock),
            tasks=TaskStore(snap.tasks, next_task_id=snap.next_task_id, clock=clock),
            completion=completion,
        )

    def snapshot(self) -> StateSnapshot:
        return StateSnapshot(
            messages=self.messages.items(),
            tasks=self.tasks.items(),
            next_task_id=self.tasks.next_task_id,
            authorized=self.identity.entries(),
        )

    # ---- helpers ----

    def _require_authorized(self, caller: str | None, op: str) -> None:
        if not self.identity.is_authorized(caller):
            logger.info("Unauthorized %s by caller=%s", op, caller)
            raise UnauthorizedError()

    def is_authorized(self, caller: str | None) -> bool:
        return self.identity.is_authorized(caller)

    # ---- chat ----

    async def send_message(self, caller: str | None, content: str) -> ChatMessage:
        self._require_authorized(caller, "send_message")

        try:
            self.messages.append(MessageRole.USER, content)
            completion = await self._completion.generate(content)
            reply = self.messages.append(MessageRole.ASSISTANT, completion.text)
        except Exception as e:
            logger.exception("send_message failed for caller=%s", caller)
            raise ProcessingError() from e

        if completion.is_fallback:
            logger.info("Stored fallback reply key=%s (%s)", reply.key, completion.error_kind)
        return reply

    def get_chat_history(self) -> list[ChatMessage]:
        return self.messages.list_all()

    # ---- tasks ----

    def create_task(self, caller: str | None, description: str) -> Task:
        self._require_authorized(caller, "create_task")
        task = self.tasks.create(description)
        logger.info("Task created id=%s by caller=%s", task.id, caller)
        return task

    def get_task(self, caller: str | None, task_id: str) -> Task:
        self._require_authorized(caller, "get_task")
        task = self.tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def update_task_status(self, caller: str | None, task_id: str, status: TaskStatus | str) -> Task:
        self._require_authorized(caller, "update_task_status")
        if not isinstance(status, TaskStatus):
            try:
                status = TaskStatus.parse(status)
            except ValueError:
                raise InvalidRequestError(f"Unknown task status: {status}") from None

        task = self.tasks.update_status(task_id, status)
        if task is None:
            raise TaskNotFoundError(task_id)
        logger.info("Task id=%s -> %s by caller=%s", task_id, status.value, caller)
        return task

    def get_all_tasks(self) -> list[Task]:
        return self.tasks.list_all()

    # ---- authorization ----

    def add_authorized_user(self, caller: str | None, user: str) -> None:
        self.identity.add_authorized_user(caller, (user or "").strip())

    def revoke_authorized_user(self, caller: str | None, user: str) -> None:
        self.identity.revoke_authorized_user(caller, (user or "").strip())
