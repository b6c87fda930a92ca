# src/taskchat/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..core.service import ChatTaskService
from ..tasks.task_models import Task, TaskStatus

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ConsoleSession:
    """Per-connector context: which service, and who is speaking."""

    service: ChatTaskService
    caller: str
    settings: Any = None


CommandHandler = Callable[[ConsoleSession, list[str]], str | Awaitable[str]]


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /task, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(self, session: ConsoleSession, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        Service errors propagate to the connector.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        result = handler(session, args)
        if inspect.isawaitable(result):
            result = await result
        return result

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _fmt_ns(ts: int) -> str:
    return datetime.fromtimestamp(ts / 1e9).astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _format_task(t: Task) -> str:
    return f"#{t.id} [{t.status.value}] {t.description} (updated {_fmt_ns(t.updated)})"


def cmd_help(session: ConsoleSession, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(session: ConsoleSession, args: list[str]) -> str:
    svc = session.service
    model = str(getattr(session.settings, "llm_model", "?"))
    return (
        "Status:\n"
        f"  Owner: {svc.identity.owner_id}\n"
        f"  Caller: {session.caller} (authorized: {'yes' if svc.is_authorized(session.caller) else 'no'})\n"
        f"  Model: {model}\n"
        f"  Messages: {len(svc.messages)}  Tasks: {len(svc.tasks)}"
    )


def cmd_whoami(session: ConsoleSession, args: list[str]) -> str:
    ok = session.service.is_authorized(session.caller)
    return f"You are {session.caller} ({'authorized' if ok else 'not authorized'})."


def cmd_as(session: ConsoleSession, args: list[str]) -> str:
    if not args:
        return "Usage: /as <identity>"
    session.caller = args[0]
    logger.debug("Console caller switched to %s", session.caller)
    return f"Now acting as {session.caller}."


def cmd_grant(session: ConsoleSession, args: list[str]) -> str:
    if not args:
        return "Usage: /grant <identity>"
    session.service.add_authorized_user(session.caller, args[0])
    return f"Authorized {args[0]}."


def cmd_revoke(session: ConsoleSession, args: list[str]) -> str:
    if not args:
        return "Usage: /revoke <identity>"
    session.service.revoke_authorized_user(session.caller, args[0])
    return f"Revoked {args[0]}."


_TASK_USAGE = (
    "Usage:\n"
    "  /task new <description>\n"
    "  /task get <id>\n"
    "  /task set <id> <" + "|".join(s.value for s in TaskStatus) + ">"
)


def cmd_task(session: ConsoleSession, args: list[str]) -> str:
    """
    /task new <description>   -> create a pending task
    /task get <id>            -> show one task
    /task set <id> <status>   -> change status
    """
    if not args:
        return _TASK_USAGE

    sub = args[0].lower()
    svc = session.service

    if sub in ("new", "add") and len(args) >= 2:
        task = svc.create_task(session.caller, " ".join(args[1:]))
        return f"Created {_format_task(task)}"

    if sub in ("get", "show") and len(args) == 2:
        return _format_task(svc.get_task(session.caller, args[1]))

    if sub == "set" and len(args) == 3:
        task = svc.update_task_status(session.caller, args[1], args[2])
        return f"Updated {_format_task(task)}"

    return _TASK_USAGE


def cmd_tasks(session: ConsoleSession, args: list[str]) -> str:
    tasks = session.service.get_all_tasks()
    if not tasks:
        return "No tasks."
    return "\n".join(_format_task(t) for t in tasks)


def cmd_history(session: ConsoleSession, args: list[str]) -> str:
    limit = 20
    if args:
        try:
            limit = max(1, int(args[0]))
        except ValueError:
            return "Usage: /history [n]"

    messages = session.service.get_chat_history()[-limit:]
    if not messages:
        return "No messages yet."
    return "\n".join(f"[{_fmt_ns(m.timestamp)}] {m.role.value}: {m.content}" for m in messages)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show owner/caller/model and store sizes.")
registry.register("whoami", cmd_whoami, help_text="Show the current caller identity.")
registry.register("as", cmd_as, help_text="Act as another identity: /as <identity>.")
registry.register("grant", cmd_grant, help_text="Owner only: /grant <identity>.")
registry.register("revoke", cmd_revoke, help_text="Owner only: /revoke <identity>.")
registry.register("task", cmd_task, help_text="Tasks: /task new | get | set.")
registry.register("tasks", cmd_tasks, help_text="List all tasks.")
registry.register("history", cmd_history, help_text="Show the chat transcript: /history [n].")
