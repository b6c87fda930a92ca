# src/taskchat/core/persistence.py

"""
Restart bridge for in-memory state.

Live stores are flattened into (key, value) sequences at shutdown and rebuilt at
startup. The on-disk JSON only bridges the restart boundary: it is deleted once
loaded, so it never becomes a second source of truth.

Upgrade safety:
- every snapshot carries a format version
- missing sections default to empty, unknown keys are ignored
- malformed rows are skipped with a warning
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypeVar

from ..chat.chat_models import ChatMessage
from ..tasks.task_models import Task
from .errors import PersistenceError

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1

V = TypeVar("V")


def snapshot(store: Mapping[str, V]) -> list[tuple[str, V]]:
    """Capture every entry of a keyed container as an ordered pair list."""
    return list(store.items())


def restore(entries: Iterable[tuple[str, V]]) -> dict[str, V]:
    """Rebuild a keyed container from pairs (later duplicates win)."""
    return {key: value for key, value in entries}


@dataclass(slots=True)
class StateSnapshot:
    messages: list[tuple[str, ChatMessage]] = field(default_factory=list)
    tasks: list[tuple[str, Task]] = field(default_factory=list)
    next_task_id: int = 0
    authorized: list[tuple[str, bool]] = field(default_factory=list)
    version: int = SNAPSHOT_VERSION


# ---- encoding ----


def encode_snapshot(snap: StateSnapshot) -> dict[str, Any]:
    return {
        "version": snap.version,
        "messages": [[k, m.to_dict()] for k, m in snap.messages],
        "tasks": [[k, t.to_dict()] for k, t in snap.tasks],
        "next_task_id": snap.next_task_id,
        "authorized": [[user, bool(flag)] for user, flag in snap.authorized],
    }


def _decode_pairs(
    raw: Any, section: str, decode: Callable[[Any], V]
) -> list[tuple[str, V]]:
    if not isinstance(raw, list):
        if raw is not None:
            logger.warning("Snapshot section %s is not a list; ignoring", section)
        return []

    out: list[tuple[str, V]] = []
    for row in raw:
        try:
            if not isinstance(row, list) or len(row) != 2:
                raise TypeError("entry must be a [key, value] pair")
            key, value = row
            out.append((str(key), decode(value)))
        except (TypeError, ValueError, KeyError):
            logger.warning("Skipping malformed %s entry: %r", section, row)
    return out


def _decode_flag(value: Any) -> bool:
    # Only JSON booleans count; "false", 1, null etc. are malformed.
    if not isinstance(value, bool):
        raise TypeError("authorization flag must be a boolean")
    return value


def _decode_message(value: Any) -> ChatMessage:
    if not isinstance(value, dict):
        raise TypeError("message entry must be an object")
    return ChatMessage.from_dict(value)


def _decode_task(value: Any) -> Task:
    if not isinstance(value, dict):
        raise TypeError("task entry must be an object")
    return Task.from_dict(value)


def _keyed_messages(pairs: list[tuple[str, ChatMessage]]) -> list[tuple[str, ChatMessage]]:
    out: list[tuple[str, ChatMessage]] = []
    for key, message in pairs:
        if key != message.key:
            logger.warning(
                "Skipping message stored under foreign key %s (timestamp %s)", key, message.timestamp
            )
            continue
        out.append((key, message))
    return out


def decode_snapshot(data: Any) -> StateSnapshot:
    """Raises ValueError when the root is not an object, PersistenceError on a newer format."""
    if not isinstance(data, dict):
        raise ValueError("Snapshot root must be an object")

    try:
        version = int(data.get("version", 1))
    except (TypeError, ValueError):
        raise PersistenceError("Snapshot version is not an integer") from None
    if version > SNAPSHOT_VERSION:
        raise PersistenceError(
            f"Snapshot version {version} is newer than supported {SNAPSHOT_VERSION}"
        )

    try:
        next_task_id = int(data.get("next_task_id") or 0)
    except (TypeError, ValueError):
        logger.warning("Snapshot next_task_id is malformed; recomputing from tasks")
        next_task_id = 0

    return StateSnapshot(
        messages=_keyed_messages(_decode_pairs(data.get("messages"), "messages", _decode_message)),
        tasks=_decode_pairs(data.get("tasks"), "tasks", _decode_task),
        next_task_id=next_task_id,
        authorized=_decode_pairs(data.get("authorized"), "authorized", _decode_flag),
        version=SNAPSHOT_VERSION,
    )


# ---- disk bridge ----


def save_snapshot(path: str | Path, snap: StateSnapshot) -> None:
    """Write the snapshot atomically (tmp file + os.replace)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(encode_snapshot(snap), ensure_ascii=False, indent=2), "utf-8")
    os.replace(tmp, path)
    with contextlib.suppress(OSError):
        # Transcript may contain sensitive content, keep the file private on disk.
        os.chmod(path, 0o600)
    logger.info(
        "Saved state: messages=%d tasks=%d users=%d to %s",
        len(snap.messages),
        len(snap.tasks),
        len(snap.authorized),
        path,
    )


def load_snapshot(path: str | Path) -> StateSnapshot | None:
    """
    Read and consume a snapshot.

    Returns None when no snapshot exists. A file that is not UTF-8 JSON with an
    object root is moved aside to <name>.corrupt so it is never silently overwritten.
    """
    path = Path(path)
    if not path.exists():
        return None

    try:
        snap = decode_snapshot(json.loads(path.read_text("utf-8")))
    except ValueError:
        # JSONDecodeError and UnicodeDecodeError are ValueError subclasses.
        corrupt = path.with_suffix(path.suffix + ".corrupt")
        logger.exception("State file %s is unreadable; moved to %s", path, corrupt)
        os.replace(path, corrupt)
        return None

    path.unlink()
    logger.info(
        "Loaded state: messages=%d tasks=%d users=%d from %s",
        len(snap.messages),
        len(snap.tasks),
        len(snap.authorized),
        path,
    )
    return snap
