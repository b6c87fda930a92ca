# src/taskchat/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Any status may move to any other; tasks are always born PENDING.
    """

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"

    @classmethod
    def parse(cls, raw: str) -> TaskStatus:
        """Strict parse for caller input. Accepts camelCase "inProgress" too."""
        s = (raw or "").strip()
        if s == "inProgress":
            return cls.IN_PROGRESS
        return cls(s.lower())

    @classmethod
    def from_db(cls, raw: str | None) -> TaskStatus:
        """Lenient parse for persisted values (unknown -> PENDING)."""
        if not raw:
            return cls.PENDING
        try:
            return cls.parse(raw)
        except ValueError:
            return cls.PENDING


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    description: str
    status: TaskStatus
    created: int
    updated: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "status": self.status.value,
            "created": self.created,
            "updated": self.updated,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        created = int(data.get("created") or 0)
        return cls(
            id=str(data["id"]),
            description=str(data.get("description") or ""),
            status=TaskStatus.from_db(data.get("status")),
            created=created,
            updated=int(data.get("updated") or created),
        )
