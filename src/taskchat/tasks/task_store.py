# src/taskchat/tasks/task_store.py

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from dataclasses import replace

from ..core.ports import Clock
from .task_models import Task, TaskStatus

logger = logging.getLogger(__name__)


class TaskStore:
    """
    In-memory task store with a process-wide id counter.

    Ids are decimal text of a counter that only moves forward. The counter is
    clamped above every id already present, so restored state can never hand
    out an id twice.

    Concurrency:
    - no method awaits; each read-modify-write runs as one step on the event loop
    """

    def __init__(
        self,
        tasks: Iterable[tuple[str, Task]] = (),
        *,
        next_task_id: int = 0,
        clock: Clock = time.time_ns,
    ) -> None:
        self._clock = clock
        self._tasks: dict[str, Task] = dict(tasks)
        self._next_task_id = max(int(next_task_id), self._max_numeric_id() + 1)
        logger.info(
            "TaskStore ready total=%d next_task_id=%d", len(self._tasks), self._next_task_id
        )

    def _max_numeric_id(self) -> int:
        ids = [int(k) for k in self._tasks if k.isdigit()]
        return max(ids, default=-1)

    def __len__(self) -> int:
        return len(self._tasks)

    @property
    def next_task_id(self) -> int:
        return self._next_task_id

    # ---- public API ----

    def create(self, description: str) -> Task:
        task_id = str(self._next_task_id)
        self._next_task_id += 1

        now = int(self._clock())
        task = Task(
            id=task_id,
            description=description,
            status=TaskStatus.PENDING,
            created=now,
            updated=now,
        )
        self._tasks[task_id] = task
        logger.debug("Task created id=%s", task_id)
        return task

    def get(self, task_id: str) -> Task | None:
        return self._tasks.get(task_id)

    def update_status(self, task_id: str, new_status: TaskStatus) -> Task | None:
        task = self._tasks.get(task_id)
        if task is None:
            return None

        updated = replace(task, status=new_status, updated=max(int(self._clock()), task.updated))
        self._tasks[task_id] = updated
        logger.debug("Task status id=%s %s -> %s", task_id, task.status.value, new_status.value)
        return updated

    def list_all(self) -> list[Task]:
        return list(self._tasks.values())

    def items(self) -> list[tuple[str, Task]]:
        return list(self._tasks.items())
