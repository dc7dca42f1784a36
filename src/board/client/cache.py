"""Client-side mirror of the board.

The cache is only ever changed by replacing it with a full snapshot from the
server. Local edits are never applied optimistically: a change shows up once
the server broadcasts the collection that contains it.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from src.board.domain.models import Task, TaskStatus

logger = logging.getLogger(__name__)


class BoardStats(BaseModel):
    """Per-column counts and overall completion, as shown in the board overview."""

    counts: dict[TaskStatus, int] = Field(description="Tasks per status column.")
    total: int = 0
    completion: int = Field(default=0, description="Done tasks as a rounded percentage.")


class ClientSyncCache:
    def __init__(self) -> None:
        self._tasks: tuple[Task, ...] = ()
        self._groups: dict[TaskStatus, list[Task]] | None = None
        self.version = 0

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._tasks

    def apply_snapshot(self, payload: Any) -> None:
        """Replace the whole collection with ``payload``.

        ``None`` or anything that is not a list counts as an empty board.
        Entries that do not parse as tasks are skipped.
        """
        tasks: list[Task] = []
        if isinstance(payload, list):
            for item in payload:
                try:
                    tasks.append(item if isinstance(item, Task) else Task.model_validate(item))
                except ValidationError:
                    logger.warning("Skipping malformed task in snapshot", extra={"item": repr(item)})
        elif payload is not None:
            logger.warning("Snapshot payload is not a list", extra={"type": type(payload).__name__})

        self._tasks = tuple(tasks)
        self._groups = None
        self.version += 1

    def get(self, task_id: str) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def grouped(self) -> dict[TaskStatus, list[Task]]:
        if self._groups is None:
            self._groups = {
                status: [task for task in self._tasks if task.status is status]
                for status in TaskStatus
            }
        return {status: list(tasks) for status, tasks in self._groups.items()}

    @property
    def by_status(self) -> dict[TaskStatus, list[Task]]:
        return self.grouped()

    def stats(self) -> BoardStats:
        groups = self.grouped()
        counts = {status: len(tasks) for status, tasks in groups.items()}
        total = len(self._tasks)
        completion = round(counts[TaskStatus.DONE] / total * 100) if total else 0
        return BoardStats(counts=counts, total=total, completion=completion)
