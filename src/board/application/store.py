from __future__ import annotations

import logging
import time
from collections.abc import Callable
from uuid import uuid4

from src.board.domain.models import (
    CreateTaskCommand,
    DeleteTaskCommand,
    MoveTaskCommand,
    MutationResult,
    Task,
    TaskCommand,
    UpdateTaskCommand,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], int]
IdFactory = Callable[[], str]


def epoch_millis() -> int:
    return time.time_ns() // 1_000_000


def new_task_id() -> str:
    return uuid4().hex


class TaskStore:
    """Single owner of the ordered task collection.

    Operations are synchronous and never suspend, so when they run on the
    event loop no other handler can observe or change the collection halfway
    through a mutation. Commands are expected to be validated already.
    """

    def __init__(self, clock: Clock = epoch_millis, id_factory: IdFactory = new_task_id) -> None:
        self._clock = clock
        self._id_factory = id_factory
        self._tasks: list[Task] = []
        self._last_ts = 0

    def __len__(self) -> int:
        return len(self._tasks)

    def list(self) -> list[Task]:
        """Return copies of all tasks in insertion order."""
        return [task.model_copy(deep=True) for task in self._tasks]

    def get(self, task_id: str) -> Task | None:
        task = self._find(task_id)
        return task.model_copy(deep=True) if task is not None else None

    def reset(self) -> None:
        self._tasks.clear()

    def apply(self, command: TaskCommand) -> MutationResult:
        if isinstance(command, CreateTaskCommand):
            return self.create(command)
        if isinstance(command, UpdateTaskCommand):
            return self.update(command)
        if isinstance(command, MoveTaskCommand):
            return self.move(command)
        if isinstance(command, DeleteTaskCommand):
            return self.delete(command)
        raise TypeError(f"Unsupported command type: {type(command).__name__}")

    def create(self, command: CreateTaskCommand) -> MutationResult:
        now = self._now()
        task = Task(
            id=self._unique_id(),
            title=command.title,
            description=command.description,
            status=command.status,
            priority=command.priority,
            category=command.category,
            attachments=list(command.attachments),
            created_at=now,
            updated_at=now,
        )
        self._tasks.append(task)
        logger.info("Task created", extra={"task_id": task.id, "status": task.status.value})
        return MutationResult.applied(task.model_copy(deep=True))

    def update(self, command: UpdateTaskCommand) -> MutationResult:
        task = self._find(command.task_id)
        if task is None:
            return MutationResult.not_found(command.task_id)
        changes = command.updates.provided()
        for field, value in changes.items():
            setattr(task, field, value)
        # Matched updates always touch, even when every field was dropped.
        task.updated_at = self._now()
        logger.info("Task updated", extra={"task_id": task.id, "fields": sorted(changes)})
        return MutationResult.applied(task.model_copy(deep=True))

    def move(self, command: MoveTaskCommand) -> MutationResult:
        task = self._find(command.task_id)
        if task is None:
            return MutationResult.not_found(command.task_id)
        previous = task.status
        task.status = command.new_status
        task.updated_at = self._now()
        logger.info(
            "Task moved",
            extra={"task_id": task.id, "from": previous.value, "to": task.status.value},
        )
        return MutationResult.applied(task.model_copy(deep=True))

    def delete(self, command: DeleteTaskCommand) -> MutationResult:
        for index, task in enumerate(self._tasks):
            if task.id == command.task_id:
                del self._tasks[index]
                logger.info("Task deleted", extra={"task_id": task.id})
                return MutationResult.applied(task)
        # The unchanged collection is still sent to every client.
        return MutationResult.not_found(command.task_id, broadcast=True)

    def _find(self, task_id: str) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def _unique_id(self) -> str:
        task_id = self._id_factory()
        while self._find(task_id) is not None:
            task_id = self._id_factory()
        return task_id

    def _now(self) -> int:
        # Strictly increasing per store so every touch is observable.
        self._last_ts = max(self._clock(), self._last_ts + 1)
        return self._last_ts
