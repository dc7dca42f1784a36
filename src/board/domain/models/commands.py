from typing import Any, Literal

from pydantic import BaseModel, Field

from src.board.domain.models.task import DEFAULT_CATEGORY
from src.board.domain.models.task_priority import TaskPriority
from src.board.domain.models.task_status import TaskStatus


class TaskCommand(BaseModel):
    """Marker/base class for normalized store commands."""

    pass


class CreateTaskCommand(TaskCommand):
    kind: Literal["create"] = "create"
    title: str = Field(min_length=1, description="Trimmed, non-empty title.")
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.LOW
    category: str = DEFAULT_CATEGORY
    attachments: list[Any] = Field(default_factory=list)


class TaskUpdates(BaseModel):
    """Validated subset of fields to apply. ``None`` means "not provided"."""

    title: str | None = None
    description: str | None = None
    category: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    attachments: list[Any] | None = None

    def provided(self) -> dict[str, Any]:
        return {name: value for name, value in self if value is not None}


class UpdateTaskCommand(TaskCommand):
    kind: Literal["update"] = "update"
    task_id: str
    updates: TaskUpdates = Field(default_factory=TaskUpdates)


class MoveTaskCommand(TaskCommand):
    kind: Literal["move"] = "move"
    task_id: str
    new_status: TaskStatus


class DeleteTaskCommand(TaskCommand):
    kind: Literal["delete"] = "delete"
    task_id: str
