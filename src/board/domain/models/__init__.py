from src.board.domain.models.commands import (
    CreateTaskCommand,
    DeleteTaskCommand,
    MoveTaskCommand,
    TaskCommand,
    TaskUpdates,
    UpdateTaskCommand,
)
from src.board.domain.models.mutation_result import MutationOutcome, MutationResult
from src.board.domain.models.task import DEFAULT_CATEGORY, Task
from src.board.domain.models.task_priority import TaskPriority
from src.board.domain.models.task_status import TaskStatus

__all__ = [
    "Task",
    "TaskStatus",
    "TaskPriority",
    "DEFAULT_CATEGORY",
    "TaskCommand",
    "CreateTaskCommand",
    "UpdateTaskCommand",
    "MoveTaskCommand",
    "DeleteTaskCommand",
    "TaskUpdates",
    "MutationOutcome",
    "MutationResult",
]
