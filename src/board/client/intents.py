from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from src.board.domain.models import TaskStatus


class MoveIntent(BaseModel):
    task_id: str
    new_status: TaskStatus

    def to_payload(self) -> dict[str, str]:
        return {"id": self.task_id, "newStatus": self.new_status.value}


def translate_drop(item: Any, column_key: str) -> MoveIntent | None:
    """Turn a card dropped on a column into a move intent.

    ``item`` is the drag payload (``{"id": ..., "isEditing": ...}``). Cards
    being edited and drops without an id produce nothing. Dropping a card on
    its own column is still a move.
    """
    if not isinstance(item, dict):
        return None
    task_id = item.get("id")
    if not task_id or item.get("isEditing"):
        return None
    status = TaskStatus.parse(column_key)
    if status is None:
        return None
    return MoveIntent(task_id=str(task_id), new_status=status)
