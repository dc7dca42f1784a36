from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, Field


class EventType(str, Enum):
    SYNC_TASKS = "sync:tasks"
    TASK_CREATE = "task:create"
    TASK_UPDATE = "task:update"
    TASK_MOVE = "task:move"
    TASK_DELETE = "task:delete"


class BoardEvent(BaseModel):
    """An event received from one connected client."""

    event_id: str = Field(default_factory=lambda: uuid4().hex)
    type: EventType
    client_id: str = Field(description="Connection the event arrived on.")
    ts: datetime = Field(default_factory=lambda: datetime.now(UTC))
    payload: Any = None

    @classmethod
    def sync(cls, client_id: str) -> BoardEvent:
        return cls(type=EventType.SYNC_TASKS, client_id=client_id)

    @classmethod
    def create(cls, client_id: str, payload: Any) -> BoardEvent:
        return cls(type=EventType.TASK_CREATE, client_id=client_id, payload=payload)

    @classmethod
    def update(cls, client_id: str, payload: Any) -> BoardEvent:
        return cls(type=EventType.TASK_UPDATE, client_id=client_id, payload=payload)

    @classmethod
    def move(cls, client_id: str, payload: Any) -> BoardEvent:
        return cls(type=EventType.TASK_MOVE, client_id=client_id, payload=payload)

    @classmethod
    def delete(cls, client_id: str, payload: Any) -> BoardEvent:
        return cls(type=EventType.TASK_DELETE, client_id=client_id, payload=payload)
