from __future__ import annotations

import logging
from typing import Any, Protocol

from src.board.client.cache import ClientSyncCache
from src.board.client.intents import MoveIntent
from src.board.domain.events.board_event import EventType
from src.board.domain.models import TaskPriority, TaskStatus

logger = logging.getLogger(__name__)


class JsonConnection(Protocol):
    def send_json(self, data: Any) -> None:
        """Send one JSON message to the server."""

    def receive_json(self) -> Any:
        """Block until the next JSON message from the server arrives."""


class BoardClientSession:
    """Client side of the board protocol over a blocking JSON connection.

    Mutations are fire-and-forget: nothing comes back except the next
    ``sync:tasks`` snapshot, which replaces the session cache. Async clients
    can feed their own received messages to :meth:`handle_message`.
    """

    def __init__(self, connection: JsonConnection, cache: ClientSyncCache | None = None) -> None:
        self._connection = connection
        self.cache = cache or ClientSyncCache()

    def request_sync(self) -> None:
        self._emit(EventType.SYNC_TASKS)

    def create_task(
        self,
        title: str,
        *,
        description: str = "",
        status: TaskStatus | str = TaskStatus.TODO,
        priority: TaskPriority | str = TaskPriority.LOW,
        category: str | None = None,
        attachments: list[Any] | None = None,
    ) -> None:
        payload: dict[str, Any] = {
            "title": title,
            "description": description,
            "status": _value(status),
            "priority": _value(priority),
            "attachments": attachments or [],
        }
        if category is not None:
            payload["category"] = category
        self._emit(EventType.TASK_CREATE, payload)

    def update_task(self, task_id: str, **updates: Any) -> None:
        self._emit(
            EventType.TASK_UPDATE,
            {"id": task_id, "updates": {key: _value(value) for key, value in updates.items()}},
        )

    def move_task(self, task_id: str, new_status: TaskStatus | str) -> None:
        self._emit(EventType.TASK_MOVE, {"id": task_id, "newStatus": _value(new_status)})

    def send_intent(self, intent: MoveIntent) -> None:
        self._emit(EventType.TASK_MOVE, intent.to_payload())

    def delete_task(self, task_id: str) -> None:
        self._emit(EventType.TASK_DELETE, {"id": task_id})

    def receive_snapshot(self) -> bool:
        return self.handle_message(self._connection.receive_json())

    def handle_message(self, message: Any) -> bool:
        """Apply ``message`` to the cache if it is a snapshot. Returns whether it was."""
        if not isinstance(message, dict) or message.get("event") != EventType.SYNC_TASKS.value:
            logger.debug("Ignoring non-snapshot message", extra={"message": repr(message)})
            return False
        self.cache.apply_snapshot(message.get("data"))
        return True

    def _emit(self, event: EventType, data: Any = None) -> None:
        self._connection.send_json({"event": event.value, "data": data})


def _value(value: Any) -> Any:
    return value.value if isinstance(value, (TaskStatus, TaskPriority)) else value
