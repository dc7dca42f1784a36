from __future__ import annotations

import logging
from typing import Any, Protocol

from src.board.application.store import TaskStore
from src.board.domain.events.board_event import EventType

logger = logging.getLogger(__name__)


class SnapshotTransport(Protocol):
    """Delivers outbound messages to connected clients.

    Both methods must enqueue without suspending, so the order of messages a
    client observes matches the order in which they were issued.
    """

    def send(self, client_id: str, message: dict[str, Any]) -> bool:
        """Queue ``message`` for one client. Return ``False`` if it is not connected."""

    def broadcast(self, message: dict[str, Any]) -> int:
        """Queue ``message`` for every connected client and return how many."""


class SyncBroadcaster:
    """Pushes the whole task collection to one or all clients."""

    def __init__(self, store: TaskStore, transport: SnapshotTransport) -> None:
        self._store = store
        self._transport = transport

    def snapshot_message(self) -> dict[str, Any]:
        return {
            "event": EventType.SYNC_TASKS.value,
            "data": [task.to_wire() for task in self._store.list()],
        }

    def request_sync(self, client_id: str) -> bool:
        message = self.snapshot_message()
        delivered = self._transport.send(client_id, message)
        if not delivered:
            logger.warning("Sync requested by unknown client", extra={"client_id": client_id})
        return delivered

    def broadcast_all(self) -> int:
        message = self.snapshot_message()
        count = self._transport.broadcast(message)
        logger.debug(
            "Snapshot broadcast",
            extra={"clients": count, "tasks": len(message["data"])},
        )
        return count
