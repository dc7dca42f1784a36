from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any
from uuid import uuid4

import inject
from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from src.board.application.broadcaster import SnapshotTransport
from src.board.domain.exceptions import MessageDecodeError
from src.board.infrastructure.events import EventRouter, decode_message

logger = logging.getLogger(__name__)


class ClientConnection:
    """One connected client: its socket plus an ordered, bounded outbound queue."""

    def __init__(self, client_id: str, websocket: WebSocket, outbox_size: int = 0) -> None:
        self.client_id = client_id
        self.websocket = websocket
        self.outbox: asyncio.Queue[dict[str, Any]] = asyncio.Queue(maxsize=outbox_size)
        self.writer: asyncio.Task[None] | None = None


class BoardConnectionManager(SnapshotTransport):
    def __init__(self, outbox_size: int = 100) -> None:
        self._outbox_size = outbox_size
        self._connections: dict[str, ClientConnection] = {}
        self._closing: set[asyncio.Task[None]] = set()

    def __len__(self) -> int:
        return len(self._connections)

    def client_ids(self) -> list[str]:
        return list(self._connections)

    async def connect(self, websocket: WebSocket) -> ClientConnection:
        await websocket.accept()
        connection = ClientConnection(uuid4().hex, websocket, self._outbox_size)
        connection.writer = asyncio.create_task(self._drain(connection))
        self._connections[connection.client_id] = connection
        logger.info("Client connected", extra={"client_id": connection.client_id})
        return connection

    async def disconnect(self, client_id: str) -> None:
        connection = self._connections.pop(client_id, None)
        if connection is None:
            return
        logger.info("Client disconnected", extra={"client_id": client_id})
        if connection.writer is not None and connection.writer is not asyncio.current_task():
            connection.writer.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await connection.writer

    async def close_all(self) -> None:
        for client_id in self.client_ids():
            await self.disconnect(client_id)

    def send(self, client_id: str, message: dict[str, Any]) -> bool:
        connection = self._connections.get(client_id)
        if connection is None:
            return False
        return self._enqueue(connection, message)

    def broadcast(self, message: dict[str, Any]) -> int:
        connections = list(self._connections.values())
        return sum(self._enqueue(connection, message) for connection in connections)

    def _enqueue(self, connection: ClientConnection, message: dict[str, Any]) -> bool:
        try:
            connection.outbox.put_nowait(message)
        except asyncio.QueueFull:
            logger.warning(
                "Dropping client with full outbox",
                extra={"client_id": connection.client_id, "size": connection.outbox.maxsize},
            )
            self._evict(connection)
            return False
        return True

    def _evict(self, connection: ClientConnection) -> None:
        self._connections.pop(connection.client_id, None)
        if connection.writer is not None:
            connection.writer.cancel()
        # The receive loop sees the close and runs its own cleanup.
        closing = asyncio.get_running_loop().create_task(self._close(connection))
        self._closing.add(closing)
        closing.add_done_callback(self._closing.discard)

    async def _close(self, connection: ClientConnection) -> None:
        try:
            await connection.websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        except (RuntimeError, OSError):
            logger.debug("Socket already closed", extra={"client_id": connection.client_id})

    async def _drain(self, connection: ClientConnection) -> None:
        while True:
            message = await connection.outbox.get()
            try:
                await connection.websocket.send_json(message)
            except (RuntimeError, OSError, WebSocketDisconnect):
                logger.warning(
                    "Dropping client after failed send",
                    extra={"client_id": connection.client_id},
                )
                self._connections.pop(connection.client_id, None)
                return


def build_ws_router(path: str) -> APIRouter:
    router = APIRouter(tags=["ws"])

    @router.websocket(path)
    async def board_updates(websocket: WebSocket) -> None:
        manager = inject.instance(BoardConnectionManager)
        event_router = inject.instance(EventRouter)
        connection = await manager.connect(websocket)
        try:
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    raise WebSocketDisconnect(message.get("code", 1000))
                raw = message.get("text") or message.get("bytes")
                if raw is None:
                    logger.warning(
                        "Ignoring empty frame",
                        extra={"client_id": connection.client_id, "type": message["type"]},
                    )
                    continue
                try:
                    event = decode_message(raw, connection.client_id)
                except MessageDecodeError as exc:
                    logger.warning(
                        "Ignoring undecodable message",
                        extra={"client_id": connection.client_id, "error": str(exc)},
                    )
                    continue
                await event_router.dispatch(event)
        except WebSocketDisconnect:
            pass
        finally:
            await manager.disconnect(connection.client_id)

    return router
