from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from src.board.application.broadcaster import SnapshotTransport, SyncBroadcaster
from src.board.application.handlers import BoardEventHandler
from src.board.application.store import TaskStore


class FakeClock:
    """Manually advanced epoch-millisecond clock."""

    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, millis: int = 1) -> None:
        self.now += millis


class StubTransport(SnapshotTransport):
    """In-memory transport that records every queued message per client."""

    def __init__(self, client_ids: list[str] | None = None) -> None:
        self.inbox: dict[str, list[dict[str, Any]]] = {
            client_id: [] for client_id in (client_ids or ["client-a", "client-b"])
        }
        self.broadcasts: list[dict[str, Any]] = []

    def send(self, client_id: str, message: dict[str, Any]) -> bool:
        if client_id not in self.inbox:
            return False
        self.inbox[client_id].append(message)
        return True

    def broadcast(self, message: dict[str, Any]) -> int:
        self.broadcasts.append(message)
        for messages in self.inbox.values():
            messages.append(message)
        return len(self.inbox)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> TaskStore:
    return TaskStore(clock=clock)


@pytest.fixture
def transport() -> StubTransport:
    return StubTransport()


@pytest.fixture
def broadcaster(store: TaskStore, transport: StubTransport) -> SyncBroadcaster:
    return SyncBroadcaster(store, transport)


@pytest.fixture
def handler(store: TaskStore, broadcaster: SyncBroadcaster) -> BoardEventHandler:
    return BoardEventHandler(store, broadcaster)


@pytest.fixture
def env_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Provide environment variables for BoardSettings."""
    monkeypatch.setenv("APP_NAME", "Test Board")
    monkeypatch.setenv("APP_VERSION", "0.1.0")
    monkeypatch.setenv("BOARD_WS_PATH", "/ws/board")


@pytest.fixture
def api_client(env_settings: None):
    """Test client around a freshly configured board app.

    Used as a context manager so every WebSocket session shares one event loop.
    """
    from src.board.presentation.main import create_app

    with TestClient(create_app()) as client:
        yield client
