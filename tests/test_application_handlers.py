import pytest

from src.board.application.broadcaster import SyncBroadcaster
from src.board.application.handlers import BoardEventHandler
from src.board.application.store import TaskStore
from src.board.domain.events.board_event import BoardEvent
from src.board.domain.models import MutationOutcome


def _snapshot_ids(message) -> list[str]:
    assert message["event"] == "sync:tasks"
    return [task["id"] for task in message["data"]]


@pytest.mark.asyncio
async def test_sync_event_replies_to_requester_only(handler, transport) -> None:
    await handler.handle_sync_event(BoardEvent.sync("client-a"))

    assert transport.inbox["client-a"] == [{"event": "sync:tasks", "data": []}]
    assert transport.inbox["client-b"] == []


@pytest.mark.asyncio
async def test_create_event_broadcasts_full_snapshot(handler, transport) -> None:
    result = await handler.handle_create_event(BoardEvent.create("client-a", {"title": "Ship release"}))

    assert result.outcome is MutationOutcome.APPLIED
    assert len(transport.broadcasts) == 1
    (task,) = transport.broadcasts[0]["data"]
    assert task["title"] == "Ship release"
    assert task["status"] == "todo"
    assert task["priority"] == "low"
    assert task["category"] == "general"
    assert task["attachments"] == []
    assert task["createdAt"] == task["updatedAt"]
    assert transport.inbox["client-a"] == transport.inbox["client-b"]


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{"title": ""}, {"title": "   "}, None])
async def test_rejected_create_does_not_broadcast(handler, transport, store, payload) -> None:
    result = await handler.handle_create_event(BoardEvent.create("client-a", payload))

    assert result.outcome is MutationOutcome.REJECTED
    assert transport.broadcasts == []
    assert store.list() == []


@pytest.mark.asyncio
async def test_create_with_bogus_status_defaults_to_todo(handler, transport) -> None:
    await handler.handle_create_event(BoardEvent.create("client-a", {"title": "X", "status": "bogus"}))

    assert transport.broadcasts[-1]["data"][0]["status"] == "todo"


@pytest.mark.asyncio
async def test_update_with_bogus_status_keeps_status_but_touches(handler, transport, store) -> None:
    created = await handler.handle_create_event(
        BoardEvent.create("client-a", {"title": "X", "status": "done"})
    )

    result = await handler.handle_update_event(
        BoardEvent.update("client-b", {"id": created.task.id, "updates": {"status": "bogus"}})
    )

    assert result.task.status.value == "done"
    assert result.task.updated_at > created.task.updated_at
    assert len(transport.broadcasts) == 2


@pytest.mark.asyncio
async def test_update_unknown_id_does_not_broadcast(handler, transport) -> None:
    result = await handler.handle_update_event(
        BoardEvent.update("client-a", {"id": "missing", "updates": {"title": "x"}})
    )

    assert result.outcome is MutationOutcome.NOT_FOUND
    assert transport.broadcasts == []


@pytest.mark.asyncio
async def test_move_with_invalid_status_is_rejected(handler, transport) -> None:
    created = await handler.handle_create_event(BoardEvent.create("client-a", {"title": "X"}))

    result = await handler.handle_move_event(
        BoardEvent.move("client-a", {"id": created.task.id, "newStatus": "archived"})
    )

    assert result.outcome is MutationOutcome.REJECTED
    assert len(transport.broadcasts) == 1


@pytest.mark.asyncio
async def test_delete_unknown_id_broadcasts_unchanged_collection(handler, transport) -> None:
    created = await handler.handle_create_event(BoardEvent.create("client-a", {"title": "X"}))

    await handler.handle_delete_event(BoardEvent.delete("client-b", {"id": "missing"}))

    assert len(transport.broadcasts) == 2
    assert _snapshot_ids(transport.broadcasts[-1]) == [created.task.id]


@pytest.mark.asyncio
async def test_delete_without_id_is_rejected_silently(handler, transport) -> None:
    result = await handler.handle_delete_event(BoardEvent.delete("client-a", {}))

    assert result.outcome is MutationOutcome.REJECTED
    assert transport.broadcasts == []


@pytest.mark.asyncio
async def test_broadcast_order_follows_processing_order(handler, transport) -> None:
    first = await handler.handle_create_event(BoardEvent.create("client-a", {"title": "A"}))
    second = await handler.handle_create_event(BoardEvent.create("client-b", {"title": "B"}))
    await handler.handle_delete_event(BoardEvent.delete("client-a", {"id": first.task.id}))

    snapshots = [_snapshot_ids(message) for message in transport.inbox["client-b"]]
    assert snapshots == [
        [first.task.id],
        [first.task.id, second.task.id],
        [second.task.id],
    ]


def test_handler_resolves_dependencies_from_injector(
    monkeypatch: pytest.MonkeyPatch, store, broadcaster
) -> None:
    import inject

    bindings = {TaskStore: store, SyncBroadcaster: broadcaster}
    monkeypatch.setattr(inject, "instance", lambda interface: bindings[interface])

    handler = BoardEventHandler()

    assert handler._store is store
    assert handler._broadcaster is broadcaster


@pytest.mark.asyncio
async def test_delete_with_numeric_id_broadcasts_unchanged_collection(handler, transport) -> None:
    created = await handler.handle_create_event(BoardEvent.create("client-a", {"title": "X"}))

    result = await handler.handle_delete_event(BoardEvent.delete("client-b", {"id": 7}))

    assert result.outcome is MutationOutcome.NOT_FOUND
    assert _snapshot_ids(transport.broadcasts[-1]) == [created.task.id]
