import inject

from src.board.application.broadcaster import SnapshotTransport, SyncBroadcaster
from src.board.application.handlers import BoardEventHandler
from src.board.application.store import TaskStore
from src.board.domain.events.board_event import EventType
from src.board.infrastructure.events import EventRouter
from src.board.presentation.websockets import BoardConnectionManager


def build_event_router(handler: BoardEventHandler | None = None) -> EventRouter:
    """Build an event router wired to the board event handler."""
    router = EventRouter()
    handler = handler or BoardEventHandler()
    router.register(EventType.SYNC_TASKS, handler.handle_sync_event)
    router.register(EventType.TASK_CREATE, handler.handle_create_event)
    router.register(EventType.TASK_UPDATE, handler.handle_update_event)
    router.register(EventType.TASK_MOVE, handler.handle_move_event)
    router.register(EventType.TASK_DELETE, handler.handle_delete_event)
    return router


def configure_di(store: TaskStore | None = None, outbox_size: int = 100) -> None:
    """Bind a fresh board (store, connections, broadcaster, router) into the injector.

    Any previous configuration is replaced, which is what a process restart
    means for the board: the collection starts empty.
    """
    if store is None:
        store = TaskStore()
    manager = BoardConnectionManager(outbox_size)
    broadcaster = SyncBroadcaster(store, manager)
    router = build_event_router(BoardEventHandler(store, broadcaster))

    def _config(binder: inject.Binder) -> None:
        binder.bind(TaskStore, store)
        binder.bind(BoardConnectionManager, manager)
        binder.bind(SnapshotTransport, manager)
        binder.bind(SyncBroadcaster, broadcaster)
        binder.bind(EventRouter, router)

    inject.clear_and_configure(_config)
