import logging
from collections.abc import Callable
from typing import Any

import inject

from src.board.application.broadcaster import SyncBroadcaster
from src.board.application.store import TaskStore
from src.board.application.validation import (
    validate_create,
    validate_delete,
    validate_move,
    validate_update,
)
from src.board.domain.events.board_event import BoardEvent
from src.board.domain.exceptions import InvalidMutationError
from src.board.domain.models import MutationOutcome, MutationResult, TaskCommand

logger = logging.getLogger(__name__)

Validator = Callable[[Any], TaskCommand]


class BoardEventHandler:
    """Validates client events, applies them to the store and fans out snapshots.

    Handlers are coroutines so they plug into the event router, but they never
    await between touching the store and queueing the resulting snapshot.
    """

    def __init__(
        self,
        store: TaskStore | None = None,
        broadcaster: SyncBroadcaster | None = None,
    ) -> None:
        self._store = store if store is not None else inject.instance(TaskStore)
        self._broadcaster = (
            broadcaster if broadcaster is not None else inject.instance(SyncBroadcaster)
        )

    async def handle_sync_event(self, event: BoardEvent) -> None:
        self._broadcaster.request_sync(event.client_id)

    async def handle_create_event(self, event: BoardEvent) -> MutationResult:
        return self._mutate(event, validate_create)

    async def handle_update_event(self, event: BoardEvent) -> MutationResult:
        return self._mutate(event, validate_update)

    async def handle_move_event(self, event: BoardEvent) -> MutationResult:
        return self._mutate(event, validate_move)

    async def handle_delete_event(self, event: BoardEvent) -> MutationResult:
        return self._mutate(event, validate_delete)

    def _mutate(self, event: BoardEvent, validator: Validator) -> MutationResult:
        try:
            command = validator(event.payload)
        except InvalidMutationError as exc:
            result = MutationResult.rejected(exc.reason)
        else:
            result = self._store.apply(command)

        if result.outcome is not MutationOutcome.APPLIED:
            logger.info(
                "Mutation not applied",
                extra={
                    "event": event.type.value,
                    "client_id": event.client_id,
                    "outcome": result.outcome.value,
                    "reason": result.reason,
                },
            )
        if result.broadcast:
            self._broadcaster.broadcast_all()
        return result
