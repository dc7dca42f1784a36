from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from src.board.domain.events.board_event import BoardEvent, EventType
from src.board.domain.models import MutationResult

logger = logging.getLogger(__name__)

# Mutation handlers return the store outcome; the sync handler returns None.
BoardHandler = Callable[[BoardEvent], Awaitable[MutationResult | None]]


class EventRouter:
    """Maps client event names to board handlers, one handler per event type."""

    def __init__(self) -> None:
        self._handlers: dict[EventType, BoardHandler] = {}

    def register(self, event_type: EventType, handler: BoardHandler) -> None:
        if event_type in self._handlers:
            logger.info("Replacing board handler", extra={"type": event_type.value})
        self._handlers[event_type] = handler

    def registered(self) -> set[EventType]:
        return set(self._handlers)

    async def dispatch(self, event: BoardEvent) -> MutationResult | None:
        """Run the handler for ``event`` and hand back the store outcome, if any."""
        handler = self._handlers.get(event.type)
        if handler is None:
            logger.warning(
                "No board handler for event",
                extra={"type": event.type.value, "client_id": event.client_id},
            )
            return None
        result = await handler(event)
        if result is not None:
            logger.debug(
                "Board event handled",
                extra={
                    "type": event.type.value,
                    "client_id": event.client_id,
                    "outcome": result.outcome.value,
                },
            )
        return result
