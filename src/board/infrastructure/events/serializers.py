from __future__ import annotations

import json

from pydantic import ValidationError

from src.board.domain.events.board_event import BoardEvent, EventType
from src.board.domain.exceptions import MessageDecodeError


def decode_message(raw: str | bytes, client_id: str) -> BoardEvent:
    try:
        envelope = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
        raise MessageDecodeError("Invalid message JSON") from exc

    if not isinstance(envelope, dict):
        raise MessageDecodeError("Message must be a JSON object")

    try:
        event_type = EventType(envelope.get("event"))
    except ValueError as exc:
        raise MessageDecodeError(f"Unknown event {envelope.get('event')!r}") from exc

    try:
        return BoardEvent(type=event_type, client_id=client_id, payload=envelope.get("data"))
    except ValidationError as exc:
        raise MessageDecodeError("Invalid event schema") from exc
