"""Turn raw client payloads into normalized store commands.

Every function here is pure: it either returns a command or raises
``InvalidMutationError``. Fields that fail their check on an update are
dropped, not rejected, so a partially bad update still applies the rest.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from src.board.domain.events.board_event import EventType
from src.board.domain.exceptions import InvalidMutationError
from src.board.domain.models import (
    DEFAULT_CATEGORY,
    CreateTaskCommand,
    DeleteTaskCommand,
    MoveTaskCommand,
    TaskPriority,
    TaskStatus,
    TaskUpdates,
    UpdateTaskCommand,
)

logger = logging.getLogger(__name__)

_TEXT_FIELDS = ("title", "description", "category")


def _require_mapping(event: EventType, payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise InvalidMutationError(event.value, "payload must be an object")
    return payload


def _require_id(event: EventType, payload: Mapping[str, Any]) -> str:
    task_id = payload.get("id")
    if not isinstance(task_id, str) or not task_id:
        raise InvalidMutationError(event.value, "missing task id")
    return task_id


def _trimmed(value: Any) -> str | None:
    return value.strip() if isinstance(value, str) else None


def _dropped(event: EventType, field: str, value: Any) -> None:
    logger.debug(
        "Dropping invalid field",
        extra={"event": event.value, "field": field, "value": repr(value)},
    )


def validate_create(payload: Any) -> CreateTaskCommand:
    event = EventType.TASK_CREATE
    data = _require_mapping(event, payload)

    title = _trimmed(data.get("title"))
    if not title:
        raise InvalidMutationError(event.value, "title is required")

    status = TaskStatus.parse(data.get("status"))
    if status is None:
        if "status" in data:
            _dropped(event, "status", data["status"])
        status = TaskStatus.TODO

    priority = TaskPriority.parse(data.get("priority"))
    if priority is None:
        if "priority" in data:
            _dropped(event, "priority", data["priority"])
        priority = TaskPriority.LOW

    attachments = data.get("attachments")
    if not isinstance(attachments, list):
        if attachments is not None:
            _dropped(event, "attachments", attachments)
        attachments = []

    return CreateTaskCommand(
        title=title,
        description=_trimmed(data.get("description")) or "",
        status=status,
        priority=priority,
        category=_trimmed(data.get("category")) or DEFAULT_CATEGORY,
        attachments=list(attachments),
    )


def validate_update(payload: Any) -> UpdateTaskCommand:
    event = EventType.TASK_UPDATE
    data = _require_mapping(event, payload)
    task_id = _require_id(event, data)

    raw = data.get("updates")
    if not isinstance(raw, Mapping):
        raise InvalidMutationError(event.value, "updates must be an object")

    fields: dict[str, Any] = {}
    for name in _TEXT_FIELDS:
        if name not in raw:
            continue
        text = _trimmed(raw[name])
        if text is None:
            _dropped(event, name, raw[name])
        else:
            fields[name] = text

    if "status" in raw:
        status = TaskStatus.parse(raw["status"])
        if status is None:
            _dropped(event, "status", raw["status"])
        else:
            fields["status"] = status

    if "priority" in raw:
        priority = TaskPriority.parse(raw["priority"])
        if priority is None:
            _dropped(event, "priority", raw["priority"])
        else:
            fields["priority"] = priority

    if "attachments" in raw:
        if isinstance(raw["attachments"], list):
            fields["attachments"] = list(raw["attachments"])
        else:
            _dropped(event, "attachments", raw["attachments"])

    return UpdateTaskCommand(task_id=task_id, updates=TaskUpdates(**fields))


def validate_move(payload: Any) -> MoveTaskCommand:
    event = EventType.TASK_MOVE
    data = _require_mapping(event, payload)
    task_id = _require_id(event, data)
    new_status = TaskStatus.parse(data.get("newStatus"))
    if new_status is None:
        raise InvalidMutationError(event.value, f"invalid status {data.get('newStatus')!r}")
    return MoveTaskCommand(task_id=task_id, new_status=new_status)


def validate_delete(payload: Any) -> DeleteTaskCommand:
    event = EventType.TASK_DELETE
    data = _require_mapping(event, payload)
    task_id = data.get("id")
    if not task_id:
        raise InvalidMutationError(event.value, "missing task id")
    # Any non-empty id is a delete request; one that is not a string matches
    # nothing and still broadcasts the unchanged collection.
    return DeleteTaskCommand(task_id=task_id if isinstance(task_id, str) else str(task_id))
