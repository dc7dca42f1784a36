from __future__ import annotations

from typing import Any

import inject
from fastapi import APIRouter
from pydantic import BaseModel, Field

from src.board.application.store import TaskStore
from src.board.presentation.websockets import BoardConnectionManager

router = APIRouter(tags=["board"])


class HealthResponse(BaseModel):
    status: str = Field(default="ok")
    connections: int = Field(description="Currently connected board clients.")
    tasks: int = Field(description="Tasks in the live collection.")


@router.get("/health", response_model=HealthResponse, summary="Board health")
def health() -> HealthResponse:
    return HealthResponse(
        connections=len(inject.instance(BoardConnectionManager)),
        tasks=len(inject.instance(TaskStore)),
    )


@router.get(
    "/tasks",
    summary="Current snapshot",
    description=(
        "Returns the same full task collection a `sync:tasks` message carries. "
        "Read-only: mutations only travel over the WebSocket."
    ),
)
def list_tasks() -> list[dict[str, Any]]:
    return [task.to_wire() for task in inject.instance(TaskStore).list()]
