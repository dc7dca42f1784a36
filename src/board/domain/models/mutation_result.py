from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from src.board.domain.models.task import Task


class MutationOutcome(str, Enum):
    APPLIED = "applied"
    REJECTED = "rejected"
    NOT_FOUND = "not_found"


class MutationResult(BaseModel):
    """Outcome of a store command.

    Results stay on the server: clients only ever observe the next snapshot.
    ``broadcast`` tells the caller whether that snapshot must be sent.
    """

    outcome: MutationOutcome
    reason: str | None = Field(default=None, description="Why nothing was applied.")
    task: Task | None = Field(default=None, description="The task as stored after the change.")
    broadcast: bool = False

    @classmethod
    def applied(cls, task: Task | None = None) -> MutationResult:
        return cls(outcome=MutationOutcome.APPLIED, task=task, broadcast=True)

    @classmethod
    def rejected(cls, reason: str) -> MutationResult:
        return cls(outcome=MutationOutcome.REJECTED, reason=reason)

    @classmethod
    def not_found(cls, task_id: str, *, broadcast: bool = False) -> MutationResult:
        return cls(
            outcome=MutationOutcome.NOT_FOUND,
            reason=f"Task with id '{task_id}' was not found.",
            broadcast=broadcast,
        )
