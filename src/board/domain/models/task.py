from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.board.domain.models.task_priority import TaskPriority
from src.board.domain.models.task_status import TaskStatus

DEFAULT_CATEGORY = "general"


class Task(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(description="Unique task identifier.")
    title: str = Field(description="Short task title.")
    description: str = Field(default="", description="Free-form details.")
    status: TaskStatus = Field(default=TaskStatus.TODO, description="Board column.")
    priority: TaskPriority = Field(default=TaskPriority.LOW, description="Task priority.")
    category: str = Field(default=DEFAULT_CATEGORY, description="Free-form category label.")
    attachments: list[Any] = Field(
        default_factory=list,
        description="Attachment metadata records ({name, type, url}), kept as given.",
    )
    created_at: int = Field(description="Creation time, epoch milliseconds.")
    updated_at: int = Field(description="Last mutation time, epoch milliseconds.")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
