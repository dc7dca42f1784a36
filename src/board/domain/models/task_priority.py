from enum import Enum


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, value: object) -> "TaskPriority | None":
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                return None
        return None
