from enum import Enum


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "inprogress"
    DONE = "done"

    @classmethod
    def parse(cls, value: object) -> "TaskStatus | None":
        """Return the matching status, or ``None`` when ``value`` is not one."""
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                return None
        return None
