"""Error types raised by the task catalog core."""

from datetime import datetime
from typing import Optional


class TaskCatalogError(Exception):
    """Base class for all task catalog errors."""


class InvalidInputError(TaskCatalogError):
    """A required input (id, title, priority) is missing or empty."""


class NotFoundError(TaskCatalogError):
    """The operation targets a task id that does not exist."""

    def __init__(self, task_id: str, message: Optional[str] = None):
        self.task_id = task_id
        super().__init__(message or f"Task with ID '{task_id}' not found")


class InvalidRangeError(TaskCatalogError):
    """A due date range filter was built with its start after its end."""

    def __init__(self, start: datetime, end: datetime):
        self.start = start
        self.end = end
        super().__init__(
            f"Start date {start.isoformat()} cannot be after end date {end.isoformat()}"
        )
