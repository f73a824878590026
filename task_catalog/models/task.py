"""Domain models for the task catalog."""

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

from ..exceptions import InvalidInputError


class TaskStatus(str, Enum):
    """Task status enumeration."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Priority(str, Enum):
    """Task priority, totally ordered LOW < MEDIUM < HIGH."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        """Position of this priority in the LOW < MEDIUM < HIGH order."""
        return _PRIORITY_RANK[self]

    def __lt__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank >= other.rank


_PRIORITY_RANK = {Priority.LOW: 0, Priority.MEDIUM: 1, Priority.HIGH: 2}


def normalize_description(value: Optional[str]) -> Optional[str]:
    """Trim a description; blank collapses to None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def naive_local(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware timestamp to naive local time; naive values pass through."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


class Task(BaseModel):
    """Task domain model.

    Records are immutable. A changed task is a new ``Task`` with the same id,
    produced by the update merger. Equality and hashing use the id only.
    """

    id: str = Field(default_factory=lambda: str(uuid4()), min_length=1, description="Unique task identifier")
    title: str = Field(..., min_length=1, description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    due_date: Optional[datetime] = Field(None, description="Task due date")
    priority: Priority = Field(..., description="Task priority")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Task status")

    class Config:
        """Pydantic configuration."""
        frozen = True

    @field_validator("id", "title", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("description", mode="before")
    @classmethod
    def clean_description(cls, value):
        return normalize_description(value) if isinstance(value, str) else value

    @field_validator("due_date")
    @classmethod
    def localize_due_date(cls, value):
        return naive_local(value)

    def __eq__(self, other):
        if not isinstance(other, Task):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)


class TaskDraft(BaseModel):
    """Named fields for a task that has not been validated yet."""
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    priority: Optional[Priority] = None
    status: TaskStatus = TaskStatus.PENDING
    id: Optional[str] = None


def build_task(draft: TaskDraft) -> Task:
    """Build a ``Task`` from a draft, enforcing the required fields.

    Args:
        draft: Field values for the new task

    Returns:
        The new task; a fresh id is generated when the draft has none

    Raises:
        InvalidInputError: If the title or a given id is blank, or the priority is missing
    """
    if draft.title is None or not draft.title.strip():
        raise InvalidInputError("Task title cannot be null or empty")
    if draft.priority is None:
        raise InvalidInputError("Task priority cannot be null")
    if draft.id is not None and not draft.id.strip():
        raise InvalidInputError("Task ID cannot be null or empty")

    fields = {
        "title": draft.title,
        "description": draft.description,
        "due_date": draft.due_date,
        "priority": draft.priority,
        "status": draft.status,
    }
    if draft.id is not None:
        fields["id"] = draft.id
    return Task(**fields)
