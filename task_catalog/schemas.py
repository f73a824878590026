"""Request schemas: task creation, update directives and list criteria."""

from datetime import datetime
from enum import Enum
from typing import Any, NamedTuple, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .exceptions import InvalidRangeError
from .models.task import Priority, TaskStatus, naive_local


# Task-related schemas
class TaskCreate(BaseModel):
    """Schema for creating a new task."""
    title: str = Field(..., description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    due_date: Optional[datetime] = Field(None, description="Task due date")
    priority: Optional[Priority] = Field(None, description="Task priority")


class ChangeKind(str, Enum):
    """What an update directive asks for one field."""
    OMIT = "omit"
    SET = "set"
    CLEAR = "clear"


class FieldChange(NamedTuple):
    """One field of an update directive: the kind of change plus its value."""
    kind: ChangeKind
    value: Any = None


class TaskUpdate(BaseModel):
    """Sparse update directive for an existing task.

    A field left out of the constructor is omitted (left unchanged). A field
    passed explicitly as ``None`` is cleared, which only has an effect on the
    optional fields ``description`` and ``due_date``. Any other value is set::

        TaskUpdate(title="Ship it")          # only the title changes
        TaskUpdate(due_date=None)            # due date becomes absent
    """
    title: Optional[str] = Field(None, description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    due_date: Optional[datetime] = Field(None, description="Task due date")
    priority: Optional[Priority] = Field(None, description="Task priority")
    status: Optional[TaskStatus] = Field(None, description="Task status")

    @field_validator("due_date")
    @classmethod
    def localize_due_date(cls, value):
        return naive_local(value)

    def change(self, name: str) -> FieldChange:
        """Return the requested change for field ``name``."""
        if name not in type(self).model_fields:
            raise KeyError(name)
        if name not in self.model_fields_set:
            return FieldChange(ChangeKind.OMIT)
        value = getattr(self, name)
        if value is None:
            return FieldChange(ChangeKind.CLEAR)
        return FieldChange(ChangeKind.SET, value)

    def is_empty(self) -> bool:
        """True when every field is omitted."""
        return not self.model_fields_set


# Listing schemas
class SortOption(str, Enum):
    """Orderings available when listing tasks."""
    DUE_DATE_ASC = "due_date_asc"
    DUE_DATE_DESC = "due_date_desc"
    PRIORITY_ASC = "priority_asc"
    PRIORITY_DESC = "priority_desc"
    TITLE_ASC = "title_asc"
    TITLE_DESC = "title_desc"


class TaskCriteria(BaseModel):
    """Filter criteria for listing tasks; every supplied field must match."""
    status: Optional[TaskStatus] = Field(None, description="Exact status to match")
    priority: Optional[Priority] = Field(None, description="Exact priority to match")
    due_start: Optional[datetime] = Field(None, description="Inclusive lower due date bound")
    due_end: Optional[datetime] = Field(None, description="Inclusive upper due date bound")

    @field_validator("due_start", "due_end")
    @classmethod
    def localize_bounds(cls, value):
        return naive_local(value)

    @model_validator(mode="after")
    def validate_due_range(self) -> "TaskCriteria":
        check_due_range(self.due_start, self.due_end)
        return self

    @property
    def has_due_range(self) -> bool:
        return self.due_start is not None or self.due_end is not None


def check_due_range(start: Optional[datetime], end: Optional[datetime]) -> None:
    """Raise InvalidRangeError if both bounds are present and start is after end."""
    if start is not None and end is not None and start > end:
        raise InvalidRangeError(start, end)
