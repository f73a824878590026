"""Apply a sparse update directive to an existing task."""

import logging
from typing import Any, Dict

from ..models.task import Task, normalize_description
from ..schemas import ChangeKind, TaskUpdate

logger = logging.getLogger(__name__)


def merge(existing: Task, directive: TaskUpdate) -> Task:
    """Return a new task with exactly the changes ``directive`` asks for.

    Omitted fields keep their current value. ``description`` and ``due_date``
    can be cleared; ``title``, ``priority`` and ``status`` cannot, and a clear
    or a blank title on them is skipped. The id is never touched and
    ``existing`` is left as it is.

    Args:
        existing: Current version of the task
        directive: Requested field changes

    Returns:
        The merged task
    """
    changes: Dict[str, Any] = {}

    title = directive.change("title")
    if title.kind is ChangeKind.SET:
        stripped = title.value.strip()
        if stripped:
            changes["title"] = stripped
        else:
            logger.debug(f"Ignoring blank title for task {existing.id}")

    description = directive.change("description")
    if description.kind is ChangeKind.CLEAR:
        changes["description"] = None
    elif description.kind is ChangeKind.SET:
        changes["description"] = normalize_description(description.value)

    due_date = directive.change("due_date")
    if due_date.kind is ChangeKind.CLEAR:
        changes["due_date"] = None
    elif due_date.kind is ChangeKind.SET:
        changes["due_date"] = due_date.value

    for name in ("priority", "status"):
        change = directive.change(name)
        if change.kind is ChangeKind.SET:
            changes[name] = change.value
        elif change.kind is ChangeKind.CLEAR:
            logger.debug(f"Ignoring clear of required field {name} for task {existing.id}")

    return existing.model_copy(update=changes)
