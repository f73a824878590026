"""Keyed task storage."""

import logging
from threading import Lock
from typing import Callable, Dict, List, Optional, Protocol

from ..models.task import Task

logger = logging.getLogger(__name__)

TaskPredicate = Callable[[Task], bool]


class TaskStore(Protocol):
    """Storage contract consumed by the task catalog.

    An empty or ``None`` id is treated as "not found"; reads never raise for
    unknown keys.
    """

    def get(self, task_id: Optional[str]) -> Optional[Task]: ...

    def put(self, task: Task) -> Task: ...

    def delete(self, task_id: Optional[str]) -> bool: ...

    def list(self, predicate: Optional[TaskPredicate] = None) -> List[Task]: ...

    def exists(self, task_id: Optional[str]) -> bool: ...


class InMemoryTaskStore:
    """Dictionary-backed task store.

    Every call holds the store lock for its whole duration, so each one sees a
    consistent view of the collection. Nothing spans calls.
    """

    def __init__(self):
        """Initialize an empty store."""
        self._tasks: Dict[str, Task] = {}
        self._lock = Lock()
        logger.debug("In-memory task store initialized")

    def get(self, task_id: Optional[str]) -> Optional[Task]:
        """Get a task by ID.

        Args:
            task_id: Task ID

        Returns:
            Task if found, None otherwise
        """
        if not task_id:
            return None
        with self._lock:
            return self._tasks.get(task_id)

    def put(self, task: Task) -> Task:
        """Insert or replace a task under its ID.

        Args:
            task: Task to store

        Returns:
            The stored task
        """
        if task is None:
            raise ValueError("Task cannot be None")
        with self._lock:
            replaced = task.id in self._tasks
            self._tasks[task.id] = task
        logger.debug(f"{'Replaced' if replaced else 'Stored'} task {task.id}")
        return task

    def delete(self, task_id: Optional[str]) -> bool:
        """Delete a task.

        Args:
            task_id: Task ID

        Returns:
            True if a task was removed, False if not found
        """
        if not task_id:
            return False
        with self._lock:
            return self._tasks.pop(task_id, None) is not None

    def list(self, predicate: Optional[TaskPredicate] = None) -> List[Task]:
        """Return a snapshot of the tasks matching ``predicate`` in insertion order."""
        with self._lock:
            tasks = list(self._tasks.values())
        if predicate is None:
            return tasks
        return [task for task in tasks if predicate(task)]

    def exists(self, task_id: Optional[str]) -> bool:
        if not task_id:
            return False
        with self._lock:
            return task_id in self._tasks

    def count(self) -> int:
        with self._lock:
            return len(self._tasks)

    def clear(self) -> int:
        """Remove every task.

        Returns:
            Number of tasks that were removed
        """
        with self._lock:
            count = len(self._tasks)
            self._tasks.clear()
        logger.warning(f"Cleared all {count} tasks")
        return count
