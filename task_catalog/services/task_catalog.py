"""Task catalog: validated CRUD, filtering and sorting over a task store."""

import logging
from datetime import datetime
from typing import List, Optional

from ..exceptions import InvalidInputError, NotFoundError
from ..models.task import Priority, Task, TaskDraft, TaskStatus, build_task
from ..repository.memory_store import InMemoryTaskStore, TaskStore
from ..schemas import SortOption, TaskCreate, TaskCriteria, TaskUpdate
from .query_engine import build_predicate, sort_tasks
from .update_merger import merge

logger = logging.getLogger(__name__)


class TaskCatalog:
    """Entry point for task operations.

    Inputs are validated here before the store, merger or query engine see
    them. Updates are a plain read-merge-write against the store with no lock
    or version check across the three steps: two concurrent updates of the
    same task race and the last write wins.
    """

    def __init__(self, store: Optional[TaskStore] = None):
        """Initialize the catalog.

        Args:
            store: Task store to use; a new in-memory store when omitted
        """
        self._store: TaskStore = store if store is not None else InMemoryTaskStore()
        logger.info("Task catalog initialized")

    @property
    def store(self) -> TaskStore:
        return self._store

    def create_task(
        self,
        title: Optional[str],
        description: Optional[str] = None,
        due_date: Optional[datetime] = None,
        priority: Optional[Priority] = None,
    ) -> Task:
        """Create a new task.

        Args:
            title: Task title
            description: Optional task description
            due_date: Optional due date
            priority: Task priority

        Returns:
            Created task, in PENDING status

        Raises:
            InvalidInputError: If title is empty or priority is missing
        """
        if title is None or not title.strip():
            raise InvalidInputError("Task title cannot be null or empty")
        if priority is None:
            raise InvalidInputError("Task priority cannot be null")

        task = build_task(
            TaskDraft(
                title=title,
                description=description,
                due_date=due_date,
                priority=priority,
                status=TaskStatus.PENDING,
            )
        )
        self._store.put(task)

        logger.info(f"Created task {task.id}: {task.title}")
        return task

    def create_task_from_schema(self, task_data: TaskCreate) -> Task:
        """Create a new task from schema.

        Args:
            task_data: Task creation data

        Returns:
            Created task
        """
        return self.create_task(
            title=task_data.title,
            description=task_data.description,
            due_date=task_data.due_date,
            priority=task_data.priority,
        )

    def get_task(self, task_id: Optional[str]) -> Task:
        """Get a task by ID.

        Raises:
            InvalidInputError: If task_id is empty
            NotFoundError: If no task has this ID
        """
        self._require_id(task_id)

        task = self._store.get(task_id)
        if task is None:
            logger.warning(f"Task {task_id} not found")
            raise NotFoundError(task_id)

        logger.debug(f"Retrieved task {task_id}: {task.title}")
        return task

    def update_task(self, task_id: Optional[str], directive: TaskUpdate) -> Task:
        """Apply an update directive to a task and store the result.

        Args:
            task_id: Task ID
            directive: Requested field changes

        Returns:
            Updated task

        Raises:
            InvalidInputError: If task_id is empty
            NotFoundError: If no task has this ID
        """
        self._require_id(task_id)

        existing = self._store.get(task_id)
        if existing is None:
            logger.warning(f"Task {task_id} not found for update")
            raise NotFoundError(task_id)

        updated = merge(existing, directive)
        self._store.put(updated)

        if directive.is_empty():
            logger.info(f"Update for task {task_id} requested no changes")
        else:
            changed = ", ".join(sorted(directive.model_fields_set))
            logger.info(f"Updated task {task_id} ({changed}): {updated.title}")
        return updated

    def delete_task(self, task_id: Optional[str]) -> None:
        """Delete a task.

        Raises:
            InvalidInputError: If task_id is empty
            NotFoundError: If no task has this ID
        """
        self._require_id(task_id)

        if not self._store.delete(task_id):
            logger.warning(f"Task {task_id} not found for deletion")
            raise NotFoundError(task_id)

        logger.info(f"Deleted task {task_id}")

    def list_tasks(
        self,
        criteria: Optional[TaskCriteria] = None,
        sort: Optional[SortOption] = None,
    ) -> List[Task]:
        """List tasks with optional filters and ordering.

        Args:
            criteria: Filter criteria; all tasks match when omitted
            sort: Ordering; store order is kept when omitted

        Returns:
            Matching tasks, possibly empty

        Raises:
            InvalidRangeError: If the criteria hold a due date range whose
                start is after its end
        """
        predicate = build_predicate(criteria)
        tasks = sort_tasks(self._store.list(predicate), sort)

        filters = criteria.model_dump(exclude_none=True) if criteria else {}
        logger.debug(f"Listed {len(tasks)} tasks (filters={filters}, sort={sort.value if sort else None})")
        return tasks

    def list_all_tasks(self) -> List[Task]:
        """List every task in store order."""
        return self._store.list()

    @staticmethod
    def _require_id(task_id: Optional[str]) -> None:
        if task_id is None or not task_id.strip():
            raise InvalidInputError("Task ID cannot be null or empty")


# Global task catalog instance - initialized by the entry point
_task_catalog: Optional[TaskCatalog] = None


def get_task_catalog() -> Optional[TaskCatalog]:
    """Get the global task catalog instance.

    Returns:
        Task catalog instance or None if not initialized
    """
    return _task_catalog


def initialize_task_catalog(store: Optional[TaskStore] = None) -> TaskCatalog:
    """Initialize the global task catalog instance.

    Args:
        store: Task store to use; a new in-memory store when omitted

    Returns:
        Initialized task catalog
    """
    global _task_catalog
    _task_catalog = TaskCatalog(store)
    return _task_catalog
