"""Shared test fixtures and configuration for the test suite."""

from datetime import datetime, timedelta
from pathlib import Path
from typing import List

import pytest

# Add the parent directory to the path for imports
import sys

sys.path.append(str(Path(__file__).parent.parent))

from task_catalog.config import Settings
from task_catalog.models.task import Priority, Task
from task_catalog.repository.memory_store import InMemoryTaskStore
from task_catalog.services.task_catalog import TaskCatalog


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with console-only logging."""
    return Settings(
        app_name="Task Catalog Test",
        environment="test",
        log_level="DEBUG",
        log_file=None,
    )


@pytest.fixture
def now() -> datetime:
    """A fixed, minute-aligned reference time."""
    return datetime(2024, 3, 15, 9, 30)


@pytest.fixture
def store() -> InMemoryTaskStore:
    """Create an empty in-memory task store."""
    return InMemoryTaskStore()


@pytest.fixture
def task_catalog(store) -> TaskCatalog:
    """Create a task catalog backed by the test store."""
    return TaskCatalog(store)


@pytest.fixture
def sample_task(now) -> Task:
    """Create a sample task for testing."""
    return Task(
        title="Test Task",
        description="This is a test task",
        due_date=now + timedelta(days=1),
        priority=Priority.MEDIUM,
    )


@pytest.fixture
def tasks_with_due_dates(task_catalog, now) -> List[Task]:
    """Tasks due in 1, 5 and 10 days plus one with no due date."""
    return [
        task_catalog.create_task("Due in one day", due_date=now + timedelta(days=1), priority=Priority.LOW),
        task_catalog.create_task("Due in five days", due_date=now + timedelta(days=5), priority=Priority.HIGH),
        task_catalog.create_task("Due in ten days", due_date=now + timedelta(days=10), priority=Priority.MEDIUM),
        task_catalog.create_task("No due date", priority=Priority.HIGH),
    ]
