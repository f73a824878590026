"""Line-oriented console for the task catalog."""

import logging
from typing import Any, Callable, Dict, List

from ..config import Settings
from ..exceptions import TaskCatalogError
from ..models.task import Priority, Task, TaskStatus
from ..schemas import ChangeKind, SortOption, TaskCriteria, TaskUpdate
from ..services.task_catalog import TaskCatalog
from .parsing import parse_due_date, parse_enum, parse_optional_change

logger = logging.getLogger(__name__)

SEPARATOR = "-" * 40


class TaskConsole:
    """Interactive prompt loop over a task catalog.

    Input parsing happens here. A field that does not parse is reported and
    left out, so the catalog only ever receives typed values.
    """

    def __init__(
        self,
        catalog: TaskCatalog,
        settings: Settings,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print,
    ):
        """Initialize the console.

        Args:
            catalog: Task catalog to operate on
            settings: Application settings (date format, clear keyword, default priority)
            input_func: Reads one line after showing a prompt
            output_func: Writes one line
        """
        self.catalog = catalog
        self.settings = settings
        self._input = input_func
        self._output = output_func

        self._commands: Dict[str, Callable[[], None]] = {}
        self._register(self.create_task, "c", "create")
        self._register(self.update_task, "u", "update")
        self._register(self.delete_task, "d", "delete")
        self._register(self.list_tasks, "l", "list")
        self._register(self.get_task, "g", "get")
        self._register(self.print_help, "h", "help", "?")

        logger.debug("Task console initialized")

    def _register(self, handler: Callable[[], None], *names: str) -> None:
        for name in names:
            self._commands[name] = handler

    def _write(self, text: str = "") -> None:
        self._output(text)

    def _ask(self, prompt: str) -> str:
        return self._input(prompt).strip()

    def run(self) -> None:
        """Read and dispatch commands until quit or end of input."""
        self._write("=== Task Management System ===")
        self._write("Welcome! Type 'help' for available commands.")
        self._write()

        while True:
            try:
                line = self._ask("> ")
            except EOFError:
                self._write("Goodbye!")
                break

            if not line:
                continue

            action = line.split()[0].lower()
            if action in ("q", "quit", "exit"):
                self._write("Goodbye!")
                break

            handler = self._commands.get(action)
            if handler is None:
                self._write("Unknown command. Type 'help' for available commands.")
                self._write()
                continue

            try:
                handler()
            except EOFError:
                self._write("Goodbye!")
                break
            except TaskCatalogError as e:
                logger.debug(f"Command '{action}' failed: {e}")
                self._write(f"Error: {e}")
            except Exception as e:
                logger.exception(f"Unexpected error running command '{action}'")
                self._write(f"Error: {e}")
            self._write()

    # Commands

    def create_task(self) -> None:
        self._write("--- Create New Task ---")
        title = self._ask("Title: ")
        if not title:
            self._write("Error: Title is required")
            return

        description = self._ask("Description (optional): ") or None

        due_date = None
        due_text = self._ask(f"Due date ({self._date_hint}, optional): ")
        if due_text:
            due_date = parse_due_date(due_text, self.settings.date_format)
            if due_date is None:
                self._write("Invalid date format. Task created without due date.")

        default = self.settings.default_priority
        priority = default
        priority_text = self._ask(f"Priority ({self._choices(Priority)}) [{default.name}]: ")
        if priority_text:
            priority = parse_enum(Priority, priority_text)
            if priority is None:
                self._write(f"Invalid priority. Using {default.name}.")
                priority = default

        task = self.catalog.create_task(title, description, due_date, priority)
        self._write("Task created successfully!")
        self.print_task(task)

    def update_task(self) -> None:
        self._write("--- Update Task ---")
        task_id = self._ask("Task ID: ")
        if not task_id:
            self._write("Error: Task ID is required")
            return

        existing = self.catalog.get_task(task_id)
        self._write("Current task:")
        self.print_task(existing)
        self._write()
        self._write("Leave fields empty to keep current values.")

        changes: Dict[str, Any] = {}
        clear = self.settings.clear_keyword

        title = self._ask("New title (optional): ")
        if title:
            changes["title"] = title

        description = parse_optional_change(
            self._ask(f"New description (optional, type '{clear}' to remove): "),
            lambda text: text,
            clear,
        )
        self._apply_change(changes, "description", description)

        due_date = parse_optional_change(
            self._ask(f"New due date ({self._date_hint}, optional, type '{clear}' to remove): "),
            lambda text: parse_due_date(text, self.settings.date_format),
            clear,
        )
        if due_date is None:
            self._write("Invalid date format. Due date not updated.")
        self._apply_change(changes, "due_date", due_date)

        priority_text = self._ask(f"New priority ({self._choices(Priority)}, optional): ")
        if priority_text:
            priority = parse_enum(Priority, priority_text)
            if priority is None:
                self._write("Invalid priority. Priority not updated.")
            else:
                changes["priority"] = priority

        status_text = self._ask(f"New status ({self._choices(TaskStatus)}, optional): ")
        if status_text:
            status = parse_enum(TaskStatus, status_text)
            if status is None:
                self._write("Invalid status. Status not updated.")
            else:
                changes["status"] = status

        updated = self.catalog.update_task(task_id, TaskUpdate(**changes))
        self._write("Task updated successfully!")
        self.print_task(updated)

    def delete_task(self) -> None:
        self._write("--- Delete Task ---")
        task_id = self._ask("Task ID: ")
        if not task_id:
            self._write("Error: Task ID is required")
            return

        self.catalog.delete_task(task_id)
        self._write("Task deleted successfully!")

    def get_task(self) -> None:
        self._write("--- Get Task ---")
        task_id = self._ask("Task ID: ")
        if not task_id:
            self._write("Error: Task ID is required")
            return

        self.print_task(self.catalog.get_task(task_id))

    def list_tasks(self) -> None:
        self._write("--- List Tasks ---")
        criteria = None
        if self._ask("Apply filters? (y/n) [n]: ").lower() in ("y", "yes"):
            criteria = self._read_criteria()

        sort = None
        sort_text = self._ask(f"Sort by ({self._choices(SortOption)}, optional): ")
        if sort_text:
            sort = parse_enum(SortOption, sort_text)
            if sort is None:
                self._write("Invalid sort option. Results not sorted.")

        tasks = self.catalog.list_tasks(criteria, sort)
        if not tasks:
            self._write("No tasks found.")
            return

        self._write()
        self._write(f"Found {len(tasks)} task(s):")
        for task in tasks:
            self.print_task(task)

    def print_help(self) -> None:
        self._write("Available commands:")
        self._write("c - Create a new task")
        self._write("u - Update an existing task")
        self._write("d - Delete a task")
        self._write("l - List all tasks (with optional filters and sorting)")
        self._write("g - Get a task by ID")
        self._write("h - Show this help message")
        self._write("q - Exit the application")

    # Helpers

    def _read_criteria(self) -> TaskCriteria:
        fields: Dict[str, Any] = {}

        status_text = self._ask(f"Filter by status ({self._choices(TaskStatus)}, optional): ")
        if status_text:
            fields["status"] = parse_enum(TaskStatus, status_text)
            if fields["status"] is None:
                self._write("Invalid status. Status filter not applied.")

        priority_text = self._ask(f"Filter by priority ({self._choices(Priority)}, optional): ")
        if priority_text:
            fields["priority"] = parse_enum(Priority, priority_text)
            if fields["priority"] is None:
                self._write("Invalid priority. Priority filter not applied.")

        for key, label in (("due_start", "start"), ("due_end", "end")):
            text = self._ask(f"Filter by due date range {label} ({self._date_hint}, optional): ")
            if text:
                fields[key] = parse_due_date(text, self.settings.date_format)
                if fields[key] is None:
                    self._write(f"Invalid date format. {label.capitalize()} date filter not applied.")

        return TaskCriteria(**fields)

    def _apply_change(self, changes: Dict[str, Any], name: str, change) -> None:
        if change is None or change.kind is ChangeKind.OMIT:
            return
        changes[name] = change.value if change.kind is ChangeKind.SET else None

    @property
    def _date_hint(self) -> str:
        return (
            self.settings.date_format
            .replace("%Y", "yyyy").replace("%m", "MM").replace("%d", "dd")
            .replace("%H", "HH").replace("%M", "mm")
        )

    @staticmethod
    def _choices(enum_cls) -> str:
        return ", ".join(member.name for member in enum_cls)

    def print_task(self, task: Task) -> None:
        for line in format_task(task, self.settings.date_format):
            self._write(line)


def format_task(task: Task, date_format: str = "%Y-%m-%d %H:%M") -> List[str]:
    """Render a task as the block of lines the console prints."""
    lines = [SEPARATOR, f"ID: {task.id}", f"Title: {task.title}"]
    if task.description is not None:
        lines.append(f"Description: {task.description}")
    if task.due_date is not None:
        lines.append(f"Due Date: {task.due_date.strftime(date_format)}")
    lines.append(f"Priority: {task.priority.name}")
    lines.append(f"Status: {task.status.name}")
    lines.append(SEPARATOR)
    return lines
