"""Tests for the text console and its parsing helpers."""

from datetime import datetime
from typing import List

import pytest

from task_catalog.cli.console import TaskConsole, format_task
from task_catalog.cli.parsing import parse_due_date, parse_enum, parse_optional_change
from task_catalog.models.task import Priority, Task, TaskStatus
from task_catalog.schemas import ChangeKind, SortOption


class ScriptedIO:
    """Feeds canned input lines and records output lines."""

    def __init__(self, lines: List[str]):
        self._lines = iter(lines)
        self.output: List[str] = []

    def read(self, prompt: str) -> str:
        try:
            return next(self._lines)
        except StopIteration:
            raise EOFError from None

    def write(self, text: str = "") -> None:
        self.output.append(text)

    @property
    def text(self) -> str:
        return "\n".join(self.output)


def run_session(task_catalog, settings, lines: List[str]) -> ScriptedIO:
    io = ScriptedIO(lines)
    TaskConsole(task_catalog, settings, input_func=io.read, output_func=io.write).run()
    return io


class TestParsing:
    """Test the input parsing helpers."""

    def test_parse_due_date(self):
        assert parse_due_date("2024-03-15 09:30") == datetime(2024, 3, 15, 9, 30)
        assert parse_due_date("  2024-03-15 09:30  ") == datetime(2024, 3, 15, 9, 30)

    @pytest.mark.parametrize("text", ["", "tomorrow", "2024-03-15", "15/03/2024 09:30", "2024-13-01 00:00"])
    def test_parse_due_date_invalid(self, text):
        assert parse_due_date(text) is None

    def test_parse_due_date_custom_format(self):
        assert parse_due_date("15.03.2024", "%d.%m.%Y") == datetime(2024, 3, 15)

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("HIGH", Priority.HIGH),
            ("low", Priority.LOW),
            (" Medium ", Priority.MEDIUM),
            ("urgent", None),
            ("", None),
        ],
    )
    def test_parse_priority(self, text, expected):
        assert parse_enum(Priority, text) == expected

    @pytest.mark.parametrize("text", ["IN_PROGRESS", "in_progress", "in-progress", "in progress"])
    def test_parse_status_spellings(self, text):
        assert parse_enum(TaskStatus, text) == TaskStatus.IN_PROGRESS

    def test_parse_sort_option(self):
        assert parse_enum(SortOption, "due_date_desc") == SortOption.DUE_DATE_DESC

    def test_parse_optional_change(self):
        assert parse_optional_change("", str).kind is ChangeKind.OMIT
        assert parse_optional_change("CLEAR", str).kind is ChangeKind.CLEAR
        assert parse_optional_change("value", str) == (ChangeKind.SET, "value")
        assert parse_optional_change("not a date", parse_due_date) is None

    def test_parse_optional_change_custom_keyword(self):
        assert parse_optional_change("none", str, clear_keyword="none").kind is ChangeKind.CLEAR
        assert parse_optional_change("clear", str, clear_keyword="none").kind is ChangeKind.SET


class TestFormatTask:
    """Test task rendering."""

    def test_format_full_task(self):
        task = Task(
            id="t1",
            title="Report",
            description="Q1",
            due_date=datetime(2024, 3, 15, 9, 30),
            priority=Priority.HIGH,
            status=TaskStatus.IN_PROGRESS,
        )

        lines = format_task(task)

        assert "ID: t1" in lines
        assert "Description: Q1" in lines
        assert "Due Date: 2024-03-15 09:30" in lines
        assert "Priority: HIGH" in lines
        assert "Status: IN_PROGRESS" in lines

    def test_format_skips_absent_fields(self):
        lines = format_task(Task(title="Bare", priority=Priority.LOW))

        assert not any(line.startswith("Description") for line in lines)
        assert not any(line.startswith("Due Date") for line in lines)


class TestTaskConsole:
    """Test scripted console sessions."""

    def test_help_and_quit(self, task_catalog, test_settings):
        io = run_session(task_catalog, test_settings, ["h", "q"])

        assert "Available commands:" in io.output
        assert io.output[-1] == "Goodbye!"

    def test_end_of_input_quits(self, task_catalog, test_settings):
        io = run_session(task_catalog, test_settings, [])

        assert io.output[-1] == "Goodbye!"

    def test_unknown_command(self, task_catalog, test_settings):
        io = run_session(task_catalog, test_settings, ["frobnicate", "q"])

        assert "Unknown command. Type 'help' for available commands." in io.output

    def test_create_task(self, task_catalog, test_settings):
        io = run_session(
            task_catalog,
            test_settings,
            ["c", "Write report", "Quarterly", "2024-03-15 09:30", "high", "q"],
        )

        assert "Task created successfully!" in io.output
        (task,) = task_catalog.list_all_tasks()
        assert task.title == "Write report"
        assert task.description == "Quarterly"
        assert task.due_date == datetime(2024, 3, 15, 9, 30)
        assert task.priority == Priority.HIGH

    def test_create_task_defaults_and_warnings(self, task_catalog, test_settings):
        io = run_session(
            task_catalog,
            test_settings,
            ["create", "Loose task", "", "next week", "urgent", "q"],
        )

        assert "Invalid date format. Task created without due date." in io.output
        assert "Invalid priority. Using MEDIUM." in io.output
        (task,) = task_catalog.list_all_tasks()
        assert task.due_date is None
        assert task.description is None
        assert task.priority == Priority.MEDIUM

    def test_create_task_requires_title(self, task_catalog, test_settings):
        io = run_session(task_catalog, test_settings, ["c", "", "q"])

        assert "Error: Title is required" in io.output
        assert task_catalog.list_all_tasks() == []

    def test_update_task(self, task_catalog, test_settings):
        task = task_catalog.create_task(
            "Original", "Old notes", datetime(2024, 3, 15, 9, 30), Priority.LOW
        )

        io = run_session(
            task_catalog,
            test_settings,
            ["u", task.id, "", "clear", "", "HIGH", "completed", "q"],
        )

        assert "Task updated successfully!" in io.output
        updated = task_catalog.get_task(task.id)
        assert updated.title == "Original"
        assert updated.description is None
        assert updated.due_date == datetime(2024, 3, 15, 9, 30)
        assert updated.priority == Priority.HIGH
        assert updated.status == TaskStatus.COMPLETED

    def test_update_invalid_fields_are_skipped(self, task_catalog, test_settings):
        task = task_catalog.create_task(
            "Original", "Notes", datetime(2024, 3, 15, 9, 30), Priority.LOW
        )

        io = run_session(
            task_catalog,
            test_settings,
            ["u", task.id, "Renamed", "", "someday", "critical", "blocked", "q"],
        )

        assert "Invalid date format. Due date not updated." in io.output
        assert "Invalid priority. Priority not updated." in io.output
        assert "Invalid status. Status not updated." in io.output
        updated = task_catalog.get_task(task.id)
        assert updated.title == "Renamed"
        assert updated.description == "Notes"
        assert updated.due_date == datetime(2024, 3, 15, 9, 30)
        assert updated.priority == Priority.LOW
        assert updated.status == TaskStatus.PENDING

    def test_update_unknown_task(self, task_catalog, test_settings):
        io = run_session(task_catalog, test_settings, ["u", "missing", "q"])

        assert "Error: Task with ID 'missing' not found" in io.output

    def test_get_and_delete(self, task_catalog, test_settings):
        task = task_catalog.create_task("Disposable", priority=Priority.LOW)

        io = run_session(task_catalog, test_settings, ["g", task.id, "d", task.id, "g", task.id, "q"])

        assert "Title: Disposable" in io.output
        assert "Task deleted successfully!" in io.output
        assert f"Error: Task with ID '{task.id}' not found" in io.output

    def test_list_without_filters(self, task_catalog, test_settings):
        task_catalog.create_task("B task", priority=Priority.LOW)
        task_catalog.create_task("A task", priority=Priority.HIGH)

        io = run_session(task_catalog, test_settings, ["l", "n", "title_asc", "q"])

        assert "Found 2 task(s):" in io.output
        titles = [line for line in io.output if line.startswith("Title: ")]
        assert titles == ["Title: A task", "Title: B task"]

    def test_list_with_filters(self, task_catalog, test_settings):
        task_catalog.create_task("Soon", due_date=datetime(2024, 3, 16, 9, 0), priority=Priority.HIGH)
        task_catalog.create_task("Later", due_date=datetime(2024, 4, 1, 9, 0), priority=Priority.HIGH)
        task_catalog.create_task("Undated", priority=Priority.HIGH)

        io = run_session(
            task_catalog,
            test_settings,
            ["l", "y", "pending", "high", "2024-03-15 00:00", "2024-03-22 00:00", "", "q"],
        )

        titles = [line for line in io.output if line.startswith("Title: ")]
        assert titles == ["Title: Soon"]

    def test_list_inverted_range_reports_error(self, task_catalog, test_settings):
        io = run_session(
            task_catalog,
            test_settings,
            ["l", "y", "", "", "2024-03-22 00:00", "2024-03-15 00:00", "q"],
        )

        assert any(line.startswith("Error: Start date") for line in io.output)

    def test_list_invalid_sort_and_no_results(self, task_catalog, test_settings):
        io = run_session(task_catalog, test_settings, ["l", "", "sideways", "q"])

        assert "Invalid sort option. Results not sorted." in io.output
        assert "No tasks found." in io.output
