"""Tests for taskpad.storage module."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest

from taskpad.storage import StorageError, TaskFile, TaskRecord, load_tasks, save_tasks
from taskpad.task import Deadline, Event, Todo
from taskpad.task_list import TaskList


class TestTaskRecord:
    """Tests for TaskRecord conversion."""

    def test_from_todo(self) -> None:
        record = TaskRecord.from_task(Todo("read", done=True))
        assert record.type == "todo"
        assert record.done is True
        assert record.by is None
        assert record.at is None

    def test_from_deadline(self) -> None:
        record = TaskRecord.from_task(Deadline("return book", date(2021, 12, 25)))
        assert record.type == "deadline"
        assert record.by == date(2021, 12, 25)

    def test_from_event(self) -> None:
        record = TaskRecord.from_task(Event("meeting", "Mon 2-4pm"))
        assert record.type == "event"
        assert record.at == "Mon 2-4pm"

    def test_deadline_requires_date(self) -> None:
        record = TaskRecord(type="deadline", description="return book")
        with pytest.raises(ValueError):
            record.to_task()

    def test_empty_description_rejected(self) -> None:
        with pytest.raises(Exception):
            TaskRecord(type="todo", description="")

    def test_unknown_type_rejected(self) -> None:
        with pytest.raises(Exception):
            TaskRecord(type="chore", description="sweep")  # type: ignore[arg-type]


class TestLoadTasks:
    """Tests for load_tasks."""

    def test_missing_file(self, temp_project: Path) -> None:
        """Test loading returns an empty list when the file doesn't exist."""
        task_list = load_tasks(temp_project / "missing.json")
        assert task_list.count() == 0

    def test_load_existing_file(self, sample_tasks_file: Path) -> None:
        task_list = load_tasks(sample_tasks_file)
        assert task_list.numbered() == [
            (1, "[T][X] buy milk"),
            (2, "[D][ ] return book (by: Dec 25 2021)"),
            (3, "[E][ ] project meeting (at: Mon 2-4pm)"),
        ]

    def test_default_path(self, sample_tasks_file: Path) -> None:
        """Test the default path is .taskpad/tasks.json in the working directory."""
        assert load_tasks().count() == 3

    def test_invalid_json(self, temp_taskpad_dir: Path) -> None:
        path = temp_taskpad_dir / "tasks.json"
        path.write_text("not json {")
        with pytest.raises(StorageError) as exc_info:
            load_tasks(path)
        assert exc_info.value.path == path
        assert str(path) in str(exc_info.value)

    def test_invalid_record(self, temp_taskpad_dir: Path) -> None:
        path = temp_taskpad_dir / "tasks.json"
        path.write_text(json.dumps({"tasks": [{"type": "deadline", "description": "x"}]}))
        with pytest.raises(StorageError):
            load_tasks(path)

    def test_wrong_shape(self, temp_taskpad_dir: Path) -> None:
        path = temp_taskpad_dir / "tasks.json"
        path.write_text(json.dumps({"tasks": "nope"}))
        with pytest.raises(StorageError):
            load_tasks(path)

    def test_unreadable_path(self, temp_project: Path) -> None:
        """Test an OS error while reading is raised as StorageError."""
        path = temp_project / "tasks.json"
        path.mkdir()
        with pytest.raises(StorageError) as exc_info:
            load_tasks(path)
        assert exc_info.value.action == "read"
        assert str(exc_info.value).startswith(f"Could not read task file {path}: ")


class TestSaveTasks:
    """Tests for save_tasks."""

    def test_save_creates_directory(self, temp_project: Path) -> None:
        path = temp_project / "nested" / "dir" / "tasks.json"
        save_tasks(TaskList([Todo("read")]), path)
        assert path.exists()

    def test_file_format(self, temp_project: Path) -> None:
        path = temp_project / "tasks.json"
        save_tasks(TaskList([Deadline("return book", date(2021, 12, 25), done=True)]), path)

        with open(path) as f:
            data = json.load(f)
        assert "saved_at" in data
        assert data["tasks"] == [
            {
                "type": "deadline",
                "description": "return book",
                "done": True,
                "by": "2021-12-25",
                "at": None,
            }
        ]

    def test_round_trip(self, temp_project: Path) -> None:
        """Test saving then loading keeps types, flags and dates."""
        original = TaskList(
            [
                Todo("buy milk", done=True),
                Deadline("return book", date(2021, 12, 25)),
                Event("party", "2021-12-31 9pm"),
            ]
        )
        path = temp_project / "tasks.json"
        save_tasks(original, path)

        loaded = load_tasks(path)
        assert loaded.numbered() == original.numbered()
        assert [type(t) for t in loaded] == [Todo, Deadline, Event]

    def test_save_empty(self, temp_project: Path) -> None:
        path = temp_project / "tasks.json"
        save_tasks(TaskList(), path)
        assert TaskFile.model_validate_json(path.read_text()).tasks == []

    def test_unwritable_path(self, temp_project: Path) -> None:
        """Test an OS error while writing is raised as StorageError."""
        (temp_project / "blocker").write_text("a regular file")
        path = temp_project / "blocker" / "tasks.json"

        with pytest.raises(StorageError) as exc_info:
            save_tasks(TaskList([Todo("read")]), path)
        assert exc_info.value.path == path
        assert exc_info.value.action == "write"
        assert str(exc_info.value).startswith(f"Could not write task file {path}: ")
        assert (temp_project / "blocker").read_text() == "a regular file"
