"""JSON persistence for the task list.

The file holds every task with its type, description, completion flag and
date or time. It is rewritten in full after each change, so it always
matches the last outcome shown to the user.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError

from taskpad.config import TASKS_FILE
from taskpad.jsonfile import read_json, write_json
from taskpad.task import Deadline, Event, Task, Todo
from taskpad.task_list import TaskList

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the task file cannot be read or written."""

    def __init__(self, path: Path, reason: str, action: str = "read") -> None:
        super().__init__(f"Could not {action} task file {path}: {reason}")
        self.path = path
        self.reason = reason
        self.action = action


class TaskRecord(BaseModel):
    """On-disk form of a single task."""

    type: Literal["todo", "deadline", "event"]
    description: str = Field(min_length=1)
    done: bool = False
    by: date | None = None
    at: str | None = None

    @classmethod
    def from_task(cls, task: Task) -> TaskRecord:
        return cls(
            type=task.task_type.command,
            description=task.description,
            done=task.done,
            by=task.by if isinstance(task, Deadline) else None,
            at=task.at if isinstance(task, Event) else None,
        )

    def to_task(self) -> Task:
        if self.type == "deadline":
            if self.by is None:
                raise ValueError(f"deadline '{self.description}' has no date")
            return Deadline(self.description, self.by, done=self.done)
        elif self.type == "event":
            if not self.at:
                raise ValueError(f"event '{self.description}' has no time")
            return Event(self.description, self.at, done=self.done)
        return Todo(self.description, done=self.done)


class TaskFile(BaseModel):
    """The whole task file."""

    saved_at: str = Field(default_factory=lambda: datetime.now().isoformat())
    tasks: list[TaskRecord] = Field(default_factory=list)


def load_tasks(path: Path | None = None) -> TaskList:
    """Load the task list from disk, or an empty list if there is no file."""
    if path is None:
        path = TASKS_FILE

    try:
        data = read_json(path)
        if data is None:
            logger.debug("No task file at %s, starting empty", path)
            return TaskList()
        task_file = TaskFile.model_validate(data)
        tasks = [record.to_task() for record in task_file.tasks]
    except OSError as e:
        raise StorageError(path, e.strerror or str(e)) from e
    except (ValidationError, ValueError) as e:
        raise StorageError(path, str(e)) from e

    logger.debug("Loaded %d tasks from %s", len(tasks), path)
    return TaskList(tasks)


def save_tasks(task_list: TaskList, path: Path | None = None) -> None:
    """Write the task list to disk."""
    if path is None:
        path = TASKS_FILE

    task_file = TaskFile(tasks=[TaskRecord.from_task(task) for task in task_list])
    try:
        write_json(path, task_file.model_dump(mode="json"))
    except OSError as e:
        raise StorageError(path, e.strerror or str(e), action="write") from e

    logger.debug("Saved %d tasks to %s", len(task_list), path)
