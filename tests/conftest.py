"""Shared fixtures for taskpad tests."""

from __future__ import annotations

import json
import os
from collections.abc import Callable, Generator, Iterable
from pathlib import Path

import pytest

from taskpad.parser import CommandDispatcher


@pytest.fixture
def temp_project(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary project directory and change to it."""
    original_dir = os.getcwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(original_dir)


@pytest.fixture
def temp_taskpad_dir(temp_project: Path) -> Path:
    """Create a temporary .taskpad directory."""
    taskpad_dir = temp_project / ".taskpad"
    taskpad_dir.mkdir()
    return taskpad_dir


@pytest.fixture
def dispatcher() -> CommandDispatcher:
    """A dispatcher with an empty task list."""
    return CommandDispatcher()


@pytest.fixture
def populated_dispatcher() -> CommandDispatcher:
    """A dispatcher holding one task of each type."""
    dispatcher = CommandDispatcher()
    dispatcher.handle("todo buy milk")
    dispatcher.handle("deadline return book /by 2021-12-25")
    dispatcher.handle("event project meeting /at 2021-12-26 2pm")
    return dispatcher


@pytest.fixture
def sample_tasks_data() -> dict:
    """Sample task file contents."""
    return {
        "saved_at": "2021-12-20T10:00:00",
        "tasks": [
            {"type": "todo", "description": "buy milk", "done": True},
            {"type": "deadline", "description": "return book", "by": "2021-12-25"},
            {"type": "event", "description": "project meeting", "at": "Mon 2-4pm"},
        ],
    }


@pytest.fixture
def sample_tasks_file(temp_taskpad_dir: Path, sample_tasks_data: dict) -> Path:
    """Write the sample task file to .taskpad/tasks.json."""
    path = temp_taskpad_dir / "tasks.json"
    with open(path, "w") as f:
        json.dump(sample_tasks_data, f)
    return path


@pytest.fixture
def line_reader() -> Callable[[Iterable[str]], Callable[[], str]]:
    """Build a line source that raises EOFError once its lines run out."""

    def make(lines: Iterable[str]) -> Callable[[], str]:
        remaining = iter(lines)

        def read_line() -> str:
            try:
                return next(remaining)
            except StopIteration:
                raise EOFError from None

        return read_line

    return make
