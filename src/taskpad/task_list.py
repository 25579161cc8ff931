"""Ordered, mutable collection of tasks."""

from __future__ import annotations

from collections.abc import Iterator

from taskpad.task import Task


class TaskList:
    """Tasks in insertion order.

    Indices taken by methods here are 0-based. Users see 1-based numbers;
    the conversion happens in the dispatcher.
    """

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self._tasks: list[Task] = list(tasks) if tasks else []

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def count(self) -> int:
        """Return the number of tasks in the list."""
        return len(self._tasks)

    def add_task(self, task: Task) -> None:
        """Append a task. The task is assumed to be valid already."""
        self._tasks.append(task)

    def get(self, index: int) -> Task | None:
        """Get the task at index, or None when out of range."""
        if not self._in_range(index):
            return None
        return self._tasks[index]

    def remove_task(self, index: int) -> Task | None:
        """Remove and return the task at index.

        Returns None and leaves the list untouched when index is out of range.
        """
        if not self._in_range(index):
            return None
        return self._tasks.pop(index)

    def mark_done(self, index: int) -> Task | None:
        """Mark the task at index as done and return it (None if out of range)."""
        task = self.get(index)
        if task is None:
            return None
        task.mark_as_done()
        return task

    def numbered(self) -> list[tuple[int, str]]:
        """Return (1-based number, rendered task) pairs in list order."""
        return [(number, str(task)) for number, task in enumerate(self._tasks, start=1)]

    def find(self, term: str) -> list[Task]:
        """Return tasks whose description contains term (case-sensitive)."""
        return [task for task in self._tasks if term in task.description]

    def _in_range(self, index: int) -> bool:
        # Negative indices are out of range, not Python-style from-the-end
        return 0 <= index < len(self._tasks)
