"""Task model for taskpad.

The variant set is closed: every task is a Todo, a Deadline or an Event,
tagged by TaskType. Each variant knows how to build itself from the text
that follows its command word and how to render itself for the list.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import ClassVar

from taskpad.errors import CommandError

# Tasks are entered as yyyy-mm-dd and shown as "Dec 25 2021"
ISO_DATE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")
DISPLAY_DATE_FORMAT = "%b %d %Y"

_BY_MARKER = re.compile(r"(?:^|\s+)/by(?:\s+|$)")
_AT_MARKER = re.compile(r"(?:^|\s+)/at(?:\s+|$)")

DEADLINE_HINT = (
    "The deadline should be a valid date in the form yyyy-mm-dd, "
    "e.g. deadline return book /by 2021-12-25"
)
EVENT_HINT = (
    "An event needs a time after /at, "
    "e.g. event project meeting /at 2021-12-25 2pm"
)


class TaskType(Enum):
    """The fixed set of task variants, valued by their one-letter tag."""

    TODO = "T"
    DEADLINE = "D"
    EVENT = "E"

    @property
    def command(self) -> str:
        """The command word that adds a task of this type."""
        return self.name.lower()


def parse_iso_date(text: str) -> date | None:
    """Parse a strict yyyy-mm-dd date, returning None when invalid."""
    if not ISO_DATE.match(text):
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def format_date(value: date) -> str:
    return value.strftime(DISPLAY_DATE_FORMAT)


def format_when(when: str) -> str:
    """Render an event time, prettifying a leading ISO date if present."""
    words = when.split(maxsplit=1)
    if not words:
        return when
    parsed = parse_iso_date(words[0])
    if parsed is None:
        return when
    return " ".join([format_date(parsed), *words[1:]])


@dataclass
class Task:
    """Common state and rendering for every task variant."""

    task_type: ClassVar[TaskType]

    description: str
    done: bool = field(default=False, kw_only=True)

    def mark_as_done(self) -> None:
        """Mark the task as completed. Marking twice is a no-op."""
        self.done = True

    @property
    def status_icon(self) -> str:
        return "X" if self.done else " "

    def details(self) -> str:
        """Variant-specific suffix appended after the description."""
        return ""

    def __str__(self) -> str:
        return f"[{self.task_type.value}][{self.status_icon}] {self.description}{self.details()}"


@dataclass
class Todo(Task):
    """A plain to-do with no date attached."""

    task_type: ClassVar[TaskType] = TaskType.TODO

    @classmethod
    def parse(cls, text: str) -> Todo | CommandError:
        description = text.strip()
        if not description:
            return CommandError.missing_description(cls.task_type.command)
        return cls(description)


@dataclass
class Deadline(Task):
    """A task that has to be done by a given date."""

    task_type: ClassVar[TaskType] = TaskType.DEADLINE

    by: date

    def details(self) -> str:
        return f" (by: {format_date(self.by)})"

    @classmethod
    def parse(cls, text: str) -> Deadline | CommandError:
        """Build a deadline from "<description> /by <date>".

        Without a /by marker the last word is taken as the date, so
        "buy milk 2021-12-25" is accepted too.
        """
        text = text.strip()
        parts = _BY_MARKER.split(text, maxsplit=1)
        if len(parts) == 2:
            description, raw_date = parts[0].strip(), parts[1].strip()
        else:
            words = text.rsplit(maxsplit=1)
            if len(words) == 2:
                description, raw_date = words
            else:
                description, raw_date = "", text

        by = parse_iso_date(raw_date)
        if by is None:
            return CommandError.invalid_parameter(DEADLINE_HINT)
        if not description:
            return CommandError.invalid_parameter(
                "A deadline needs a description before its date, "
                "e.g. deadline return book /by 2021-12-25"
            )
        return cls(description, by)


@dataclass
class Event(Task):
    """A task that happens at a given time.

    The time is free text. A leading yyyy-mm-dd date is validated and
    displayed like a deadline date; anything else is kept as typed.
    """

    task_type: ClassVar[TaskType] = TaskType.EVENT

    at: str

    def details(self) -> str:
        return f" (at: {format_when(self.at)})"

    @classmethod
    def parse(cls, text: str) -> Event | CommandError:
        parts = _AT_MARKER.split(text.strip(), maxsplit=1)
        if len(parts) != 2 or not parts[1].strip():
            return CommandError.invalid_parameter(EVENT_HINT)

        description, at = parts[0].strip(), parts[1].strip()
        if not description:
            return CommandError.invalid_parameter(
                "An event needs a description before /at, "
                "e.g. event project meeting /at 2021-12-25 2pm"
            )

        head = at.split(maxsplit=1)[0]
        if ISO_DATE.match(head) and parse_iso_date(head) is None:
            return CommandError.invalid_parameter(
                f"'{head}' is not a real date, dates are written yyyy-mm-dd, "
                "e.g. event project meeting /at 2021-12-25 2pm"
            )
        return cls(description, at)


def parse_task(task_type: TaskType, text: str) -> Task | CommandError:
    """Build a task of the given type from the text after its command word."""
    if task_type is TaskType.TODO:
        return Todo.parse(text)
    elif task_type is TaskType.DEADLINE:
        return Deadline.parse(text)
    elif task_type is TaskType.EVENT:
        return Event.parse(text)
    raise ValueError(f"Unknown task type: {task_type}")
