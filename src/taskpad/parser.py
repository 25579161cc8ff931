"""Command interpretation for taskpad.

A line of input is classified into one of a fixed set of commands, checked,
and applied to the TaskList. Every call to CommandDispatcher.handle produces
exactly one Outcome; failures come back as outcomes too, never as exceptions.

Classification order matters because command words can overlap as prefixes:

    bye -> list -> find -> done -> delete -> todo/deadline/event -> unknown
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from taskpad.errors import CommandError
from taskpad.task import TaskType, parse_task
from taskpad.task_list import TaskList

logger = logging.getLogger(__name__)

BYE_MESSAGE = "Bye. Hope to see you again soon!"

# Plain ASCII digits only: int() would also take "1_0", "+1" and full-width digits
TASK_NUMBER = re.compile(r"-?[0-9]+")


class CommandType(Enum):
    """Shapes a line of input can be classified into."""

    BYE = "bye"
    LIST = "list"
    FIND = "find"
    DONE = "done"
    DELETE = "delete"
    ADD = "add"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Command:
    """A classified line of input."""

    command_type: CommandType
    argument: str = ""
    """Text after the command word (empty when the word stands alone)."""

    task_type: TaskType | None = None
    """Set for ADD commands only."""


@dataclass(frozen=True)
class Outcome:
    """Result of handling one line of input."""

    message: str
    exit_requested: bool = False
    mutated: bool = False
    """True when the task list changed and should be persisted."""

    error: CommandError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, error: CommandError) -> Outcome:
        return cls(message=error.message, error=error)


def _argument(line: str, word: str) -> str | None:
    """Return the text after `word` if line starts with it, else None."""
    if line == word:
        return ""
    if line.startswith(word + " "):
        return line[len(word) + 1 :]
    return None


def classify(line: str) -> Command:
    """Classify a stripped line of input. First match wins."""
    if line == "bye":
        return Command(CommandType.BYE)
    if line == "list":
        return Command(CommandType.LIST)

    for command_type in (CommandType.FIND, CommandType.DONE, CommandType.DELETE):
        argument = _argument(line, command_type.value)
        if argument is not None:
            return Command(command_type, argument)

    for task_type in TaskType:
        argument = _argument(line, task_type.command)
        if argument is not None:
            return Command(CommandType.ADD, argument, task_type)

    return Command(CommandType.UNKNOWN, line)


def parse_task_number(argument: str, command: str) -> int | CommandError:
    """Parse the 1-based task number given to done/delete."""
    argument = argument.strip()
    if not TASK_NUMBER.fullmatch(argument):
        return CommandError.invalid_parameter(
            f"Please say which task with a single number after '{command}', "
            f"e.g. {command} 1"
        )
    return int(argument)


def _task_count(count: int) -> str:
    noun = "task" if count == 1 else "tasks"
    return f"Now you have {count} {noun} in the list."


class CommandDispatcher:
    """Apply lines of input to a TaskList it owns for the session."""

    def __init__(self, task_list: TaskList | None = None) -> None:
        self.task_list = task_list if task_list is not None else TaskList()
        self._handlers: dict[CommandType, Callable[[Command], Outcome | CommandError]] = {
            CommandType.BYE: self._bye,
            CommandType.LIST: self._list,
            CommandType.FIND: self._find,
            CommandType.DONE: self._done,
            CommandType.DELETE: self._delete,
            CommandType.ADD: self._add,
            CommandType.UNKNOWN: self._unknown,
        }

    def handle(self, line: str) -> Outcome:
        """Handle one line of input and return its outcome."""
        command = classify(line.strip())
        logger.debug("Classified %r as %s", line, command.command_type.name)

        result = self._handlers[command.command_type](command)
        if isinstance(result, CommandError):
            logger.debug("Command failed (%s): %s", result.kind.value, result.message)
            return Outcome.failure(result)
        return result

    # -------------------- handlers --------------------

    def _bye(self, command: Command) -> Outcome:
        return Outcome(message=BYE_MESSAGE, exit_requested=True)

    def _list(self, command: Command) -> Outcome:
        if not len(self.task_list):
            return Outcome(message="Your task list is empty.")
        lines = ["Here are the tasks in your list:"]
        lines.extend(f"{number}. {rendered}" for number, rendered in self.task_list.numbered())
        return Outcome(message="\n".join(lines))

    def _find(self, command: Command) -> Outcome | CommandError:
        term = command.argument
        if not term.strip():
            return CommandError.invalid_parameter(
                "Please say what to search for after 'find', e.g. find book"
            )
        matches = self.task_list.find(term)
        if not matches:
            return Outcome(message=f"No tasks contain '{term}'.")
        lines = [f"Here are the tasks containing '{term}':"]
        lines.extend(f"{number}. {task}" for number, task in enumerate(matches, start=1))
        return Outcome(message="\n".join(lines))

    def _done(self, command: Command) -> Outcome | CommandError:
        number = parse_task_number(command.argument, "done")
        if isinstance(number, CommandError):
            return number
        task = self.task_list.mark_done(number - 1)
        if task is None:
            return CommandError.out_of_range(number, self.task_list.count())
        return Outcome(
            message=f"Nice! I've marked this task as done:\n  {task}",
            mutated=True,
        )

    def _delete(self, command: Command) -> Outcome | CommandError:
        number = parse_task_number(command.argument, "delete")
        if isinstance(number, CommandError):
            return number
        task = self.task_list.remove_task(number - 1)
        if task is None:
            return CommandError.out_of_range(number, self.task_list.count())
        return Outcome(
            message=(
                f"Noted. I've removed this task:\n  {task}\n"
                f"{_task_count(self.task_list.count())}"
            ),
            mutated=True,
        )

    def _add(self, command: Command) -> Outcome | CommandError:
        assert command.task_type is not None, "ADD commands carry a task type"
        if not command.argument.strip():
            return CommandError.missing_description(command.task_type.command)

        task = parse_task(command.task_type, command.argument)
        if isinstance(task, CommandError):
            return task
        assert task is not None, "a classified add command always yields a task"

        self.task_list.add_task(task)
        return Outcome(
            message=(
                f"Got it. I've added this task:\n  {task}\n"
                f"{_task_count(self.task_list.count())}"
            ),
            mutated=True,
        )

    def _unknown(self, command: Command) -> CommandError:
        return CommandError.unrecognized(command.argument)
