"""Error values produced while interpreting commands.

Errors are returned, not raised: sub-parsers hand back a CommandError and
the dispatcher turns it into a one-line outcome for the user.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    """Kinds of user-recoverable command failures."""

    UNRECOGNIZED_COMMAND = "unrecognized_command"
    """The input matched none of the known commands."""

    MISSING_DESCRIPTION = "missing_description"
    """An add command was given without a description."""

    INVALID_PARAMETER = "invalid_parameter"
    """A command argument was missing or malformed."""

    INDEX_OUT_OF_RANGE = "index_out_of_range"
    """A task number does not refer to any task in the list."""


@dataclass(frozen=True)
class CommandError:
    """A failed command, with the message shown to the user."""

    kind: ErrorKind
    message: str

    @classmethod
    def unrecognized(cls, line: str) -> CommandError:
        return cls(
            ErrorKind.UNRECOGNIZED_COMMAND,
            f"Sorry, I don't know what '{line}' means.",
        )

    @classmethod
    def missing_description(cls, command: str) -> CommandError:
        article = "an" if command[:1] in "aeiou" else "a"
        return cls(
            ErrorKind.MISSING_DESCRIPTION,
            f"The description of {article} {command} cannot be empty.",
        )

    @classmethod
    def invalid_parameter(cls, hint: str) -> CommandError:
        return cls(ErrorKind.INVALID_PARAMETER, hint)

    @classmethod
    def out_of_range(cls, number: int, count: int) -> CommandError:
        if count == 0:
            detail = "the list is empty"
        else:
            detail = f"pick a number from 1 to {count}"
        return cls(
            ErrorKind.INDEX_OUT_OF_RANGE,
            f"There is no task {number} in your list ({detail}).",
        )
