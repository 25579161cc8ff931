"""Interactive session loop.

The session pulls lines from a line source, hands each one to the
dispatcher and pushes the outcome to a line sink. It knows nothing about
terminals or files: the CLI supplies the source, the sink and the
persistence callback.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from taskpad.parser import CommandDispatcher
from taskpad.task_list import TaskList

logger = logging.getLogger(__name__)

GREETING = "Hello! What can I do for you?"


class StopReason(Enum):
    """Reasons for the session ending."""

    BYE = "User said bye"
    END_OF_INPUT = "Input ended"
    INTERRUPTED = "User interrupted"


@dataclass
class SessionResult:
    """Result of a session."""

    commands_handled: int
    stop_reason: StopReason


class Session:
    """Run commands until the user says bye or input runs out."""

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        read_line: Callable[[], str],
        write: Callable[[str], None],
        on_change: Callable[[TaskList], None] | None = None,
        greeting: str | None = GREETING,
    ) -> None:
        """Initialise the session.

        Args:
            dispatcher: Dispatcher owning the task list
            read_line: Returns the next line of input, raises EOFError at the end
            write: Displays one message to the user
            on_change: Called with the task list after every mutating command
            greeting: Message written before the first prompt (None to skip)
        """
        self.dispatcher = dispatcher
        self.read_line = read_line
        self.write = write
        self.on_change = on_change
        self.greeting = greeting

    def run(self) -> SessionResult:
        logger.info("Session started with %d tasks", self.dispatcher.task_list.count())
        if self.greeting:
            self.write(self.greeting)

        handled = 0
        stop_reason = StopReason.END_OF_INPUT
        while True:
            try:
                line = self.read_line()
            except EOFError:
                break
            except KeyboardInterrupt:
                stop_reason = StopReason.INTERRUPTED
                break

            if not line.strip():
                continue

            outcome = self.dispatcher.handle(line)
            handled += 1

            # Persist before showing the outcome so the file never lags behind it
            if outcome.mutated and self.on_change is not None:
                self.on_change(self.dispatcher.task_list)

            self.write(outcome.message)

            if outcome.exit_requested:
                stop_reason = StopReason.BYE
                break

        logger.info("Session finished after %d commands: %s", handled, stop_reason.value)
        return SessionResult(commands_handled=handled, stop_reason=stop_reason)
