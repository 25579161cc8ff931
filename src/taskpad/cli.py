"""CLI interface for taskpad."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from taskpad import __version__
from taskpad.config import TaskpadConfig
from taskpad.logging_setup import setup_logging
from taskpad.parser import CommandDispatcher, Outcome
from taskpad.session import GREETING, Session
from taskpad.storage import StorageError, load_tasks, save_tasks
from taskpad.task_list import TaskList

console = Console()
logger = logging.getLogger(__name__)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="taskpad")
@click.option(
    "--file",
    "-f",
    "task_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Task file to use (default from config, .taskpad/tasks.json)",
)
@click.option(
    "--no-save",
    is_flag=True,
    help="Do not write changes back to the task file (or write the log file)",
)
@click.pass_context
def main(ctx: click.Context, task_file: Path | None, no_save: bool) -> None:
    """taskpad - a command-line task tracker.

    Run without a subcommand to start an interactive session.

    \b
    Session commands:
      todo <description>                  Add a to-do
      deadline <description> /by <date>   Add a deadline (date is yyyy-mm-dd)
      event <description> /at <when>      Add an event
      list                                Show all tasks
      find <text>                         Show tasks containing text
      done <n>                            Mark task n as done
      delete <n>                          Remove task n
      bye                                 Save and quit
    """
    ctx.ensure_object(dict)
    config = TaskpadConfig.load()
    ctx.obj["config"] = config
    ctx.obj["task_file"] = task_file or Path(config.storage.path)
    ctx.obj["autosave"] = config.storage.autosave and not no_save

    # --no-save leaves .taskpad/ untouched, log file included
    log_file = Path(config.logging.file) if config.logging.file and not no_save else None
    setup_logging(config.logging.level, log_file)

    if ctx.invoked_subcommand is None:
        ctx.invoke(session_command)


@main.command("session")
@click.pass_context
def session_command(ctx: click.Context) -> None:
    """Start an interactive session (the default)."""
    config: TaskpadConfig = ctx.obj["config"]
    task_list = _load_or_exit(ctx)

    if config.session.greeting:
        console.print(Panel.fit(GREETING, title="taskpad"))

    session = Session(
        CommandDispatcher(task_list),
        read_line=lambda: console.input(config.session.prompt),
        write=_print_message,
        on_change=_make_saver(ctx),
        greeting=None,
    )
    try:
        result = session.run()
    except StorageError as e:
        _report_storage_error(e)
        ctx.exit(1)
    logger.debug("Session ended: %s", result)


@main.command("do")
@click.argument("lines", nargs=-1, required=True)
@click.pass_context
def do_command(ctx: click.Context, lines: tuple[str, ...]) -> None:
    """Run one or more commands and exit.

    Each argument is handled as one command line.

    \b
    Examples:
      taskpad do "todo read book"
      taskpad do "deadline return book /by 2021-12-25" list
      taskpad do "done 2"
    """
    task_list = _load_or_exit(ctx)
    dispatcher = CommandDispatcher(task_list)
    save = _make_saver(ctx)

    failed = False
    for line in lines:
        outcome = dispatcher.handle(line)
        if outcome.mutated and save is not None:
            try:
                save(dispatcher.task_list)
            except StorageError as e:
                _report_storage_error(e)
                ctx.exit(1)
        _print_outcome(outcome)
        failed = failed or not outcome.ok
        if outcome.exit_requested:
            break

    if failed:
        ctx.exit(1)


def _load_or_exit(ctx: click.Context) -> TaskList:
    """Load the task list, exiting with an error if the file is unreadable."""
    path: Path = ctx.obj["task_file"]
    try:
        return load_tasks(path)
    except StorageError as e:
        _report_storage_error(e)
        ctx.exit(1)


def _report_storage_error(error: StorageError) -> None:
    console.print(f"[red]{escape(str(error))}[/red]", soft_wrap=True)
    if error.action == "write":
        console.print("[dim]The last change was not saved.[/dim]")
    else:
        console.print("[dim]Fix or move the file; it has not been modified.[/dim]")


def _make_saver(ctx: click.Context) -> Callable[[TaskList], None] | None:
    """Build the persistence callback, or None when saving is disabled."""
    if not ctx.obj["autosave"]:
        return None
    path: Path = ctx.obj["task_file"]

    def save(task_list: TaskList) -> None:
        save_tasks(task_list, path)

    return save


def _print_message(message: str) -> None:
    # Task descriptions are user text, so never interpret them as markup
    console.print(message, markup=False, highlight=False, soft_wrap=True)


def _print_outcome(outcome: Outcome) -> None:
    if outcome.ok:
        _print_message(outcome.message)
    else:
        console.print(outcome.message, style="red", markup=False, highlight=False, soft_wrap=True)


if __name__ == "__main__":
    main()
