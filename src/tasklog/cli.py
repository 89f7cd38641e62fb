# src/tasklog/cli.py

"""
Command-line interface for tasklog.

This module:
- defines argument parsing and subcommands,
- loads the store once, runs one operation, saves only after a mutation,
- maps engine errors to messages and exit codes.

Exit codes: 0 success, 1 domain failure (not found, invalid status,
corrupt or unwritable state file), 2 usage error.
"""

import argparse
import logging
import sys
from typing import Callable, NoReturn, Optional

from tasklog.config import Settings, load_settings
from tasklog.engine.errors import (
    CorruptStateError,
    InvalidStatusError,
    StorageWriteError,
    TaskNotFoundError,
)
from tasklog.engine.model import Status
from tasklog.engine.render import render_active, render_list, render_search
from tasklog.engine.storage import TaskFile
from tasklog.engine.store import TaskStore
from tasklog.logging_setup import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

COMMANDS = ("add", "list", "update", "delete", "search", "active", "help")


# ---------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------

class _GlobalOptionsParser(argparse.ArgumentParser):
    """
    Parser for the options that precede the command.

    Used on its own to locate the command token; reports problems by
    raising instead of printing and exiting.
    """

    def error(self, message: str) -> NoReturn:
        raise argparse.ArgumentError(None, message)


def _build_global_parser() -> _GlobalOptionsParser:
    parser = _GlobalOptionsParser(prog="tasklog", add_help=False)
    parser.add_argument(
        "-f",
        "--file",
        type=str,
        default=None,
        help="State file (default: $TASKLOG_FILE or ~/.tasklog.yml)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable coloured output",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log to stderr (-v info, -vv debug)",
    )
    return parser


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tasklog",
        description="A simple CLI task manager",
        parents=[_build_global_parser()],
    )

    sub = parser.add_subparsers(dest="command", metavar="command")

    p_add = sub.add_parser("add", help="Add a new task")
    p_add.add_argument("description", nargs="+", help="Task description")
    p_add.set_defaults(func=cmd_add)

    p_list = sub.add_parser("list", help="List all tasks and their logs")
    p_list.set_defaults(func=cmd_list)

    p_update = sub.add_parser("update", help="Update task status")
    p_update.add_argument("task_id", type=int, help="Task id")
    p_update.add_argument(
        "status",
        help=f"New status ({', '.join(Status.allowed())}; any case, surrounding spaces ignored)",
    )
    p_update.set_defaults(func=cmd_update)

    p_delete = sub.add_parser("delete", help="Remove a task by id")
    p_delete.add_argument("task_id", type=int, help="Task id")
    p_delete.set_defaults(func=cmd_delete)

    p_search = sub.add_parser("search", help="Find tasks by keyword")
    p_search.add_argument("keyword", help="Case-insensitive substring")
    p_search.set_defaults(func=cmd_search)

    p_active = sub.add_parser("active", help="Show tasks that are not done")
    p_active.set_defaults(func=cmd_active)

    p_help = sub.add_parser("help", help="Show this menu")
    p_help.set_defaults(func=None)

    return parser


def _find_command(argv: list[str]) -> Optional[str]:
    """
    Return the first positional token (the command).

    Global options are consumed by the same parser definition the real
    parse uses, so abbreviations (--fil) and combined flags (-vf PATH)
    are read the same way. Malformed options yield None and are left to
    the full parse to report.
    """
    try:
        _, rest = _build_global_parser().parse_known_args(argv)
    except argparse.ArgumentError:
        return None

    for tok in rest:
        if not tok.startswith("-"):
            return tok
    return None


# ---------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------

def cmd_add(args: argparse.Namespace, settings: Settings) -> int:
    storage = TaskFile(settings.storage_path)
    store = storage.load()

    try:
        task = store.add(" ".join(args.description))
    except ValueError as e:
        print(f"Error: {e}")
        return EXIT_FAILURE

    print(f"Added task {task.id}: {task.description}")
    return _save(storage, store)


def cmd_list(args: argparse.Namespace, settings: Settings) -> int:
    store = TaskFile(settings.storage_path).load()
    render_list(store, color=settings.color)
    return EXIT_OK


def cmd_update(args: argparse.Namespace, settings: Settings) -> int:
    storage = TaskFile(settings.storage_path)
    store = storage.load()

    try:
        task = store.update_status(args.task_id, args.status)
    except (InvalidStatusError, TaskNotFoundError) as e:
        print(f"Error: {e}")
        return EXIT_FAILURE

    print(f"Task {task.id} updated to: {task.status.value}")
    return _save(storage, store)


def cmd_delete(args: argparse.Namespace, settings: Settings) -> int:
    storage = TaskFile(settings.storage_path)
    store = storage.load()

    try:
        store.delete(args.task_id)
    except TaskNotFoundError as e:
        print(f"Error: {e}")
        return EXIT_FAILURE

    print(f"Task {args.task_id} deleted, {len(store)} remaining.")
    return _save(storage, store)


def cmd_search(args: argparse.Namespace, settings: Settings) -> int:
    store = TaskFile(settings.storage_path).load()
    render_search(store.search(args.keyword), color=settings.color)
    return EXIT_OK


def cmd_active(args: argparse.Namespace, settings: Settings) -> int:
    store = TaskFile(settings.storage_path).load()
    render_active(store.active(), total=len(store), color=settings.color)
    return EXIT_OK


def _save(storage: TaskFile, store: TaskStore) -> int:
    """
    Persist after a successful mutation.

    A failed write is reported as a warning; the change then only exists
    in memory.
    """
    try:
        storage.save(store)
    except StorageWriteError as e:
        print(f"Warning: changes were not saved. {e}", file=sys.stderr)
        return EXIT_FAILURE
    return EXIT_OK


# ---------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)
    parser = _build_parser()

    command = _find_command(argv)
    if command is not None and command not in COMMANDS:
        print(f"Unknown command: '{command}'\n")
        parser.print_help()
        return EXIT_USAGE

    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # argparse exits 2 on usage errors and 0 on --help.
        return e.code if isinstance(e.code, int) else EXIT_USAGE

    func: Optional[Callable[[argparse.Namespace, Settings], int]]
    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return EXIT_OK

    settings = load_settings(
        file=args.file,
        no_color=args.no_color,
        verbosity=args.verbose,
    )
    setup_logging(settings.log_level)
    logger.debug("Using state file %s", settings.storage_path)

    try:
        return func(args, settings)
    except CorruptStateError as e:
        print(f"Error loading tasks: {e}")
        return EXIT_FAILURE


if __name__ == "__main__":
    raise SystemExit(main())
