# src/tasklog/engine/render.py

"""
Rendering helpers for CLI output.

This module is responsible for:
- the full task table with logs (list),
- keyword matches (search),
- the short "what's left" summary (active).

It is presentation-only: it should not mutate task state or write files.
"""

from __future__ import annotations

from typing import Iterable

from .model import Status, Task
from .store import ActiveView, SearchResult


# ---------------------------------------------------------------------
# ANSI / terminal helpers
# ---------------------------------------------------------------------

_RESET = "\033[0m"
_DIM = "\033[90m"

_COLOR = {
    Status.TODO: "\033[33m",         # yellow
    Status.IN_PROGRESS: "\033[36m",  # cyan
    Status.DONE: "\033[32m",         # green
    Status.BLOCKED: "\033[31m",      # red
}

_STATUS_W = max(len(s.value) for s in Status)
_RULE = f"----|-{'-' * _STATUS_W}-|------------"


def _supports_color() -> bool:
    """Return True if stdout is a TTY."""
    import sys

    return sys.stdout.isatty()


def _paint(s: str, code: str, color: bool) -> str:
    if not (color and code and _supports_color()):
        return s
    return f"{code}{s}{_RESET}"


def _status_text(task: Task, *, color: bool, width: int = 0) -> str:
    # Pad before colouring so escapes do not break column alignment.
    return _paint(task.status.value.ljust(width), _COLOR.get(task.status, ""), color)


# ---------------------------------------------------------------------
# Views
# ---------------------------------------------------------------------

def render_list(tasks: Iterable[Task], *, color: bool = True) -> None:
    """
    Render every task with its status and full log.

    Format:
      ID  | Status      | Description
      1   | todo        | Buy milk
          -> Moved to todo at ...
    """
    tasks = list(tasks)
    if not tasks:
        print("Your list is empty.")
        return

    print(f"{'ID':<3} | {'Status':<{_STATUS_W}} | Description")
    print(_RULE)
    for task in tasks:
        status = _status_text(task, color=color, width=_STATUS_W)
        print(f"{task.id:<3} | {status} | {task.description}")
        for entry in task.log:
            print(f"    {_paint('-> ' + entry, _DIM, color)}")
        print(_RULE)


def render_search(result: SearchResult, *, color: bool = True) -> None:
    print(f"Searching for: '{result.keyword}'...")

    if not result.found:
        print(f"No tasks found matching '{result.keyword}'.")
        return

    for task in result:
        print(f"{task.id}. [{_status_text(task, color=color)}] {task.description}")

    print()
    print(f"Found {len(result)} result(s).")


def render_active(view: ActiveView, *, total: int, color: bool = True) -> None:
    """
    Render tasks that are not done yet.

    `total` is the store size, used to tell an empty list apart from a
    finished one.
    """
    if total == 0:
        print("No tasks!")
        return

    shown = 0
    for task in view:
        print(f"[{_status_text(task, color=color)}] {task.description}")
        shown += 1

    if not shown:
        print("All caught up!")
