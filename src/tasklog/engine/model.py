# src/tasklog/engine/model.py

"""
Core domain models.

This module defines the in-memory representation of a task, the fixed
status vocabulary, and the format of status-transition log entries.

No filesystem access should happen here.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .errors import InvalidStatusError


# ---------------------------------------------------------------------
# Status
# ---------------------------------------------------------------------

class Status(str, Enum):
    """
    Task status.

    Statuses are independent values, not an ordered workflow:
    any status may move to any other status.
    """

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"
    BLOCKED = "blocked"

    @classmethod
    def allowed(cls) -> tuple[str, ...]:
        return tuple(s.value for s in cls)


INITIAL_STATUS = Status.TODO
TERMINAL_STATUS = Status.DONE

LOG_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_status(raw: object) -> Status:
    """
    Parse a user or file supplied status (case-insensitive).

    Raises InvalidStatusError for anything outside the fixed set.
    """
    if isinstance(raw, Status):
        return raw
    if not isinstance(raw, str):
        raise InvalidStatusError(repr(raw), Status.allowed())

    try:
        return Status(raw.strip().lower())
    except ValueError as e:
        raise InvalidStatusError(raw, Status.allowed()) from e


def format_log_entry(status: Status, when: datetime) -> str:
    """Return the log line recorded for a move into `status`."""
    return f"Moved to {status.value} at {when.strftime(LOG_TIME_FORMAT)}"


# ---------------------------------------------------------------------
# Task
# ---------------------------------------------------------------------

@dataclass(slots=True)
class Task:
    """
    A single tracked unit of work.

    Notes:
    - id is positional: the store reassigns it whenever membership changes.
    - description is fixed at creation.
    - log is append-only; one entry per status change, creation included.
    """

    id: int
    description: str
    status: Status = INITIAL_STATUS
    log: list[str] = field(default_factory=list)

    def move_to(self, status: Status, when: datetime) -> None:
        """Overwrite the status and record the transition."""
        self.status = status
        self.log.append(format_log_entry(status, when))

    @property
    def is_done(self) -> bool:
        return self.status is TERMINAL_STATUS
