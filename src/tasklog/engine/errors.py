# src/tasklog/engine/errors.py

"""
Engine exceptions.

Engine modules raise these; the CLI catches them at the command
boundary and turns them into messages and exit codes.
"""

from pathlib import Path
from typing import Sequence


class TasklogError(Exception):
    """Base class for all tasklog failures."""


class TaskNotFoundError(TasklogError):
    """Raised when no task has the requested id."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class InvalidStatusError(TasklogError, ValueError):
    """Raised when a status is not one of the allowed values."""

    def __init__(self, value: str, allowed: Sequence[str]) -> None:
        super().__init__(
            f"'{value}' is not a valid status (allowed: {', '.join(allowed)})"
        )
        self.value = value
        self.allowed = tuple(allowed)


class CorruptStateError(TasklogError):
    """
    Raised when the state file exists but cannot be turned into tasks.

    Distinct from a missing file, which simply means an empty store.
    """

    def __init__(self, path: str | Path, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = str(path)
        self.message = message


class StorageWriteError(TasklogError):
    """Raised when the state file cannot be written."""

    def __init__(self, path: str | Path, reason: str) -> None:
        super().__init__(f"Cannot write {path}: {reason}")
        self.path = str(path)
        self.reason = reason
