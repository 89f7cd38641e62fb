# src/tasklog/engine/store.py

"""
Task store.

This module contains *all* state-changing operations on the ordered
task sequence: add, status updates and deletion, plus the read-only
search and active views.

Design principles:
- The store owns its list; callers only ever see tuples or views.
- Ids are positional and always 1..N after add/delete (reindexing).
- Validation happens before mutation, so a failed call changes nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .errors import TaskNotFoundError
from .model import INITIAL_STATUS, Status, Task, parse_status

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Result objects
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SearchResult:
    """
    Matches for a keyword, in store order.

    An empty result is a valid outcome: check `found`.
    """

    keyword: str
    tasks: tuple[Task, ...]

    @property
    def found(self) -> bool:
        return bool(self.tasks)

    def __len__(self) -> int:
        return len(self.tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)


class ActiveView:
    """
    Lazy view over the tasks that are not done yet.

    Every iteration walks the store afresh, so the view can be reused
    after the store changes.
    """

    def __init__(self, store: "TaskStore") -> None:
        self._store = store

    def __iter__(self) -> Iterator[Task]:
        return (t for t in self._store if not t.is_done)


# ---------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------

class TaskStore:
    """
    Ordered in-memory task sequence; insertion order is display order.
    """

    def __init__(
        self,
        tasks: Optional[Iterable[Task]] = None,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._tasks: list[Task] = list(tasks or [])
        self._clock = clock
        self.reindex()

    # -----------------------------------------------------------------
    # Read access
    # -----------------------------------------------------------------

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def get(self, task_id: int) -> Task:
        return self._tasks[self._index_of(task_id)]

    # -----------------------------------------------------------------
    # Mutations
    # -----------------------------------------------------------------

    def add(self, description: str) -> Task:
        """
        Create a task in the initial status and append it.

        Creation is logged as the first status transition.
        """
        text = (description or "").strip()
        if not text:
            raise ValueError("description must be a non-empty string")

        task = Task(id=len(self._tasks) + 1, description=text)
        task.move_to(INITIAL_STATUS, self._clock())

        self._tasks.append(task)
        self.reindex()
        logger.info("Added task id=%s", task.id)
        return task

    def reindex(self) -> None:
        """Renumber ids to match 1-based position."""
        for pos, task in enumerate(self._tasks, start=1):
            task.id = pos

    def update_status(self, task_id: int, new_status: str | Status) -> Task:
        """
        Move a task to another status and log the transition.

        Membership is unchanged, so no reindex happens here.
        """
        status = parse_status(new_status)
        task = self._tasks[self._index_of(task_id)]

        task.move_to(status, self._clock())
        logger.info("Task id=%s -> %s", task.id, status.value)
        return task

    def delete(self, task_id: int) -> Task:
        """
        Remove a task, keep the others in order, then reindex.

        Returns the removed task (with its id before reindexing).
        """
        removed = self._tasks.pop(self._index_of(task_id))
        self.reindex()
        logger.info("Deleted task id=%s, %s remaining", task_id, len(self._tasks))
        return removed

    # -----------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------

    def search(self, keyword: str) -> SearchResult:
        """Case-insensitive substring match against descriptions."""
        needle = (keyword or "").lower()
        hits = tuple(t for t in self._tasks if needle in t.description.lower())
        return SearchResult(keyword=keyword, tasks=hits)

    def active(self) -> ActiveView:
        return ActiveView(self)

    # -----------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------

    def _index_of(self, task_id: int) -> int:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        raise TaskNotFoundError(task_id)
