# src/tasklog/engine/storage.py

"""
State file persistence.

The whole store lives in one YAML document: an ordered list of task
mappings with their logs as nested lists.

    - id: 1
      description: Buy milk
      status: todo
      log:
      - Moved to todo at 2026-10-19 09:15:02

Loading is strict: a file that exists but cannot be turned into tasks
raises CorruptStateError and never yields partial data. A missing file
is an empty store.
"""

from __future__ import annotations

import contextlib
import logging
import shutil
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any, Final

import yaml

from .errors import CorruptStateError, InvalidStatusError, StorageWriteError
from .model import Task, parse_status
from .store import TaskStore

logger = logging.getLogger(__name__)

DEFAULT_FILE_NAME: Final[str] = ".tasklog.yml"


class TaskFile:
    """
    Load/save boundary between a TaskStore and a single file on disk.

    The path is resolved by the caller (see tasklog.config).
    """

    def __init__(
        self,
        path: str | Path,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.path = Path(path)
        self._clock = clock

    # -----------------------------------------------------------------
    # Load
    # -----------------------------------------------------------------

    def load(self) -> TaskStore:
        if not self.path.exists():
            logger.debug("No state file at %s, starting empty", self.path)
            return TaskStore(clock=self._clock)

        try:
            text = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise self._corrupt(f"Cannot decode file: {e}") from e
        except OSError as e:
            raise self._corrupt(f"Cannot read file: {e}") from e

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise self._corrupt(f"Invalid YAML: {e}") from e

        if data is None:
            data = []
        if not isinstance(data, list):
            raise self._corrupt("YAML root must be a list of tasks")

        tasks = [self._parse_task(i, item) for i, item in enumerate(data, start=1)]
        store = TaskStore(tasks, clock=self._clock)
        logger.info("Loaded %s task(s) from %s", len(store), self.path)
        return store

    def _parse_task(self, idx: int, item: Any) -> Task:
        where = f"tasks[{idx}]"
        if not isinstance(item, dict):
            raise self._corrupt(f"{where} must be a mapping")

        task_id = item.get("id")
        if isinstance(task_id, bool) or not isinstance(task_id, int):
            raise self._corrupt(f"{where}: 'id' must be an integer")

        description = item.get("description")
        if not isinstance(description, str) or not description.strip():
            raise self._corrupt(f"{where}: 'description' must be a non-empty string")

        try:
            status = parse_status(item.get("status"))
        except InvalidStatusError as e:
            raise self._corrupt(f"{where}: {e}") from e

        log = item.get("log")
        if log is None:
            log = []
        if not isinstance(log, list) or not all(isinstance(s, str) for s in log):
            raise self._corrupt(f"{where}: 'log' must be a list of strings")

        return Task(id=task_id, description=description, status=status, log=list(log))

    def _corrupt(self, message: str) -> CorruptStateError:
        logger.debug("Corrupt state file %s: %s", self.path, message)
        return CorruptStateError(self.path, message)

    # -----------------------------------------------------------------
    # Save
    # -----------------------------------------------------------------

    def save(self, store: TaskStore) -> None:
        """
        Overwrite the state file with the full store.

        Written to a sibling temp file and renamed into place, so a failed
        write leaves the previous file untouched. A symlinked state file is
        followed, and the existing file mode is kept.
        """
        text = render_tasks_yml(store.tasks)
        tmp_path: Path | None = None

        try:
            target = self.path.resolve()
            tmp_path = target.with_name(target.name + ".tmp")
            target.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(text, encoding="utf-8")
            if target.exists():
                shutil.copymode(target, tmp_path)
            tmp_path.replace(target)
        except OSError as e:
            if tmp_path is not None:
                with contextlib.suppress(OSError):
                    tmp_path.unlink(missing_ok=True)
            logger.debug("Saving %s failed: %s", self.path, e)
            raise StorageWriteError(self.path, str(e)) from e

        logger.info("Saved %s task(s) to %s", len(store), self.path)


# ---------------------------------------------------------------------
# Serialisation
# ---------------------------------------------------------------------

def render_tasks_yml(tasks: tuple[Task, ...] | list[Task]) -> str:
    data = [
        {
            "id": t.id,
            "description": t.description,
            "status": t.status.value,
            "log": list(t.log),
        }
        for t in tasks
    ]
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
