# tests/conftest.py

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Iterator

import pytest

from tasklog.engine.storage import TaskFile
from tasklog.engine.store import TaskStore

START = datetime(2026, 10, 19, 9, 0, 0)


@pytest.fixture()
def clock() -> Callable[[], datetime]:
    """
    Deterministic clock: each call returns the previous time + 1 minute.

    Log entries stay distinguishable and predictable.
    """
    state = {"now": START - timedelta(minutes=1)}

    def _now() -> datetime:
        state["now"] += timedelta(minutes=1)
        return state["now"]

    return _now


@pytest.fixture()
def store(clock: Callable[[], datetime]) -> TaskStore:
    return TaskStore(clock=clock)


@pytest.fixture()
def state_path(tmp_path: Path) -> Path:
    return tmp_path / "tasks.yml"


@pytest.fixture()
def task_file(state_path: Path, clock: Callable[[], datetime]) -> TaskFile:
    return TaskFile(state_path, clock=clock)


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """
    The CLI reconfigures the root logger; drop the handlers it installed
    so handlers bound to captured streams do not leak between tests.
    """
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        # pytest's own capture handlers are subclasses; leave them alone.
        if type(h) is logging.StreamHandler and h not in handlers:
            root.removeHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)
