# tests/test_model.py

from __future__ import annotations

from datetime import datetime

import pytest

from tasklog.engine.errors import InvalidStatusError
from tasklog.engine.model import Status, Task, format_log_entry, parse_status


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("todo", Status.TODO),
        ("DONE", Status.DONE),
        ("In-Progress", Status.IN_PROGRESS),
        ("  blocked ", Status.BLOCKED),
        (Status.DONE, Status.DONE),
    ],
)
def test_parse_status_is_case_insensitive(raw: object, expected: Status) -> None:
    assert parse_status(raw) is expected


@pytest.mark.parametrize("raw", ["", "finished", "in progress", "created", None, 3])
def test_parse_status_rejects_unknown_values(raw: object) -> None:
    with pytest.raises(InvalidStatusError) as exc:
        parse_status(raw)

    assert exc.value.allowed == ("todo", "in-progress", "done", "blocked")
    assert isinstance(exc.value, ValueError)


def test_format_log_entry() -> None:
    when = datetime(2026, 1, 2, 3, 4, 5)
    assert format_log_entry(Status.IN_PROGRESS, when) == "Moved to in-progress at 2026-01-02 03:04:05"


def test_move_to_overwrites_status_and_appends_log() -> None:
    task = Task(id=1, description="Write report", log=["Moved to todo at 2026-01-01 00:00:00"])

    task.move_to(Status.BLOCKED, datetime(2026, 1, 2, 8, 30, 0))

    assert task.status is Status.BLOCKED
    assert task.log == [
        "Moved to todo at 2026-01-01 00:00:00",
        "Moved to blocked at 2026-01-02 08:30:00",
    ]
    assert not task.is_done

    task.move_to(Status.DONE, datetime(2026, 1, 3, 8, 30, 0))
    assert task.is_done
