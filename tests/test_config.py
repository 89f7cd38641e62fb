# tests/test_config.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tasklog.config import load_settings


def test_defaults_to_home_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))

    s = load_settings(env={})

    assert s.storage_path == Path.home() / ".tasklog.yml"
    assert s.color is True
    assert s.log_level == logging.WARNING


def test_env_file_is_used_and_expanded(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))

    s = load_settings(env={"TASKLOG_FILE": "~/work/tasks.yml"})

    assert s.storage_path == tmp_path / "work" / "tasks.yml"


def test_flag_beats_env(tmp_path: Path) -> None:
    s = load_settings(
        file=str(tmp_path / "flag.yml"),
        env={"TASKLOG_FILE": str(tmp_path / "env.yml")},
    )

    assert s.storage_path == tmp_path / "flag.yml"


@pytest.mark.parametrize(
    "no_color,env,expected",
    [
        (False, {}, True),
        (True, {}, False),
        (False, {"NO_COLOR": ""}, False),
    ],
)
def test_color_switches(no_color: bool, env: dict[str, str], expected: bool) -> None:
    assert load_settings(no_color=no_color, env=env).color is expected


@pytest.mark.parametrize(
    "verbosity,env,expected",
    [
        (0, {}, logging.WARNING),
        (1, {}, logging.INFO),
        (2, {}, logging.DEBUG),
        (3, {}, logging.DEBUG),
        (0, {"TASKLOG_LOG_LEVEL": "debug"}, logging.DEBUG),
        (0, {"TASKLOG_LOG_LEVEL": "40"}, logging.ERROR),
        (0, {"TASKLOG_LOG_LEVEL": "chatty"}, logging.WARNING),
        (1, {"TASKLOG_LOG_LEVEL": "error"}, logging.INFO),
    ],
)
def test_log_level(verbosity: int, env: dict[str, str], expected: int) -> None:
    assert load_settings(verbosity=verbosity, env=env).log_level == expected
