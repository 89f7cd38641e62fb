# src/tasklog/config.py

"""Settings resolved from command-line flags and environment variables.

Precedence for every value: explicit flag > environment > default.
The resolved storage path is handed to the persistence layer; nothing
else reads the home directory.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from tasklog.engine.storage import DEFAULT_FILE_NAME

ENV_PREFIX = "TASKLOG"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(env: Mapping[str, str], name: str, default: str = "") -> str:
    v = env.get(name)
    return default if v is None else v


def _env_log_level(env: Mapping[str, str], name: str, default: int) -> int:
    raw = _env(env, name).strip().upper()
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else default


def default_storage_path() -> Path:
    return Path.home() / DEFAULT_FILE_NAME


@dataclass(frozen=True, slots=True)
class Settings:
    storage_path: Path
    color: bool = True
    log_level: int = logging.WARNING


def load_settings(
    *,
    file: Optional[str] = None,
    no_color: bool = False,
    verbosity: int = 0,
    env: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Resolve Settings.

    - storage path: --file > TASKLOG_FILE > ~/.tasklog.yml
    - colour: off with --no-color or when NO_COLOR is set (any value)
    - log level: -v / -vv > TASKLOG_LOG_LEVEL > WARNING
    """
    env = os.environ if env is None else env

    raw_path = file or _env(env, _k("FILE")).strip()
    storage_path = Path(raw_path).expanduser() if raw_path else default_storage_path()

    color = not no_color and "NO_COLOR" not in env

    if verbosity >= 2:
        log_level = logging.DEBUG
    elif verbosity == 1:
        log_level = logging.INFO
    else:
        log_level = _env_log_level(env, _k("LOG_LEVEL"), logging.WARNING)

    return Settings(storage_path=storage_path, color=color, log_level=log_level)
