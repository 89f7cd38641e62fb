# src/tasklog/logging_setup.py

from __future__ import annotations

import logging
import sys


def setup_logging(level: int = logging.WARNING) -> None:
    """
    Configure a single stderr handler on the root logger.

    stdout stays reserved for command output. Call this once, before the
    first log call.
    """
    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    logging.captureWarnings(True)
