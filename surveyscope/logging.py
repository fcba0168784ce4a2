"""Logging setup for the surveyscope CLI.

Terminal output goes to stderr and stays quiet (WARNING) unless a command is
run with ``--verbose``.  Commands that write into an output directory also
keep a rotating log at ``<output_dir>/.surveyscope/surveyscope.log``; its
level is read from ``SURVEYSCOPE_LOG_LEVEL`` and is unaffected by
``--verbose``.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_LEVEL_ENV = "SURVEYSCOPE_LOG_LEVEL"

_TERMINAL_FORMAT = "%(levelname)s | %(name)s | %(message)s"
_FILE_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

_ROTATE_AT_BYTES = 1024 * 1024
_ROTATED_FILES_KEPT = 2


def _parse_log_level(name: str) -> int:
    """Map a level name such as ``"debug"`` to its number, else INFO."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def log_path(output_dir: Path) -> Path:
    return output_dir / ".surveyscope" / "surveyscope.log"


def _terminal_handler(verbose: bool) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    handler.setFormatter(logging.Formatter(_TERMINAL_FORMAT))
    return handler


def _file_handler(output_dir: Path) -> logging.Handler:
    path = log_path(output_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        path,
        maxBytes=_ROTATE_AT_BYTES,
        backupCount=_ROTATED_FILES_KEPT,
        encoding="utf-8",
    )
    handler.setLevel(_parse_log_level(os.environ.get(LOG_LEVEL_ENV, "INFO")))
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
    return handler


def setup_logging(*, output_dir: Path | None = None, verbose: bool = False) -> None:
    """Install the terminal handler, plus the log file when given ``output_dir``.

    Each call replaces whatever handlers the root logger already has, so
    commands can call it unconditionally.
    """
    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()

    # Handlers do the filtering; the root passes everything through.
    root.setLevel(logging.DEBUG)
    root.addHandler(_terminal_handler(verbose))
    if output_dir is not None:
        root.addHandler(_file_handler(output_dir))
