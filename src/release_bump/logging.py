"""Logging setup for the release-bump command line.

Library code only ever asks for loggers; handlers are installed by the
CLI through init_logging().
"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

DEFAULT_LEVEL = "INFO"
LEVEL_ENV_VAR = "RELEASE_BUMP_LOG_LEVEL"

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


def parse_level(level: str | None) -> int:
    if level is None:
        level = os.getenv(LEVEL_ENV_VAR, DEFAULT_LEVEL)
    return _LEVELS.get(str(level).upper(), logging.INFO)


def init_logging(level: str | None = None, console: Console | None = None) -> None:
    """Install a rich handler on the package logger.

    - Level comes from `level` or env `RELEASE_BUMP_LOG_LEVEL`.
    - Output goes to stderr without timestamps.
    - If a handler is already installed, only the level is updated.
    """
    lvl = parse_level(level)
    logger = logging.getLogger("release_bump")
    logger.setLevel(lvl)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_time=False,
            show_path=False,
            markup=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Return a module logger; never configures handlers."""
    return logging.getLogger(name)
