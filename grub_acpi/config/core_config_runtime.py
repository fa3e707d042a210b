"""Utilities for CLI entry points.

This module centralizes shared runtime helpers used by `main.py`
(logging configuration).
"""

from __future__ import annotations

import sys

from loguru import logger

_PLAIN_FORMAT = "<level>{message}</level>"
_TIMESTAMP_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> <level>{level: <8}</level> <level>{message}</level>"


def configure_logging(*, debug: bool = False, verbose: bool = False) -> None:
    """Configure Loguru for the whole process.

    Politique:
    - Sans flag: INFO, messages seuls (progression lisible par l'utilisateur).
    - --verbose: INFO horodaté avec niveau.
    - --debug: DEBUG horodaté (+ backtrace/diagnose).
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if debug else "INFO",
        backtrace=debug,
        diagnose=debug,
        format=_TIMESTAMP_FORMAT if (debug or verbose) else _PLAIN_FORMAT,
    )
