"""Opt-in logging setup for scripts using the client.

The library itself only creates module loggers; applications call
:func:`setup_logging` (or configure ``logging`` themselves) to see output.
"""

from __future__ import annotations

import logging

from .config import LOG_LEVEL

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str | int | None = None) -> None:
    """Install a basic stderr handler unless the root logger already has one."""

    if not logging.getLogger().hasHandlers():
        logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)
