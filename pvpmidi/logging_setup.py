"""Logging configuration for the pvpmidi command-line tools.

Only the ``pvpmidi`` logger tree is configured; records go to stderr so
command output on stdout (``sent [144, 5, 1]``) stays scriptable.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%H:%M:%S"
LEVEL_ENV_VAR = "LOG_LEVEL"

# Marks handlers installed here so a second call replaces instead of stacking
_HANDLER_TAG = "_pvpmidi_handler"


def _level_from_name(name: str) -> Optional[int]:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else None


def configure_logging(default_level: str = "WARNING", stream=None) -> int:
    """Set up the ``pvpmidi`` logger from ``$LOG_LEVEL`` and return its level."""
    requested = os.environ.get(LEVEL_ENV_VAR, "")
    level = _level_from_name(requested) if requested else None
    if level is None:
        level = _level_from_name(default_level) or logging.WARNING

    package_logger = logging.getLogger("pvpmidi")
    for old in [h for h in package_logger.handlers if getattr(h, _HANDLER_TAG, False)]:
        package_logger.removeHandler(old)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    setattr(handler, _HANDLER_TAG, True)
    package_logger.addHandler(handler)
    package_logger.setLevel(level)

    if requested and _level_from_name(requested) is None:
        package_logger.warning("%s=%r is not a log level; using %s",
                               LEVEL_ENV_VAR, requested, logging.getLevelName(level))
    return level
