"""Default locations for the control socket and the settings file."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

APP_NAME = "pvpmidi"
SOCKET_NAME = f"{APP_NAME}.sock"
SETTINGS_NAME = "settings.json"


def user_temp_dir() -> Path:
    """Per-user directory under the system temp dir."""
    return Path(tempfile.gettempdir()) / f"{APP_NAME}-{os.getuid()}"


def runtime_dir() -> Path:
    """``$XDG_RUNTIME_DIR/pvpmidi``; ``/run/pvpmidi`` for root; else a temp dir."""
    xdg = os.environ.get("XDG_RUNTIME_DIR")
    if xdg:
        return Path(xdg) / APP_NAME
    if os.geteuid() == 0:
        return Path("/run") / APP_NAME
    return user_temp_dir()


def config_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    return (Path(xdg) if xdg else Path.home() / ".config") / APP_NAME


DEFAULT_SOCK_PATH = runtime_dir() / SOCKET_NAME
DEFAULT_SETTINGS_PATH = config_dir() / SETTINGS_NAME
