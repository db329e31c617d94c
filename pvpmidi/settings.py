"""Settings persistence -- save and restore controller configuration.

Saved state:
  - virtual port name
  - command offset
  - strict mode flag

The file is human-readable JSON so it can be hand-edited if needed.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional, TYPE_CHECKING

from pvpmidi.models import DEFAULT_PORT_NAME
from pvpmidi.paths import DEFAULT_SETTINGS_PATH

if TYPE_CHECKING:
    from pvpmidi.host import PvpController


logger = logging.getLogger(__name__)

SETTINGS_VERSION = 1


@dataclass
class Settings:
    port_name: str = DEFAULT_PORT_NAME
    command_offset: int = 0
    strict: bool = False


def snapshot(host: PvpController) -> dict:
    """Capture the restorable configuration of the controller as a plain dict."""
    data = asdict(Settings(
        port_name=host.port_name,
        command_offset=host.encoder.command_offset,
        strict=host.encoder.strict,
    ))
    data["version"] = SETTINGS_VERSION
    return data


def save(host: PvpController, path: Optional[Path] = None):
    """Save the controller configuration to a JSON file."""
    path = Path(path) if path else DEFAULT_SETTINGS_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(snapshot(host), indent=2) + "\n")
    logger.info("[Settings] Saved to %s", path)


def load(path: Optional[Path] = None) -> Settings:
    """Read settings from ``path``; missing or unknown files give defaults."""
    path = Path(path) if path else DEFAULT_SETTINGS_PATH
    if not path.exists():
        logger.info("[Settings] No settings file at %s", path)
        return Settings()

    data = json.loads(path.read_text())
    version = data.get("version", 0)
    if version != SETTINGS_VERSION:
        logger.warning("[Settings] Unknown settings version %s, using defaults", version)
        return Settings()

    defaults = Settings()
    return Settings(
        port_name=str(data.get("port_name", defaults.port_name)),
        command_offset=int(data.get("command_offset", defaults.command_offset)),
        strict=bool(data.get("strict", defaults.strict)),
    )


def restore(host: PvpController, path: Optional[Path] = None):
    """Apply saved settings to ``host``.

    The port name only takes effect the next time the port is opened.
    """
    settings = load(path)
    host.port_name = settings.port_name
    host.encoder.set_command_offset(settings.command_offset)
    host.encoder.strict = settings.strict
    logger.info("[Settings] Restored: %s", settings)
