"""pvpmidi controller -- owns the output port and the encoder."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pvpmidi import settings
from pvpmidi.actions import ACTIONS
from pvpmidi.encoder import Encoder
from pvpmidi.midi import MidiOutputPort
from pvpmidi.models import DEFAULT_PORT_NAME, Effect


class PvpController:
    """ProVideoPlayer remote: open a port, then call actions on ``encoder``.

    Every named action of the encoder is also reachable directly on the
    controller (``controller.video_play()``).
    """

    effect = Effect

    def __init__(self, port_name: str = DEFAULT_PORT_NAME, command_offset: int = 0,
                 strict: bool = False, settings_path: Optional[str] = None,
                 port: Optional[MidiOutputPort] = None):
        self.port_name = port_name
        self.settings_path = (Path(settings_path) if settings_path
                              else settings.DEFAULT_SETTINGS_PATH)
        self.port = port if port is not None else MidiOutputPort()
        self.encoder = Encoder(self.port, command_offset=command_offset, strict=strict)

    def __getattr__(self, name):
        if name in ACTIONS:
            return getattr(self.encoder, name)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    # -- port ----------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self.port.is_open

    def open(self, port_index: Optional[int] = None) -> str:
        """Open the virtual port ProVideoPlayer connects to, or a hardware port."""
        if port_index is not None:
            return self.port.open(port_index)
        return self.port.open_virtual(self.port_name)

    def close(self):
        self.port.close()

    # -- configuration -------------------------------------------------------

    def set_command_offset(self, offset: int):
        self.encoder.set_command_offset(offset)

    def execute(self, command, arg=1):
        return self.encoder.execute(command, arg)

    def save_settings(self, path: Optional[str] = None):
        p = Path(path) if path else self.settings_path
        settings.save(self, p)

    def restore_settings(self, path: Optional[str] = None):
        p = Path(path) if path else self.settings_path
        settings.restore(self, p)

    # -- shutdown ------------------------------------------------------------

    def shutdown(self):
        self.close()
