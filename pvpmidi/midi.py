"""Low-level MIDI output port wrapper (python-rtmidi)."""

from __future__ import annotations

import logging
from typing import Optional

from pvpmidi.deps import HAS_RTMIDI, rtmidi


logger = logging.getLogger(__name__)


class MidiOutputPort:
    """Opens a single hardware or virtual MIDI output port."""

    def __init__(self):
        self._port = None
        self._name: Optional[str] = None

    # -- class helpers -------------------------------------------------------

    @staticmethod
    def list_ports() -> list[str]:
        if not HAS_RTMIDI:
            return []
        m = rtmidi.MidiOut()
        ports = [m.get_port_name(i) for i in range(m.get_port_count())]
        m.delete()
        return ports

    # -- open / close --------------------------------------------------------

    def open(self, port_index: int) -> str:
        self.close()
        if not HAS_RTMIDI:
            raise RuntimeError("python-rtmidi not installed")
        self._port = rtmidi.MidiOut()
        self._port.open_port(port_index)
        self._name = self._port.get_port_name(port_index)
        logger.info("opened output port %d: %s", port_index, self._name)
        return self._name

    def open_virtual(self, name: str) -> str:
        self.close()
        if not HAS_RTMIDI:
            raise RuntimeError("python-rtmidi not installed")
        self._port = rtmidi.MidiOut()
        self._port.open_virtual_port(name)
        self._name = name
        logger.info("opened virtual output port: %s", name)
        return name

    def close(self):
        if self._port:
            self._port.close_port()
            self._port.delete()
            logger.info("closed output port: %s", self._name)
            self._port = None
            self._name = None

    # -- output --------------------------------------------------------------

    def send(self, message: list[int]):
        if self._port is None:
            raise RuntimeError("MIDI output port is not open")
        self._port.send_message(message)

    @property
    def is_open(self) -> bool:
        return self._port is not None

    @property
    def name(self) -> Optional[str]:
        return self._name
