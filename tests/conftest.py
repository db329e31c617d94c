# tests/conftest.py
import logging

import pytest

from pvpmidi.encoder import Encoder
from pvpmidi.host import PvpController


class RecordingPort:
    """Stands in for MidiOutputPort; keeps every message sent."""

    def __init__(self):
        self.sent = []
        self.name = None

    @property
    def is_open(self):
        return self.name is not None

    def open(self, port_index):
        self.name = f"hw:{port_index}"
        return self.name

    def open_virtual(self, name):
        self.name = name
        return name

    def close(self):
        self.name = None

    def send(self, message):
        self.sent.append(list(message))


@pytest.fixture
def port():
    return RecordingPort()


@pytest.fixture
def encoder(port):
    return Encoder(port)


@pytest.fixture
def controller(port, tmp_path):
    return PvpController(settings_path=str(tmp_path / "settings.json"), port=port)


@pytest.fixture(autouse=True)
def restore_package_logger():
    package_logger = logging.getLogger("pvpmidi")
    handlers, level = list(package_logger.handlers), package_logger.level
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
