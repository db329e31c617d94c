import shutil
import tempfile
import threading
from pathlib import Path

import pytest

from pvpmidi.client import send_command
from pvpmidi.server import PvpServer


@pytest.fixture
def server(controller):
    # Unix socket paths are length-limited; keep this one short.
    sock_dir = Path(tempfile.mkdtemp(prefix="pvp"))
    controller.open()
    srv = PvpServer(controller, sock_dir / "pvp.sock")
    thread = threading.Thread(target=srv.serve_forever, daemon=True)
    thread.start()
    yield srv
    srv.shutdown()
    srv.server_close()
    thread.join(timeout=5)
    shutil.rmtree(sock_dir, ignore_errors=True)


def test_command_round_trip(server, port):
    assert send_command("trigger_cue 3", server.sock_path) == "  sent [144, 15, 3]"
    assert port.sent == [[144, 15, 3]]


def test_quit_keeps_host_running(server, controller):
    assert send_command("quit", server.sock_path) == "[Host] Disconnected."
    assert controller.is_open


def test_socket_removed_on_close(server):
    path = server.sock_path
    assert path.exists()
    server.shutdown()
    server.server_close()
    assert not path.exists()


def test_missing_socket(tmp_path):
    with pytest.raises(ConnectionError):
        send_command("video_play", tmp_path / "absent.sock")
