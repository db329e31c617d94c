"""Unix socket server for pvpmidi.

A virtual MIDI port only exists while its process is alive, so ``serve``
keeps the PvpController running headless and accepts shell sessions over a
Unix domain socket.  The protocol is line-oriented text:

  client -> server:  one shell command per line (UTF-8)
  server -> client:  output lines, terminated by a sentinel line

The sentinel is a NUL byte on its own line (``\\x00\\n``).

Client connections are served from threads; a lock serialises command
execution so two clients never interleave output or offset changes.
"""

from __future__ import annotations

import io
import logging
import os
import signal
import socketserver
import sys
import threading
from pathlib import Path
from typing import Optional

from pvpmidi.cli import PvpShell
from pvpmidi.host import PvpController
from pvpmidi.paths import DEFAULT_SOCK_PATH, SOCKET_NAME, user_temp_dir

# Sentinel that marks the end of a command's output.
END_OF_RESPONSE = "\x00"


logger = logging.getLogger(__name__)


class _ShellRequestHandler(socketserver.StreamRequestHandler):
    """One connected client: read command lines, answer with shell output."""

    server: PvpServer

    def handle(self):
        banner = (PvpShell.intro or "").lstrip("\n")
        self._respond(banner)

        try:
            for raw in self.rfile:
                line = raw.decode("utf-8", errors="replace").rstrip("\r\n")
                if not line:
                    self._respond("")
                    continue

                output = self.server.run_command(line)
                if output is None:
                    self._respond("[Host] Disconnected.")
                    break
                self._respond(output)
        except (BrokenPipeError, ConnectionResetError):
            logger.debug("client went away")

    def _respond(self, output: str):
        if output and not output.endswith("\n"):
            output += "\n"
        self.wfile.write((output + END_OF_RESPONSE + "\n").encode("utf-8"))


class PvpServer(socketserver.ThreadingMixIn, socketserver.UnixStreamServer):
    """Headless PvpController daemon with a Unix socket control interface."""

    daemon_threads = True

    def __init__(self, host: PvpController, sock_path: Path = DEFAULT_SOCK_PATH):
        self.host = host
        self.sock_path = Path(sock_path)
        self._lock = threading.Lock()
        self._prepare_socket_path()
        super().__init__(str(self.sock_path), _ShellRequestHandler)
        # Allow non-root users in the same group to connect
        os.chmod(str(self.sock_path), 0o770)

    def _prepare_socket_path(self):
        if self.sock_path.exists():
            self.sock_path.unlink()
        try:
            self.sock_path.parent.mkdir(parents=True, exist_ok=True)
        except PermissionError as exc:
            fallback = user_temp_dir() / SOCKET_NAME
            raise PermissionError(
                f"cannot create socket directory '{self.sock_path.parent}'. "
                f"Use --sock with a writable path (for example: {fallback})"
            ) from exc

    def run_command(self, line: str) -> Optional[str]:
        """Execute one shell command and capture its printed output.

        Returns ``None`` when the command asks to disconnect; the host keeps
        running until the daemon process exits.
        """
        with self._lock:
            buf = io.StringIO()
            shell = PvpShell(self.host, stdout=buf, owns_host=False)
            shell.use_rawinput = False
            stop = shell.onecmd(line)
        logger.debug("command %r handled", line)
        return None if stop else buf.getvalue()

    def server_close(self):
        super().server_close()
        if self.sock_path.exists():
            try:
                self.sock_path.unlink()
            except OSError as exc:
                logger.warning("could not remove socket %s: %s", self.sock_path, exc)


def run_server(host: PvpController, sock_path: Optional[str] = None):
    """Serve until SIGINT/SIGTERM, then close the port."""
    path = Path(sock_path) if sock_path else DEFAULT_SOCK_PATH
    server = PvpServer(host, path)

    def _shutdown(signum, frame):
        print("\n[Server] Shutting down...")
        server.server_close()
        host.shutdown()
        sys.exit(0)

    signal.signal(signal.SIGINT, _shutdown)
    signal.signal(signal.SIGTERM, _shutdown)

    print(f"[Server] Listening on {path}")
    try:
        server.serve_forever()
    finally:
        server.server_close()
