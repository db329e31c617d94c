"""Client for a running ``pvpmidi serve`` daemon.

Interactive::

    pvpmidi cli [--sock PATH]

One command from a script::

    from pvpmidi.client import send_command
    print(send_command("trigger_cue 3"))
"""

from __future__ import annotations

import readline  # noqa: F401  (enables line-editing in input())
import socket
import sys
from pathlib import Path
from typing import Optional, Union

from pvpmidi.paths import DEFAULT_SOCK_PATH
from pvpmidi.server import END_OF_RESPONSE


def _open(sock_path: Union[str, Path, None]) -> socket.socket:
    path = Path(sock_path) if sock_path else DEFAULT_SOCK_PATH
    if not path.exists():
        raise ConnectionError(f"socket {path} not found. Is the server running?")
    sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    try:
        sock.connect(str(path))
    except OSError as e:
        sock.close()
        raise ConnectionError(f"cannot connect to {path}: {e}") from e
    return sock


def read_response(rfile) -> Optional[list[str]]:
    """Read lines up to the end-of-response sentinel.

    Returns ``None`` if the connection closed before a sentinel was seen.
    """
    lines = []
    while True:
        line = rfile.readline()
        if not line:
            return None
        line = line.rstrip("\n")
        if line == END_OF_RESPONSE:
            return lines
        lines.append(line)


def send_command(line: str, sock_path: Union[str, Path, None] = None) -> str:
    """Run one shell command on the daemon and return its output."""
    with _open(sock_path) as sock, \
            sock.makefile("r", encoding="utf-8", errors="replace") as rfile, \
            sock.makefile("w", encoding="utf-8") as wfile:
        read_response(rfile)  # banner
        wfile.write(line + "\n")
        wfile.flush()
        lines = read_response(rfile)
    if lines is None:
        raise ConnectionError("server closed the connection")
    return "\n".join(lines)


def connect(sock_path: Union[str, Path, None] = None):
    """Connect to the daemon and run an interactive REPL."""
    try:
        sock = _open(sock_path)
    except ConnectionError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    with sock, \
            sock.makefile("r", encoding="utf-8", errors="replace") as rfile, \
            sock.makefile("w", encoding="utf-8") as wfile:
        banner = read_response(rfile)
        if banner is None:
            return
        print("\n".join(banner))

        while True:
            try:
                line = input("pvp> ")
            except (EOFError, KeyboardInterrupt):
                print()
                break

            try:
                wfile.write(line + "\n")
                wfile.flush()
            except OSError:
                break

            lines = read_response(rfile)
            if lines is None:
                break
            if lines:
                print("\n".join(lines))

            if line.strip().lower() in {"quit", "exit"}:
                break
