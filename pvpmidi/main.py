"""Entry point and argument parsing for pvpmidi.

Subcommands
-----------
serve   Open the MIDI port and run headless with a Unix socket interface.
cli     Connect to a running server and open an interactive session.
shell   Open the MIDI port and run an interactive session in this process.
send    Open the MIDI port, perform one action and close it again.
ports   List MIDI output ports.
list    List actions, commands and effects.
"""

from __future__ import annotations

import argparse
import logging
import sys

from pvpmidi.actions import ACTIONS
from pvpmidi.cli import PvpShell, parse_action_arg
from pvpmidi.host import PvpController
from pvpmidi.logging_setup import configure_logging
from pvpmidi.paths import DEFAULT_SETTINGS_PATH, DEFAULT_SOCK_PATH


logger = logging.getLogger(__name__)


# -- shared helpers ----------------------------------------------------------

def _add_host_args(parser: argparse.ArgumentParser):
    """Add arguments used when starting a controller."""
    parser.add_argument("--port-name", default=None,
                        help="Virtual port name (default: from settings, "
                             "else 'PVP Control')")
    parser.add_argument("--port", type=int, default=None,
                        help="Open hardware output port INDEX instead of a "
                             "virtual port")
    parser.add_argument("--offset", type=int, default=None,
                        help="Command offset configured in ProVideoPlayer")
    parser.add_argument("--strict", action="store_true", default=None,
                        help="Reject notes/velocities outside 0-127")
    parser.add_argument("--settings", default=None,
                        help=f"Settings file path (default: {DEFAULT_SETTINGS_PATH})")
    parser.add_argument("--no-restore", action="store_true",
                        help="Ignore the saved settings file")


def _boot_host(args) -> PvpController:
    """Create a PvpController from saved settings and command-line overrides."""
    host = PvpController(settings_path=args.settings)

    if not args.no_restore:
        try:
            host.restore_settings()
        except Exception as e:
            logger.warning("settings restore failed: %s", e)

    if args.port_name is not None:
        host.port_name = args.port_name
    if args.offset is not None:
        host.set_command_offset(args.offset)
    if args.strict is not None:
        host.encoder.strict = args.strict

    try:
        host.open(args.port)
    except Exception as e:
        logger.warning("MIDI output startup failed: %s", e)
    return host


def _parse_send_arg(action: str, raw):
    return parse_action_arg(ACTIONS[action], raw or "")


# -- subcommand handlers -----------------------------------------------------

def _cmd_serve(args):
    """Run the controller as a headless server."""
    from pvpmidi.server import run_server

    level = configure_logging(default_level="WARNING")
    logger.info("pvpmidi server starting (log level: %s)", logging.getLevelName(level))

    host = _boot_host(args)
    run_server(host, args.sock)


def _cmd_cli(args):
    """Connect to a running server."""
    from pvpmidi.client import connect

    connect(args.sock)


def _cmd_shell(args):
    """Interactive session owning the port."""
    configure_logging(default_level="WARNING")
    host = _boot_host(args)
    shell = PvpShell(host)
    try:
        shell.cmdloop()
    except KeyboardInterrupt:
        host.shutdown()


def _cmd_send(args):
    """Perform one action."""
    configure_logging(default_level="WARNING")
    try:
        value = _parse_send_arg(args.action, args.arg)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    host = _boot_host(args)
    try:
        msg = host.encoder.perform(args.action, value)
    except (ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        host.shutdown()
    print(f"sent {msg}" if msg is not None else "ignored")


def _cmd_ports(args):
    PvpShell(PvpController()).do_ports("")


def _cmd_list(args):
    shell = PvpShell(PvpController())
    for title, show in (("Actions", shell.do_actions), ("Commands", shell.do_commands),
                        ("Effects", shell.do_effects)):
        print(f"{title}:")
        show("")


# -- main --------------------------------------------------------------------

def main(argv=None):
    ap = argparse.ArgumentParser(
        description="pvpmidi - ProVideoPlayer MIDI remote")
    sub = ap.add_subparsers(dest="command")

    # -- serve ---------------------------------------------------------------
    sp_serve = sub.add_parser(
        "serve",
        help="Run headless with a Unix socket control interface")
    _add_host_args(sp_serve)
    sp_serve.add_argument(
        "--sock", default=None,
        help=f"Unix socket path (default: {DEFAULT_SOCK_PATH})")
    sp_serve.set_defaults(func=_cmd_serve)

    # -- cli -----------------------------------------------------------------
    sp_cli = sub.add_parser(
        "cli",
        help="Connect to a running pvpmidi server")
    sp_cli.add_argument(
        "--sock", default=None,
        help=f"Unix socket path (default: {DEFAULT_SOCK_PATH})")
    sp_cli.set_defaults(func=_cmd_cli)

    # -- shell ---------------------------------------------------------------
    sp_shell = sub.add_parser(
        "shell",
        help="Open the port and start an interactive session")
    _add_host_args(sp_shell)
    sp_shell.set_defaults(func=_cmd_shell)

    # -- send ----------------------------------------------------------------
    sp_send = sub.add_parser(
        "send",
        help="Perform a single action")
    _add_host_args(sp_send)
    sp_send.add_argument("action", choices=sorted(ACTIONS), metavar="ACTION",
                         help="Action name (see 'list')")
    sp_send.add_argument("arg", nargs="?", default=None,
                         help="Index, effect name/id or 0.0-1.0 value")
    sp_send.set_defaults(func=_cmd_send)

    # -- ports / list --------------------------------------------------------
    sub.add_parser("ports", help="List MIDI output ports").set_defaults(func=_cmd_ports)
    sub.add_parser("list", help="List actions, commands and effects").set_defaults(
        func=_cmd_list)

    args = ap.parse_args(argv)
    if args.command is None:
        ap.error("a command is required: serve, cli, shell, send, ports or list")
    args.func(args)


if __name__ == "__main__":
    main()
