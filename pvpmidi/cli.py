"""Interactive command-line interface for pvpmidi.

Every named action is a shell command of the same name::

    pvp> video_play
    pvp> trigger_cue 3
    pvp> enable_effect blur
    pvp> set_vignette_radius 0.5

Effects may be given by name (any case, underscores ignored) or by id.
"""

from __future__ import annotations

import cmd

from pvpmidi.actions import ACTIONS, ARG_EFFECT, ARG_INDEX, ARG_NONE, ARG_UNIT, ActionSpec
from pvpmidi.deps import HAS_MIDO, HAS_RTMIDI
from pvpmidi.host import PvpController
from pvpmidi.midi import MidiOutputPort
from pvpmidi.models import Command, Effect


_USAGE_BY_KIND = {
    ARG_NONE: "",
    ARG_INDEX: " <index>",
    ARG_EFFECT: " <effect name|id>",
    ARG_UNIT: " <0.0-1.0>",
}


def parse_effect(text: str):
    """Effect name or numeric id; unknown ids are left for the encoder to reject."""
    try:
        return int(text)
    except ValueError:
        return Effect.from_name(text)


def parse_action_arg(spec: ActionSpec, arg: str):
    """Convert the shell argument for ``spec``; raises ValueError on bad input."""
    text = arg.strip()
    if spec.arg == ARG_NONE:
        if text:
            raise ValueError(f"{spec.name} takes no argument")
        return None
    if not text:
        raise ValueError(f"Usage: {spec.name}{_USAGE_BY_KIND[spec.arg]}")
    if spec.arg == ARG_INDEX:
        return int(text)
    if spec.arg == ARG_EFFECT:
        return parse_effect(text)
    return float(text)


class PvpShell(cmd.Cmd):
    intro = r"""
============================================================
  pvpmidi  -  ProVideoPlayer MIDI remote
============================================================
Type 'help' for available commands, 'actions' for the action list.
"""
    prompt = "pvp> "

    def __init__(self, host: PvpController, stdout=None, owns_host: bool = True):
        super().__init__(stdout=stdout)
        self.host = host
        # When True, quit/exit will call host.shutdown().
        # Set to False when running behind the socket server (the server
        # manages the host lifecycle).
        self._owns_host = owns_host

    # -- helper for redirectable output --------------------------------------

    def _print(self, *args, **kwargs):
        """Print to self.stdout so output is captured in server mode."""
        kwargs.setdefault("file", self.stdout)
        print(*args, **kwargs)

    def _run_action(self, spec: ActionSpec, arg: str):
        try:
            value = parse_action_arg(spec, arg)
            msg = self.host.encoder.perform(spec.name, value)
        except Exception as e:
            self._print(f"Error: {e}")
            return
        if msg is None:
            self._print("  ignored")
        else:
            self._print(f"  sent {msg}")

    def emptyline(self):
        pass

    # -- raw commands --------------------------------------------------------

    def do_exec(self, arg):
        """Send any command: exec <Command name|offset> [value]"""
        parts = arg.strip().split()
        if not parts or len(parts) > 2:
            self._print("Usage: exec <command> [value]")
            return
        try:
            if parts[0].isdigit():
                command = Command(int(parts[0]))
            else:
                command = Command.from_name(parts[0])
            value = int(parts[1]) if len(parts) > 1 else 1
            msg = self.host.encoder.execute(command, value)
        except Exception as e:
            self._print(f"Error: {e}")
            return
        self._print(f"  sent {msg}")

    # -- configuration -------------------------------------------------------

    def do_offset(self, arg):
        """Get/set command offset: offset [note]"""
        if arg.strip():
            try:
                self.host.set_command_offset(int(arg.strip()))
            except ValueError:
                self._print("Error: offset must be an integer")
                return
        self._print(f"  command offset: {self.host.encoder.command_offset}")

    def do_strict(self, arg):
        """Get/set strict range checking: strict [on|off]"""
        a = arg.strip().lower()
        if a in ("on", "true", "1"):
            self.host.encoder.strict = True
        elif a in ("off", "false", "0"):
            self.host.encoder.strict = False
        elif a:
            self._print("Usage: strict [on|off]")
            return
        self._print(f"  strict: {'on' if self.host.encoder.strict else 'off'}")

    # -- listings ------------------------------------------------------------

    def do_actions(self, arg):
        """List named actions."""
        for spec in ACTIONS.values():
            usage = f"{spec.name}{_USAGE_BY_KIND[spec.arg]}"
            self._print(f"  {usage:<36} {spec.help}")

    def do_commands(self, arg):
        """List the command table (name = note offset)."""
        for command in Command:
            self._print(f"  {int(command):>3}  {command.name}")

    def do_effects(self, arg):
        """List effect ids."""
        for effect in Effect:
            self._print(f"  {int(effect):>3}  {effect.name}")

    # -- ports ---------------------------------------------------------------

    def do_ports(self, arg):
        """List MIDI output ports."""
        ports = MidiOutputPort.list_ports()
        if not ports:
            self._print("  No MIDI output ports found.")
            return
        for i, name in enumerate(ports):
            self._print(f"  [{i}] {name}")

    # -- settings ------------------------------------------------------------

    def do_save(self, arg):
        """Save settings: save [path]"""
        path = arg.strip() or None
        try:
            self.host.save_settings(path)
            self._print("  Saved.")
        except Exception as e:
            self._print(f"Error: {e}")

    def do_restore(self, arg):
        """Restore settings: restore [path]"""
        path = arg.strip() or None
        try:
            self.host.restore_settings(path)
            self._print("  Restored.")
        except Exception as e:
            self._print(f"Error: {e}")

    # -- status --------------------------------------------------------------

    def do_status(self, arg):
        """Overall status."""
        self._print("=== pvpmidi Status ===")
        self._print(f"  Port    : {self.host.port.name or 'closed'}")
        self._print(f"  Offset  : {self.host.encoder.command_offset}")
        self._print(f"  Strict  : {'on' if self.host.encoder.strict else 'off'}")
        self._print(f"  Settings: {self.host.settings_path}")

    def do_deps(self, arg):
        """Check dependencies."""
        for name, ok in [("python-rtmidi", HAS_RTMIDI), ("mido", HAS_MIDO)]:
            self._print(f"  {name}: {'OK' if ok else 'MISSING'}")

    def do_quit(self, arg):
        """Exit the current CLI session."""
        if self._owns_host:
            self.host.shutdown()
        return True

    do_exit = do_quit
    do_EOF = do_quit


def _make_action_command(spec: ActionSpec):
    def do_action(self, arg):
        self._run_action(spec, arg)

    do_action.__doc__ = f"{spec.help}: {spec.name}{_USAGE_BY_KIND[spec.arg]}"
    do_action.__name__ = f"do_{spec.name}"
    return do_action


for _spec in ACTIONS.values():
    setattr(PvpShell, f"do_{_spec.name}", _make_action_command(_spec))
