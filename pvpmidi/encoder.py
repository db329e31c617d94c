"""Encodes player actions into MIDI note messages for ProVideoPlayer.

For every action:

  1. Look up the action's Command offset
  2. Apply the action's argument rule (drop, reject or rescale)
  3. note = command_offset + Command, velocity = argument
  4. Hand [144, note, velocity] to the transport

The encoder keeps no state other than its command offset.  A lock covers the
read-offset / encode / send sequence so the socket server can share one
encoder between client threads.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional, Protocol

from pvpmidi.actions import get_action
from pvpmidi.deps import HAS_MIDO, mido
from pvpmidi.models import NOTE_ON_STATUS, Command, InvalidArgument, MidiMessage


logger = logging.getLogger(__name__)


class Transport(Protocol):
    def send(self, message: list[int]) -> None: ...


class Encoder:
    """Turns actions into messages and sends them through ``transport``."""

    def __init__(self, transport: Transport, command_offset: int = 0,
                 strict: bool = False):
        self._transport = transport
        self._command_offset = command_offset
        # When True, out-of-range notes and velocities raise instead of
        # being forwarded as-is.
        self.strict = strict
        self._lock = threading.Lock()

    # -- configuration -------------------------------------------------------

    @property
    def command_offset(self) -> int:
        return self._command_offset

    def set_command_offset(self, offset: int):
        """Set the note number ProVideoPlayer's command range starts at."""
        with self._lock:
            self._command_offset = offset
        logger.info("command offset -> %d", offset)

    # -- encoding ------------------------------------------------------------

    def encode(self, command: Command, arg: Optional[int] = 1) -> MidiMessage:
        """Build the message for ``command`` without sending it."""
        velocity = 1 if arg is None else arg
        msg = MidiMessage(NOTE_ON_STATUS, self._command_offset + command, velocity)
        if self.strict:
            _check_data_bytes(msg)
        return msg

    def execute(self, command: Command, arg: Optional[int] = 1) -> MidiMessage:
        """Encode ``command`` with ``arg`` and send it."""
        with self._lock:
            msg = self.encode(command, arg)
            self._transport.send(msg.as_list())
        logger.debug("%s -> %s", getattr(command, "name", command), msg)
        return msg

    def perform(self, action: str, arg=None) -> Optional[MidiMessage]:
        """Run a named action; returns None when the action drops the call."""
        spec = get_action(action)
        velocity = spec.prepare(arg)
        if velocity is None:
            logger.debug("%s(%r) ignored", action, arg)
            return None
        return self.execute(spec.command, velocity)

    # -- clear ---------------------------------------------------------------

    def clear_all(self):
        return self.perform("clear_all")

    def clear_layer(self):
        return self.perform("clear_layer")

    def clear_text_stream(self):
        return self.perform("clear_text_stream")

    # -- video transport -----------------------------------------------------

    def video_go_to_beginning(self):
        return self.perform("video_go_to_beginning")

    def video_rewind(self):
        return self.perform("video_rewind")

    def video_play(self):
        return self.perform("video_play")

    def video_pause(self):
        return self.perform("video_pause")

    def video_play_pause(self):
        return self.perform("video_play_pause")

    def video_fast_forward(self):
        return self.perform("video_fast_forward")

    def video_go_to_end(self):
        return self.perform("video_go_to_end")

    # -- presentation --------------------------------------------------------

    def previous_playlist(self):
        return self.perform("previous_playlist")

    def next_playlist(self):
        return self.perform("next_playlist")

    def next_cue(self):
        return self.perform("next_cue")

    def previous_cue(self):
        return self.perform("previous_cue")

    # -- select by index -----------------------------------------------------

    def select_playlist(self, playlist_index: int):
        return self.perform("select_playlist", playlist_index)

    def trigger_cue(self, cue_index: int):
        """Trigger a cue; indexes <= 0 are ignored without error."""
        return self.perform("trigger_cue", cue_index)

    def select_layer(self, layer_index: int):
        return self.perform("select_layer", layer_index)

    def select_look(self, look_index: int):
        return self.perform("select_look", look_index)

    def enable_mask(self, mask_index: int):
        return self.perform("enable_mask", mask_index)

    def disable_mask(self, mask_index: int):
        return self.perform("disable_mask", mask_index)

    def enable_effect(self, effect: int):
        """Enable an effect; ``effect`` must be an ``Effect`` value."""
        return self.perform("enable_effect", effect)

    def disable_effect(self, effect: int):
        """Disable an effect; ``effect`` must be an ``Effect`` value."""
        return self.perform("disable_effect", effect)

    # -- effect parameters ---------------------------------------------------

    def set_vignette_radius(self, radius: float):
        """Set the vignette radius from a 0.0-1.0 value.

        Negative values clamp to 0.  The value is rescaled to
        ``int(radius * 127 + 1)``, so 1.0 sends velocity 128.
        """
        return self.perform("set_vignette_radius", radius)


def _check_data_bytes(msg: MidiMessage):
    """Strict mode: reject messages whose data bytes are not 7-bit."""
    if not HAS_MIDO:
        raise RuntimeError("mido not installed (required for strict mode)")
    try:
        mido.Message.from_bytes(msg.as_list())
    except (ValueError, TypeError) as exc:
        raise InvalidArgument(f"message {msg} is not valid MIDI: {exc}") from exc
