"""pvpmidi - drive ProVideoPlayer over MIDI."""

from pvpmidi.encoder import Encoder
from pvpmidi.host import PvpController
from pvpmidi.models import Command, Effect, InvalidArgument, MidiMessage

__all__ = ["Encoder", "PvpController", "Command", "Effect", "InvalidArgument",
           "MidiMessage"]
