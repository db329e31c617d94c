"""Command table, effect table and the outbound message type.

The numeric values below are the note offsets ProVideoPlayer listens for.
They are wire format: never renumber an existing member.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

DEFAULT_PORT_NAME = "PVP Control"

# Highest 7-bit MIDI data value
MAX_VALUE = 127


class InvalidArgument(ValueError):
    """Raised before encoding when an argument cannot be sent."""


class Command(IntEnum):
    ClearAll = 0
    ClearLayer = 1
    ClearTextStream = 2

    GoToBeginning = 3
    Rewind = 4
    Play = 5
    Pause = 6
    PlayPause = 7
    FastForward = 8
    GoToEnd = 9

    PreviousPlaylist = 10
    NextPlaylist = 11
    PreviousCue = 12
    NextCue = 13

    SelectPlaylist = 14
    TriggerCue = 15
    SelectLayer = 16
    SelectLook = 17
    EnableMask = 18
    DisableMask = 19
    EnableEffect = 20
    DisableEffect = 21

    VignetteRadius = 22
    ColorAdjustmentHue = 23
    ColorAdjustmentSaturation = 24
    ColorAdjustmentContrast = 25
    ColorAdjustmentBrightness = 26
    BlurType = 27
    BlurArea = 28
    BlurRadius = 29
    ColorEffectsMode = 30
    ColorEffectsRed = 31
    ColorEffectsGreen = 32
    ColorEffectsBlue = 33
    RGBAdjustRed = 34
    RGBAdjustGreen = 35
    RGBAdjustBlue = 36
    DepthOfFieldX = 37
    DepthOfFieldY = 38
    DepthOfFieldRadius = 39
    OldFilmSepia = 40
    OldFilmNoise = 41
    OldFilmScratch = 42
    OldFilmVignette = 43
    KaleidoscopeType = 44
    KaleidoscopeSpeed = 45
    ColorPosterizeGamma = 46
    ColorPosterizeNumberOfColors = 47
    StarsSpeed = 48
    HalftoneSharpness = 49
    HalftoneGrayComponents = 50
    HalftoneColorRemoval = 51
    RippleSpeed = 52
    RippleType = 53
    DistortionType = 54
    PicassoAnimate = 55
    VariableFPS = 56
    TileColumns = 57
    TileRows = 58
    TileGridSize = 59
    PlayRate = 60
    EdgeMode = 61
    ToonMode = 62
    ChromaticsMode = 63
    ColorWaveSpeed = 64
    ColorWaveType = 65

    @classmethod
    def from_name(cls, name: str) -> Command:
        """Case-insensitive lookup, ignoring underscores."""
        return _lookup(cls, name, "command")


class Effect(IntEnum):
    """Effect ids accepted by EnableEffect / DisableEffect."""

    VignetteRadius = 1
    ColorAdjustment = 2
    Blur = 3
    ColorEffects = 4
    RGBAdjust = 5
    DepthOfField = 6
    OldFilm = 7
    Kaleidoscope = 8
    ColorPosterize = 9
    Stars = 10
    Halftone = 11
    Ripple = 12
    Distortion = 13
    Picasso = 14
    VariableFPS = 15
    Tile = 16
    PlayRate = 17
    Edge = 18
    Toon = 19
    Chromatics = 20
    ColorWave = 21

    @classmethod
    def from_name(cls, name: str) -> Effect:
        """Case-insensitive lookup, ignoring underscores."""
        return _lookup(cls, name, "effect")

    @classmethod
    def coerce(cls, value) -> Effect:
        """Return the member for ``value`` or raise InvalidArgument."""
        if isinstance(value, bool):
            raise InvalidArgument(f"effect id is invalid: {value!r}")
        try:
            return cls(value)
        except (ValueError, TypeError) as exc:
            raise InvalidArgument(f"effect id is invalid: {value!r}") from exc


def _normalise(name: str) -> str:
    return name.replace("_", "").replace("-", "").lower()


def _lookup(enum_cls, name: str, kind: str):
    wanted = _normalise(name)
    for member in enum_cls:
        if _normalise(member.name) == wanted:
            return member
    raise InvalidArgument(f"unknown {kind} '{name}'")


def status_byte(note_on: bool, channel: int) -> int:
    """Status byte as ProVideoPlayer expects it (channel is 1-based)."""
    return 127 + (16 if note_on else 0) + channel


# Every message this package emits is a note-on on channel 1.
NOTE_ON_STATUS = status_byte(True, 1)


@dataclass(frozen=True)
class MidiMessage:
    """A single 3-byte message: status, note, velocity."""

    status: int
    note: int
    velocity: int

    def as_list(self) -> list[int]:
        return [self.status, self.note, self.velocity]

    def __str__(self) -> str:
        return f"[{self.status}, {self.note}, {self.velocity}]"
