"""Named player actions and the argument rule each one applies.

Every named action is a row in ``ACTIONS``; the encoder and the shell both
dispatch through this table, so the only per-action code is the ``prepare``
rule for the few actions that validate or rescale their argument.

A ``prepare`` callable takes the raw argument and returns the velocity to
send, ``None`` to drop the call silently, or raises ``InvalidArgument``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional

from pvpmidi.models import MAX_VALUE, Command, Effect, InvalidArgument

# Argument kinds, used by the shell to parse its input
ARG_NONE = "none"
ARG_INDEX = "index"
ARG_EFFECT = "effect"
ARG_UNIT = "unit"


def _pass_through(arg):
    return 1 if arg is None else arg


def _positive_only(arg) -> Optional[int]:
    if arg is None:
        return 1
    if arg <= 0:
        return None
    return arg


def _effect_member(arg) -> int:
    return int(Effect.coerce(arg))


def _unit_to_velocity(arg) -> int:
    if not math.isfinite(arg):
        raise InvalidArgument(f"radius must be a finite number: {arg!r}")
    # 1.0 maps to 128, one past the 7-bit range; kept for wire compatibility
    if arg < 0:
        arg = 0
    return int(arg * MAX_VALUE + 1)


@dataclass(frozen=True)
class ActionSpec:
    name: str
    command: Command
    arg: str = ARG_NONE
    prepare: Callable = _pass_through
    help: str = ""


ACTIONS: dict[str, ActionSpec] = {spec.name: spec for spec in (
    # -- clear ---------------------------------------------------------------
    ActionSpec("clear_all", Command.ClearAll, help="Clear all layers"),
    ActionSpec("clear_layer", Command.ClearLayer, help="Clear selected layers"),
    ActionSpec("clear_text_stream", Command.ClearTextStream,
               help="Clear the text stream (when available)"),

    # -- video transport -----------------------------------------------------
    ActionSpec("video_go_to_beginning", Command.GoToBeginning,
               help="Go to the beginning of the current video"),
    ActionSpec("video_rewind", Command.Rewind, help="Rewind the current video"),
    ActionSpec("video_play", Command.Play, help="Play the current video"),
    ActionSpec("video_pause", Command.Pause, help="Pause the current video"),
    ActionSpec("video_play_pause", Command.PlayPause,
               help="Toggle play/pause on the current video"),
    ActionSpec("video_fast_forward", Command.FastForward,
               help="Fast forward the current video"),
    ActionSpec("video_go_to_end", Command.GoToEnd,
               help="Go to the end of the current video"),

    # -- presentation --------------------------------------------------------
    ActionSpec("previous_playlist", Command.PreviousPlaylist,
               help="Open the previous playlist"),
    ActionSpec("next_playlist", Command.NextPlaylist, help="Open the next playlist"),
    ActionSpec("next_cue", Command.NextCue, help="Trigger the next cue"),
    ActionSpec("previous_cue", Command.PreviousCue, help="Trigger the previous cue"),

    # -- select by index -----------------------------------------------------
    ActionSpec("select_playlist", Command.SelectPlaylist, ARG_INDEX,
               help="Select a specific playlist"),
    ActionSpec("trigger_cue", Command.TriggerCue, ARG_INDEX, _positive_only,
               help="Trigger a cue in the current playlist (ignored if <= 0)"),
    ActionSpec("select_layer", Command.SelectLayer, ARG_INDEX,
               help="Select a specific layer"),
    ActionSpec("select_look", Command.SelectLook, ARG_INDEX,
               help="Select a specific look"),
    ActionSpec("enable_mask", Command.EnableMask, ARG_INDEX,
               help="Enable a specific mask"),
    ActionSpec("disable_mask", Command.DisableMask, ARG_INDEX,
               help="Disable a specific mask"),
    ActionSpec("enable_effect", Command.EnableEffect, ARG_EFFECT, _effect_member,
               help="Enable an effect"),
    ActionSpec("disable_effect", Command.DisableEffect, ARG_EFFECT, _effect_member,
               help="Disable an effect"),

    # -- effect parameters ---------------------------------------------------
    ActionSpec("set_vignette_radius", Command.VignetteRadius, ARG_UNIT,
               _unit_to_velocity, help="Set the vignette radius (0.0-1.0)"),
)}


def get_action(name: str) -> ActionSpec:
    try:
        return ACTIONS[name]
    except KeyError:
        raise InvalidArgument(f"unknown action '{name}'") from None
