import threading

import pytest

from pvpmidi.actions import ACTIONS
from pvpmidi.encoder import Encoder
from pvpmidi.models import Command, Effect, InvalidArgument, MidiMessage


@pytest.mark.parametrize("command", list(Command))
def test_execute_encodes_every_command(encoder, port, command):
    encoder.set_command_offset(40)
    msg = encoder.execute(command, 7)
    assert port.sent == [[144, 40 + command.value, 7]]
    assert msg == MidiMessage(144, 40 + command.value, 7)


def test_execute_defaults_velocity_to_one(encoder, port):
    encoder.execute(Command.Play)
    encoder.execute(Command.Play, None)
    assert port.sent == [[144, 5, 1], [144, 5, 1]]


def test_default_offset_is_zero(encoder):
    assert encoder.command_offset == 0


def test_offset_change_shifts_notes_only_for_later_messages(encoder, port):
    encoder.select_layer(2)
    encoder.set_command_offset(10)
    encoder.select_layer(2)
    encoder.set_command_offset(3)
    encoder.select_layer(2)
    assert port.sent == [[144, 16, 2], [144, 26, 2], [144, 19, 2]]


def test_offset_not_validated(encoder, port):
    encoder.set_command_offset(-20)
    encoder.video_play()
    encoder.set_command_offset(100)
    encoder.execute(Command.ColorWaveType, 300)
    assert port.sent == [[144, -15, 1], [144, 165, 300]]


def test_offset_at_construction(port):
    Encoder(port, command_offset=12).video_pause()
    assert port.sent == [[144, 18, 1]]


@pytest.mark.parametrize("index", [0, -5])
def test_trigger_cue_non_positive_is_silently_dropped(encoder, port, index):
    assert encoder.trigger_cue(index) is None
    assert port.sent == []


def test_trigger_cue_sends_index(encoder, port):
    encoder.trigger_cue(3)
    assert port.sent == [[144, 15, 3]]


def test_enable_effect_rejects_unknown_id(encoder, port):
    with pytest.raises(InvalidArgument):
        encoder.enable_effect(999)
    with pytest.raises(InvalidArgument):
        encoder.disable_effect(0)
    assert port.sent == []


def test_enable_and_disable_effect(encoder, port):
    encoder.enable_effect(Effect.Blur)
    encoder.disable_effect(Effect.ColorWave)
    encoder.enable_effect(8)
    assert port.sent == [[144, 20, 3], [144, 21, 21], [144, 20, 8]]


def test_vignette_radius_negative_clamps_to_zero(encoder, port):
    encoder.set_vignette_radius(-1)
    encoder.set_vignette_radius(0)
    assert port.sent == [[144, 22, 1], [144, 22, 1]]


def test_vignette_radius_full_scale_sends_128(encoder, port):
    encoder.set_vignette_radius(1)
    assert port.sent == [[144, 22, 128]]


def test_vignette_radius_half(encoder, port):
    encoder.set_vignette_radius(0.5)
    assert port.sent == [[144, 22, 64]]


@pytest.mark.parametrize("method,note", [
    ("clear_all", 0),
    ("clear_layer", 1),
    ("clear_text_stream", 2),
    ("video_go_to_beginning", 3),
    ("video_rewind", 4),
    ("video_play", 5),
    ("video_pause", 6),
    ("video_play_pause", 7),
    ("video_fast_forward", 8),
    ("video_go_to_end", 9),
    ("previous_playlist", 10),
    ("next_playlist", 11),
    ("previous_cue", 12),
    ("next_cue", 13),
])
def test_no_argument_actions(encoder, port, method, note):
    getattr(encoder, method)()
    assert port.sent == [[144, note, 1]]


@pytest.mark.parametrize("method,note", [
    ("select_playlist", 14),
    ("select_layer", 16),
    ("select_look", 17),
    ("enable_mask", 18),
    ("disable_mask", 19),
])
def test_index_actions_pass_argument_through(encoder, port, method, note):
    getattr(encoder, method)(0)
    getattr(encoder, method)(9)
    assert port.sent == [[144, note, 0], [144, note, 9]]


def test_every_table_action_has_a_method():
    for name in ACTIONS:
        assert callable(getattr(Encoder, name))


def test_repeated_action_is_byte_identical(encoder, port):
    encoder.video_play()
    encoder.video_play()
    assert port.sent[0] == port.sent[1]


def test_encoding_depends_only_on_offset_command_and_argument(port):
    a = Encoder(port, command_offset=5)
    b = Encoder(port, command_offset=5)
    b.next_cue()
    b.trigger_cue(4)
    assert a.encode(Command.SelectLook, 2) == b.encode(Command.SelectLook, 2)


def test_encode_does_not_send(encoder, port):
    assert encoder.encode(Command.Play) == MidiMessage(144, 5, 1)
    assert port.sent == []


def test_perform_unknown_action(encoder):
    with pytest.raises(InvalidArgument):
        encoder.perform("launch_rockets")


def test_strict_mode_rejects_out_of_range(port):
    encoder = Encoder(port, strict=True)
    with pytest.raises(InvalidArgument):
        encoder.set_vignette_radius(1)
    encoder.set_command_offset(100)
    with pytest.raises(InvalidArgument):
        encoder.execute(Command.ColorWaveType)
    assert port.sent == []


def test_strict_mode_allows_valid_messages(port):
    encoder = Encoder(port, strict=True)
    encoder.set_vignette_radius(0.99)
    assert port.sent == [[144, 22, 126]]


def test_concurrent_sends_use_a_consistent_offset(encoder, port):
    def worker():
        for _ in range(200):
            encoder.video_play()

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for _ in range(50):
        encoder.set_command_offset(0)
        encoder.set_command_offset(10)
    for t in threads:
        t.join()

    assert len(port.sent) == 800
    assert {tuple(m) for m in port.sent} <= {(144, 5, 1), (144, 15, 1)}


@pytest.mark.parametrize("radius", [float("nan"), float("inf"), float("-inf")])
def test_vignette_radius_rejects_non_finite(encoder, port, radius):
    with pytest.raises(InvalidArgument):
        encoder.set_vignette_radius(radius)
    assert port.sent == []
