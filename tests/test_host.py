import pytest

from pvpmidi.host import PvpController
from pvpmidi.models import Command, Effect


def test_open_virtual_port_by_name(controller, port):
    controller.port_name = "Booth"
    assert controller.open() == "Booth"
    assert controller.is_open


def test_open_hardware_port(controller, port):
    assert controller.open(2) == "hw:2"


def test_actions_forward_to_encoder(controller, port):
    controller.open()
    controller.video_play()
    controller.trigger_cue(0)
    controller.enable_effect(controller.effect.Kaleidoscope)
    controller.set_command_offset(10)
    controller.execute(Command.NextCue)
    assert port.sent == [[144, 5, 1], [144, 20, 8], [144, 23, 1]]


def test_effect_enumeration_is_exposed():
    assert PvpController.effect is Effect


def test_unknown_attribute(controller):
    with pytest.raises(AttributeError):
        controller.launch_rockets


def test_shutdown_closes_port(controller, port):
    controller.open()
    controller.shutdown()
    assert not controller.is_open


def test_open_and_shutdown_print_nothing(controller, capsys):
    controller.open()
    controller.shutdown()
    assert capsys.readouterr().out == ""
