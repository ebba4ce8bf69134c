import pytest

from rfsensors.selectplus import (
    decode_selectplus,
    encode_selectplus,
    parse_selectplus_command,
)
from rfsensors.signal import DecodeContext, RawSignal

BLACK = [
    1000, 1000, 225, 1000, 225, 1000, 225, 300, 900, 300, 900, 300, 900, 300, 900,
    1000, 225, 1000, 225, 300, 925, 300, 900, 1000, 225, 1000, 225, 275, 900, 300,
    900, 300, 900, 300, 900, 900,
]
WHITE = [
    325, 950, 250, 950, 250, 250, 925, 950, 250, 950, 250, 950, 250, 275, 925, 950,
    250, 950, 250, 250, 925, 950, 250, 275, 925, 250, 925, 275, 925, 250, 925, 275,
    925, 275, 925, 925,
]


def _context():
    return DecodeContext(clock=lambda: 0)


def test_black_button_sample():
    message = decode_selectplus(RawSignal(BLACK), _context())
    assert message.line() == "20;00;SelectPlus;ID=1c33;SWITCH=1;CMD=ON;CHIME=01;"


def test_white_button_sample():
    message = decode_selectplus(RawSignal(WHITE), _context())
    assert message.fields["ID"] == "1bb4"


def test_repeat_is_suppressed():
    context = _context()
    first = decode_selectplus(RawSignal(BLACK), context)
    assert first.fields["ID"] == "1c33"
    assert decode_selectplus(RawSignal(BLACK), context) is True
    assert len(context.messages) == 1


def test_different_packet_is_not_a_repeat():
    context = _context()
    decode_selectplus(RawSignal(BLACK), context)
    message = decode_selectplus(RawSignal(WHITE), context)
    assert message.fields["ID"] == "1bb4"
    assert message.sequence == 1


def test_wrong_pulse_count_rejected():
    assert decode_selectplus(RawSignal(BLACK[:-2]), _context()) is None


def test_pulse_too_long_rejected():
    pulses = list(BLACK)
    pulses[1] = 3000
    assert decode_selectplus(RawSignal(pulses), _context()) is None


def test_invalid_manchester_rejected():
    pulses = list(BLACK)
    pulses[2] = 1000
    assert decode_selectplus(RawSignal(pulses), _context()) is None


def test_nonzero_trailing_nibble_rejected():
    pulses = list(BLACK)
    pulses[33], pulses[34] = 1000, 225
    assert decode_selectplus(RawSignal(pulses), _context()) is None


def test_parse_command():
    assert parse_selectplus_command("10;SELECTPLUS;001c33;1;OFF;") == 0x1C330


def test_parse_command_case_insensitive():
    assert parse_selectplus_command("10;selectplus;001BB4;1;ON;") == 0x1BB4 << 4


def test_parse_other_command():
    assert parse_selectplus_command("10;DELTRONIC;001c33;1;OFF;") is None


def test_parse_bad_address():
    with pytest.raises(ValueError):
        parse_selectplus_command("10;SELECTPLUS;zz1c33;1;OFF;")


def test_encode_frames_repeat_identically():
    levels = encode_selectplus(0x1C330)
    frame_length = 35
    first = levels[:frame_length]
    second = levels[frame_length + 1 : 2 * frame_length + 1]
    assert first == second
    assert levels[frame_length][0] is False
    assert all(a[0] != b[0] for a, b in zip(first, first[1:]))