import pytest

from rfsensors.deltronic import decode_deltronic, encode_deltronic, parse_deltronic_command
from rfsensors.signal import DecodeContext, RawSignal

ADDRESS_1 = (
    600, 1150, 525, 1175, 500, 1175, 475, 1200, 500, 1175, 500, 1200, 475,
    1175, 475, 1200, 475, 575, 1075, 575, 1075, 575, 1075, 1225, 450,
)
ADDRESS_5 = (
    550, 1075, 425, 1100, 400, 1125, 425, 1100, 400, 1125, 400, 1150, 375,
    1125, 400, 1125, 375, 550, 900, 1125, 375, 550, 900, 1150, 375,
)
ADDRESS_9 = (
    600, 1150, 500, 1175, 525, 1175, 500, 1175, 500, 1175, 500, 1175, 500,
    1175, 475, 1200, 500, 1200, 475, 575, 1075, 600, 1075, 1200, 475,
)


def _padded(values):
    return RawSignal(tuple(values) + (0,))


def _train(bits):
    pulses = [600]
    for bit in bits:
        pulses += [1100, 450] if bit else [550, 1000]
    pulses.append(0)
    return RawSignal(tuple(pulses))


def _fresh():
    return DecodeContext(signal_hash=1)


@pytest.mark.parametrize(
    "values, ident",
    [(ADDRESS_1, "0001"), (ADDRESS_5, "0005"), (ADDRESS_9, "0009")],
)
def test_decodes_documented_samples(values, ident):
    message = decode_deltronic(_padded(values), _fresh())
    assert message.label == "Deltronic"
    assert message.fields["ID"] == ident


def test_line_format():
    message = decode_deltronic(_padded(ADDRESS_1), _fresh())
    assert message.line() == "20;00;Deltronic;ID=0001;SWITCH=1;CMD=ON;CHIME=01;"


def test_sequence_advances():
    context = _fresh()
    decode_deltronic(_padded(ADDRESS_1), context)
    second = decode_deltronic(_padded(ADDRESS_5), context)
    assert second.sequence == 1
    assert len(context.messages) == 2


def test_wrong_pulse_count_rejected():
    assert decode_deltronic(RawSignal(ADDRESS_1), _fresh()) is None


def test_long_start_pulse_rejected():
    values = (700,) + ADDRESS_1[1:]
    assert decode_deltronic(_padded(values), _fresh()) is None


def test_missing_preamble_rejected():
    bits = [0] + [1] * 7 + [0, 0, 0, 1]
    assert decode_deltronic(_train(bits), _fresh()) is None


def test_train_helper_round_trip():
    bits = [1] * 8 + [0, 1, 1, 0]
    message = decode_deltronic(_train(bits), _fresh())
    assert message.fields["ID"] == f"{0b0110:04x}"


def test_pulse_too_long_rejected():
    values = list(ADDRESS_1)
    values[1] = 1300
    assert decode_deltronic(_padded(values), _fresh()) is None


def test_repeat_is_suppressed():
    context = DecodeContext(clock=lambda: 0)
    assert decode_deltronic(_padded(ADDRESS_1), context) is True
    assert context.messages == []


def test_parse_command():
    assert parse_deltronic_command("10;DELTRONIC;000001;1;ON;") == 0xFF1


def test_parse_command_case_insensitive():
    assert parse_deltronic_command("10;deltronic;000009;1;ON;") == parse_deltronic_command(
        "10;DELTRONIC;000009;1;ON;"
    )


def test_parse_other_command():
    assert parse_deltronic_command("10;SELECTPLUS;001c33;1;OFF;") is None


def test_parse_bad_address():
    with pytest.raises(ValueError):
        parse_deltronic_command("10;DELTRONIC;00zz01;1;ON;")


def test_encode_starts_with_separator_and_sync():
    levels = encode_deltronic(0xFF5)
    assert levels[:3] == [(True, 640), (False, 36 * 640), (True, 640)]


def test_encode_length():
    levels = encode_deltronic(0xFF5)
    assert len(levels) == 3 + 16 * (12 * 2 + 2)


def test_encode_bits_round_trip():
    address = parse_deltronic_command("10;DELTRONIC;000005;1;ON;")
    levels = encode_deltronic(address)
    frame = levels[3 : 3 + 24]
    lows = frame[0::2]
    value = 0
    for level, duration in lows:
        assert level is False
        value = (value << 1) | (1 if duration > 640 else 0)
    assert value == address


def test_encode_frames_repeat_identically():
    levels = encode_deltronic(0xFF9)
    body = levels[3:]
    frame_length = 26
    frames = [body[i : i + frame_length] for i in range(0, len(body), frame_length)]
    assert all(frame == frames[0] for frame in frames)