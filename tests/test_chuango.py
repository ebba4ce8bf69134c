import pytest

from rfsensors.chuango import decode_chuango
from rfsensors.signal import DecodeContext, RawSignal

SAMPLE = (
    1620, 420, 1530, 450, 1560, 390, 510, 1440, 1560, 420, 1530, 420, 450, 1530,
    1440, 510, 1440, 540, 360, 1500, 450, 1470, 480, 1470, 1560, 390, 510, 1440,
    1530, 420, 1500, 480, 1470, 570, 330, 1590, 390, 1530, 450, 1500, 480, 1470,
    1530, 420, 1530, 420, 1530, 420, 450, 3360,
)


def _train(bits, tag=0):
    pulses = []
    for bit in bits:
        pulses += [400, 1500] if bit else [1500, 400]
    pulses += [450, 3360]
    return RawSignal(tuple(pulses), tag=tag)


def _fresh():
    return DecodeContext(signal_hash=1)


def test_decodes_documented_sample():
    message = decode_chuango(RawSignal(SAMPLE), _fresh())
    assert message.fields["ID"] == "127478"


def test_line_format():
    message = decode_chuango(RawSignal(SAMPLE), _fresh())
    assert message.line() == "20;00;Chuango;ID=127478;SWITCH=02;CMD=ON;"


@pytest.mark.parametrize("value", [0x000001, 0xABCDEF, 0x800000])
def test_round_trip(value):
    bits = [(value >> shift) & 1 for shift in range(23, -1, -1)]
    message = decode_chuango(_train(bits), _fresh())
    assert message.fields["ID"] == f"{value:06x}"


def test_oregon_tagged_signal_skipped():
    signal = RawSignal(SAMPLE, tag=63)
    assert decode_chuango(signal, _fresh()) is None


def test_wrong_pulse_count_rejected():
    assert decode_chuango(RawSignal(SAMPLE[:-2]), _fresh()) is None


def test_all_zero_rejected():
    assert decode_chuango(_train([0] * 24), _fresh()) is None


def test_pulse_too_long_rejected():
    pulses = list(SAMPLE)
    pulses[7] = 2100
    assert decode_chuango(RawSignal(tuple(pulses)), _fresh()) is None


def test_invalid_sequence_rejected():
    pulses = list(SAMPLE)
    pulses[6] = 900
    assert decode_chuango(RawSignal(tuple(pulses)), _fresh()) is None


def test_repeat_is_suppressed():
    context = DecodeContext(clock=lambda: 0)
    assert decode_chuango(RawSignal(SAMPLE), context) is True
    assert context.messages == []


def test_repeat_window_elapsed():
    context = DecodeContext(clock=lambda: 2001)
    message = decode_chuango(RawSignal(SAMPLE), context)
    assert message.fields["ID"] == "127478"


def test_sample_rate_scales_thresholds():
    scaled = RawSignal(tuple(pulse // 30 for pulse in SAMPLE), sample_rate=30)
    message = decode_chuango(scaled, _fresh())
    assert message.fields["ID"] == "127478"