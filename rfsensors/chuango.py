"""Chuango alarm sensors (motion detectors, door and window contacts)."""

from __future__ import annotations

from typing import Union

from rfsensors.signal import DecodeContext, Message, RawSignal

PULSES = 50
OREGON_TAG = 63
PULSE_MID = 700
PULSE_MAX = 2000
PULSE_MIN = 150
REPEAT_WINDOW_MS = 2000

LABEL = "Chuango"

Result = Union[Message, bool, None]


def decode_chuango(signal: RawSignal, context: DecodeContext) -> Result:
    """Decode a Chuango sensor trigger of 24 bits.

    A long pulse after a short one is a 1, a short pulse after a long one a
    0. Returns the published message, True for a suppressed repeat, or None
    when the signal is not a valid packet.
    """
    if signal.number != PULSES or signal.tag == OREGON_TAG:
        return None
    rate = signal.sample_rate
    mid = PULSE_MID // rate
    top = PULSE_MAX // rate
    bottom = PULSE_MIN // rate
    pulses = signal.pulses
    bitstream = 0
    for previous, pulse in zip(pulses[0:47:2], pulses[1:48:2]):
        if pulse > mid:
            if pulse > top or previous > mid:
                return None
            bitstream = (bitstream << 1) | 1
        else:
            if pulse < bottom or previous < mid:
                return None
            bitstream <<= 1
    if context.is_repeat(window_ms=REPEAT_WINDOW_MS):
        return True
    if bitstream == 0:
        return None
    return context.publish(
        LABEL,
        {"ID": f"{bitstream & 0xFFFFFF:06x}", "SWITCH": "02", "CMD": "ON"},
    )