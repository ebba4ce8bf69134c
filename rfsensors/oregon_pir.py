"""Oregon PIR/LED/alarm device decoder, reported as X10 switches."""

from __future__ import annotations

from typing import Union

from rfsensors.signal import DecodeContext, Message, RawSignal

OREGON_TAG = 63
MIN_PULSES = 50
MAX_PULSES = 52
PREAMBLE_PULSES = 28
SHORT_MAX = 600
END_PULSE = 1600
REPEAT_WINDOW_MS = 2000
SWITCH_BASE = 0x30

LABEL = "X10"

Result = Union[Message, bool, None]


def decode_oregon_pir(signal: RawSignal, context: DecodeContext) -> Result:
    """Decode an Oregon PIR/LED/alarm packet.

    Only signals tagged for this protocol are considered. After a preamble
    of short pulses, a long pulse toggles the bit value and a short pulse
    repeats it; a short pulse that follows is part of the same bit. Returns
    the published message, True for a suppressed repeat, or None when the
    signal is not a valid packet.
    """
    if signal.tag != OREGON_TAG:
        return None
    if not MIN_PULSES <= signal.number <= MAX_PULSES:
        return None
    durations = signal.microseconds()
    if any(duration > SHORT_MAX for duration in durations[:PREAMBLE_PULSES]):
        return None

    bitstream = 0
    rfbit = 1
    end = len(durations)
    index = PREAMBLE_PULSES
    while index < end:
        pulse = durations[index]
        if pulse > SHORT_MAX:
            if pulse > END_PULSE:
                break
            rfbit ^= 1
        bitstream = ((bitstream << 1) | rfbit) & 0xFFFFFFFF
        following = durations[index + 1] if index + 1 < end else 0
        index += 2 if following < SHORT_MAX else 1

    if context.is_repeat(window_ms=REPEAT_WINDOW_MS):
        return True
    if bitstream == 0:
        return None
    bitstream >>= 4
    switch = (bitstream & 0x3) + SWITCH_BASE
    return context.publish(
        LABEL,
        {"ID": f"{bitstream & 0xFFFFFF:06x}", "SWITCH": f"{switch:02x}", "CMD": "ON"},
    )