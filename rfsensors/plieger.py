"""Plieger York doorbell decoder."""

from __future__ import annotations

from typing import Union

from rfsensors.signal import DecodeContext, Message, RawSignal

PULSES = 66
PULSE_MID = 700
PULSE_MAX = 1900
REPEAT_WINDOW_MS = 1000

LABEL = "Plieger"
CHIMES = {0xE0: 1, 0x1C: 2, 0x03: 3}

Result = Union[Message, bool, None]


def decode_plieger(signal: RawSignal, context: DecodeContext) -> Result:
    """Decode a Plieger York doorbell press of 32 bits.

    The top 16 bits are the address, the next 8 are always zero and the
    last 8 select one of three chimes. Returns the published message, True
    for a suppressed repeat, or None when the signal is not a valid packet.
    """
    if signal.number != PULSES:
        return None
    rate = signal.sample_rate
    mid = PULSE_MID // rate
    top = PULSE_MAX // rate
    pulses = signal.pulses
    bitstream = 0
    for pulse, gap in zip(pulses[0:63:2], pulses[1:64:2]):
        if pulse > mid:
            if pulse > top or gap > mid:
                return None
            bitstream = (bitstream << 1) | 1
        else:
            if gap < mid:
                return None
            bitstream <<= 1
    if context.is_repeat(window_ms=REPEAT_WINDOW_MS):
        return True
    if bitstream == 0:
        return None
    if (bitstream >> 8) & 0xFF:
        return None
    chime = CHIMES.get(bitstream & 0xFF)
    if chime is None:
        return None
    ident = (bitstream >> 16) & 0xFFFF
    return context.publish(
        LABEL,
        {"ID": f"{ident:04x}", "SWITCH": "1", "CMD": "ON", "CHIME": f"{chime:02x}"},
    )