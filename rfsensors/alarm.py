"""Alarm sensors reported as X10 switches (Varel/Chubb/Ajax and EV1527 based PIRs and contacts)."""

from __future__ import annotations

from typing import Union

from rfsensors.signal import DecodeContext, Message, RawSignal

PIR_V2_PULSES = 26
PIR_V2_PULSE_MID = 700
PIR_V2_PULSE_MAX = 1000
PIR_V2_START_MAX = 550
PIR_V2_PULSE_MIN = 250

PIR_V1_PULSES = 50
PIR_V1_PULSE_MID = 600
PIR_V1_PULSE_MAX = 1300
PIR_V1_PULSE_MIN = 150

OREGON_TAG = 63
REPEAT_WINDOW_MS = 2000
LABEL = "X10"

Result = Union[Message, bool, None]


def _publish(context: DecodeContext, ident: str) -> Message:
    return context.publish(LABEL, {"ID": ident, "SWITCH": "01", "CMD": "ON"})


def decode_alarm_pir_v2(signal: RawSignal, context: DecodeContext) -> Result:
    """Decode a Manchester coded 12-bit alarm sensor packet (HT12E based).

    A short pulse followed by a long gap is a 1, a long pulse followed by a
    short gap a 0. Returns the published message, True for a suppressed
    repeat, or None when the signal is not a valid packet.
    """
    if signal.number != PIR_V2_PULSES:
        return None
    rate = signal.sample_rate
    mid = PIR_V2_PULSE_MID // rate
    top = PIR_V2_PULSE_MAX // rate
    start_max = PIR_V2_START_MAX // rate
    bottom = PIR_V2_PULSE_MIN // rate
    pulses = signal.pulses
    if pulses[0] > start_max:
        return None
    bitstream = 0
    for pulse, gap in zip(pulses[1::2], pulses[2::2]):
        if pulse > mid:
            if pulse > top or gap > mid:
                return None
            bitstream <<= 1
        else:
            if pulse < bottom or gap < mid:
                return None
            bitstream = (bitstream << 1) | 1
    if context.is_repeat(window_ms=REPEAT_WINDOW_MS):
        return True
    if bitstream == 0:
        return None
    return _publish(context, f"{bitstream & 0xFFFF:04x}")


def decode_alarm_pir_v1(signal: RawSignal, context: DecodeContext) -> Result:
    """Decode a 24-bit alarm sensor packet (EV1527 based motion and contact sensors).

    A long pulse after a short one is a 0, a short pulse after a long one a
    1. Signals tagged for the Oregon PIR decoder are left alone. Returns the
    published message, True for a suppressed repeat, or None when the signal
    is not a valid packet.
    """
    if signal.number != PIR_V1_PULSES or signal.tag == OREGON_TAG:
        return None
    rate = signal.sample_rate
    mid = PIR_V1_PULSE_MID // rate
    top = PIR_V1_PULSE_MAX // rate
    bottom = PIR_V1_PULSE_MIN // rate
    pulses = signal.pulses
    bitstream = 0
    for previous, pulse in zip(pulses[0:47:2], pulses[1:48:2]):
        if pulse > mid:
            if pulse > top or previous > mid:
                return None
            bitstream <<= 1
        else:
            if pulse < bottom or previous < mid:
                return None
            bitstream = (bitstream << 1) | 1
    if context.is_repeat(window_ms=REPEAT_WINDOW_MS):
        return True
    if bitstream == 0:
        return None
    return _publish(context, f"{bitstream & 0xFFFFFF:06x}")