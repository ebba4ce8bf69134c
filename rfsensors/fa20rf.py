"""Flamingo FA20RF/FA21RF smoke detector: receive and send."""

from __future__ import annotations

import string
from typing import Optional

from rfsensors.signal import DecodeContext, Message, RawSignal

PULSES = 52
GAP_MAX = 1000
LONG_THRESHOLD = 2000
LONG_MAX = 2800
SHORT_MIN = 1000
SHORT_MAX = 1500
ALL_ONES = 0xFFFFFF

LABEL = "FA20RF"
COMMAND_PREFIX = "FA20RF;"
ID_START = 10
ID_END = 16
SEPARATOR_INDEX = 18
COMMAND_START = 19

TX_SAMPLE_RATE = 50
TX_REPEATS = 10
TX_DELAY = 20
RF_START = 3000
RF_SPACE = 675
RF_LOW = 1250
RF_HIGH = 2550
ID_BITS = 24


def decode_fa20rf(signal: RawSignal, context: DecodeContext) -> Optional[Message]:
    """Decode an FA20RF smoke alert of 24 bits.

    Returns the published message, or None when the signal is not valid.
    """
    if signal.number != PULSES:
        return None
    durations = signal.microseconds()
    bitstream = 0
    for gap, pulse in zip(durations[2:49:2], durations[3:50:2]):
        if gap > GAP_MAX:
            return None
        if pulse > LONG_THRESHOLD:
            if pulse > LONG_MAX:
                return None
            bitstream = (bitstream << 1) | 1
        else:
            if pulse > SHORT_MAX or pulse < SHORT_MIN:
                return None
            bitstream <<= 1
    if bitstream in (0, ALL_ONES) or bitstream & 0xFFFF == 0xFFFF:
        return None
    return context.publish(LABEL, {"ID": f"{bitstream:06x}", "SMOKEALERT": "ON"})


def encode_fa20rf(line: str) -> Optional[RawSignal]:
    """Build the pulse train for a ``10;FA20RF;xxxxxx;n;ON;`` command.

    Returns the train to send (sample rate 50 microseconds, sent TX_REPEATS
    times), an empty train when the command is not ON and nothing needs to go
    out, or None when the line is not an FA20RF command. Raises ValueError
    for a malformed command.
    """
    if line[3 : 3 + len(COMMAND_PREFIX)].upper() != COMMAND_PREFIX:
        return None
    if len(line) <= SEPARATOR_INDEX or line[SEPARATOR_INDEX] != ";":
        raise ValueError(f"malformed FA20RF command: {line!r}")
    text = line[ID_START:ID_END]
    if not text or any(char not in string.hexdigits for char in text):
        raise ValueError(f"invalid FA20RF address: {text!r}")
    command = line[COMMAND_START:].split(";", 1)[0].strip().upper()
    if command != "ON":
        return RawSignal((), sample_rate=TX_SAMPLE_RATE)

    address = int(text, 16)
    rate = TX_SAMPLE_RATE
    space = RF_SPACE // rate
    pulses = [RF_START // rate, (RF_SPACE + 125) // rate]
    for shift in range(ID_BITS - 1, -1, -1):
        mark = RF_HIGH if (address >> shift) & 1 else RF_LOW
        pulses += [space, mark // rate]
    pulses += [space, 0]
    return RawSignal(tuple(pulses), sample_rate=rate)