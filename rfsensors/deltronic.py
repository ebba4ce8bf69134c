"""Deltronic doorbell (UM3750 based): receive and send."""

from __future__ import annotations

import string
from typing import Optional, Union

from rfsensors.signal import DecodeContext, Message, RawSignal

PULSES = 26
START_MAX = 675
LONG_THRESHOLD = 800
LONG_MAX = 1275
SHORT_MIN = 250
GAP_SHORT_MAX = 675
GAP_LONG_MIN = 700
REPEAT_WINDOW_MS = 2000
PREAMBLE_MASK = 0xFF0

LABEL = "Deltronic"
COMMAND_PREFIX = "DELTRONIC;"
ID_START = 13
ID_END = 19

PERIOD_US = 640
LONG_PERIODS = 2
SYNC_PERIODS = 36
TRANSMISSIONS = 16
FRAME_BITS = 12

Level = tuple[bool, int]
Result = Union[Message, bool, None]


def _to_int(bits: list[int]) -> int:
    value = 0
    for bit in bits:
        value = (value << 1) | bit
    return value


def _read_bits(signal: RawSignal) -> Optional[list[int]]:
    """Turn (pulse, gap) pairs into bits: long-short is 1, short-long is 0."""
    durations = signal.microseconds()
    if durations[0] > START_MAX:
        return None
    bits: list[int] = []
    for pulse, gap in zip(durations[1::2], durations[2::2]):
        if pulse > LONG_THRESHOLD:
            if pulse > LONG_MAX or gap > GAP_SHORT_MAX:
                return None
            bits.append(1)
        else:
            if pulse < SHORT_MIN or gap < GAP_LONG_MIN:
                return None
            bits.append(0)
    return bits


def decode_deltronic(signal: RawSignal, context: DecodeContext) -> Result:
    """Decode a Deltronic doorbell press of 12 bits.

    Returns the published message, True for a suppressed repeat, or None when
    the signal is not a valid packet.
    """
    if signal.number != PULSES:
        return None
    bits = _read_bits(signal)
    if bits is None:
        return None
    if context.is_repeat(window_ms=REPEAT_WINDOW_MS):
        return True
    bitstream = _to_int(bits)
    if bitstream & PREAMBLE_MASK != PREAMBLE_MASK:
        return None
    if bitstream == 0:
        return None
    return context.publish(
        LABEL,
        {"ID": f"{bitstream & 0x0F:04x}", "SWITCH": "1", "CMD": "ON", "CHIME": "01"},
    )


def parse_deltronic_command(line: str) -> Optional[int]:
    """Read the address from a ``10;DELTRONIC;xxxxxx;...`` command.

    Returns the 12-bit code to transmit, or None when the line is not a
    Deltronic command. Raises ValueError for a malformed address.
    """
    if line[3 : 3 + len(COMMAND_PREFIX)].upper() != COMMAND_PREFIX:
        return None
    text = line[ID_START:ID_END]
    if not text or any(char not in string.hexdigits for char in text):
        raise ValueError(f"invalid Deltronic address: {text!r}")
    return int(text, 16) | PREAMBLE_MASK


def encode_deltronic(address: int) -> list[Level]:
    """Build the transmission for ``address`` as (level, microseconds) steps.

    A separator and a sync come first; then the 12 bits, most significant
    first, each followed frame by a sync, 16 times over. A 1 is a long low
    then a short high, a 0 a short low then a long high.
    """
    period = PERIOD_US
    long_ = LONG_PERIODS * period
    sync: list[Level] = [(False, SYNC_PERIODS * period), (True, period)]
    frame: list[Level] = []
    for shift in range(FRAME_BITS - 1, -1, -1):
        if (address >> shift) & 1:
            frame += [(False, long_), (True, period)]
        else:
            frame += [(False, period), (True, long_)]
    frame += sync
    return [(True, period), *sync, *(frame * TRANSMISSIONS)]