"""Select Plus wireless doorbell (Quhwa QH-832AC, "1 by One", Delta): receive and send."""

from __future__ import annotations

import string
from typing import Optional, Union

from rfsensors.signal import DecodeContext, Message, RawSignal

PULSES = 36
PULSE_MID = 650
PULSE_MAX = 2125
REPEAT_WINDOW_MS = 2000

LABEL = "SelectPlus"
COMMAND_PREFIX = "SELECTPLUS;"
ID_START = 14
ID_END = 20

PULSE_US = 364
RETRANSMISSIONS = 16
FRAME_BITS = 17
FRAME_GAP_PULSES = 16

Level = tuple[bool, int]
Result = Union[Message, bool, None]


def _to_int(bits: list[int]) -> int:
    value = 0
    for bit in bits:
        value = (value << 1) | bit
    return value


def _read_bits(signal: RawSignal) -> Optional[list[int]]:
    """Turn (pulse, gap) pairs into bits: short-long is 0, long-short is 1."""
    rate = signal.sample_rate
    mid = PULSE_MID // rate
    top = PULSE_MAX // rate
    pulses = signal.pulses
    bits: list[int] = []
    for pulse, gap in zip(pulses[1::2], pulses[2::2]):
        if pulse < mid:
            if gap < mid:
                return None
            bits.append(0)
        else:
            if pulse > top or gap > mid:
                return None
            bits.append(1)
    return bits


def decode_selectplus(signal: RawSignal, context: DecodeContext) -> Result:
    """Decode a Select Plus doorbell press.

    Returns the published message, True for a suppressed repeat, or None when
    the signal is not a valid packet.
    """
    if signal.number != PULSES:
        return None
    bits = _read_bits(signal)
    if bits is None:
        return None
    bitstream = _to_int(bits)
    if bitstream == 0:
        return None
    if context.is_repeat(window_ms=REPEAT_WINDOW_MS, crc=bitstream):
        return True
    if bitstream & 0x0F:
        return None
    return context.publish(
        LABEL,
        {
            "ID": f"{(bitstream >> 4) & 0xFFFF:04x}",
            "SWITCH": "1",
            "CMD": "ON",
            "CHIME": "01",
        },
    )


def parse_selectplus_command(line: str) -> Optional[int]:
    """Read the address from a ``10;SELECTPLUS;xxxxxx;...`` command.

    Returns the address shifted into transmit position, or None when the line
    is not a Select Plus command. Raises ValueError for a malformed address.
    """
    if line[3 : 3 + len(COMMAND_PREFIX)].upper() != COMMAND_PREFIX:
        return None
    text = line[ID_START:ID_END]
    if not text or any(char not in string.hexdigits for char in text):
        raise ValueError(f"invalid Select Plus address: {text!r}")
    return int(text, 16) << 4


def encode_selectplus(address: int) -> list[Level]:
    """Build the transmission for ``address`` as (level, microseconds) steps.

    Each frame is a long high sync followed by 17 bits, most significant
    first; a 0 is short low then long high, a 1 long low then short high.
    The frame is sent 17 times with a low gap between frames.
    """
    short, long_ = PULSE_US, 3 * PULSE_US
    frame: list[Level] = [(True, long_)]
    for shift in range(FRAME_BITS - 1, -1, -1):
        if (address >> shift) & 1:
            frame += [(False, long_), (True, short)]
        else:
            frame += [(False, short), (True, long_)]
    gap: Level = (False, FRAME_GAP_PULSES * PULSE_US)
    levels: list[Level] = []
    for repeat in range(RETRANSMISSIONS + 1):
        levels += frame
        if repeat < RETRANSMISSIONS:
            levels.append(gap)
    return levels