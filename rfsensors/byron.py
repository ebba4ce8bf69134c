"""Byron MP / RL-02 digital doorbell: receive and send."""

from __future__ import annotations

import string
from typing import Optional, Union

from rfsensors.signal import DecodeContext, Message, RawSignal

CODE_LENGTH = 12
PULSES = CODE_LENGTH * 4 + 2
BASE_PULSE = 125
CHECK_MASK = 0x7FF
CHECK_VALUE = 0x7AD
BUTTON_BIT = 0x800

LABEL = "Byron MP"
COMMAND_PREFIX = "BYRON MP;"
ID_START = 12
ID_END = 18

PULSE_US = 175
TRANSMISSIONS = 8
SYNC_LOW_PULSES = 31

Level = tuple[bool, int]
Result = Union[Message, None]


def _shape(group: tuple[int, ...], threshold: int) -> str:
    return "".join("S" if pulse < threshold else "L" if pulse > threshold else "=" for pulse in group)


def _read_code(signal: RawSignal) -> Optional[int]:
    """Read 12 tri-state symbols; floats (and a leading 1101) set their bit."""
    threshold = (BASE_PULSE * 2) // signal.sample_rate
    data = signal.pulses[: CODE_LENGTH * 4]
    value = 0
    for index, group in enumerate(zip(*[iter(data)] * 4)):
        shape = _shape(group, threshold)
        if shape in ("SLSL", "LSLS"):
            continue
        if shape == "SLLS" or (index == 0 and shape == "LLSL"):
            value |= 1 << index
            continue
        return None
    return value


def decode_byron(signal: RawSignal, context: DecodeContext) -> Result:
    """Decode a Byron MP doorbell packet.

    The ID is 0 for the ring button and 1 for the change-chime button.
    Returns the published message, or None when the signal is not valid.
    """
    if signal.number != PULSES:
        return None
    code = _read_code(signal)
    if not code:
        return None
    if code & CHECK_MASK != CHECK_VALUE:
        return None
    button = 1 if code & BUTTON_BIT else 0
    return context.publish(
        LABEL,
        {"ID": f"{button:04x}", "SWITCH": "1", "CMD": "ON", "CHIME": "01"},
    )


def parse_byron_command(line: str) -> Optional[int]:
    """Read the address from a ``10;BYRON MP;xxxxxx;...`` command.

    Returns the 12-bit code to transmit, or None when the line is not a Byron
    MP command. Raises ValueError for a malformed address.
    """
    if line[3 : 3 + len(COMMAND_PREFIX)].upper() != COMMAND_PREFIX:
        return None
    text = line[ID_START:ID_END]
    if not text or any(char not in string.hexdigits for char in text):
        raise ValueError(f"invalid Byron MP address: {text!r}")
    return (int(text, 16) << 11) | CHECK_VALUE


def encode_byron(address: int) -> list[Level]:
    """Build the transmission for ``address`` as (level, microseconds) steps.

    The low 11 bits go out least significant first as 0 or float; bit 11
    goes out as 1 (when clear) or float (when set). Each frame ends with a
    sync and is sent 8 times.
    """
    short, long_ = PULSE_US, 3 * PULSE_US
    zero = (short, long_, short, long_)
    floating = (short, long_, long_, short)
    one = (long_, short, long_, short)

    symbols = [floating if (address >> shift) & 1 else zero for shift in range(CODE_LENGTH - 1)]
    symbols.append(floating if (address >> (CODE_LENGTH - 1)) & 1 else one)
    durations = [duration for symbol in symbols for duration in symbol]
    durations += [short, SYNC_LOW_PULSES * PULSE_US]
    frame = [(position % 2 == 0, duration) for position, duration in enumerate(durations)]
    return frame * TRANSMISSIONS