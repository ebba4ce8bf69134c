"""LaCrosse weather sensor decoder (TX3-TH, TX4, TFA 30.3125 and alikes)."""

from __future__ import annotations

from typing import Optional, Union

from rfsensors.signal import DecodeContext, Message, RawSignal

NOMINAL_PULSES = 88
PULSE_TOLERANCE = 4
HEADER_BITS = 16

LABEL = "LaCrosse"
TYPE_TEMPERATURE = 0x00
TYPE_HUMIDITY = 0x0E

Result = Union[Message, bool, None]


def _to_int(bits: list[int]) -> int:
    value = 0
    for bit in bits:
        value = (value << 1) | bit
    return value


def _read_bits(signal: RawSignal) -> Optional[list[int]]:
    """Turn (pulse, gap) pairs into bits: a long pulse is 0, a short pulse is 1.

    A bad gap after the very first pulse is tolerated by treating that pulse
    as long; a bad gap after the final pulse is ignored.
    """
    rate = signal.sample_rate
    pulse_mid = 750 // rate
    pulse_max = 1350 // rate
    short_max = 550 // rate
    gap_low = 800 // rate
    gap_high = 1000 // rate
    first_pulse = 1200 // rate
    count = signal.number
    pulses = signal.pulses

    bits: list[int] = []
    for position, (pulse, gap) in enumerate(zip(pulses[0::2], pulses[1::2])):
        if not gap_low <= gap <= gap_high:
            if position == 0:
                pulse = first_pulse
            elif 2 * position + 2 < count:
                return None
        if pulse > pulse_mid:
            if pulse > pulse_max:
                return None
            bits.append(0)
        else:
            if pulse > short_max:
                return None
            bits.append(1)
    return bits


def _hex4(value: int) -> str:
    return f"{value & 0xFFFF:04x}"


def decode_lacrosse(signal: RawSignal, context: DecodeContext) -> Result:
    """Decode a LaCrosse temperature or humidity packet of 44 bits.

    Returns the published message, True for a suppressed repeat, or None when
    the signal is not a valid packet.
    """
    if abs(signal.number - NOMINAL_PULSES) > PULSE_TOLERANCE:
        return None
    bits = _read_bits(signal)
    if bits is None:
        return None
    header = _to_int(bits[:HEADER_BITS]) & 0xFFFFFFFF
    body = _to_int(bits[HEADER_BITS:]) & 0xFFFFFFFF
    if header == 0 and body == 0:
        return None

    nibbles = [(header >> shift) & 0x0F for shift in (12, 8, 4, 0)]
    nibbles += [(body >> shift) & 0x0F for shift in (24, 20, 16, 12, 8, 4)]
    if nibbles[0] != 0x00 or nibbles[1] != 0x0A:
        return None
    if sum(nibbles) & 0x0F != body & 0x0F:
        return None

    packet_type = nibbles[2]
    address = nibbles[3]
    address_low = nibbles[4] >> 1
    signature = (address_low << 16) + (address << 8) + packet_type
    if context.is_repeat(window_ms=0, crc=signature):
        return True

    ident = f"{address:02X}{address_low:02X}"
    if packet_type == TYPE_TEMPERATURE:
        temperature = nibbles[5] * 100 + nibbles[6] * 10 + nibbles[7] - 500
        return context.publish(LABEL, {"ID": ident, "TEMP": _hex4(temperature)})
    if packet_type == TYPE_HUMIDITY:
        humidity = nibbles[5] * 16 + nibbles[6]
        if humidity == 0:
            return None
        return context.publish(LABEL, {"ID": ident, "HUM": f"{humidity & 0xFF:02x}"})
    return None