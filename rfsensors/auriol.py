"""Auriol weather sensor decoders (Z32171A, Z31743, Z31055A-TX) and Xiron sensors."""

from __future__ import annotations

from typing import Iterator, Optional, Union

from rfsensors.signal import DecodeContext, Message, RawSignal

AURIOL_V3_PULSES = 82
AURIOL_PULSES = 66
AURIOL_V2_PULSES = 74

XIRON_TAG = 46
NEGATIVE_THRESHOLD = 3000
TEMPERATURE_LIMIT = 0x258
V3_TEMPERATURE_OFFSET = 0x4C4

Result = Union[Message, bool, None]


def _to_int(bits: list[int]) -> int:
    value = 0
    for bit in bits:
        value = (value << 1) | bit
    return value


def _pairs(signal: RawSignal) -> Iterator[tuple[int, int]]:
    """Yield (data pulse, gap pulse) pairs in microseconds, skipping the start pulse."""
    durations = signal.microseconds()
    return zip(durations[1::2], durations[2::2])


def _signed_temperature(raw: int) -> Optional[int]:
    """Map a raw reading to tenths of a degree with bit 15 marking negatives.

    Readings above 3000 count down from 4096. Anything beyond 60.0 degrees
    either way is rejected.
    """
    if raw > NEGATIVE_THRESHOLD:
        raw = (4096 - raw) & 0xFFFFFFFF
        if raw > TEMPERATURE_LIMIT:
            return None
        return raw | 0x8000
    if raw > TEMPERATURE_LIMIT:
        return None
    return raw


def _battery(ok: int) -> str:
    return "OK" if ok else "LOW"


def decode_auriol_v3(signal: RawSignal, context: DecodeContext) -> Result:
    """Decode an Auriol V3 (Z32171A) packet of 40 bits.

    Returns the published message, True for a suppressed repeat, or None when
    the signal is not a valid packet.
    """
    if signal.number != AURIOL_V3_PULSES:
        return None
    bits: list[int] = []
    for pulse, gap in _pairs(signal):
        if gap > 650:
            return None
        if pulse > 3500:
            bits.append(1)
        elif 1500 <= pulse <= 2000:
            bits.append(0)
        else:
            return None
    if context.is_repeat(window_ms=0):
        return True
    header = _to_int(bits[:16])
    body = _to_int(bits[16:])
    if header == 0 or body == 0:
        return None

    rolling_code = (header >> 8) & 0xFF
    reading = (((body >> 12) & 0xFFF) - V3_TEMPERATURE_OFFSET) & 0xFFFF
    reading = (reading * 5 // 9) & 0xFFFF
    temperature = _signed_temperature(reading)
    if temperature is None:
        return None
    humidity = (body >> 4) & 0xFF
    channel = body & 0x03
    return context.publish(
        "Auriol V3",
        {
            "ID": f"{rolling_code:02X}{channel:02X}",
            "TEMP": f"{temperature:04x}",
            "HUM": f"{humidity:02x}",
        },
    )


def decode_auriol(signal: RawSignal, context: DecodeContext) -> Result:
    """Decode an Auriol (Z31743) packet of 32 bits with a parity bit.

    Returns the published message, True for a suppressed repeat, or None when
    the signal is not a valid packet.
    """
    if signal.number != AURIOL_PULSES:
        return None
    bits: list[int] = []
    for pulse, gap in _pairs(signal):
        if gap > 550:
            return None
        if pulse > 3000:
            bits.append(1)
        elif 1600 <= pulse <= 2200:
            bits.append(0)
        else:
            return None
    if context.is_repeat(window_ms=1000):
        return True
    bitstream = _to_int(bits)
    if bitstream == 0:
        return None
    parity = bin(bitstream >> 1).count("1") & 1
    if parity != bitstream & 0x01:
        return None
    if (bitstream >> 20) & 0x07:
        return None

    battery = (bitstream >> 23) & 0x01
    temperature = _signed_temperature((bitstream >> 8) & 0xFFF)
    if temperature is None:
        return None
    rolling_code = (bitstream >> 24) & 0xFF
    return context.publish(
        "Auriol",
        {
            "ID": f"00{rolling_code:02X}",
            "TEMP": f"{temperature:04x}",
            "BAT": _battery(battery),
        },
    )


def decode_auriol_v2(signal: RawSignal, context: DecodeContext) -> Result:
    """Decode an Auriol V2 (Z31055A-TX) or Xiron packet of 36 bits.

    Xiron packets are only accepted when the signal is tagged for this
    protocol. Returns the published message, or None when the signal is not a
    valid packet.
    """
    if signal.number != AURIOL_V2_PULSES:
        return None
    bits: list[int] = []
    for pulse, gap in _pairs(signal):
        if gap > 700:
            return None
        if pulse > 1400:
            if pulse > 2100:
                return None
            bits.append(1)
        elif 500 <= pulse <= 1100:
            bits.append(0)
        else:
            return None
    header = _to_int(bits[:24])
    tail = _to_int(bits[24:])
    if header == 0:
        return None
    if tail & 0xF00 != 0xF00:
        return None
    xiron = tail & 0xFFF != 0xF00
    if xiron:
        if signal.tag != XIRON_TAG:
            return None
    elif (header >> 12) & 0x07:
        return None

    battery = (header >> 15) & 0x01
    rolling_code = (header >> 16) & 0xFF
    channel = ((header >> 12) & 0x03) + 1
    temperature = _signed_temperature(header & 0xFFF)
    if temperature is None:
        return None
    fields = {
        "ID": f"{rolling_code:02X}{channel:02X}",
        "TEMP": f"{temperature:04x}",
    }
    if xiron:
        fields["HUM"] = f"{tail & 0xFF:02d}"
    fields["BAT"] = _battery(battery)
    return context.publish("Xiron" if xiron else "Auriol V2", fields)