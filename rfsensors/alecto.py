"""Alecto V2 (ACH2010, WS3000) and DKW2012 868 MHz weather station decoder."""

from __future__ import annotations

from typing import Iterable, Optional, Union

from rfsensors.signal import DecodeContext, Message, RawSignal

DKW2012_MIN_PULSES = 164
DKW2012_MAX_PULSES = 176
ACH2010_MIN_PULSES = 160
ACH2010_MAX_PULSES = 160

SHORT_LIMIT = 0x300
CRC_POLYNOMIAL = 0x31
VALID_TYPES = (5, 10)

Result = Union[Message, bool, None]


def alecto_crc8(data: Iterable[int]) -> int:
    """CRC-8 with polynomial 0x31, MSB first, initial value 0."""
    crc = 0
    for byte in data:
        byte &= 0xFF
        for _ in range(8):
            mix = (crc ^ byte) & 0x80
            crc = (crc << 1) & 0xFF
            if mix:
                crc ^= CRC_POLYNOMIAL
            byte = (byte << 1) & 0xFF
    return crc


def _read_bytes(signal: RawSignal, count: int) -> Optional[list[int]]:
    """Read the trailing ``count`` bytes; a short data pulse is a 1 bit.

    The message is taken from its end because the header is often cut short.
    """
    wanted = count * 8
    samples = signal.microseconds()[-2::-2][:wanted]
    if len(samples) < wanted:
        return None
    bits = [1 if duration < SHORT_LIMIT else 0 for duration in reversed(samples)]
    result = []
    for group in zip(*[iter(bits)] * 8):
        value = 0
        for bit in group:
            value = (value << 1) | bit
        result.append(value)
    return result


def decode_alecto_v2(signal: RawSignal, context: DecodeContext) -> Result:
    """Decode an Alecto V2 or DKW2012 weather packet.

    Returns the published message, True for a packet with a valid checksum
    but an unhandled message type, or None when the signal is not valid.
    """
    count = signal.number
    ach2010 = ACH2010_MIN_PULSES <= count <= ACH2010_MAX_PULSES
    dkw2012 = DKW2012_MIN_PULSES <= count <= DKW2012_MAX_PULSES
    if not (ach2010 or dkw2012):
        return None
    length = 9 if count > ACH2010_MAX_PULSES else 8
    data = _read_bytes(signal, length + 1)
    if data is None:
        return None
    *payload, checksum = data
    if checksum != alecto_crc8(payload):
        return None
    if data[0] >> 4 not in VALID_TYPES:
        return True

    rolling_code = ((data[0] << 4) | (data[1] >> 4)) & 0xFF
    temperature = ((data[1] & 0x03) * 256 + data[2] - 400) & 0xFFFF
    humidity = data[3]
    wind_speed = data[4] * 108 // 10
    wind_gust = data[5] * 108 // 10
    rain = data[6] * 256 + data[7]

    fields = {
        "ID": f"00{rolling_code:02x}",
        "TEMP": f"{temperature:04x}",
        "HUM": f"{humidity:02x}",
        "WINSP": f"{wind_speed:04x}",
        "WINGS": f"{wind_gust:04x}",
        "RAIN": f"{rain:04x}",
    }
    if count >= DKW2012_MIN_PULSES:
        fields["WINDIR"] = f"{data[8] & 0x0F:04d}"
        return context.publish("DKW2012", fields)
    return context.publish("Alecto V2", fields)