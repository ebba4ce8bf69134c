"""UPM/Esic weather sensor decoder (WT260, WT440H, WT450, WDS500, RG700 and alikes)."""

from __future__ import annotations

from typing import Optional, Union

from rfsensors.signal import DecodeContext, Message, RawSignal

MIN_PULSES = 46
MAX_PULSES = 56
MAX_BITS = 36
HEADER_BITS = 10
PREAMBLE = 0x0C
MAX_TEMPERATURE = 0x3E8

LABEL = "UPM/Esic"
LABEL_FORMAT2 = "UPM/Esic F2"


def _to_int(bits: list[int]) -> int:
    value = 0
    for bit in bits:
        value = (value << 1) | bit
    return value


def _trunc_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // denominator
    return quotient if numerator >= 0 else -quotient


def _hex4(value: int) -> str:
    return f"{value & 0xFFFFFFFF:04x}"


def _battery(flag: int) -> str:
    return "LOW" if flag else "OK"


def _read_bits(signal: RawSignal) -> Optional[list[int]]:
    """Turn pulses into bits: one long pulse is 0, two short pulses are 1."""
    rate = signal.sample_rate
    short_max = 1100 // rate
    long_max = 2075 // rate
    long_min = 1600 // rate
    bits: list[int] = []
    half = False
    for pulse in signal.pulses[:-1]:
        if long_min < pulse < long_max:
            if half:
                return None
            bits.append(0)
        else:
            if pulse > short_max:
                return None
            if half:
                bits.append(1)
            half = not half
        if len(bits) > MAX_BITS:
            return None
    return bits


def _message_format(header: int, body: int) -> Optional[int]:
    checksum = 0
    for shift in range(0, 9, 2):
        checksum ^= (header >> shift) & 3
    for shift in range(2, 25, 2):
        checksum ^= (body >> shift) & 3
    if checksum == body & 3:
        return 1
    checksum ^= body & 3
    if (checksum & 1) ^ ((checksum >> 1) & 1) == 0:
        return 2
    return None


def decode_upm(signal: RawSignal, context: DecodeContext) -> Union[Message, bool, None]:
    """Decode a UPM/Esic packet.

    Returns the published message, True when the packet is a suppressed
    repeat, or None when the signal is not a valid UPM/Esic packet.
    """
    if not MIN_PULSES <= signal.number <= MAX_PULSES:
        return None
    bits = _read_bits(signal)
    if bits is None:
        return None
    header = _to_int(bits[:HEADER_BITS])
    body = _to_int(bits[HEADER_BITS:])
    if header >> 6 != PREAMBLE or header == 0 or body == 0:
        return None
    msgformat = _message_format(header, body)
    if msgformat is None:
        return None
    if context.is_repeat(crc=header):
        return True

    house = header & 0x03
    device = (header >> 2) & 0x0F
    ident = f"{house:02X}{device:02X}"

    if msgformat == 2:
        fraction = (body >> 1) & 0x7F
        whole = ((body >> 8) & 0xFF) - 50
        temperature = _trunc_div(whole * 100 + fraction, 10)
        if temperature > MAX_TEMPERATURE:
            return None
        humidity = (body >> 16) & 0x7F
        return context.publish(
            LABEL_FORMAT2,
            {"ID": ident, "TEMP": _hex4(temperature), "HUM": f"{humidity:02x}"},
        )

    battery = _battery((body >> 23) & 1)
    if house == 10 and device == 2:
        speed = (body >> 8) & 0x7F
        direction = (body >> 15) & 0x0F
        return context.publish(
            LABEL,
            {"ID": ident, "WINSP": f"{speed:02x}", "WINDIR": f"{direction:04d}", "BAT": battery},
        )
    if house == 10 and device == 3:
        rain = ((body >> 8) & 0x7F) * 7
        return context.publish(LABEL, {"ID": ident, "RAIN": f"{rain:04x}", "BAT": battery})

    tenths = (body >> 4) & 0x0F
    temperature = (((body >> 8) & 0x7F) - 50) * 10 + tenths
    if temperature > MAX_TEMPERATURE:
        return None
    humidity = ((body >> 15) & 0xFF) // 2
    return context.publish(
        LABEL,
        {"ID": ident, "TEMP": _hex4(temperature), "HUM": f"{humidity:02d}", "BAT": battery},
    )