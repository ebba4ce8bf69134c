"""Raw pulse trains, decoded messages and the state shared by all decoders."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, Mapping, Optional, Union

DEBUG_MIN_PULSES = 26

Fields = Union[Mapping[str, str], Iterable[tuple[str, str]]]


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


@dataclass(frozen=True)
class RawSignal:
    """A received pulse train.

    ``pulses`` holds the pulse durations in units of ``sample_rate``
    microseconds. ``tag`` marks a train that an earlier stage has already
    assigned to a particular protocol (0 when untagged).
    """

    pulses: tuple[int, ...]
    sample_rate: int = 1
    tag: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "pulses", tuple(self.pulses))
        if self.sample_rate <= 0:
            raise ValueError("sample_rate must be positive")

    @property
    def number(self) -> int:
        """Number of pulses in the train."""
        return len(self.pulses)

    def microseconds(self) -> list[int]:
        """Pulse durations in microseconds."""
        return [pulse * self.sample_rate for pulse in self.pulses]


@dataclass(frozen=True)
class Message:
    """One decoded report, as emitted on the output line."""

    sequence: int
    label: str
    fields: dict[str, str] = field(default_factory=dict)

    def line(self) -> str:
        """The report in ``20;NN;Label;KEY=VALUE;...`` form."""
        body = "".join(f"{key}={value};" for key, value in self.fields.items())
        return f"20;{self.sequence:02X};{self.label};{body}"


@dataclass
class DecodeContext:
    """Packet sequence numbering and repeat-suppression state."""

    sequence: int = 0
    signal_hash: int = 0
    previous_hash: int = 0
    repeating_timer: int = 0
    signal_crc: int = 0
    clock: Callable[[], int] = _monotonic_ms
    messages: list[Message] = field(default_factory=list)

    def publish(self, label: str, fields: Fields) -> Message:
        """Record a report under the next sequence number and return it."""
        message = Message(self.sequence, label, dict(fields))
        self.sequence = (self.sequence + 1) & 0xFF
        self.messages.append(message)
        return message

    def is_repeat(self, window_ms: Optional[int] = None, crc: Optional[int] = None) -> bool:
        """Tell whether the current packet was seen recently.

        A packet is fresh when the signal hash changed, when ``window_ms`` is
        given and the repeat timer plus that window has passed, or when ``crc``
        is given and differs from the stored one. A fresh packet's ``crc`` is
        stored for the next comparison.
        """
        fresh = self.signal_hash != self.previous_hash
        if not fresh and window_ms is not None:
            fresh = self.repeating_timer + window_ms < self.clock()
        if not fresh and crc is not None:
            fresh = crc != self.signal_crc
        if fresh and crc is not None:
            self.signal_crc = crc
        return not fresh


def debug_report(signal: RawSignal, context: DecodeContext, hex_mode: bool) -> Optional[Message]:
    """Report an undecoded pulse train, or None when it is too short to matter.

    In hex mode the raw sample values are listed as two hex digits each;
    otherwise the durations are listed in microseconds, comma separated.
    """
    if signal.number < DEBUG_MIN_PULSES:
        return None
    if hex_mode:
        durations = "".join(f"{pulse & 0xFF:02X}" for pulse in signal.pulses)
    else:
        durations = ",".join(str(value) for value in signal.microseconds())
    return context.publish(
        "DEBUG",
        {"Pulses": str(signal.number), "Pulses(uSec)": durations},
    )