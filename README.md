# rfsensors

Decoders for the raw pulse trains sent by cheap 433 MHz and 868 MHz home
sensors. There are also transmit helpers for some doorbells and for a smoke
detector. The package has no dependencies outside the standard library.

You pass a pulse train to a decoder as a `RawSignal`. The decoder checks
whether the pulses match its protocol. If they do, it publishes a `Message`
through a `DecodeContext`. A message renders as a report line such as:

```
20;00;FA20RF;ID=97e3b2;SMOKEALERT=ON;
```

## Supported devices

| Module                 | Functions                                                    | Devices |
|------------------------|--------------------------------------------------------------|---------|
| `rfsensors.upm`        | `decode_upm`                                                 | UPM/Esic, WT260/WT440/WT450, WDS500, RG700 |
| `rfsensors.lacrosse`   | `decode_lacrosse`                                            | LaCrosse TX3/TX4, TFA 30.3125 |
| `rfsensors.auriol`     | `decode_auriol_v3`, `decode_auriol`, `decode_auriol_v2`      | Auriol Z32171A, Z31743, Z31055A-TX, Xiron |
| `rfsensors.alecto`     | `decode_alecto_v2`, `alecto_crc8`                            | Alecto V2 / ACH2010 / WS3000, DKW2012 (868 MHz) |
| `rfsensors.alarm`      | `decode_alarm_pir_v2`, `decode_alarm_pir_v1`                 | HT12E- and EV1527-based PIRs and contacts, reported as X10 |
| `rfsensors.chuango`    | `decode_chuango`                                             | Chuango alarm sensors |
| `rfsensors.oregon_pir` | `decode_oregon_pir`                                          | Oregon PIR/LED/alarm units, reported as X10 |
| `rfsensors.selectplus` | `decode_selectplus`, `parse_selectplus_command`, `encode_selectplus` | Select Plus / Quhwa doorbells |
| `rfsensors.plieger`    | `decode_plieger`                                             | Plieger York doorbell |
| `rfsensors.deltronic`  | `decode_deltronic`, `parse_deltronic_command`, `encode_deltronic` | Deltronic (UM3750) doorbell |
| `rfsensors.byron`      | `decode_byron`, `parse_byron_command`, `encode_byron`        | Byron MP / RL-02 doorbell |
| `rfsensors.fa20rf`     | `decode_fa20rf`, `encode_fa20rf`                             | Flamingo FA20RF/FA21RF smoke detector |

## Core types (`rfsensors.signal`)

- `RawSignal(pulses, sample_rate=1, tag=0)` is a frozen pulse train.
  - `pulses` are durations in units of `sample_rate` microseconds.
  - `number` is the pulse count.
  - `microseconds()` returns the durations in microseconds.
  - `tag` marks a train that an earlier stage has assigned to one protocol.
    Xiron packets in `decode_auriol_v2` are accepted only with tag 46.
    `decode_oregon_pir` accepts only tag 63, and the alarm and Chuango
    decoders skip trains with that tag.
- `Message(sequence, label, fields)` is one report. `line()` renders it as
  `20;NN;Label;KEY=VALUE;...`, where `NN` is the sequence number in
  two-digit hex.
- `DecodeContext` holds the state that decoders share:
  - `sequence`, the running packet number, which wraps at 256.
  - The repeat-suppression state: `signal_hash`, `previous_hash`,
    `repeating_timer` and `signal_crc`.
  - `clock`, a function that returns milliseconds.
  - `messages`, every message published so far.

  `publish(label, fields)` records a message and returns it.
  `is_repeat(window_ms=None, crc=None)` tells whether the current packet
  counts as a repeat. The packet is treated as new when any of these holds:
  - `signal_hash` differs from `previous_hash`;
  - `window_ms` is given and `repeating_timer + window_ms` lies before the
    current clock;
  - `crc` is given and differs from the stored CRC.

  When a new packet has a `crc`, that value is stored for the next check.
- `debug_report(signal, context, hex_mode)` publishes a `DEBUG` message for a
  train that no decoder recognised. The message lists the pulses as two-digit
  hex samples or as comma-separated microseconds. It returns `None` when the
  train has fewer than 26 pulses.

## Decoder results

Every decoder takes `(signal, context)` and returns one of these:

- the published `Message` when it decoded a packet;
- `True` when it dropped the packet as a recent repeat. `decode_alecto_v2`
  also returns `True` for a packet whose checksum is valid but whose message
  type it does not handle;
- `None` when the signal is not a valid packet for that protocol.

`decode_byron`, `decode_fa20rf` and `decode_auriol_v2` do no repeat
suppression.

## Usage

```python
from rfsensors.signal import DecodeContext
from rfsensors.fa20rf import decode_fa20rf, encode_fa20rf

signal = encode_fa20rf("10;FA20RF;97e3b2;1;ON;")
context = DecodeContext()

message = decode_fa20rf(signal, context)
print(message.line())   # 20;00;FA20RF;ID=97e3b2;SMOKEALERT=ON;
```

## Transmit helpers

- `parse_selectplus_command`, `parse_deltronic_command` and
  `parse_byron_command` read a command line such as
  `10;SELECTPLUS;001c33;1;OFF;`. Each returns the code to transmit. It
  returns `None` when the line is for another device, and raises `ValueError`
  when the address is not hexadecimal.
- `encode_selectplus`, `encode_deltronic` and `encode_byron` turn that code
  into the full transmission, with all repeats, as a list of
  `(level, microseconds)` steps.
- `encode_fa20rf` takes a command line directly. It returns one of:
  - a `RawSignal` with a sample rate of 50, for an `ON` command;
  - an empty `RawSignal` for any other command;
  - `None` when the line is not an FA20RF command.

  It raises `ValueError` for a malformed command.

## What this package does not do

The package only works on pulse trains and command strings.

- It does not talk to a radio receiver or transmitter.
- It does not read or write a serial port.
- It does not capture pulses or time them.
- It has no command-line program.

Getting pulses into a `RawSignal`, and playing encoded steps out on hardware,
is up to the caller. So is setting the repeat-suppression fields on
`DecodeContext`.

## Running the tests

```
pip install -e ".[test]"
pytest
```