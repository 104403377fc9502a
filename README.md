# hidremap

Building blocks for a USB HID input remapper: parsing the report
descriptors of attached devices, keeping track of what each device
declares, and the report descriptors the remapper presents to the host.

## Modules

- `hidremap.crc`
  - `crc32(data)` – the standard CRC-32 (the same value as `zlib.crc32`).
  - `checksum_ok(buffer)` – `True` when the last four bytes of `buffer`
    hold the little-endian CRC-32 of the bytes before them. Raises
    `ValueError` for buffers shorter than four bytes.

- `hidremap.descriptor_parser`
  - `parse_descriptor(report_descriptor)` returns a `ParsedDescriptor`.
    Raises `ValueError` if the last item is cut short; a single trailing
    zero byte is accepted as padding.
  - `ParsedDescriptor` has `input_usages`, `output_usages` and
    `feature_usages` (report ID → usage → `UsageDef`), `has_report_id`, and
    `report_sizes` (`ReportType` → report ID → size in bytes, report ID byte
    not included). `usages(report_type)` returns the map for one
    `ReportType`.
  - `ReportType` is `INPUT`, `OUTPUT` or `FEATURE`.
  - `UsageDef` holds `report_id`, `size`, `bitpos`, `is_relative`,
    `is_array`, `logical_minimum`, `index`, `count` and `usage_maximum`.
    Usages are 32-bit values, usage page in the high 16 bits. Usages that
    start beyond the first 64 bytes of a report are left out.

- `hidremap.device_registry`
  - `DeviceRegistry` keeps the usages of every attached interface. An
    interface is a 16-bit number whose high byte is the device address.
  - `add_descriptor(report_descriptor, interface)` parses and records a
    descriptor, gives the interface an index, and creates zeroed
    `out_reports` / `prev_out_reports` buffers for its output reports.
  - `assign_interface_index(interface)` returns the lowest free index from
    0 to 31; when all are taken, further interfaces share 31.
  - `out_report_key(interface, report_id)` returns
    `interface << 16 | report_id`, the key of an output report.
  - `clear_device(dev_addr)` forgets all interfaces, output reports and
    index assignments of one device.
  - `descriptor_updated` is set whenever the recorded state changes.

- `hidremap.descriptors`
  - `report_descriptor(number)` returns one of four descriptors: 0 keyboard
    with relative mouse, 1 keyboard with absolute mouse, 2 gamepad,
    3 PS4-style gamepad. Other numbers raise `ValueError`.
  - `config_report_descriptor()` returns the vendor-defined descriptor of
    the configuration interface (a `CONFIG_SIZE`-byte feature report and a
    63-byte monitor input report).
  - Report ID constants: `REPORT_ID_MOUSE`, `REPORT_ID_KEYBOARD`,
    `REPORT_ID_CONSUMER`, `REPORT_ID_LEDS`, `REPORT_ID_MULTIPLIER`,
    `REPORT_ID_CONFIG`, `REPORT_ID_MONITOR`.

- `hidremap.our_descriptor`
  - `get_descriptor(number)` returns an `OurDescriptor` with the
    descriptor bytes, `vid` / `pid` (non-zero only for the gamepad, see
    `overrides_usb_ids`) and, for the keyboard and mouse personalities, a
    `ResolutionMultiplierHandler`.
  - `ResolutionMultiplierHandler.handle_set_report(report_id, buffer)`
    stores the resolution multiplier or passes LED output reports to
    `on_leds_report`; `handle_get_report(report_id, reqlen)` returns the
    stored multiplier as one byte, or `b""` for other reports.

## Example

```python
from hidremap.crc import crc32
from hidremap.descriptor_parser import ReportType, parse_descriptor
from hidremap.descriptors import report_descriptor

parsed = parse_descriptor(report_descriptor(0))
for report_id, usages in parsed.usages(ReportType.INPUT).items():
    for usage, definition in usages.items():
        print(report_id, hex(usage), definition.bitpos, definition.size)

print(hex(crc32(b"123456789")))  # 0xcbf43926
```

```python
from hidremap.device_registry import DeviceRegistry
from hidremap.descriptors import report_descriptor

registry = DeviceRegistry()
interface = (1 << 8) | 0  # device address 1, interface 0
registry.add_descriptor(report_descriptor(0), interface)
print(registry.interface_index[interface])  # 0
registry.clear_device(1)
```

## What this package does not do

It does not talk to USB or Bluetooth hardware, and it does not translate
input reports into output reports. There is no handling of the
configuration protocol, no saving or loading of settings, and no command
line program. It provides the descriptor data and bookkeeping that such a
program would build on.

## Running the tests

```
pip install .[test]
pytest
```