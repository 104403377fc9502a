"""HID report descriptors presented to the host.

Four selectable device descriptors (keyboard and relative mouse, keyboard
and absolute mouse, gamepad, PS4-style gamepad) plus the vendor-defined
descriptor of the configuration interface.
"""

from __future__ import annotations

__all__ = [
    "CONFIG_SIZE",
    "RESOLUTION_MULTIPLIER",
    "REPORT_ID_MOUSE",
    "REPORT_ID_KEYBOARD",
    "REPORT_ID_CONSUMER",
    "REPORT_ID_LEDS",
    "REPORT_ID_MULTIPLIER",
    "REPORT_ID_CONFIG",
    "REPORT_ID_MONITOR",
    "MAX_INPUT_REPORT_ID",
    "NOUR_DESCRIPTORS",
    "report_descriptor",
    "config_report_descriptor",
]

CONFIG_SIZE = 32
RESOLUTION_MULTIPLIER = 120

REPORT_ID_MOUSE = 1
REPORT_ID_KEYBOARD = 2
REPORT_ID_CONSUMER = 3
REPORT_ID_LEDS = 98
REPORT_ID_MULTIPLIER = 99
REPORT_ID_CONFIG = 100
REPORT_ID_MONITOR = 101

MAX_INPUT_REPORT_ID = 3

NOUR_DESCRIPTORS = 4


def _hex(*chunks: str) -> bytes:
    """Join whitespace-separated hex byte chunks into one byte string."""
    return bytes.fromhex(" ".join(chunks))


def _mouse_collection(absolute: bool) -> bytes:
    xy_range_and_input = (
        "16 00 00 26 FF 7F 81 02"  # logical 0..32767, Input (Data,Var,Abs)
        if absolute
        else "16 00 80 26 FF 7F 81 06"  # logical -32768..32767, Input (Data,Var,Rel)
    )
    mouse = f"{REPORT_ID_MOUSE:02X}"
    multiplier = f"85 {REPORT_ID_MULTIPLIER:02X} 09 48"
    multiplier_feature = f"75 02 15 00 25 01 35 01 45 {RESOLUTION_MULTIPLIER:02X} B1 02"
    return _hex(
        f"05 01 09 02 A1 01 05 01 09 02 A1 02 85 {mouse} 09 01 A1 00",  # mouse, pointer
        "05 09 19 01 29 08 95 08 75 01 25 01 81 02",  # eight buttons
        "05 01 09 30 09 31 95 02 75 10",  # X and Y, 16 bits each
        xy_range_and_input,
        f"A1 02 {multiplier} 95 01 {multiplier_feature}",  # wheel resolution multiplier
        f"85 {mouse} 09 38 35 00 45 00 16 00 80 26 FF 7F 75 10 81 06 C0",  # wheel
        f"A1 02 {multiplier} {multiplier_feature}",  # pan resolution multiplier
        "35 00 45 00 75 04 B1 03",  # feature padding
        f"85 {mouse} 05 0C 16 00 80 26 FF 7F 75 10 0A 38 02 81 06 C0",  # AC Pan
        "C0 C0 C0",  # close physical, logical and application collections
    )


_KEYBOARD_COLLECTION = _hex(
    f"05 01 09 06 A1 01 85 {REPORT_ID_KEYBOARD:02X}",  # keyboard application
    "05 07 19 E0 29 E7 15 00 25 01 75 01 95 08 81 02",  # modifier bits
    "19 04 29 73 95 70 81 02",  # key bitmap 0x04..0x73
    "19 87 29 8B 95 05 81 02",  # international keys 0x87..0x8B
    "09 90 09 91 95 02 81 02",  # LANG1, LANG2
    "95 01 81 03",  # input padding
    f"85 {REPORT_ID_LEDS:02X} 05 08 95 05 19 01 29 05 91 02",  # five LED outputs
    "95 01 75 03 91 03 C0",  # output padding, end collection
)

_CONSUMER_COLLECTION = _hex(
    f"05 0C 09 01 A1 01 85 {REPORT_ID_CONSUMER:02X} 15 00 25 01",  # consumer control
    "09 B5 09 B6 09 B7 09 CD 09 E2 09 E9 09 EA 75 01 95 07 81 02",  # media keys
    "05 0B 09 2F 95 01 81 02 C0",  # telephony phone mute, end collection
)

_KB_MOUSE = _mouse_collection(absolute=False) + _KEYBOARD_COLLECTION + _CONSUMER_COLLECTION
_ABSOLUTE = _mouse_collection(absolute=True) + _KEYBOARD_COLLECTION + _CONSUMER_COLLECTION

_GAMEPAD = _hex(
    "05 01 09 05 A1 01",  # game pad application
    "15 00 25 01 35 00 45 01 75 01 95 10 05 09 19 01 29 10 81 02",  # sixteen buttons
    "05 01 25 07 46 3B 01 75 04 95 01 65 14 09 39 81 42 65 00",  # hat switch
    "95 01 81 01",  # padding nibble
    "26 FF 00 46 FF 00 09 30 09 31 09 32 09 35 75 08 95 04 81 02",  # X, Y, Z, Rz
    "06 00 FF 09 20 95 01 81 02",  # vendor input byte
    "0A 21 26 95 08 91 02 C0",  # vendor output, end collection
)

_PS4_FEATURE_REPORTS = "".join(
    f" 85 {report_id:02X} {usage} 95 {count:02X} B1 02"
    for report_id, usage, count in (
        (0xF0, "09 47", 0x3F),
        (0xF1, "09 48", 0x3F),
        (0xF2, "09 49", 0x0F),
        (0xF3, "0A 01 47", 0x07),
    )
)

_PS4 = _hex(
    "05 01 09 05 A1 01 85 01",  # game pad application, report 1
    "09 30 09 31 09 32 09 35 15 00 26 FF 00 75 08 95 04 81 02",  # X, Y, Z, Rz
    "09 39 15 00 25 07 35 00 46 3B 01 65 14 75 04 95 01 81 42 65 00",  # hat switch
    "05 09 19 01 29 0E 15 00 25 01 75 01 95 0E 81 02",  # fourteen buttons
    "06 00 FF 09 20 75 06 95 01 81 02",  # vendor six-bit counter
    "05 01 09 33 09 34 15 00 26 FF 00 75 08 95 02 81 02",  # Rx, Ry
    "06 00 FF 09 21 95 36 81 02",  # vendor input bytes
    "85 05 09 22 95 1F 91 02",  # vendor output report 5
    "85 03 0A 21 27 95 2F B1 02",  # vendor feature report 3
    "06 80 FF 85 E0 09 57 95 02 B1 02 C0",  # vendor feature report 0xE0, end collection
    "06 F0 FF 09 40 A1 01",  # authentication application
    _PS4_FEATURE_REPORTS,
    "C0",
)


def _config_collection(usage: int, report_id: int, count: int, main_item: int) -> str:
    return f"09 {usage:02X} A1 01 09 {usage:02X} 85 {report_id:02X} 75 08 95 {count:02X} {main_item:02X} 02 C0"


_CONFIG = _hex(
    "06 00 FF",  # Usage Page (Vendor Defined 0xFF00)
    _config_collection(0x20, REPORT_ID_CONFIG, CONFIG_SIZE, 0xB1),  # config feature report
    _config_collection(0x21, REPORT_ID_MONITOR, 0x3F, 0x81),  # monitor input report
)

_DESCRIPTORS = (_KB_MOUSE, _ABSOLUTE, _GAMEPAD, _PS4)


def report_descriptor(number: int) -> bytes:
    """Return the report descriptor of the device personality ``number``.

    Raises ValueError if ``number`` is not between 0 and NOUR_DESCRIPTORS - 1.
    """
    if not 0 <= number < NOUR_DESCRIPTORS:
        raise ValueError(f"descriptor number {number} out of range 0..{NOUR_DESCRIPTORS - 1}")
    return _DESCRIPTORS[number]


def config_report_descriptor() -> bytes:
    """Return the report descriptor of the configuration interface."""
    return _CONFIG