"""Device personalities presented to the host, and their report handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from hidremap.descriptors import (
    NOUR_DESCRIPTORS,
    REPORT_ID_LEDS,
    REPORT_ID_MULTIPLIER,
    report_descriptor,
)

__all__ = ["OurDescriptor", "ResolutionMultiplierHandler", "get_descriptor"]

LedsReportCallback = Callable[[int, bytes], None]

_GAMEPAD_VID = 0x0F0D
_GAMEPAD_PID = 0x0092


@dataclass
class ResolutionMultiplierHandler:
    """Feature and output report handling of the keyboard and mouse personalities.

    The host writes the hi-res scroll resolution multiplier through a feature
    report and reads it back. Keyboard LED output reports are passed to
    ``on_leds_report`` as ``(report_id, data)`` when it is set.
    """

    resolution_multiplier: int = 0
    on_leds_report: Optional[LedsReportCallback] = field(default=None, repr=False)

    def handle_get_report(self, report_id: int, reqlen: int) -> bytes:
        """Return the data of the requested report; empty if it is not served."""
        if report_id == REPORT_ID_MULTIPLIER and reqlen >= 1:
            return bytes((self.resolution_multiplier & 0xFF,))
        return b""

    def handle_set_report(self, report_id: int, buffer: bytes | bytearray | memoryview) -> None:
        """Take a report written by the host."""
        data = bytes(buffer)
        if report_id == REPORT_ID_MULTIPLIER and len(data) >= 1:
            self.resolution_multiplier = data[0]
        elif report_id == REPORT_ID_LEDS and self.on_leds_report is not None:
            self.on_leds_report(report_id, data)


@dataclass
class OurDescriptor:
    """A device personality: its report descriptor, USB IDs and report handler.

    A ``vid`` and ``pid`` of zero mean the default USB IDs are kept.
    """

    descriptor: bytes
    vid: int = 0
    pid: int = 0
    handler: Optional[ResolutionMultiplierHandler] = None

    @property
    def descriptor_length(self) -> int:
        return len(self.descriptor)

    @property
    def overrides_usb_ids(self) -> bool:
        """Whether this personality replaces the device's vendor and product IDs."""
        return self.vid != 0 and self.pid != 0


def get_descriptor(number: int) -> OurDescriptor:
    """Return the device personality ``number``.

    0 is keyboard with relative mouse, 1 keyboard with absolute mouse,
    2 gamepad, 3 PS4-style gamepad. Raises ValueError for other numbers.
    """
    if not 0 <= number < NOUR_DESCRIPTORS:
        raise ValueError(f"descriptor number {number} out of range 0..{NOUR_DESCRIPTORS - 1}")
    descriptor = report_descriptor(number)
    if number in (0, 1):
        return OurDescriptor(descriptor=descriptor, handler=ResolutionMultiplierHandler())
    if number == 2:
        return OurDescriptor(descriptor=descriptor, vid=_GAMEPAD_VID, pid=_GAMEPAD_PID)
    return OurDescriptor(descriptor=descriptor)