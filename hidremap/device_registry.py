"""State about the HID devices currently attached, keyed by device and interface.

Interfaces are 16-bit values whose high byte is the device address.
Output reports are keyed by ``interface << 16 | report_id``.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Dict, List

from hidremap.descriptor_parser import ReportType, UsageDef, parse_descriptor

__all__ = ["DeviceRegistry"]

UsageMap = Dict[int, Dict[int, UsageDef]]

_MAX_INTERFACE_INDEX = 31


def _merge_usages(target: UsageMap, source: UsageMap) -> None:
    """Add usages from ``source`` to ``target``, keeping entries already there."""
    for report_id, usages in source.items():
        per_report = target.setdefault(report_id, {})
        for usage, usage_def in usages.items():
            per_report.setdefault(usage, usage_def)


@dataclass
class DeviceRegistry:
    """Usages, output report buffers and interface indexes of connected devices."""

    their_usages: Dict[int, UsageMap] = field(default_factory=dict)
    their_out_usages: Dict[int, UsageMap] = field(default_factory=dict)
    their_feature_usages: Dict[int, UsageMap] = field(default_factory=dict)
    has_report_id: Dict[int, bool] = field(default_factory=dict)
    out_reports: Dict[int, bytearray] = field(default_factory=dict)
    prev_out_reports: Dict[int, bytearray] = field(default_factory=dict)
    out_report_sizes: Dict[int, int] = field(default_factory=dict)
    their_out_usages_flat: Dict[int, List[int]] = field(default_factory=dict)
    interface_index: Dict[int, int] = field(default_factory=dict)
    interface_index_in_use: int = 0
    descriptor_updated: bool = False
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    @staticmethod
    def out_report_key(interface: int, report_id: int) -> int:
        """Return the key under which an output report of an interface is stored."""
        return ((interface & 0xFFFF) << 16) | (report_id & 0xFF)

    def assign_interface_index(self, interface: int) -> int:
        """Give ``interface`` the lowest free index from 0 to 31 and return it.

        An interface that already has an index keeps it. When all indexes
        are taken, further interfaces share index 31.
        """
        with self._lock:
            if interface in self.interface_index:
                return self.interface_index[interface]
            index = 0
            while index < _MAX_INTERFACE_INDEX and (1 << index) & self.interface_index_in_use:
                index += 1
            self.interface_index[interface] = index
            self.interface_index_in_use |= 1 << index
            return index

    def add_descriptor(self, report_descriptor: bytes | bytearray | memoryview, interface: int) -> None:
        """Parse a device's report descriptor and record what it declares.

        Raises ValueError if the descriptor is truncated; nothing is recorded then.
        """
        parsed = parse_descriptor(report_descriptor)
        with self._lock:
            _merge_usages(self.their_usages.setdefault(interface, {}), parsed.input_usages)
            _merge_usages(self.their_out_usages.setdefault(interface, {}), parsed.output_usages)
            _merge_usages(self.their_feature_usages.setdefault(interface, {}), parsed.feature_usages)
            self.has_report_id[interface] = self.has_report_id.get(interface, False) or parsed.has_report_id
            self.assign_interface_index(interface)

            for report_id, size in parsed.report_sizes.get(ReportType.OUTPUT, {}).items():
                key = self.out_report_key(interface, report_id)
                self.out_report_sizes[key] = size
                self.out_reports[key] = bytearray(size)
                self.prev_out_reports[key] = bytearray(size)

            for report_id, usages in self.their_out_usages[interface].items():
                key = self.out_report_key(interface, report_id)
                for usage in usages:
                    self.their_out_usages_flat.setdefault(usage, []).append(key)

            self.descriptor_updated = True

    def clear_device(self, dev_addr: int) -> None:
        """Forget everything recorded for the interfaces of device ``dev_addr``."""
        with self._lock:
            for interface in [i for i in self.their_usages if i >> 8 == dev_addr]:
                self.has_report_id.pop(interface, None)
                index = self.interface_index.pop(interface, 0)
                self.interface_index_in_use &= ~(1 << index)
                del self.their_usages[interface]

            for usage_maps in (self.their_feature_usages, self.their_out_usages):
                for interface in [i for i in usage_maps if i >> 8 == dev_addr]:
                    del usage_maps[interface]

            for key in [k for k in self.out_reports if k >> 24 == dev_addr]:
                self.out_report_sizes.pop(key, None)
                self.prev_out_reports.pop(key, None)
                del self.out_reports[key]

            for usage, keys in self.their_out_usages_flat.items():
                self.their_out_usages_flat[usage] = [k for k in keys if k >> 24 != dev_addr]

            self.descriptor_updated = True