"""Parsing of HID report descriptors into per-report usage maps."""

from __future__ import annotations

import enum
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterator, Tuple

__all__ = ["ReportType", "UsageDef", "ParsedDescriptor", "parse_descriptor"]

_HID_INPUT = 0x80
_HID_OUTPUT = 0x90
_HID_FEATURE = 0xB0
_HID_COLLECTION = 0xA0
_HID_USAGE_PAGE = 0x04
_HID_REPORT_SIZE = 0x74
_HID_REPORT_ID = 0x84
_HID_REPORT_COUNT = 0x94
_HID_USAGE = 0x08
_HID_USAGE_MINIMUM = 0x18
_HID_USAGE_MAXIMUM = 0x28
_HID_LOGICAL_MINIMUM = 0x14
_HID_LOGICAL_MAXIMUM = 0x24

_SIZE_CODES = (0, 1, 2, 4)
_U32 = 0xFFFFFFFF
_U16 = 0xFFFF


class ReportType(enum.IntEnum):
    INPUT = 0
    OUTPUT = 1
    FEATURE = 2


_MAIN_ITEM_TYPES = {
    _HID_INPUT: ReportType.INPUT,
    _HID_OUTPUT: ReportType.OUTPUT,
    _HID_FEATURE: ReportType.FEATURE,
}


@dataclass(frozen=True)
class UsageDef:
    """Where a usage lives inside a report and how to interpret it."""

    report_id: int
    size: int
    bitpos: int
    is_relative: bool
    is_array: bool = False
    logical_minimum: int = 0
    index: int = 0
    count: int = 0
    usage_maximum: int = 0


UsageMap = Dict[int, Dict[int, UsageDef]]


@dataclass
class ParsedDescriptor:
    """Usages found in a report descriptor, per report type and report ID.

    ``report_sizes`` maps each report type to report ID -> size in bytes
    (report ID byte not included).
    """

    input_usages: UsageMap = field(default_factory=dict)
    output_usages: UsageMap = field(default_factory=dict)
    feature_usages: UsageMap = field(default_factory=dict)
    has_report_id: bool = False
    report_sizes: Dict[ReportType, Dict[int, int]] = field(default_factory=dict)

    def usages(self, report_type: ReportType) -> UsageMap:
        """Return the report ID -> usage -> definition map for a report type."""
        return {
            ReportType.INPUT: self.input_usages,
            ReportType.OUTPUT: self.output_usages,
            ReportType.FEATURE: self.feature_usages,
        }[ReportType(report_type)]


def _iter_items(data: bytes) -> Iterator[Tuple[int, int, int]]:
    """Yield (tag, data size, unsigned value) for each short item."""
    idx = 0
    n = len(data)
    while idx < n:
        prefix = data[idx]
        if prefix == 0 and idx == n - 1:
            # a lone trailing zero byte is tolerated as padding
            return
        size = _SIZE_CODES[prefix & 0x03]
        start = idx + 1
        end = start + size
        if end > n:
            raise ValueError(f"truncated report descriptor item at offset {idx}")
        yield prefix & 0xFC, size, int.from_bytes(data[start:end], "little")
        idx = end


def _to_int32(value: int) -> int:
    value &= _U32
    return value - (1 << 32) if value & 0x80000000 else value


def _sign_extend(value: int, size: int) -> int:
    if size == 0:
        return 0
    bits = size * 8
    if value & (1 << (bits - 1)):
        value -= 1 << bits
    return _to_int32(value)


class _Parser:
    def __init__(self) -> None:
        self.result = ParsedDescriptor()
        self.bitpos: Dict[ReportType, Dict[int, int]] = {}
        self.report_id = 0
        self.report_size = 0
        self.report_count = 0
        self.usage_page = 0
        self.usages: deque[int] = deque()
        self.usage_minimum = 0
        self.usage_maximum = 0
        self.logical_minimum = 0
        self.logical_maximum = 0

    def _pos(self, report_type: ReportType) -> int:
        return self.bitpos.setdefault(report_type, {}).setdefault(self.report_id, 0)

    def _advance(self, report_type: ReportType, bits: int) -> None:
        positions = self.bitpos.setdefault(report_type, {})
        positions[self.report_id] = (positions.get(self.report_id, 0) + bits) & _U16

    def _mark(self, report_type: ReportType, usage: int, relative: bool, **extra) -> None:
        bitpos = self._pos(report_type)
        limit = 8 * (64 if self.report_id == 0 else 63)
        if bitpos >= limit:
            # reports longer than 64 bytes are not handled
            return
        per_report = self.result.usages(report_type).setdefault(self.report_id, {})
        if usage not in per_report:
            per_report[usage] = UsageDef(
                report_id=self.report_id,
                size=self.report_size,
                bitpos=bitpos,
                is_relative=relative,
                logical_minimum=self.logical_minimum,
                **extra,
            )

    def _full_usage(self, size: int, value: int) -> int:
        return ((self.usage_page << 16) | value) & _U32 if size <= 2 else value

    def _reset_local(self) -> None:
        self.usages.clear()
        self.usage_minimum = 0
        self.usage_maximum = 0

    def _main_item(self, report_type: ReportType, value: int) -> None:
        relative = bool(value & 0x04)
        kind = value & 0x03
        has_range = bool(self.usage_minimum and self.usage_maximum)
        if kind == 0x02:
            if has_range:
                usage = self.usage_minimum
                for _ in range(self.report_count):
                    self._mark(report_type, usage, relative)
                    if usage < self.usage_maximum:
                        usage += 1
                    self._advance(report_type, self.report_size)
            elif self.usages:
                usage = 0
                for _ in range(self.report_count):
                    if self.usages:
                        usage = self.usages.popleft()
                    self._mark(report_type, usage, relative)
                    self._advance(report_type, self.report_size)
            else:
                self._advance(report_type, self.report_size * self.report_count)
        elif kind == 0x00:
            if has_range:
                span = (self.usage_minimum + self.logical_maximum - self.logical_minimum) & _U32
                self._mark(
                    report_type,
                    self.usage_minimum,
                    relative,
                    is_array=True,
                    index=self.logical_minimum,
                    count=self.report_count,
                    usage_maximum=min(self.usage_maximum, span),
                )
            elif self.usages:
                for index in range(self.logical_minimum, self.logical_maximum + 1):
                    if not self.usages:
                        break
                    self._mark(
                        report_type,
                        self.usages.popleft(),
                        relative,
                        is_array=True,
                        index=index,
                        count=self.report_count,
                    )
            self._advance(report_type, self.report_size * self.report_count)
        else:
            self._advance(report_type, self.report_size * self.report_count)
        self._reset_local()

    def feed(self, data: bytes) -> ParsedDescriptor:
        for tag, size, value in _iter_items(data):
            if tag in _MAIN_ITEM_TYPES:
                self._main_item(_MAIN_ITEM_TYPES[tag], value)
            elif tag == _HID_COLLECTION:
                self._reset_local()
            elif tag == _HID_USAGE_PAGE:
                self.usage_page = value
            elif tag == _HID_REPORT_SIZE:
                self.report_size = value
            elif tag == _HID_REPORT_ID:
                self.report_id = value & 0xFF
                self.result.has_report_id = True
            elif tag == _HID_REPORT_COUNT:
                self.report_count = value
            elif tag == _HID_USAGE:
                self.usages.append(self._full_usage(size, value))
            elif tag == _HID_USAGE_MINIMUM:
                self.usage_minimum = self._full_usage(size, value)
            elif tag == _HID_USAGE_MAXIMUM:
                self.usage_maximum = self._full_usage(size, value)
            elif tag == _HID_LOGICAL_MINIMUM:
                self.logical_minimum = _sign_extend(value, size)
            elif tag == _HID_LOGICAL_MAXIMUM:
                self.logical_maximum = _to_int32(value)

        self.result.report_sizes = {
            report_type: {rid: bits // 8 for rid, bits in positions.items()}
            for report_type, positions in self.bitpos.items()
        }
        return self.result


def parse_descriptor(report_descriptor: bytes | bytearray | memoryview) -> ParsedDescriptor:
    """Parse a HID report descriptor.

    Raises ValueError if the last item is cut short.
    """
    return _Parser().feed(bytes(report_descriptor))