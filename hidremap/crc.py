"""CRC-32 checksums used by configuration buffers."""

from __future__ import annotations

import zlib

__all__ = ["crc32", "checksum_ok"]

_CRC_LEN = 4


def crc32(data: bytes | bytearray | memoryview) -> int:
    """Return the standard (reflected, 0xEDB88320) CRC-32 of ``data``."""
    return zlib.crc32(bytes(data)) & 0xFFFFFFFF


def checksum_ok(buffer: bytes | bytearray | memoryview) -> bool:
    """Check that the last four bytes of ``buffer`` hold the little-endian
    CRC-32 of everything before them."""
    raw = bytes(buffer)
    if len(raw) < _CRC_LEN:
        raise ValueError(f"buffer of {len(raw)} bytes is too short to carry a checksum")
    payload, stored = raw[:-_CRC_LEN], raw[-_CRC_LEN:]
    return crc32(payload) == int.from_bytes(stored, "little")