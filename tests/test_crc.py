import pytest

from hidremap.crc import checksum_ok, crc32


def _with_crc(data: bytes) -> bytes:
    return data + crc32(data).to_bytes(4, "little")


def test_standard_check_value():
    assert crc32(b"123456789") == 0xCBF43926


def test_empty_input():
    assert crc32(b"") == 0


def test_accepts_bytearray_and_memoryview():
    data = b"hid remapper config"
    assert crc32(bytearray(data)) == crc32(data)
    assert crc32(memoryview(data)) == crc32(data)


def test_result_is_32_bit():
    for data in (b"\xff" * 100, b"\x00" * 7, bytes(range(256))):
        assert 0 <= crc32(data) <= 0xFFFFFFFF


def test_checksum_round_trip():
    data = bytes(range(28))
    assert checksum_ok(_with_crc(data)) is True


def test_checksum_detects_corruption():
    buffer = bytearray(_with_crc(bytes(range(28))))
    buffer[5] ^= 0x01
    assert checksum_ok(buffer) is False


def test_checksum_detects_wrong_stored_value():
    data = bytes(range(28))
    bad = data + ((crc32(data) ^ 1).to_bytes(4, "little"))
    assert checksum_ok(bad) is False


def test_checksum_uses_little_endian():
    data = b"abcdef"
    big_endian = data + crc32(data).to_bytes(4, "big")
    assert checksum_ok(big_endian) is (crc32(data).to_bytes(4, "big") == crc32(data).to_bytes(4, "little"))


def test_checksum_of_only_crc_bytes():
    assert checksum_ok(_with_crc(b"")) is True


def test_checksum_too_short_raises():
    with pytest.raises(ValueError):
        checksum_ok(b"\x00\x01\x02")