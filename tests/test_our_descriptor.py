import pytest

from hidremap.descriptors import (
    NOUR_DESCRIPTORS,
    REPORT_ID_LEDS,
    REPORT_ID_MOUSE,
    REPORT_ID_MULTIPLIER,
    report_descriptor,
)
from hidremap.our_descriptor import (
    OurDescriptor,
    ResolutionMultiplierHandler,
    get_descriptor,
)


@pytest.mark.parametrize("number", range(NOUR_DESCRIPTORS))
def test_descriptor_bytes_match_report_descriptor(number):
    d = get_descriptor(number)
    assert d.descriptor == report_descriptor(number)
    assert d.descriptor_length == len(report_descriptor(number))


@pytest.mark.parametrize("number", [-1, NOUR_DESCRIPTORS])
def test_out_of_range_raises(number):
    with pytest.raises(ValueError):
        get_descriptor(number)


def test_gamepad_overrides_usb_ids():
    d = get_descriptor(2)
    assert (d.vid, d.pid) == (0x0F0D, 0x0092)
    assert d.overrides_usb_ids is True


@pytest.mark.parametrize("number", [0, 1, 3])
def test_other_descriptors_keep_usb_ids(number):
    d = get_descriptor(number)
    assert (d.vid, d.pid) == (0, 0)
    assert d.overrides_usb_ids is False


def test_handlers_present_only_for_keyboard_mouse():
    assert isinstance(get_descriptor(0).handler, ResolutionMultiplierHandler)
    assert isinstance(get_descriptor(1).handler, ResolutionMultiplierHandler)
    assert get_descriptor(2).handler is None
    assert get_descriptor(3).handler is None


def test_multiplier_round_trip():
    h = ResolutionMultiplierHandler()
    h.handle_set_report(REPORT_ID_MULTIPLIER, bytes([1, 9]))
    assert h.resolution_multiplier == 1
    assert h.handle_get_report(REPORT_ID_MULTIPLIER, 1) == bytes([1])


def test_get_multiplier_default_is_zero():
    h = ResolutionMultiplierHandler()
    assert h.handle_get_report(REPORT_ID_MULTIPLIER, 8) == bytes([0])


def test_get_with_zero_length_returns_nothing():
    h = ResolutionMultiplierHandler(resolution_multiplier=1)
    assert h.handle_get_report(REPORT_ID_MULTIPLIER, 0) == b""


def test_get_unknown_report_returns_nothing():
    h = ResolutionMultiplierHandler(resolution_multiplier=1)
    assert h.handle_get_report(REPORT_ID_MOUSE, 8) == b""


def test_set_empty_multiplier_is_ignored():
    h = ResolutionMultiplierHandler(resolution_multiplier=1)
    h.handle_set_report(REPORT_ID_MULTIPLIER, b"")
    assert h.resolution_multiplier == 1


def test_set_unknown_report_is_ignored():
    h = ResolutionMultiplierHandler()
    h.handle_set_report(REPORT_ID_MOUSE, bytes([1]))
    assert h.resolution_multiplier == 0


def test_leds_report_forwarded():
    received = []
    h = ResolutionMultiplierHandler(on_leds_report=lambda rid, data: received.append((rid, data)))
    h.handle_set_report(REPORT_ID_LEDS, bytearray([3]))
    assert received == [(REPORT_ID_LEDS, bytes([3]))]
    assert h.resolution_multiplier == 0


def test_leds_report_without_callback_changes_nothing():
    h = ResolutionMultiplierHandler()
    h.handle_set_report(REPORT_ID_LEDS, bytes([3]))
    assert h.resolution_multiplier == 0


def test_each_call_gives_independent_handler():
    a = get_descriptor(0)
    b = get_descriptor(0)
    a.handler.handle_set_report(REPORT_ID_MULTIPLIER, bytes([1]))
    assert b.handler.resolution_multiplier == 0


def test_custom_descriptor_length():
    d = OurDescriptor(descriptor=bytes([0xC0, 0xC0]))
    assert d.descriptor_length == 2
    assert d.overrides_usb_ids is False