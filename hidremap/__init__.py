"""HID report descriptor parsing, device registry, host-facing descriptors and CRC helpers."""

__version__ = "0.1.0"
__all__ = ["crc", "descriptor_parser", "device_registry", "descriptors", "our_descriptor"]