[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hidremap"
version = "0.1.0"
description = "HID report descriptor parsing, device usage registry, host-facing descriptors and CRC helpers for a USB HID remapper"
requires-python = ">=3.10"
dependencies = []
keywords = ["hid", "usb", "report descriptor", "remapper", "crc32", "gamepad"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Hardware :: Universal Serial Bus (USB) :: Human Interface Device (HID)",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hidremap"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
