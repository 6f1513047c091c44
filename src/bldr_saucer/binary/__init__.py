"""Locating and building the bldr-saucer binary."""

from bldr_saucer.binary.builder import InstallOutcome, build_from_source, install
from bldr_saucer.binary.locator import (
    get_binary_path,
    get_platform_binary_path,
    get_source_binary_path,
    has_binary,
)

__all__ = [
    "InstallOutcome",
    "build_from_source",
    "get_binary_path",
    "get_platform_binary_path",
    "get_source_binary_path",
    "has_binary",
    "install",
]
