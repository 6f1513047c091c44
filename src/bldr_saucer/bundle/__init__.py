"""Read-only bundles of embedded files."""

from bldr_saucer.bundle.embedded import EMBED_PATTERNS, get_sources
from bldr_saucer.bundle.resource_bundle import BundleListing, EntryInfo, ResourceBundle
from bldr_saucer.bundle.snapshot import DEFAULT_PATTERNS, snapshot

__all__ = [
    "BundleListing",
    "DEFAULT_PATTERNS",
    "EMBED_PATTERNS",
    "EntryInfo",
    "ResourceBundle",
    "get_sources",
    "snapshot",
]
