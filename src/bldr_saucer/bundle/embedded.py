"""The C++ sources shipped with this package."""

import threading
from typing import Optional

from bldr_saucer.bundle.resource_bundle import ResourceBundle
from bldr_saucer.bundle.snapshot import DEFAULT_PATTERNS, snapshot
from bldr_saucer.utils.resources import sources_root

EMBED_PATTERNS = DEFAULT_PATTERNS

_SOURCES: Optional[ResourceBundle] = None
_SOURCES_LOCK = threading.Lock()


def get_sources() -> ResourceBundle:
    """Return the bundle of shipped sources.

    The package data is read once, on first use, and the resulting bundle
    is shared for the rest of the process.

    Raises:
        EmbedError: If the installed package data does not satisfy
            :data:`EMBED_PATTERNS`.
    """
    global _SOURCES

    if _SOURCES is None:
        with _SOURCES_LOCK:
            if _SOURCES is None:
                _SOURCES = snapshot(sources_root(), EMBED_PATTERNS)
    return _SOURCES
