"""Resource loading utilities.

This module provides safe resource loading using importlib.resources
for compatibility with zip-apps and PyInstaller binaries.
"""

from importlib.resources import files
from importlib.resources.abc import Traversable

_PACKAGE = "bldr_saucer"


def sources_root() -> Traversable:
    """Return the directory holding the shipped C++ sources."""
    return files(_PACKAGE) / "sources"


def deps_manifest() -> Traversable:
    """Return the packaged vendoring manifest."""
    return files(_PACKAGE) / "deps" / "deps.toml"
