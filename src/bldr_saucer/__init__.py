"""Embedded bldr-saucer C++ sources and binary tooling.

Example::

    import bldr_saucer

    sources = bldr_saucer.get_sources()
    with sources.open("src/main.cpp") as fh:
        header = fh.readline()
    sources.materialize(build_root)
"""

from bldr_saucer._version import __version__
from bldr_saucer.binary import (
    InstallOutcome,
    get_binary_path,
    get_platform_binary_path,
    get_source_binary_path,
    has_binary,
    install,
)
from bldr_saucer.bundle import EntryInfo, ResourceBundle, get_sources, snapshot
from bldr_saucer.config import BuilderConfig, load_config
from bldr_saucer.deps import VendorManifest, load_manifest
from bldr_saucer.exceptions import (
    BinaryNotFoundError,
    BldrSaucerError,
    BuildError,
    ConfigError,
    EmbedError,
    ManifestError,
    NotFoundError,
)

__all__ = [
    "__version__",
    "BinaryNotFoundError",
    "BldrSaucerError",
    "BuildError",
    "BuilderConfig",
    "ConfigError",
    "EmbedError",
    "EntryInfo",
    "InstallOutcome",
    "ManifestError",
    "NotFoundError",
    "ResourceBundle",
    "VendorManifest",
    "get_binary_path",
    "get_platform_binary_path",
    "get_source_binary_path",
    "get_sources",
    "has_binary",
    "install",
    "load_config",
    "load_manifest",
    "snapshot",
]
