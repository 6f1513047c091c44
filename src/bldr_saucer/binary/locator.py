"""Locate the bldr-saucer executable.

A prebuilt binary ships in a per-platform companion package
(``bldr_saucer_<os>_<arch>``). When none is installed, or when a source
build is forced, the binary produced by :mod:`bldr_saucer.binary.builder`
under the configured work directory is used instead.
"""

import importlib.util
import platform
import sys
from pathlib import Path
from typing import Optional

from bldr_saucer.config import BuilderConfig, load_config
from bldr_saucer.exceptions import BinaryNotFoundError

BINARY_NAME = "bldr-saucer"

PLATFORM_PACKAGES = {
    "darwin-arm64": "bldr_saucer_darwin_arm64",
    "darwin-x64": "bldr_saucer_darwin_x64",
    "linux-x64": "bldr_saucer_linux_x64",
    "linux-arm64": "bldr_saucer_linux_arm64",
    "win32-x64": "bldr_saucer_win32_x64",
}

_ARCH_ALIASES = {
    "x86_64": "x64",
    "amd64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
}


def platform_key() -> str:
    """Return the ``<os>-<arch>`` key of the running interpreter, e.g. ``linux-x64``."""
    system = "linux" if sys.platform.startswith("linux") else sys.platform
    machine = platform.machine().lower()
    return f"{system}-{_ARCH_ALIASES.get(machine, machine)}"


def binary_name() -> str:
    """File name of the executable on this platform."""
    return f"{BINARY_NAME}.exe" if sys.platform == "win32" else BINARY_NAME


def get_platform_binary_path() -> Optional[Path]:
    """Return where the platform package keeps its prebuilt binary.

    Returns:
        The expected binary path, or ``None`` if the platform is not
        supported or its package is not installed. The file itself is
        not checked.
    """
    package = PLATFORM_PACKAGES.get(platform_key())
    if package is None:
        return None

    try:
        spec = importlib.util.find_spec(package)
    except (ImportError, ValueError):
        return None
    if spec is None or not spec.submodule_search_locations:
        return None

    package_dir = Path(next(iter(spec.submodule_search_locations)))
    return package_dir / "bin" / binary_name()


def get_source_binary_path(config: Optional[BuilderConfig] = None) -> Path:
    """Return where a source build places the binary."""
    if config is None:
        config = load_config()
    return config.build_dir / binary_name()


def get_binary_path(config: Optional[BuilderConfig] = None) -> Path:
    """Resolve the bldr-saucer binary to run.

    When ``from_source`` is set, the source-built path is returned
    whether or not it exists yet. Otherwise the prebuilt platform binary
    wins over a source build.

    Args:
        config: Builder configuration; loaded from the environment when
            omitted.

    Returns:
        Path to the binary.

    Raises:
        BinaryNotFoundError: If neither binary exists.
    """
    if config is None:
        config = load_config()

    if config.from_source:
        return get_source_binary_path(config)

    platform_binary = get_platform_binary_path()
    if platform_binary is not None and platform_binary.is_file():
        return platform_binary

    source_binary = get_source_binary_path(config)
    if source_binary.is_file():
        return source_binary

    key = platform_key()
    raise BinaryNotFoundError(
        f"bldr-saucer binary not found for platform {key}. "
        "Try running with BLDR_SAUCER_FROM_SOURCE=true to build from source.",
        platform=key,
    )


def has_binary(config: Optional[BuilderConfig] = None) -> bool:
    """Check whether :func:`get_binary_path` resolves."""
    try:
        get_binary_path(config)
    except BinaryNotFoundError:
        return False
    return True
