"""Build the bldr-saucer binary from the embedded sources.

Mirrors what a package post-install step does: skip when asked, reuse a
prebuilt platform binary when one is installed, and otherwise compile
the embedded sources with CMake when a source build is requested.
"""

import logging
import shutil
import subprocess
from enum import Enum
from pathlib import Path
from typing import Optional

from bldr_saucer.bundle import ResourceBundle, get_sources
from bldr_saucer.binary.locator import get_platform_binary_path, get_source_binary_path
from bldr_saucer.config import BuilderConfig, load_config
from bldr_saucer.exceptions import BuildError
from bldr_saucer.utils.logging import configure_module_logger, set_package_level

logger = configure_module_logger(__name__, level=logging.INFO)


class InstallOutcome(str, Enum):
    """What :func:`install` ended up doing."""

    SKIPPED = "skipped"
    PREBUILT = "prebuilt"
    NOT_REQUESTED = "not_requested"
    BUILT = "built"


def required_tools(generator: str) -> list[str]:
    """Executables a source build needs on ``$PATH``."""
    tools = ["cmake"]
    if generator.startswith("Ninja"):
        tools.append("ninja")
    return tools


def check_tools(config: BuilderConfig) -> None:
    """Ensure every build tool is installed.

    Raises:
        BuildError: Naming the first missing tool.
    """
    for tool in required_tools(config.generator):
        if shutil.which(tool) is None:
            raise BuildError(f"{tool} is required but not found", step="tools")


def extract_sources(
    config: BuilderConfig, bundle: Optional[ResourceBundle] = None
) -> list[Path]:
    """Write the embedded sources to ``config.source_dir``.

    Any previous extraction is removed first so files dropped from the
    bundle do not linger in the source tree. Vendored dependencies live in
    ``config.vendor_root`` and are left alone.

    Returns:
        The files written.
    """
    if bundle is None:
        bundle = get_sources()
    if config.source_dir.exists():
        shutil.rmtree(config.source_dir)
    written = bundle.materialize(config.source_dir)
    logger.debug(f"Extracted {len(written)} files to {config.source_dir}")
    return written


def configure_command(config: BuilderConfig) -> list[str]:
    """Return the CMake configure invocation for *config*."""
    cmd = [
        "cmake",
        "-G",
        config.generator,
        "-S",
        str(config.source_dir),
        "-B",
        str(config.build_dir),
        f"-DBLDR_SAUCER_VENDOR_DIR={config.vendor_root}",
    ]
    cmd.extend(config.cmake_args)
    return cmd


def build_command(config: BuilderConfig) -> list[str]:
    """Return the CMake build invocation for *config*."""
    return ["cmake", "--build", str(config.build_dir)]


def _run_step(cmd: list[str], cwd: Path, step: str, failure: str) -> None:
    logger.debug(f"Running: {' '.join(cmd)}")
    try:
        subprocess.run(cmd, cwd=cwd, check=True)
    except subprocess.CalledProcessError as e:
        raise BuildError(failure, step=step, returncode=e.returncode) from e
    except OSError as e:
        raise BuildError(f"{failure}: {e}", step=step) from e


def build_from_source(
    config: BuilderConfig, bundle: Optional[ResourceBundle] = None
) -> Path:
    """Extract the embedded sources and compile them with CMake.

    Args:
        config: Builder configuration.
        bundle: Sources to build; defaults to the shipped bundle.

    Returns:
        Path to the freshly built binary.

    Raises:
        BuildError: If a tool is missing, a CMake step fails, or the
            binary is absent after the build.
    """
    if config.verbose:
        set_package_level(logging.DEBUG)

    check_tools(config)

    config.work_dir.mkdir(parents=True, exist_ok=True)
    extract_sources(config, bundle)

    logger.info("[yellow]⏳[/yellow] bldr-saucer: Configuring …")
    _run_step(
        configure_command(config), config.work_dir, "configure", "CMake configure failed"
    )

    logger.info("[yellow]⏳[/yellow] bldr-saucer: Building …")
    _run_step(build_command(config), config.work_dir, "build", "CMake build failed")

    binary = get_source_binary_path(config)
    if not binary.is_file():
        raise BuildError(f"Binary not found at {binary}", step="verify")

    logger.info("[green]✓[/green] bldr-saucer: Build successful!")
    return binary


def install(config: Optional[BuilderConfig] = None) -> InstallOutcome:
    """Make a bldr-saucer binary available.

    1. ``skip_binary`` set: do nothing.
    2. A prebuilt platform binary is installed: use it.
    3. ``from_source`` unset: do nothing, but say how to force a build.
    4. Otherwise build from the embedded sources.

    Args:
        config: Builder configuration; loaded from the environment when
            omitted.

    Returns:
        The action taken.

    Raises:
        BuildError: If the source build fails.
    """
    if config is None:
        config = load_config()

    if config.skip_binary:
        logger.info("bldr-saucer: Skipping install (BLDR_SAUCER_SKIP_BINARY=true)")
        return InstallOutcome.SKIPPED

    platform_binary = get_platform_binary_path()
    if platform_binary is not None and platform_binary.is_file():
        logger.info("bldr-saucer: Using prebuilt binary")
        return InstallOutcome.PREBUILT

    if not config.from_source:
        logger.info(
            "bldr-saucer: No prebuilt binary for this platform. "
            "Set BLDR_SAUCER_FROM_SOURCE=true to build from source."
        )
        return InstallOutcome.NOT_REQUESTED

    logger.info("bldr-saucer: Building from source …")
    build_from_source(config)
    return InstallOutcome.BUILT
