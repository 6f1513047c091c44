"""CLI module for bldr-saucer.

This module provides the command-line interface for inspecting the
embedded sources and installing the binary.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from bldr_saucer.cli.commands import _fail, run_install, show_binary_path, show_deps
from bldr_saucer.cli.sources import app as sources_app
from bldr_saucer.config import load_config
from bldr_saucer.exceptions import BldrSaucerError
from bldr_saucer.utils.logging import set_package_level, setup_logging

app = typer.Typer(
    name="bldr-saucer",
    help="bldr-saucer - embedded webview sources and binary installer",
    add_completion=False,
)
console = Console()

app.add_typer(
    sources_app,
    name="sources",
    help="Embedded source commands",
)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose output"
    ),
) -> None:
    """Inspect embedded sources and manage the bldr-saucer binary."""
    if verbose:
        setup_logging(level=logging.DEBUG)
        set_package_level(logging.DEBUG)


@app.command("install")
def install_command(
    from_source: bool = typer.Option(
        False, "--from-source", help="Build from the embedded sources"
    ),
    skip: bool = typer.Option(False, "--skip", help="Skip binary installation"),
    work_dir: Optional[Path] = typer.Option(
        None, "--work-dir", help="Directory for extracted sources and build tree"
    ),
) -> None:
    """Install the bldr-saucer binary."""
    try:
        config = load_config(
            from_source=True if from_source else None,
            skip_binary=True if skip else None,
            work_dir=work_dir,
        )
    except BldrSaucerError as e:
        raise _fail(console, e) from e
    run_install(config=config, console=console)


@app.command("path")
def path_command(
    from_source: bool = typer.Option(
        False, "--from-source", help="Resolve the source-built binary"
    ),
) -> None:
    """Print the path of the bldr-saucer binary."""
    try:
        config = load_config(from_source=True if from_source else None)
    except BldrSaucerError as e:
        raise _fail(console, e) from e
    show_binary_path(config=config, console=console)


@app.command("deps")
def deps_command(
    manifest: Optional[Path] = typer.Option(
        None, "--manifest", help="Manifest file (default: the packaged one)"
    ),
) -> None:
    """Show the repositories vendored into the native build."""
    show_deps(manifest=manifest, console=console)


if __name__ == "__main__":
    app()
