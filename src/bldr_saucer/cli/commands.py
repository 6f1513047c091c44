"""Implementation of CLI commands.

Each command prints through a Rich console and converts package errors
into a red message and exit code 1.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from bldr_saucer.binary.builder import InstallOutcome, install
from bldr_saucer.binary.locator import get_binary_path
from bldr_saucer.bundle import get_sources
from bldr_saucer.config import BuilderConfig
from bldr_saucer.deps import load_manifest
from bldr_saucer.exceptions import BldrSaucerError


def _fail(console: Console, error: Exception) -> typer.Exit:
    console.print(f"[red]✗[/red] {error}")
    return typer.Exit(code=1)


def list_sources(
    prefix: str = "",
    shallow: bool = False,
    console: Optional[Console] = None,
) -> None:
    """Print the embedded entries under *prefix* as a table.

    Args:
        prefix: Directory to list; empty for the bundle root.
        shallow: List only immediate children, directories included.
        console: Rich console instance for output.
    """
    if console is None:
        console = Console()

    try:
        listing = get_sources().list(prefix, recursive=not shallow)
        rows = list(listing)
    except BldrSaucerError as e:
        raise _fail(console, e) from e

    table = Table(title="Embedded Sources", show_header=True, header_style="bold")
    table.add_column("Path", style="cyan", no_wrap=True)
    table.add_column("Size", style="magenta", justify="right")

    for path, info in rows:
        if info.is_dir:
            table.add_row(f"{path}/", "-")
        else:
            table.add_row(path, f"{info.size} B")

    console.print(table)


def cat_source(path: str, console: Optional[Console] = None) -> None:
    """Write the raw contents of one embedded file to stdout."""
    if console is None:
        console = Console(stderr=True)

    try:
        data = get_sources().read_all(path)
    except BldrSaucerError as e:
        raise _fail(console, e) from e

    typer.echo(data, nl=False)


def extract_sources(dest: Path, console: Optional[Console] = None) -> None:
    """Recreate the embedded file layout below *dest*."""
    if console is None:
        console = Console()

    try:
        written = get_sources().materialize(dest)
    except (BldrSaucerError, OSError) as e:
        raise _fail(console, e) from e

    console.print(
        f"[green]✓[/green] Extracted {len(written)} files to [bold]{dest}[/bold]"
    )


def run_install(config: BuilderConfig, console: Optional[Console] = None) -> None:
    """Install the binary according to *config* and report the outcome."""
    if console is None:
        console = Console()

    try:
        outcome = install(config)
    except BldrSaucerError as e:
        raise _fail(console, e) from e

    if outcome is InstallOutcome.BUILT:
        console.print("[green]✓[/green] Built bldr-saucer from source.")
    elif outcome is InstallOutcome.PREBUILT:
        console.print("[green]✓[/green] Prebuilt bldr-saucer binary is installed.")
    elif outcome is InstallOutcome.SKIPPED:
        console.print("[dim]Skipped binary installation.[/dim]")
    else:
        console.print(
            "[yellow]No prebuilt binary for this platform.[/yellow] "
            "Re-run with --from-source to build it."
        )


def show_binary_path(config: BuilderConfig, console: Optional[Console] = None) -> None:
    """Print the resolved binary path."""
    if console is None:
        console = Console()

    try:
        binary = get_binary_path(config)
    except BldrSaucerError as e:
        raise _fail(console, e) from e

    typer.echo(str(binary))


def show_deps(manifest: Optional[Path] = None, console: Optional[Console] = None) -> None:
    """Print the vendoring manifest as a table."""
    if console is None:
        console = Console()

    try:
        loaded = load_manifest(manifest)
    except BldrSaucerError as e:
        raise _fail(console, e) from e

    table = Table(title="Vendored Repositories", show_header=True, header_style="bold")
    table.add_column("Module", style="cyan", no_wrap=True)
    table.add_column("C++ sources", style="magenta")
    table.add_column("Description", style="green")

    for dep in loaded.dependencies:
        table.add_row(dep.module, "yes" if dep.vendor_sources else "no", dep.description)

    console.print(table)
