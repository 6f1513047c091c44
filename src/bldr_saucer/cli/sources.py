"""Embedded source CLI commands.

This module provides subcommands for inspecting and extracting the
bundled C++ sources.
"""

from pathlib import Path

import typer
from rich.console import Console

from bldr_saucer.cli.commands import cat_source, extract_sources, list_sources

app = typer.Typer(
    name="sources",
    help="Embedded source commands",
    add_completion=False,
)
console = Console()


@app.command("list")
def list_command(
    prefix: str = typer.Argument("", help="Directory to list (default: bundle root)"),
    shallow: bool = typer.Option(
        False, "--shallow", "-s", help="Only list immediate children"
    ),
) -> None:
    """List embedded files."""
    list_sources(prefix=prefix, shallow=shallow, console=console)


@app.command("cat")
def cat_command(
    path: str = typer.Argument(..., help="Embedded path, e.g. src/main.cpp"),
) -> None:
    """Print the contents of an embedded file."""
    cat_source(path=path)


@app.command("extract")
def extract_command(
    dest: Path = typer.Argument(..., help="Directory to write the sources into"),
) -> None:
    """Write the embedded sources to a directory."""
    extract_sources(dest=dest, console=console)
