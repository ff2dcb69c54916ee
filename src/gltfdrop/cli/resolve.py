"""gltfdrop resolve — show what individual reference strings resolve to.

Usage:
  gltfdrop resolve helmet.zip --ref textures/Diffuse.png --ref ./buffer.bin
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from gltfdrop.cli.errors import err_single_has_no_references
from gltfdrop.cli.loading import load_package
from gltfdrop.ingest.handles import ResourceHandle
from gltfdrop.ingest.models import SinglePackage

console = Console()


def resolve_cmd(
    paths: Annotated[
        list[Path],
        typer.Argument(help="Files, folders or a single .zip forming the package."),
    ],
    ref: Annotated[
        list[str],
        typer.Option("--ref", "-r", help="Reference string to resolve (repeatable)."),
    ],
) -> None:
    """Resolve reference strings against a package's resource index."""
    session, package = load_package(console, paths)
    if isinstance(package, SinglePackage):
        console.print(err_single_has_no_references(package.name))
        raise typer.Exit(1)

    resolver = session.resolver()
    table = Table(show_header=True)
    table.add_column("Reference")
    table.add_column("Result")
    for reference in ref:
        hit = resolver(reference)
        if isinstance(hit, ResourceHandle):
            table.add_row(reference, f"[green]{hit.name}[/] [dim]{hit.url}[/]")
        else:
            table.add_row(reference, "[yellow]unresolved[/] (returned unchanged)")
    console.print(table)
