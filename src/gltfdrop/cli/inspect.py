"""gltfdrop inspect — ingest a drop and check every descriptor reference.

Usage:
  gltfdrop inspect helmet/                 # folder with a .gltf + side files
  gltfdrop inspect helmet.zip --keys       # also list every index key
  gltfdrop inspect model.glb model.gltf --glb
  gltfdrop inspect helmet/ --strict        # exit 2 if any reference is unresolved
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from gltfdrop.cli.errors import err_bad_descriptor, warn_unresolved
from gltfdrop.cli.loading import load_package
from gltfdrop.gltf.descriptor import (
    DescriptorError,
    descriptor_references,
    export_file_name,
    read_glb_header,
)
from gltfdrop.ingest.handles import ResourceHandle
from gltfdrop.ingest.models import CompositePackage, SinglePackage
from gltfdrop.session import ViewerSession

console = Console()


def inspect_cmd(
    paths: Annotated[
        list[Path],
        typer.Argument(help="Files, folders or a single .zip, as dropped on the viewer."),
    ],
    glb: Annotated[
        bool,
        typer.Option("--glb", help="Force the single-binary path (first .glb wins)."),
    ] = False,
    keys: Annotated[
        bool,
        typer.Option("--keys", help="List every lookup key in the resource index."),
    ] = False,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Exit with status 2 if any reference is unresolved."),
    ] = False,
) -> None:
    """Load a model package and report how its references resolve."""
    session, package = load_package(console, paths, force_single=glb)
    suffix = session.config.export.suffix

    if isinstance(package, SinglePackage):
        _show_single(session, package, suffix)
        return

    _show_composite(package, suffix)
    if keys:
        _show_keys(package)

    unresolved = _show_references(session, package)
    if unresolved:
        console.print(warn_unresolved(unresolved))
        if strict:
            raise typer.Exit(2)


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------


def _show_single(session: ViewerSession, package: SinglePackage, suffix: str) -> None:
    lines = [
        "Package:  [bold]single binary[/]",
        f"File:     {package.name} ({package.handle.size:,} bytes)",
        f"Export:   {export_file_name(package.name, suffix)}",
    ]
    try:
        header = read_glb_header(session.read(package.handle))
        lines.append(f"GLB:      version {header.version}, {header.length:,} bytes declared")
    except DescriptorError as exc:
        lines.append(f"GLB:      [yellow]✗ {exc}[/]")
    console.print(Panel("\n".join(lines), title="[bold]Package[/]", expand=False))


def _show_composite(package: CompositePackage, suffix: str) -> None:
    lines = [
        "Package:  [bold]descriptor + side files[/]",
        f"Root:     {package.root_name}",
        f"Files:    {len(package.handles)}  |  Keys: {len(package.index)}",
        f"Export:   {export_file_name(package.root_name, suffix)}",
    ]
    console.print(Panel("\n".join(lines), title="[bold]Package[/]", expand=False))


def _show_keys(package: CompositePackage) -> None:
    table = Table(title="Resource index", show_lines=False)
    table.add_column("Key")
    table.add_column("File", style="dim")
    for key, handle in package.index.items():
        table.add_row(key, handle.name)
    console.print(table)


def _show_references(session: ViewerSession, package: CompositePackage) -> int:
    """Print one row per descriptor reference; return the unresolved count."""
    try:
        refs = descriptor_references(session.read(package.root_handle))
    except DescriptorError as exc:
        console.print(err_bad_descriptor(package.root_name, str(exc)))
        return 0

    if not refs:
        console.print("[dim]Descriptor declares no external references.[/]")
        return 0

    resolver = session.resolver()
    table = Table(title="References")
    table.add_column("Status", width=3)
    table.add_column("Reference")
    table.add_column("Resolved to", style="dim")

    unresolved = 0
    for ref in refs:
        hit = resolver(ref)
        if isinstance(hit, ResourceHandle):
            table.add_row("[green]✓[/]", ref, f"{hit.name} ({hit.content_type})")
        else:
            unresolved += 1
            table.add_row("[red]✗[/]", ref, "unresolved")
    console.print(table)
    return unresolved
