"""gltfdrop CLI entry point."""

from __future__ import annotations

import importlib.metadata
from typing import Annotated

import typer

from gltfdrop.cli.config_cmd import config_cmd
from gltfdrop.cli.inspect import inspect_cmd
from gltfdrop.cli.resolve import resolve_cmd


def _installed_version() -> str:
    try:
        return importlib.metadata.version("gltfdrop")
    except importlib.metadata.PackageNotFoundError:
        return "dev"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"gltfdrop {_installed_version()}")
        raise typer.Exit()


app = typer.Typer(
    name="gltfdrop",
    help=(
        "gltfdrop — load glTF/GLB model packages and resolve their side files.\n\n"
        "  gltfdrop inspect  Ingest files, folders or a .zip and check every reference.\n"
        "  gltfdrop resolve  Show which file a given reference string resolves to."
    ),
    add_completion=False,
)


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
) -> None:
    """gltfdrop — glTF/GLB package ingestion."""


app.command("inspect")(inspect_cmd)
app.command("resolve")(resolve_cmd)
app.command("config")(config_cmd)


@app.command("version")
def version_cmd() -> None:
    """Show the installed gltfdrop version."""
    typer.echo(f"gltfdrop {_installed_version()}")


if __name__ == "__main__":
    app()
