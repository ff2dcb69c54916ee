"""gltfdrop config — print the effective, fully merged configuration."""

from __future__ import annotations

import dataclasses

import typer
import yaml
from rich.console import Console

from gltfdrop.cli.errors import err_invalid_config
from gltfdrop.config import ConfigError, load_config

console = Console()


def config_cmd() -> None:
    """Show the merged configuration (defaults → global → project → env)."""
    try:
        cfg = load_config()
    except ConfigError as exc:
        console.print(err_invalid_config(str(exc)))
        raise typer.Exit(1) from exc
    typer.echo(yaml.safe_dump(dataclasses.asdict(cfg), sort_keys=False).rstrip())
