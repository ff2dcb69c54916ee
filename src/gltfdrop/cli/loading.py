"""Shared ingestion step for the inspect and resolve commands."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console

from gltfdrop.cli.errors import (
    err_invalid_config,
    err_no_package,
    err_path_not_found,
    err_unreadable_container,
)
from gltfdrop.config import ConfigError, load_config
from gltfdrop.ingest.errors import NoPackageError, UnreadableContainerError
from gltfdrop.ingest.models import ModelPackage
from gltfdrop.session import ViewerSession


def load_package(
    console: Console, paths: list[Path], force_single: bool = False
) -> tuple[ViewerSession, ModelPackage]:
    """Ingest *paths* like a drop onto the viewer, or exit with a message."""
    for p in paths:
        if not p.exists():
            console.print(err_path_not_found(str(p)))
            raise typer.Exit(1)

    try:
        cfg = load_config()
    except ConfigError as exc:
        console.print(err_invalid_config(str(exc)))
        raise typer.Exit(1) from exc

    session = ViewerSession(config=cfg)
    try:
        package = asyncio.run(session.ingest_drop(paths, force_single=force_single))
    except NoPackageError as exc:
        console.print(err_no_package())
        raise typer.Exit(1) from exc
    except UnreadableContainerError as exc:
        console.print(err_unreadable_container(str(exc)))
        raise typer.Exit(1) from exc
    return session, package
