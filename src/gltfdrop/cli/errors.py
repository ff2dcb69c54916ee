"""gltfdrop rich error messages — actionable feedback.

Every error shown to the user must contain:
  1. What went wrong (clear cause)
  2. The exact action the user should take to fix it

Usage:
    from gltfdrop.cli.errors import err_no_package
    console.print(err_no_package())
    raise typer.Exit(1)
"""

from __future__ import annotations


def err_path_not_found(path: str) -> str:
    """Input path does not exist."""
    return (
        f"[red]Error:[/] Path not found: '{path}'\n"
        "  Check the spelling, or use an absolute path."
    )


def err_no_package() -> str:
    """Input contains neither .gltf nor .glb — a warning, not a crash."""
    return (
        "[yellow]Warning:[/] No .gltf or .glb found in the input.\n"
        "  Drop a .glb file, a folder containing a .gltf, or a .zip of that folder."
    )


def err_unreadable_container(detail: str) -> str:
    """Archive could not be expanded."""
    return (
        f"[red]Error:[/] Cannot read archive: {detail}\n"
        "  Re-create the .zip with standard deflate compression and no password,\n"
        "  or drop the extracted folder instead."
    )


def err_invalid_config(detail: str) -> str:
    """Config file or environment override is invalid."""
    return (
        f"[red]Error:[/] Invalid configuration: {detail}\n"
        "  Fix the value in gltfdrop.yaml or ~/.gltfdrop/config.yaml,\n"
        "  or unset the GLTFDROP_* environment variable."
    )


def err_single_has_no_references(name: str) -> str:
    """resolve was pointed at a self-contained .glb."""
    return (
        f"[red]Error:[/] '{name}' is a self-contained binary package; it has no side files.\n"
        "  Use a .gltf folder or .zip, or run:  gltfdrop inspect <path>"
    )


def err_bad_descriptor(name: str, detail: str) -> str:
    """The root descriptor could not be scanned for references."""
    return (
        f"[yellow]Warning:[/] Could not read references from '{name}': {detail}\n"
        "  Check that the file is valid glTF JSON."
    )


def warn_unresolved(count: int) -> str:
    """Some descriptor references did not match any uploaded file."""
    return (
        f"[yellow]⚠[/] {count} reference(s) did not match any file in the package.\n"
        "  Include the missing files, or keep the folder structure the .gltf expects."
    )
