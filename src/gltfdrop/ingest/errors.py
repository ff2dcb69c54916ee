"""Ingestion error kinds.

All of them are recoverable: the caller keeps its previously active package and
may retry with new input. Unresolved references are not errors at all; the
resolver hands the original string back to the parser.
"""

from __future__ import annotations


class IngestError(Exception):
    """Base class for every ingestion failure."""


class UnreadableContainerError(IngestError):
    """Archive is corrupt, encrypted, uses unsupported compression, or is too large."""


class NoPackageError(IngestError):
    """Input holds neither a .gltf descriptor nor a .glb binary package."""

    def __init__(self, message: str = "no recognized package in input") -> None:
        super().__init__(message)


class IngestSupersededError(IngestError):
    """A newer ingestion started while this one was still gathering input."""
