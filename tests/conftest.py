"""Shared pytest fixtures."""

from __future__ import annotations

import io
import zipfile
from collections.abc import Callable

import pytest

from gltfdrop.ingest.handles import HandleRegistry


@pytest.fixture
def registry() -> HandleRegistry:
    """Fresh handle registry per test."""
    return HandleRegistry()


@pytest.fixture
def make_zip() -> Callable[..., bytes]:
    """Build an in-memory ZIP from ``{path: bytes}`` (insertion order kept).

    Paths ending in '/' are written as directory entries.
    """

    def _build(entries: dict[str, bytes], compression: int = zipfile.ZIP_DEFLATED) -> bytes:
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w", compression=compression) as zf:
            for path, data in entries.items():
                if path.endswith("/"):
                    zf.writestr(zipfile.ZipInfo(path), b"")
                else:
                    zf.writestr(path, data)
        return buf.getvalue()

    return _build
