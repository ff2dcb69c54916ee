"""Extension classifier — file name → asset kind + content type.

Pure suffix lookup; unknown extensions degrade to ``application/octet-stream``
instead of raising.

Usage:
    info = classify("textures/Diffuse.PNG")
    info.kind          # AssetKind.TEXTURE
    info.content_type  # "image/png"
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AssetKind(str, Enum):
    DESCRIPTOR = "descriptor"
    BINARY_PACKAGE = "binary-package"
    BUFFER = "buffer"
    TEXTURE = "texture"
    ARCHIVE = "archive"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class AssetInfo:
    kind: AssetKind
    content_type: str


_OCTET_STREAM = "application/octet-stream"

_BY_SUFFIX: dict[str, AssetInfo] = {
    "gltf": AssetInfo(AssetKind.DESCRIPTOR, "model/gltf+json"),
    "glb": AssetInfo(AssetKind.BINARY_PACKAGE, "model/gltf-binary"),
    "bin": AssetInfo(AssetKind.BUFFER, _OCTET_STREAM),
    "png": AssetInfo(AssetKind.TEXTURE, "image/png"),
    "jpg": AssetInfo(AssetKind.TEXTURE, "image/jpeg"),
    "jpeg": AssetInfo(AssetKind.TEXTURE, "image/jpeg"),
    "webp": AssetInfo(AssetKind.TEXTURE, "image/webp"),
    "ktx2": AssetInfo(AssetKind.TEXTURE, "image/ktx2"),
    "zip": AssetInfo(AssetKind.ARCHIVE, "application/zip"),
}

_UNKNOWN = AssetInfo(AssetKind.UNKNOWN, _OCTET_STREAM)


def _suffix(name: str) -> str:
    """Lowercased text after the last '.' of the final path segment ('' if none)."""
    base = name.rsplit("/", 1)[-1]
    if "." not in base:
        return ""
    return base.rsplit(".", 1)[-1].lower()


def classify(name: str) -> AssetInfo:
    """Return the asset kind and content type for *name*. Never raises."""
    return _BY_SUFFIX.get(_suffix(name), _UNKNOWN)


def is_descriptor(name: str) -> bool:
    return classify(name).kind is AssetKind.DESCRIPTOR


def is_binary_package(name: str) -> bool:
    return classify(name).kind is AssetKind.BINARY_PACKAGE


def is_archive(name: str) -> bool:
    return classify(name).kind is AssetKind.ARCHIVE
