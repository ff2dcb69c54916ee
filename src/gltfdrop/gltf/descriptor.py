"""Thin glTF helpers for the CLI.

Full descriptor decoding belongs to the rendering side. These helpers only do
what the command line needs to exercise the resolver: list the external URIs a
.gltf declares, sanity-check a .glb header, and name the exported file.
"""

from __future__ import annotations

import json
import re
import struct
from dataclasses import dataclass

_GLB_MAGIC = b"glTF"
_GLB_HEADER = struct.Struct("<4sII")  # magic, version, total length
_MODEL_SUFFIX_RE = re.compile(r"\.(glb|gltf)$", re.IGNORECASE)


class DescriptorError(ValueError):
    """Raised when a descriptor or binary package cannot be read."""


@dataclass(frozen=True)
class GlbHeader:
    version: int
    length: int


def descriptor_references(data: bytes) -> list[str]:
    """Return external URIs from ``buffers[]`` and ``images[]`` in file order.

    Embedded ``data:`` URIs are skipped; repeated URIs are reported once.

    Raises:
        DescriptorError: if *data* is not a JSON object.
    """
    try:
        doc = json.loads(data.decode("utf-8-sig"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DescriptorError(f"Descriptor is not valid JSON: {exc}") from exc
    if not isinstance(doc, dict):
        raise DescriptorError("Descriptor root must be a JSON object.")

    refs: list[str] = []
    seen: set[str] = set()
    for section in ("buffers", "images"):
        entries = doc.get(section) or []
        if not isinstance(entries, list):
            continue
        for entry in entries:
            uri = entry.get("uri") if isinstance(entry, dict) else None
            if not isinstance(uri, str) or uri.startswith("data:") or uri in seen:
                continue
            seen.add(uri)
            refs.append(uri)
    return refs


def read_glb_header(data: bytes) -> GlbHeader:
    """Parse the 12-byte GLB header.

    Raises:
        DescriptorError: on a short buffer or a missing ``glTF`` magic.
    """
    if len(data) < _GLB_HEADER.size:
        raise DescriptorError(f"GLB too short: {len(data)} bytes.")
    magic, version, length = _GLB_HEADER.unpack_from(data)
    if magic != _GLB_MAGIC:
        raise DescriptorError(f"Not a GLB file (magic {magic!r}).")
    return GlbHeader(version=version, length=length)


def export_file_name(name: str, suffix: str = "_modified") -> str:
    """``helmet.gltf`` → ``helmet_modified.glb``."""
    return f"{_MODEL_SUFFIX_RE.sub('', name)}{suffix}.glb"
