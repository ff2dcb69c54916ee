"""Multi-key resource index — every normalized form of a path → one handle.

For an item with effective path ``p`` the handle is registered under, in order:

    p, lower(p), basename(p), lower(basename(p)), ./p, ./lower(p),
    decode(p), lower(decode(p)), ./decode(p), ./lower(decode(p))

Insertion is set-if-absent. When two items normalize to the same key (two
``diffuse.png`` files in different folders, say) the first item in input order
keeps that key for the lifetime of the package; the later one stays reachable
through its fuller path keys. This tie-break is deterministic and is not an
error.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from gltfdrop.ingest.handles import HandleRegistry, ResourceHandle
from gltfdrop.ingest.models import SourceItem
from gltfdrop.ingest.paths import basename, percent_decode


class ResourceIndex(Mapping[str, ResourceHandle]):
    """Read-only, insertion-ordered key → handle mapping.

    Built once by :func:`build_index`; safe to read from many callers at once.
    """

    def __init__(self, entries: Mapping[str, ResourceHandle] | None = None) -> None:
        self._entries: dict[str, ResourceHandle] = dict(entries or {})

    def __getitem__(self, key: str) -> ResourceHandle:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ResourceIndex({len(self._entries)} keys)"

    def as_mapping(self) -> Mapping[str, ResourceHandle]:
        return MappingProxyType(self._entries)


@dataclass(frozen=True)
class IndexBuild:
    """Result of :func:`build_index`: ``handles[i]`` belongs to ``items[i]``."""

    index: ResourceIndex
    handles: tuple[ResourceHandle, ...]


def reference_keys(path: str) -> list[str]:
    """All lookup keys for *path*, in registration order (duplicates kept).

    Decoded keys are omitted when *path* does not percent-decode cleanly.
    """
    lower = path.lower()
    base = basename(path)
    keys = [path, lower, base, base.lower(), "./" + path, "./" + lower]
    try:
        decoded = percent_decode(path)
    except ValueError:
        return keys
    decoded_lower = decoded.lower()
    keys += [decoded, decoded_lower, "./" + decoded, "./" + decoded_lower]
    return keys


def build_index(items: Sequence[SourceItem], registry: HandleRegistry) -> IndexBuild:
    """Create one handle per item and index it under every reference key."""
    entries: dict[str, ResourceHandle] = {}
    handles: list[ResourceHandle] = []
    for item in items:
        handle = registry.create(item.data, item.name, item.info.content_type)
        handles.append(handle)
        _register(entries, reference_keys(item.effective_path), handle)
    return IndexBuild(index=ResourceIndex(entries), handles=tuple(handles))


def _register(
    entries: dict[str, ResourceHandle], keys: Iterable[str], handle: ResourceHandle
) -> None:
    for key in keys:
        entries.setdefault(key, handle)
