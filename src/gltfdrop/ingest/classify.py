"""Ingestion classifier — decide what kind of package a set of files is.

Decision order:
  1. force_single and any .glb   → SinglePackage(first .glb)
  2. any .gltf                   → CompositePackage rooted at the first .gltf
  3. any .glb                    → SinglePackage(first .glb)
  4. otherwise                   → NoPackageError

A drop that holds both a .glb and a .gltf therefore loads the descriptor unless
the caller explicitly asked for the single-binary path.
"""

from __future__ import annotations

from collections.abc import Sequence

from gltfdrop.ingest.errors import NoPackageError
from gltfdrop.ingest.handles import HandleRegistry, ResourceHandle
from gltfdrop.ingest.index import ResourceIndex, build_index
from gltfdrop.ingest.kinds import is_binary_package, is_descriptor
from gltfdrop.ingest.models import CompositePackage, ModelPackage, SinglePackage, SourceItem


def classify_inputs(
    items: Sequence[SourceItem],
    registry: HandleRegistry,
    force_single: bool = False,
) -> ModelPackage:
    """Build a package from *items*, creating its handles in *registry*.

    Raises:
        NoPackageError: neither a descriptor nor a binary package is present.
            No handles are created in that case.
    """
    first_glb = next((it for it in items if is_binary_package(it.name)), None)

    if force_single and first_glb is not None:
        return _single(first_glb, registry)

    root_pos = next((i for i, it in enumerate(items) if is_descriptor(it.name)), None)
    if root_pos is not None:
        return _composite(root_pos, items, registry)

    if first_glb is not None:
        return _single(first_glb, registry)

    raise NoPackageError()


def _single(item: SourceItem, registry: HandleRegistry) -> SinglePackage:
    handle = registry.create(item.data, item.name, item.info.content_type)
    return SinglePackage(handle=handle, name=item.name)


def _composite(
    root_pos: int, items: Sequence[SourceItem], registry: HandleRegistry
) -> CompositePackage:
    root = items[root_pos]
    build = build_index(items, registry)
    own = build.handles[root_pos]
    owned = list(build.handles)

    root_handle = _lookup_own_key(root, own, build.index)
    if root_handle is None:
        # Every own key was claimed by an earlier item; give the root its own handle.
        root_handle = registry.create(root.data, root.name, root.info.content_type)
        owned.append(root_handle)

    return CompositePackage(
        root_handle=root_handle,
        root_name=root.name,
        index=build.index,
        owned=tuple(owned),
    )


def _lookup_own_key(
    root: SourceItem, own: ResourceHandle, index: ResourceIndex
) -> ResourceHandle | None:
    path = root.effective_path
    for key in (path, path.lower(), root.name, root.name.lower()):
        if index.get(key) is own:
            return own
    return None
