"""Viewer session — owns the single active model package.

Swapping is the only way the active package changes:

    new package fully built  →  reference swapped  →  old handles revoked

Overlapping ingestions (a second drop while an archive from the first is
still being expanded) are ordered by a generation counter: the latest gesture
wins. An ingestion that finishes gathering its input after a newer one has
started raises IngestSupersededError before creating any handle, so two
packages are never live at the same time and a slow archive cannot clobber a
newer drop.

Usage:
    session = ViewerSession()
    package = await session.ingest_drop([Path("~/Downloads/helmet.zip")])
    resolver = session.resolver()
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Sequence
from pathlib import Path

import aiofiles

from gltfdrop.config import GltfdropConfig
from gltfdrop.ingest.classify import classify_inputs
from gltfdrop.ingest.container import expand_async
from gltfdrop.ingest.errors import IngestSupersededError
from gltfdrop.ingest.handles import HandleRegistry, ResourceHandle
from gltfdrop.ingest.kinds import is_archive
from gltfdrop.ingest.models import CompositePackage, ModelPackage, SourceItem
from gltfdrop.ingest.resolver import ResourceResolver
from gltfdrop.ingest.sources import collect_drop


class ViewerSession:
    """Holds the active package and sequences every change to it."""

    def __init__(
        self,
        registry: HandleRegistry | None = None,
        config: GltfdropConfig | None = None,
    ) -> None:
        self.registry = registry if registry is not None else HandleRegistry()
        self.config = config if config is not None else GltfdropConfig()
        self._active: ModelPackage | None = None
        self._generation = 0
        self._swap_lock = asyncio.Lock()

    @property
    def active(self) -> ModelPackage | None:
        return self._active

    # ------------------------------------------------------------------
    # Ingestion entry points
    # ------------------------------------------------------------------

    async def ingest_items(
        self, items: Sequence[SourceItem], force_single: bool = False
    ) -> ModelPackage:
        """Classify already-gathered items and activate the result."""
        return await self._ingest(_ready(list(items)), force_single)

    async def ingest_archive(self, archive: bytes) -> ModelPackage:
        """Expand a ZIP container and activate the package inside it."""
        return await self._ingest(self._expand(archive), force_single=False)

    async def ingest_drop(
        self, paths: Sequence[Path | str], force_single: bool = False
    ) -> ModelPackage:
        """Ingest a drop of files and/or folders.

        A drop that contains a .zip is treated as an archive drop: only the
        first archive is ingested and every other dropped path is ignored, so
        one gesture always yields exactly one expansion. Otherwise folders are
        walked and every file is classified together.
        """
        archive = next((Path(p) for p in paths if is_archive(str(p))), None)
        if archive is not None:
            return await self._ingest(self._expand_file(archive), force_single=False)
        return await self._ingest(
            collect_drop(paths, max_depth=self.config.ingest.max_depth), force_single
        )

    # ------------------------------------------------------------------
    # Teardown + access
    # ------------------------------------------------------------------

    def reset(self) -> int:
        """Deactivate the current package; return how many handles were revoked."""
        old, self._active = self._active, None
        self._generation += 1  # in-flight ingestions are now stale
        return self.registry.revoke_all(old.handles) if old is not None else 0

    def resolver(self) -> ResourceResolver | None:
        """Resolution capability for the active composite package, else None."""
        if isinstance(self._active, CompositePackage):
            return ResourceResolver(self._active.index)
        return None

    def read(self, handle: ResourceHandle) -> bytes:
        return self.registry.read(handle)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _expand_file(self, path: Path) -> list[SourceItem]:
        async with aiofiles.open(path, "rb") as fh:
            archive = await fh.read()
        return await self._expand(archive)

    async def _expand(self, archive: bytes) -> list[SourceItem]:
        ingest = self.config.ingest
        return await expand_async(
            archive,
            max_entries=ingest.max_archive_entries,
            max_bytes=ingest.max_archive_bytes,
            exclude=ingest.exclude,
        )

    async def _ingest(
        self, gather: Awaitable[list[SourceItem]], force_single: bool
    ) -> ModelPackage:
        self._generation += 1
        ticket = self._generation

        items = await gather  # errors propagate; the active package is untouched

        async with self._swap_lock:
            if ticket != self._generation:
                raise IngestSupersededError(
                    "A newer ingestion started before this one finished."
                )
            package = classify_inputs(items, self.registry, force_single=force_single)
            old, self._active = self._active, package
            if old is not None:
                self.registry.revoke_all(old.handles)
        return package


async def _ready(items: list[SourceItem]) -> list[SourceItem]:
    return items
