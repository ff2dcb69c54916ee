"""Domain models for the ingestion layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

from gltfdrop.ingest.handles import ResourceHandle
from gltfdrop.ingest.kinds import AssetInfo, classify

if TYPE_CHECKING:
    from gltfdrop.ingest.index import ResourceIndex


@dataclass(frozen=True)
class SourceItem:
    name: str
    relative_path: str | None
    data: bytes = field(repr=False)
    size: int = -1  # -1 → len(data)

    def __post_init__(self) -> None:
        if self.size < 0:
            object.__setattr__(self, "size", len(self.data))

    @property
    def effective_path(self) -> str:
        """relative_path when present, else the bare file name."""
        return self.relative_path or self.name

    @property
    def info(self) -> AssetInfo:
        return classify(self.name)


@dataclass(frozen=True)
class SinglePackage:
    """A self-contained .glb: one handle, nothing to resolve."""

    handle: ResourceHandle
    name: str

    @property
    def handles(self) -> tuple[ResourceHandle, ...]:
        return (self.handle,)


@dataclass(frozen=True)
class CompositePackage:
    """A .gltf descriptor plus the side files indexed for reference lookup.

    Attributes:
        root_handle: Handle of the descriptor itself.
        root_name: File name of the descriptor.
        index: Multi-key index over every item of the package.
        owned: Every handle issued for this package (index handles plus a
            fallback root handle, if one had to be created).
    """

    root_handle: ResourceHandle
    root_name: str
    index: ResourceIndex
    owned: tuple[ResourceHandle, ...] = ()

    @property
    def handles(self) -> tuple[ResourceHandle, ...]:
        return self.owned


ModelPackage = Union[SinglePackage, CompositePackage]
