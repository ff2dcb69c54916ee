"""gltfdrop ingestion core — classifier, handle registry, index, resolver."""

from gltfdrop.ingest.classify import classify_inputs
from gltfdrop.ingest.container import expand, expand_async
from gltfdrop.ingest.errors import (
    IngestError,
    IngestSupersededError,
    NoPackageError,
    UnreadableContainerError,
)
from gltfdrop.ingest.handles import HandleRegistry, ResourceHandle, RevokedHandleError
from gltfdrop.ingest.index import IndexBuild, ResourceIndex, build_index
from gltfdrop.ingest.kinds import AssetInfo, AssetKind, classify
from gltfdrop.ingest.models import CompositePackage, ModelPackage, SinglePackage, SourceItem
from gltfdrop.ingest.resolver import ResourceResolver, resolve

__all__ = [
    "AssetInfo",
    "AssetKind",
    "CompositePackage",
    "HandleRegistry",
    "IndexBuild",
    "IngestError",
    "IngestSupersededError",
    "ModelPackage",
    "NoPackageError",
    "ResourceHandle",
    "ResourceIndex",
    "ResourceResolver",
    "RevokedHandleError",
    "SinglePackage",
    "SourceItem",
    "UnreadableContainerError",
    "build_index",
    "classify",
    "classify_inputs",
    "expand",
    "expand_async",
    "resolve",
]
