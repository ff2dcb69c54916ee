"""gltfdrop — ingestion and reference resolution for a glTF/GLB model viewer."""

from gltfdrop.ingest import (
    CompositePackage,
    HandleRegistry,
    IngestError,
    ModelPackage,
    NoPackageError,
    ResourceHandle,
    ResourceResolver,
    SinglePackage,
    SourceItem,
    UnreadableContainerError,
    classify_inputs,
    resolve,
)
from gltfdrop.session import ViewerSession

__all__ = [
    "CompositePackage",
    "HandleRegistry",
    "IngestError",
    "ModelPackage",
    "NoPackageError",
    "ResourceHandle",
    "ResourceResolver",
    "SinglePackage",
    "SourceItem",
    "UnreadableContainerError",
    "ViewerSession",
    "classify_inputs",
    "resolve",
]
