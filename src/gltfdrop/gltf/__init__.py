"""glTF descriptor helpers."""

from gltfdrop.gltf.descriptor import (
    DescriptorError,
    GlbHeader,
    descriptor_references,
    export_file_name,
    read_glb_header,
)

__all__ = [
    "DescriptorError",
    "GlbHeader",
    "descriptor_references",
    "export_file_name",
    "read_glb_header",
]
