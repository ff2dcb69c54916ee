"""Reference resolver — descriptor reference string → resource handle.

Fallback chain, first hit wins:

  1. strip one leading './' or '/'            → normalized
  2. exact normalized
  3. exact lower(normalized)
  4. exact './' + normalized
  5. percent-decoded, then its lowercase      (decode failure → next step)
  6. basename(normalized), then its lowercase
  7. linear scan: first key ending in '/' + normalized or '/' + basename
     (each also compared case-insensitively)
  8. give up: the reference is returned unchanged

Step 7 is a full scan over the index. Packages hold tens to low hundreds of side
files, so there is no suffix index.

Unresolved references are not errors here. The caller receives the original
string and any fetch failure surfaces in the parser that requested it.
"""

from __future__ import annotations

from collections.abc import Mapping

from gltfdrop.ingest.handles import ResourceHandle
from gltfdrop.ingest.paths import basename, percent_decode, strip_leading


def resolve(index: Mapping[str, ResourceHandle], reference: str) -> ResourceHandle | str:
    """Return the best-matching handle for *reference*, or *reference* itself.

    Read-only over *index*; never raises.
    """
    if reference.startswith("data:"):
        return reference

    normalized = strip_leading(reference)
    lower = normalized.lower()

    for key in (normalized, lower, "./" + normalized):
        if key in index:
            return index[key]

    try:
        decoded = percent_decode(normalized)
    except ValueError:
        pass
    else:
        for key in (decoded, decoded.lower()):
            if key in index:
                return index[key]

    base = basename(normalized)
    base_lower = base.lower()
    for key in (base, base_lower):
        if key in index:
            return index[key]

    path_suffix = "/" + normalized
    path_suffix_lower = "/" + lower
    base_suffix = "/" + base
    base_suffix_lower = "/" + base_lower
    for key, handle in index.items():
        key_lower = key.lower()
        if (
            key.endswith(path_suffix)
            or key_lower.endswith(path_suffix_lower)
            or key.endswith(base_suffix)
            or key_lower.endswith(base_suffix_lower)
        ):
            return handle

    return reference


class ResourceResolver:
    """Resolution capability handed to a model parser.

    The parser calls it synchronously for every side-file URL it needs:

        resolver = ResourceResolver(package.index)
        url = resolver.url_for("textures/diffuse.png")
    """

    def __init__(self, index: Mapping[str, ResourceHandle]) -> None:
        self._index = index

    def __call__(self, reference: str) -> ResourceHandle | str:
        return resolve(self._index, reference)

    def url_for(self, reference: str) -> str:
        """Handle URL for *reference*, or *reference* unchanged when unresolved."""
        hit = resolve(self._index, reference)
        return hit.url if isinstance(hit, ResourceHandle) else hit
