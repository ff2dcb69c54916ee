"""Container expander — ZIP archive → flat list of SourceItems.

Strategy:
- Open the archive with stdlib ``zipfile`` from an in-memory buffer.
- Walk ``infolist()`` in archive order; directory entries are skipped.
- Each file entry becomes a SourceItem whose ``relative_path`` is the full
  in-archive path and whose ``name`` is its basename.

Entry order is significant: it becomes the iteration order of the resource
index, so duplicate basenames inside an archive follow the same first-wins rule
as loose files. No resource handles are created here.
"""

from __future__ import annotations

import asyncio
import fnmatch
import io
import zipfile
import zlib
from collections.abc import Sequence

from gltfdrop.ingest.errors import UnreadableContainerError
from gltfdrop.ingest.models import SourceItem

DEFAULT_MAX_ENTRIES = 10_000
DEFAULT_MAX_BYTES = 1 << 30  # 1 GiB of declared uncompressed content


def expand(
    archive: bytes,
    *,
    max_entries: int = DEFAULT_MAX_ENTRIES,
    max_bytes: int = DEFAULT_MAX_BYTES,
    exclude: Sequence[str] = (),
) -> list[SourceItem]:
    """Decompress *archive* and return its file entries as SourceItems.

    Args:
        archive: Raw bytes of a ZIP container.
        max_entries: Upper bound on file entries.
        max_bytes: Upper bound on the sum of declared uncompressed sizes.
        exclude: fnmatch patterns matched against each entry's full path.

    Returns:
        SourceItems in archive entry order.

    Raises:
        UnreadableContainerError: corrupt or encrypted archive, unsupported
            compression method, CRC mismatch, or a limit exceeded. Nothing is
            returned in that case — expansion is all or nothing.
    """
    try:
        zf = zipfile.ZipFile(io.BytesIO(archive), "r")
    except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError) as exc:
        raise UnreadableContainerError(f"Not a readable ZIP archive: {exc}") from exc

    with zf:
        entries = [info for info in zf.infolist() if not info.is_dir()]
        entries = [
            info
            for info in entries
            if not any(fnmatch.fnmatch(info.filename, pat) for pat in exclude)
        ]
        _check_limits(entries, max_entries=max_entries, max_bytes=max_bytes)

        items: list[SourceItem] = []
        for info in entries:
            if info.flag_bits & 0x1:
                raise UnreadableContainerError(
                    f"Encrypted entry not supported: {info.filename!r}"
                )
            try:
                data = zf.read(info)
            except (zipfile.BadZipFile, NotImplementedError, zlib.error, EOFError) as exc:
                raise UnreadableContainerError(
                    f"Cannot decompress {info.filename!r}: {exc}"
                ) from exc
            path = info.filename.replace("\\", "/")
            items.append(
                SourceItem(name=path.rsplit("/", 1)[-1], relative_path=path, data=data)
            )
    return items


async def expand_async(archive: bytes, **kwargs) -> list[SourceItem]:
    """Run :func:`expand` in a worker thread so the event loop stays responsive."""
    return await asyncio.to_thread(expand, archive, **kwargs)


def _check_limits(entries: list[zipfile.ZipInfo], max_entries: int, max_bytes: int) -> None:
    if len(entries) > max_entries:
        raise UnreadableContainerError(
            f"Archive has {len(entries)} files; the limit is {max_entries}."
        )
    total = sum(info.file_size for info in entries)
    if total > max_bytes:
        raise UnreadableContainerError(
            f"Archive expands to {total:,} bytes; the limit is {max_bytes:,}."
        )
