"""Input shapes accepted at the ingestion boundary.

  flat selection     → items_from_files()    (relative_path absent)
  directory upload   → items_from_upload()   (relative_path per file)
  dropped folder     → traverse_tree()       (walked with an explicit worklist)
  several drop roots → collect_drop()

All of them produce the same flat SourceItem sequence for the classifier.
"""

from __future__ import annotations

import warnings
from collections import deque
from collections.abc import Iterable, Sequence
from pathlib import Path

import aiofiles
import aiofiles.os

from gltfdrop.ingest.models import SourceItem

DEFAULT_MAX_DEPTH = 32


def items_from_files(paths: Iterable[Path | str]) -> list[SourceItem]:
    """Flat file selection: the file name doubles as the reference path."""
    items: list[SourceItem] = []
    for p in map(Path, paths):
        items.append(SourceItem(name=p.name, relative_path=None, data=p.read_bytes()))
    return items


def items_from_upload(pairs: Iterable[tuple[str, Path | str]]) -> list[SourceItem]:
    """Directory upload: ``(relative_path, file_path)`` pairs, as a browser reports them."""
    items: list[SourceItem] = []
    for rel, p in pairs:
        rel = rel.replace("\\", "/")
        items.append(
            SourceItem(
                name=rel.rsplit("/", 1)[-1],
                relative_path=rel,
                data=Path(p).read_bytes(),
            )
        )
    return items


async def traverse_tree(root: Path | str, max_depth: int = DEFAULT_MAX_DEPTH) -> list[SourceItem]:
    """Flatten a dropped file or folder into SourceItems.

    A folder root contributes its own name as the first path segment
    (``model/scene.gltf``), the same shape a directory upload reports. Children
    are visited in name order. The result is complete only once the worklist
    is empty, i.e. after every subtree has been expanded.

    Directories nested deeper than *max_depth* below the root are skipped with
    a warning.
    """
    root = Path(root)
    items: list[SourceItem] = []

    if not await aiofiles.os.path.isdir(root):
        items.append(await _read_item(root, root.name))
        return items

    worklist: deque[tuple[Path, str, int]] = deque([(root, root.name + "/", 0)])
    while worklist:
        directory, prefix, depth = worklist.popleft()
        for name in sorted(await aiofiles.os.listdir(directory)):
            child = directory / name
            if await aiofiles.os.path.isdir(child):
                if depth + 1 > max_depth:
                    warnings.warn(
                        f"Skipping '{prefix}{name}/': deeper than {max_depth} levels.",
                        UserWarning,
                        stacklevel=2,
                    )
                    continue
                worklist.append((child, f"{prefix}{name}/", depth + 1))
            elif await aiofiles.os.path.isfile(child):
                items.append(await _read_item(child, prefix + name))
    return items


async def collect_drop(
    roots: Sequence[Path | str], max_depth: int = DEFAULT_MAX_DEPTH
) -> list[SourceItem]:
    """Traverse each dropped root in order and concatenate the results."""
    items: list[SourceItem] = []
    for root in roots:
        items.extend(await traverse_tree(root, max_depth=max_depth))
    return items


async def _read_item(path: Path, relative_path: str) -> SourceItem:
    async with aiofiles.open(path, "rb") as fh:
        data = await fh.read()
    return SourceItem(name=path.name, relative_path=relative_path, data=data)
