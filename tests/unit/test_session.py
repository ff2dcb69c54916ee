"""Tests for the viewer session: activation, teardown, overlap guard."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from gltfdrop.config import GltfdropConfig
from gltfdrop.ingest.errors import (
    IngestSupersededError,
    NoPackageError,
    UnreadableContainerError,
)
from gltfdrop.ingest.handles import HandleRegistry, ResourceHandle
from gltfdrop.ingest.models import CompositePackage, SinglePackage, SourceItem
from gltfdrop.session import ViewerSession


class _CountingRegistry(HandleRegistry):
    """Registry that records every successful revoke per handle id."""

    def __init__(self) -> None:
        super().__init__()
        self.revocations: dict[str, int] = {}

    def revoke(self, handle: ResourceHandle) -> bool:
        revoked = super().revoke(handle)
        if revoked:
            self.revocations[handle.id] = self.revocations.get(handle.id, 0) + 1
        return revoked


def _item(path: str, data: bytes | None = None) -> SourceItem:
    return SourceItem(
        name=path.rsplit("/", 1)[-1],
        relative_path=path,
        data=data if data is not None else path.encode(),
    )


def _gltf_items(prefix: str = "model") -> list[SourceItem]:
    return [
        _item(f"{prefix}/scene.gltf", b'{"buffers": [{"uri": "scene.bin"}]}'),
        _item(f"{prefix}/scene.bin"),
        _item(f"{prefix}/textures/diffuse.png"),
    ]


# ------------------------------------------------------------------
# Activation + teardown
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_ingest_items_activates_package() -> None:
    session = ViewerSession()
    package = await session.ingest_items(_gltf_items())
    assert session.active is package
    assert isinstance(package, CompositePackage)


@pytest.mark.asyncio
async def test_new_package_revokes_previous_exactly_once() -> None:
    registry = _CountingRegistry()
    session = ViewerSession(registry=registry)

    first = await session.ingest_items(_gltf_items("first"))
    second = await session.ingest_items(_gltf_items("second"))

    assert session.active is second
    assert all(registry.revocations.get(h.id) == 1 for h in first.handles)
    assert not any(registry.is_live(h) for h in first.handles)
    assert all(registry.is_live(h) for h in second.handles)
    assert len(registry) == len(second.handles)


@pytest.mark.asyncio
async def test_failed_ingestion_leaves_previous_package() -> None:
    session = ViewerSession()
    first = await session.ingest_items([_item("scene.glb")])

    with pytest.raises(NoPackageError):
        await session.ingest_items([_item("texture.png")])

    assert session.active is first
    assert session.registry.is_live(first.handle)
    assert len(session.registry) == 1


@pytest.mark.asyncio
async def test_unreadable_archive_leaves_previous_package() -> None:
    session = ViewerSession()
    first = await session.ingest_items([_item("scene.glb")])

    with pytest.raises(UnreadableContainerError):
        await session.ingest_archive(b"not a zip")

    assert session.active is first
    assert len(session.registry) == 1


@pytest.mark.asyncio
async def test_reset_revokes_everything() -> None:
    session = ViewerSession()
    package = await session.ingest_items(_gltf_items())
    assert session.reset() == len(package.handles)
    assert session.active is None
    assert len(session.registry) == 0
    assert session.reset() == 0


# ------------------------------------------------------------------
# Resolver capability
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_resolver_for_composite() -> None:
    session = ViewerSession()
    await session.ingest_items(_gltf_items())
    resolver = session.resolver()
    hit = resolver("./textures/diffuse.png")
    assert isinstance(hit, ResourceHandle)
    assert session.read(hit) == b"model/textures/diffuse.png"


@pytest.mark.asyncio
async def test_resolver_none_for_single() -> None:
    session = ViewerSession()
    await session.ingest_items([_item("scene.glb")])
    assert session.resolver() is None


def test_resolver_none_when_idle() -> None:
    assert ViewerSession().resolver() is None


# ------------------------------------------------------------------
# Archives + drops
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_ingest_archive_composite(make_zip) -> None:
    archive = make_zip(
        {"root.gltf": b"{}", "root.bin": b"b", "textures/diffuse.png": b"p"}
    )
    session = ViewerSession()
    package = await session.ingest_archive(archive)

    assert isinstance(package, CompositePackage)
    assert package.root_name == "root.gltf"
    resolver = session.resolver()
    assert resolver("textures/diffuse.png").name == "diffuse.png"
    assert resolver("./textures/diffuse.png").name == "diffuse.png"


@pytest.mark.asyncio
async def test_ingest_archive_single_glb(make_zip) -> None:
    session = ViewerSession()
    package = await session.ingest_archive(make_zip({"models/car.glb": b"glTF"}))
    assert isinstance(package, SinglePackage)
    assert package.name == "car.glb"


@pytest.mark.asyncio
async def test_ingest_archive_respects_config_limits(make_zip) -> None:
    cfg = GltfdropConfig()
    cfg.ingest.max_archive_entries = 1
    session = ViewerSession(config=cfg)
    with pytest.raises(UnreadableContainerError):
        await session.ingest_archive(make_zip({"a.gltf": b"{}", "a.bin": b"b"}))
    assert session.active is None


@pytest.mark.asyncio
async def test_ingest_drop_folder(tmp_path: Path) -> None:
    folder = tmp_path / "helmet"
    (folder / "textures").mkdir(parents=True)
    (folder / "scene.gltf").write_bytes(b"{}")
    (folder / "textures" / "diffuse.png").write_bytes(b"p")

    session = ViewerSession()
    package = await session.ingest_drop([folder])
    assert isinstance(package, CompositePackage)
    assert session.resolver()("textures/diffuse.png").name == "diffuse.png"


@pytest.mark.asyncio
async def test_ingest_drop_zip_takes_priority(tmp_path: Path, make_zip) -> None:
    (tmp_path / "loose.glb").write_bytes(b"glTF")
    archive = tmp_path / "pack.zip"
    archive.write_bytes(make_zip({"scene.gltf": b"{}"}))

    session = ViewerSession()
    package = await session.ingest_drop([tmp_path / "loose.glb", archive])
    assert isinstance(package, CompositePackage)
    assert package.root_name == "scene.gltf"


@pytest.mark.asyncio
async def test_ingest_drop_first_archive_wins(tmp_path: Path, make_zip) -> None:
    first = tmp_path / "a.zip"
    first.write_bytes(make_zip({"first.gltf": b"{}"}))
    second = tmp_path / "b.zip"
    second.write_bytes(make_zip({"second.gltf": b"{}"}))

    session = ViewerSession()
    package = await session.ingest_drop([first, second])
    assert package.root_name == "first.gltf"
    assert len(session.registry) == 1


@pytest.mark.asyncio
async def test_ingest_drop_reads_archive_without_blocking_read(
    tmp_path: Path, make_zip, monkeypatch: pytest.MonkeyPatch
) -> None:
    archive = tmp_path / "pack.zip"
    archive.write_bytes(make_zip({"scene.gltf": b"{}", "scene.bin": b"\x00"}))

    def _no_sync_read(self: Path) -> bytes:
        raise AssertionError(f"synchronous read of {self}")

    monkeypatch.setattr(Path, "read_bytes", _no_sync_read)

    session = ViewerSession()
    package = await session.ingest_drop([archive])
    assert isinstance(package, CompositePackage)
    assert package.root_name == "scene.gltf"


@pytest.mark.asyncio
async def test_ingest_drop_forced_single(tmp_path: Path) -> None:
    (tmp_path / "model.glb").write_bytes(b"glTF")
    (tmp_path / "model.gltf").write_bytes(b"{}")

    session = ViewerSession()
    package = await session.ingest_drop(
        [tmp_path / "model.glb", tmp_path / "model.gltf"], force_single=True
    )
    assert isinstance(package, SinglePackage)


# ------------------------------------------------------------------
# Overlapping ingestions
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_latest_gesture_wins_over_slow_archive() -> None:
    registry = HandleRegistry()
    session = ViewerSession(registry=registry)
    release = asyncio.Event()

    async def _slow_gather() -> list[SourceItem]:
        await release.wait()
        return _gltf_items("slow")

    slow = asyncio.create_task(session._ingest(_slow_gather(), force_single=False))
    await asyncio.sleep(0)  # let the slow ingestion take its ticket

    fast = await session.ingest_items(_gltf_items("fast"))
    release.set()

    with pytest.raises(IngestSupersededError):
        await slow

    assert session.active is fast
    assert len(registry) == len(fast.handles)  # the stale ingestion created nothing


@pytest.mark.asyncio
async def test_reset_supersedes_in_flight_ingestion() -> None:
    session = ViewerSession()
    release = asyncio.Event()

    async def _slow_gather() -> list[SourceItem]:
        await release.wait()
        return _gltf_items()

    slow = asyncio.create_task(session._ingest(_slow_gather(), force_single=False))
    await asyncio.sleep(0)
    session.reset()
    release.set()

    with pytest.raises(IngestSupersededError):
        await slow
    assert session.active is None
    assert len(session.registry) == 0


@pytest.mark.asyncio
async def test_concurrent_ingestions_never_leave_two_packages() -> None:
    registry = HandleRegistry()
    session = ViewerSession(registry=registry)

    results = await asyncio.gather(
        *(session.ingest_items(_gltf_items(f"m{i}")) for i in range(5)),
        return_exceptions=True,
    )

    packages = [r for r in results if not isinstance(r, BaseException)]
    assert packages, "at least the last ingestion must succeed"
    assert all(
        isinstance(r, IngestSupersededError) for r in results if isinstance(r, BaseException)
    )
    assert len(registry) == len(session.active.handles)
