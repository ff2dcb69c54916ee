"""Tests for gltfdrop inspect / resolve / config / version commands."""

from __future__ import annotations

import json
import struct
from pathlib import Path

import pytest
from typer.testing import CliRunner

from gltfdrop.cli.main import app

runner = CliRunner()


# ------------------------------------------------------------------
# Fixtures
# ------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every command from tmp_path so no stray gltfdrop.yaml is picked up."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("GLTFDROP_MAX_ARCHIVE_BYTES", raising=False)
    monkeypatch.delenv("GLTFDROP_MAX_DEPTH", raising=False)


def _gltf_folder(root: Path, images: list[str], files: list[str]) -> Path:
    folder = root / "helmet"
    folder.mkdir()
    doc = {
        "asset": {"version": "2.0"},
        "buffers": [{"uri": "scene.bin", "byteLength": 1}],
        "images": [{"uri": uri} for uri in images],
    }
    (folder / "scene.gltf").write_text(json.dumps(doc), encoding="utf-8")
    (folder / "scene.bin").write_bytes(b"\x00")
    for rel in files:
        target = folder / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(b"img")
    return folder


def _glb(path: Path) -> Path:
    path.write_bytes(struct.pack("<4sII", b"glTF", 2, 12))
    return path


# ------------------------------------------------------------------
# inspect
# ------------------------------------------------------------------


def test_inspect_folder_all_resolved(tmp_path):
    folder = _gltf_folder(tmp_path, ["textures/diffuse.png"], ["textures/diffuse.png"])
    result = runner.invoke(app, ["inspect", str(folder)])

    assert result.exit_code == 0
    assert "descriptor + side files" in result.output
    assert "scene.gltf" in result.output
    assert "scene_modified.glb" in result.output
    assert "unresolved" not in result.output


def test_inspect_reports_unresolved(tmp_path):
    folder = _gltf_folder(tmp_path, ["textures/missing.png"], [])
    result = runner.invoke(app, ["inspect", str(folder)])

    assert result.exit_code == 0
    assert "unresolved" in result.output
    assert "did not match" in result.output


def test_inspect_strict_exits_2_on_unresolved(tmp_path):
    folder = _gltf_folder(tmp_path, ["textures/missing.png"], [])
    result = runner.invoke(app, ["inspect", str(folder), "--strict"])
    assert result.exit_code == 2


def test_inspect_keys_table(tmp_path):
    folder = _gltf_folder(tmp_path, [], [])
    result = runner.invoke(app, ["inspect", str(folder), "--keys"])
    assert result.exit_code == 0
    assert "./helmet/scene.bin" in result.output


def test_inspect_single_glb(tmp_path):
    result = runner.invoke(app, ["inspect", str(_glb(tmp_path / "car.glb"))])
    assert result.exit_code == 0
    assert "single binary" in result.output
    assert "version 2" in result.output


def test_inspect_forced_glb_in_mixed_drop(tmp_path):
    glb = _glb(tmp_path / "model.glb")
    gltf = tmp_path / "model.gltf"
    gltf.write_text("{}", encoding="utf-8")

    default = runner.invoke(app, ["inspect", str(glb), str(gltf)])
    forced = runner.invoke(app, ["inspect", str(glb), str(gltf), "--glb"])

    assert "descriptor + side files" in default.output
    assert "single binary" in forced.output


def test_inspect_zip(tmp_path, make_zip):
    archive = tmp_path / "pack.zip"
    archive.write_bytes(
        make_zip(
            {
                "root.gltf": json.dumps({"images": [{"uri": "./textures/diffuse.png"}]}).encode(),
                "textures/diffuse.png": b"p",
            }
        )
    )
    result = runner.invoke(app, ["inspect", str(archive)])
    assert result.exit_code == 0
    assert "root.gltf" in result.output
    assert "unresolved" not in result.output


def test_inspect_no_package(tmp_path):
    png = tmp_path / "texture.png"
    png.write_bytes(b"p")
    result = runner.invoke(app, ["inspect", str(png)])
    assert result.exit_code == 1
    assert "No .gltf or .glb" in result.output


def test_inspect_corrupt_zip(tmp_path):
    archive = tmp_path / "broken.zip"
    archive.write_bytes(b"this is not a zip")
    result = runner.invoke(app, ["inspect", str(archive)])
    assert result.exit_code == 1
    assert "Cannot read archive" in result.output


def test_inspect_missing_path(tmp_path):
    result = runner.invoke(app, ["inspect", str(tmp_path / "nope")])
    assert result.exit_code == 1
    assert "Path not found" in result.output


def test_inspect_invalid_config(tmp_path):
    (tmp_path / "gltfdrop.yaml").write_text("ingest:\n  exclude: '*.txt'\n", encoding="utf-8")
    result = runner.invoke(app, ["inspect", str(_glb(tmp_path / "car.glb"))])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


# ------------------------------------------------------------------
# resolve
# ------------------------------------------------------------------


def test_resolve_refs(tmp_path):
    folder = _gltf_folder(tmp_path, [], ["textures/diffuse.png"])
    result = runner.invoke(
        app,
        ["resolve", str(folder), "--ref", "Textures/Diffuse.png", "--ref", "nothing.png"],
    )
    assert result.exit_code == 0
    assert "diffuse.png" in result.output
    assert "unresolved" in result.output


def test_resolve_single_package_rejected(tmp_path):
    result = runner.invoke(
        app, ["resolve", str(_glb(tmp_path / "car.glb")), "--ref", "x.bin"]
    )
    assert result.exit_code == 1
    assert "self-contained" in result.output


# ------------------------------------------------------------------
# config + version
# ------------------------------------------------------------------


def test_config_prints_merged_values(tmp_path):
    (tmp_path / "gltfdrop.yaml").write_text("ingest:\n  max_depth: 7\n", encoding="utf-8")
    result = runner.invoke(app, ["config"])
    assert result.exit_code == 0
    assert "max_depth: 7" in result.output
    assert "suffix: _modified" in result.output


def test_version_command():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert result.output.startswith("gltfdrop ")


def test_version_flag():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "gltfdrop" in result.output
