"""gltfdrop configuration loader.

Priority (high → low):
  1. CLI flags           (handled at call site — not in this module)
  2. Environment variables  (GLTFDROP_MAX_ARCHIVE_BYTES, GLTFDROP_MAX_DEPTH)
  3. Per-project gltfdrop.yaml  (current working directory)
  4. Global ~/.gltfdrop/config.yaml
  5. Hardcoded defaults

All YAML reads use yaml.safe_load() — never yaml.load().
"""

from __future__ import annotations

import os
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from gltfdrop.ingest.container import DEFAULT_MAX_BYTES, DEFAULT_MAX_ENTRIES
from gltfdrop.ingest.sources import DEFAULT_MAX_DEPTH

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_GLOBAL_CONFIG_DIR: Path = Path.home() / ".gltfdrop"
_GLOBAL_CONFIG_PATH: Path = _GLOBAL_CONFIG_DIR / "config.yaml"
_PROJECT_CONFIG_NAME: str = "gltfdrop.yaml"

# Top-level sections; any other key produces a warning
_KNOWN_SECTIONS: frozenset[str] = frozenset(["ingest", "export"])


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(ValueError):
    """Raised when a config file contains an invalid value."""


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass
class IngestCfg:
    """Ingestion limits (gltfdrop.yaml: ingest:).

    Attributes:
        max_depth: Deepest folder level followed when walking a dropped folder.
        max_archive_entries: Maximum number of files in one archive.
        max_archive_bytes: Maximum total uncompressed size of one archive.
        exclude: fnmatch patterns; matching archive entries are left out.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    max_archive_entries: int = DEFAULT_MAX_ENTRIES
    max_archive_bytes: int = DEFAULT_MAX_BYTES
    exclude: list[str] = field(default_factory=list)


@dataclass
class ExportCfg:
    """Export naming (gltfdrop.yaml: export:)."""

    suffix: str = "_modified"


@dataclass
class GltfdropConfig:
    """Root configuration object, built by load_config() from merged YAML layers."""

    ingest: IngestCfg = field(default_factory=IngestCfg)
    export: ExportCfg = field(default_factory=ExportCfg)


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def _warn_unknown_keys(data: dict[str, Any], source: Path) -> None:
    """Emit a UserWarning for unrecognised top-level keys."""
    for key in data:
        if key not in _KNOWN_SECTIONS:
            warnings.warn(
                f"Unknown config key '{key}' in '{source}' — ignored.",
                UserWarning,
                stacklevel=4,
            )


def _check_positive(name: str, value: int) -> None:
    if value < 1:
        raise ConfigError(f"{name} must be >= 1, got {value}.")


def _validate(cfg: GltfdropConfig) -> None:
    _check_positive("ingest.max_depth", cfg.ingest.max_depth)
    _check_positive("ingest.max_archive_entries", cfg.ingest.max_archive_entries)
    _check_positive("ingest.max_archive_bytes", cfg.ingest.max_archive_bytes)
    if "/" in cfg.export.suffix or "\\" in cfg.export.suffix:
        raise ConfigError(f"export.suffix must not contain path separators: '{cfg.export.suffix}'")


# ---------------------------------------------------------------------------
# Merge + build
# ---------------------------------------------------------------------------


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return a new dict that is *base* deep-merged with *override*."""
    result = dict(base)
    for k, v in override.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _exclude_patterns(raw: Any) -> list[str]:
    if not isinstance(raw, list):
        raise ConfigError("ingest.exclude must be a list of glob patterns.")
    return [str(p) for p in raw]


def _cfg_from_dict(data: dict[str, Any]) -> GltfdropConfig:
    """Build a *GltfdropConfig* from a merged raw YAML dict."""
    cfg = GltfdropConfig()

    try:
        if "ingest" in data:
            i = data["ingest"] or {}
            cfg.ingest = IngestCfg(
                max_depth=int(i.get("max_depth", cfg.ingest.max_depth)),
                max_archive_entries=int(
                    i.get("max_archive_entries", cfg.ingest.max_archive_entries)
                ),
                max_archive_bytes=int(i.get("max_archive_bytes", cfg.ingest.max_archive_bytes)),
                exclude=_exclude_patterns(i.get("exclude", [])),
            )

        if "export" in data:
            e = data["export"] or {}
            cfg.export = ExportCfg(suffix=str(e.get("suffix", cfg.export.suffix)))
    except ConfigError:
        raise
    except (TypeError, ValueError, AttributeError) as exc:
        raise ConfigError(f"Invalid config value: {exc}") from exc

    return cfg


def _apply_env_overrides(cfg: GltfdropConfig) -> GltfdropConfig:
    """Apply GLTFDROP_* environment variable overrides."""
    for env_name, attr in (
        ("GLTFDROP_MAX_ARCHIVE_BYTES", "max_archive_bytes"),
        ("GLTFDROP_MAX_DEPTH", "max_depth"),
    ):
        if raw := os.environ.get(env_name):
            try:
                setattr(cfg.ingest, attr, int(raw))
            except ValueError as exc:
                raise ConfigError(f"{env_name} must be an integer, got '{raw}'.") from exc
    return cfg


def _read_yaml(path: Path) -> dict[str, Any]:
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file '{path}' must contain a mapping at the top level.")
    return raw


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(
    project_dir: Path | None = None,
    *,
    global_config_path: Path | None = None,
) -> GltfdropConfig:
    """Load and return a merged *GltfdropConfig*.

    Applies layers in order: global → per-project → env vars.
    CLI flag overrides must be applied by the caller after this function.

    Args:
        project_dir: Directory to search for *gltfdrop.yaml*. Defaults to CWD.
        global_config_path: Override the global config path (for testing).

    Raises:
        ConfigError: on malformed YAML structure or out-of-range values.
    """
    global_path = global_config_path if global_config_path is not None else _GLOBAL_CONFIG_PATH
    search_dir = project_dir if project_dir is not None else Path.cwd()

    merged: dict[str, Any] = {}

    if global_path.exists():
        raw_global = _read_yaml(global_path)
        _warn_unknown_keys(raw_global, global_path)
        merged = _deep_merge(merged, raw_global)

    project_cfg_path = search_dir / _PROJECT_CONFIG_NAME
    if project_cfg_path.exists():
        raw_project = _read_yaml(project_cfg_path)
        _warn_unknown_keys(raw_project, project_cfg_path)
        merged = _deep_merge(merged, raw_project)

    cfg = _apply_env_overrides(_cfg_from_dict(merged))
    _validate(cfg)
    return cfg
