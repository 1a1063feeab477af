from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


DEFAULT_CONFIG_PATH = "config/deploy.yaml"
DEFAULT_BASE_URL = "https://agnesfa.github.io/farm-tiles"
INSPECTORS = ("gdalinfo", "rasterio")


@dataclass(frozen=True, slots=True)
class DeployConfig:
    """
    Explicit runtime configuration for DeployCommand.

    Attributes:
        repo_root: checkout that owns src/ and tiles/ and is pushed to hosting.
        base_url: public root the checkout is served from (no trailing slash).
        gdalinfo, gdal2tiles, git: executables for the external tools.
        inspector: "gdalinfo" (external tool) or "rasterio" (in-process).
        log_level: logging level name.
    """
    repo_root: Path
    base_url: str = DEFAULT_BASE_URL
    gdalinfo: str = "gdalinfo"
    gdal2tiles: str = "gdal2tiles.py"
    git: str = "git"
    inspector: str = "gdalinfo"
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        object.__setattr__(self, "repo_root", Path(self.repo_root))
        object.__setattr__(self, "base_url", str(self.base_url).rstrip("/"))
        if self.inspector not in INSPECTORS:
            raise ValueError(f"tools.inspector must be one of {INSPECTORS}, got {self.inspector!r}")

    def with_overrides(
        self,
        *,
        repo_root: Optional[str] = None,
        base_url: Optional[str] = None,
        log_level: Optional[str] = None,
    ) -> "DeployConfig":
        """Apply CLI flag overrides; None leaves a field untouched."""
        changes: Dict[str, Any] = {}
        if repo_root:
            changes["repo_root"] = Path(repo_root)
        if base_url:
            changes["base_url"] = base_url
        if log_level:
            changes["log_level"] = log_level
        return replace(self, **changes) if changes else self


def _load_yaml(path: str) -> Dict:
    if not Path(path).exists():
        return {}
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def load_config(path: str = DEFAULT_CONFIG_PATH, cwd: Optional[Path] = None) -> DeployConfig:
    """
    Read config/deploy.yaml (or `path`); a missing file yields defaults.

    A relative repo.root is resolved against `cwd` (default: the process cwd,
    read once here and nowhere else).
    """
    P = _load_yaml(path)
    repo = P.get("repo") or {}
    publish = P.get("publish") or {}
    tools = P.get("tools") or {}
    logging_cfg = P.get("logging") or {}

    base = Path(cwd) if cwd is not None else Path.cwd()
    root = Path(repo.get("root") or ".")
    if not root.is_absolute():
        root = base / root

    # Precedence: --base-url flag, then TILE_DEPLOY_BASE_URL, then the file.
    base_url = os.environ.get("TILE_DEPLOY_BASE_URL") or publish.get("base_url") or DEFAULT_BASE_URL

    return DeployConfig(
        repo_root=root.resolve(),
        base_url=str(base_url),
        gdalinfo=str(tools.get("gdalinfo", "gdalinfo")),
        gdal2tiles=str(tools.get("gdal2tiles", "gdal2tiles.py")),
        git=str(tools.get("git", "git")),
        inspector=str(tools.get("inspector", "gdalinfo")),
        log_level=str(logging_cfg.get("level", "INFO")),
    )
