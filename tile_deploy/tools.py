"""
External collaborators of the deploy pipeline.

Each capability is a small Protocol returning a ToolResult (exit status plus
captured text), so the pipeline can run against fakes in tests and against
the real GDAL / git executables in production:

    RasterInspector.inspect(raster)          -> gdalinfo, or rasterio in-process
    TileGenerator.generate(raster, out_dir)  -> gdal2tiles.py
    VersionControl.add/commit/push           -> git

Invocations are synchronous with no timeout; a hung tool blocks the deploy.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Union

import rasterio
from rasterio.errors import RasterioError

from common.logging_setup import get_logger


log = get_logger("tile_deploy.tools")

# Tiling parameters are fixed for every deploy.
ZOOM_MIN = 17
ZOOM_MAX = 22
TILE_PROCESSES = 4

COMMAND_NOT_FOUND = 127

PathLike = Union[str, Path]


@dataclass(frozen=True, slots=True)
class ToolResult:
    returncode: int
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class RasterInspector(Protocol):
    def inspect(self, raster: Path) -> ToolResult: ...


class TileGenerator(Protocol):
    def generate(self, raster: Path, out_dir: Path) -> ToolResult: ...


class VersionControl(Protocol):
    def add(self, path: str) -> ToolResult: ...

    def commit(self, message: str) -> ToolResult: ...

    def push(self) -> ToolResult: ...


def run_tool(args: Sequence[PathLike], cwd: Optional[PathLike] = None) -> ToolResult:
    """
    Run a command to completion, stdout and stderr merged into one text blob.
    A missing executable is reported like a shell would (127), not raised.
    """
    argv = [str(a) for a in args]
    log.debug("Running tool", extra={"extra": {"argv": argv, "cwd": str(cwd) if cwd else None}})
    try:
        cp = subprocess.run(
            argv,
            cwd=str(cwd) if cwd is not None else None,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
        )
    except FileNotFoundError:
        return ToolResult(COMMAND_NOT_FOUND, f"{argv[0]}: command not found")
    return ToolResult(cp.returncode, cp.stdout or "")


# -------------------------
# Raster inspection
# -------------------------
class GdalInfoInspector:
    def __init__(self, executable: str = "gdalinfo"):
        self.executable = executable

    def inspect(self, raster: Path) -> ToolResult:
        return run_tool([self.executable, raster])


class RasterioInspector:
    """In-process alternative to gdalinfo; summarises what rasterio can read."""

    def inspect(self, raster: Path) -> ToolResult:
        try:
            with rasterio.open(raster) as ds:
                lines = [
                    f"Driver: {ds.driver}",
                    f"Files: {raster}",
                    f"Size is {ds.width}, {ds.height}",
                    f"Bands: {ds.count} ({', '.join(ds.dtypes)})",
                    f"Coordinate System: {ds.crs.to_string() if ds.crs else 'none'}",
                    "Bounds: left={:.6f} bottom={:.6f} right={:.6f} top={:.6f}".format(*ds.bounds),
                ]
                if ds.nodata is not None:
                    lines.append(f"NoData Value={ds.nodata}")
        except RasterioError as e:
            return ToolResult(1, f"ERROR: {e}")
        return ToolResult(0, "\n".join(lines))


# -------------------------
# Tiling
# -------------------------
def gdal2tiles_args(executable: str, raster: PathLike, out_dir: PathLike) -> List[str]:
    """XYZ pyramid, zoom 17-22, no background fill, 4 worker processes."""
    return [
        executable,
        "-z", f"{ZOOM_MIN}-{ZOOM_MAX}",
        "-w", "none",
        "--xyz",
        f"--processes={TILE_PROCESSES}",
        str(raster),
        str(out_dir),
    ]


class Gdal2TilesGenerator:
    def __init__(self, executable: str = "gdal2tiles.py"):
        self.executable = executable

    def generate(self, raster: Path, out_dir: Path) -> ToolResult:
        return run_tool(gdal2tiles_args(self.executable, raster, out_dir))


# -------------------------
# Version control
# -------------------------
class GitVersionControl:
    """git against the checkout at repo_root and its configured remote/branch."""

    def __init__(self, repo_root: PathLike, executable: str = "git"):
        self.repo_root = Path(repo_root)
        self.executable = executable

    def _git(self, *args: str) -> ToolResult:
        return run_tool([self.executable, *args], cwd=self.repo_root)

    def add(self, path: str) -> ToolResult:
        return self._git("add", path)

    def commit(self, message: str) -> ToolResult:
        return self._git("commit", "-m", message)

    def push(self) -> ToolResult:
        return self._git("push")
