"""
Fake collaborators recording every call, for pipeline tests.
"""

from pathlib import Path
from typing import List, Optional, Tuple

from tile_deploy.tools import ToolResult


class FakeInspector:
    def __init__(self, returncode: int = 0, output: str = "Driver: GTiff/GeoTIFF\nSize is 100, 100"):
        self.result = ToolResult(returncode, output)
        self.calls: List[Path] = []

    def inspect(self, raster: Path) -> ToolResult:
        self.calls.append(raster)
        return self.result


class FakeTiler:
    """Creates out_dir/17/0/0.png unless told to fail."""

    def __init__(self, returncode: int = 0, write_tile: bool = True):
        self.returncode = returncode
        self.write_tile = write_tile
        self.calls: List[Tuple[Path, Path]] = []

    def generate(self, raster: Path, out_dir: Path) -> ToolResult:
        self.calls.append((raster, out_dir))
        if self.write_tile:
            tile = out_dir / "17" / "0" / "0.png"
            tile.parent.mkdir(parents=True, exist_ok=True)
            tile.write_bytes(b"\x89PNG")
        return ToolResult(self.returncode, "Generating Base Tiles:\n0...10...20...100 - done.")


class FakeVCS:
    def __init__(self, fail_on: Optional[str] = None, output: str = ""):
        self.fail_on = fail_on
        self.output = output
        self.calls: List[Tuple[str, ...]] = []

    def _result(self, name: str) -> ToolResult:
        if name == self.fail_on:
            return ToolResult(1, self.output or f"{name} failed")
        return ToolResult(0, "")

    def add(self, path: str) -> ToolResult:
        self.calls.append(("add", path))
        return self._result("add")

    def commit(self, message: str) -> ToolResult:
        self.calls.append(("commit", message))
        return self._result("commit")

    def push(self) -> ToolResult:
        self.calls.append(("push",))
        return self._result("push")
