from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from common.errors import InvalidRasterError, RasterNotFoundError, UsageError
from common.logging_setup import get_logger
from common.types import DeployRequest
from tile_deploy.tools import RasterInspector, ToolResult


log = get_logger("tile_deploy.validate")

MIN_ARGS = 3
MAX_ARGS = 4


def parse_request(args: Sequence[str], cwd: Optional[Path] = None) -> DeployRequest:
    """
    Turn raw positional arguments into a DeployRequest.

    Checks, in order: arity (3 or 4), raster is a regular file, paddock name,
    date token, variant. Nothing on disk is touched.
    A relative raster path is resolved against `cwd` when given.
    """
    if not MIN_ARGS <= len(args) <= MAX_ARGS:
        raise UsageError(f"expected {MIN_ARGS} or {MAX_ARGS} arguments, got {len(args)}")

    raster, paddock, date = args[0], args[1], args[2]
    variant_arg = args[3] if len(args) == MAX_ARGS else None

    raster_path = Path(raster).expanduser()
    if cwd is not None and not raster_path.is_absolute():
        raster_path = Path(cwd) / raster_path
    if not raster_path.is_file():
        raise RasterNotFoundError(f"GeoTIFF not found: {raster}")

    # An explicit empty fourth argument is rejected, not read as "no variant".
    return DeployRequest(
        raster_path=raster_path,
        paddock_id=paddock,
        capture_date=date,
        variant=variant_arg,  # type: ignore[arg-type]
    )


def check_raster(inspector: RasterInspector, raster_path: Path) -> ToolResult:
    """Run the inspector; a non-zero exit means the file is not a usable GeoTIFF."""
    result = inspector.inspect(raster_path)
    log.debug("Raster inspection finished", extra={"extra": {"raster": str(raster_path), "returncode": result.returncode}})
    if not result.ok:
        raise InvalidRasterError(
            "raster inspection failed: file may not be a valid GeoTIFF",
            output=result.output,
        )
    return result
