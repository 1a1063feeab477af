from __future__ import annotations

import shutil
from pathlib import Path

from common.errors import ArchiveIOError, PublishError, TileGenerationError
from common.logging_setup import get_logger
from common.types import DeployRequest, StoragePlan
from tile_deploy.planner import commit_message, tile_url_template
from tile_deploy.tools import TileGenerator, ToolResult, VersionControl


log = get_logger("tile_deploy.steps")


def archive_source(req: DeployRequest, plan: StoragePlan, repo_root: Path) -> Path:
    """
    Copy the source raster to {repo_root}/{archive_dir}/{archive_file_name}.
    An existing archive for the same request is overwritten.
    """
    dst_dir = repo_root / plan.archive_dir
    dst = dst_dir / plan.archive_file_name
    if dst.exists():
        log.warning("Overwriting existing archive", extra={"extra": {"path": str(dst)}})
    try:
        dst_dir.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(req.raster_path, dst)
    except OSError as e:
        raise ArchiveIOError(f"could not copy {req.raster_path} to {plan.archive_path}: {e}") from e
    return dst


def generate_tiles(generator: TileGenerator, archived: Path, plan: StoragePlan, repo_root: Path) -> Path:
    """
    Build the XYZ pyramid for the archived raster into {repo_root}/{tile_dir}.
    A failed run leaves whatever was written; remove the directory before retrying.
    """
    out_dir = repo_root / plan.tile_dir
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise TileGenerationError(f"could not create {plan.tile_dir}: {e}") from e

    result = generator.generate(archived, out_dir)
    _log_output("tile generator", result)
    if not result.ok:
        raise TileGenerationError(
            f"tile generation failed with exit status {result.returncode}",
            output=result.output,
        )
    return out_dir


def publish_tiles(vcs: VersionControl, req: DeployRequest, plan: StoragePlan) -> None:
    """Stage the tile directory only, commit, push. No retry on any failure."""
    steps = (
        ("add", lambda: vcs.add(plan.tile_dir)),
        ("commit", lambda: vcs.commit(commit_message(req))),
        ("push", vcs.push),
    )
    for name, call in steps:
        result = call()
        _log_output(f"git {name}", result)
        if result.output:
            print(result.output.rstrip("\n"))
        if not result.ok:
            raise PublishError(
                f"git {name} failed with exit status {result.returncode}",
                output=result.output,
            )


def report(base_url: str, plan: StoragePlan) -> str:
    url = tile_url_template(base_url, plan)
    print("=== Complete ===")
    print(f"Tile URL: {url}")
    print("")
    print("Use this URL in farmOS as an XYZ tile layer.")
    return url


def _log_output(tool: str, result: ToolResult) -> None:
    log.debug(f"{tool} output", extra={"extra": {"returncode": result.returncode, "output": result.output}})
