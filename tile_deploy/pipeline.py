from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence

from common.errors import DeployError
from common.logging_setup import get_logger
from common.types import DeployRequest, StoragePlan
from tile_deploy.config import DeployConfig
from tile_deploy.planner import plan_storage
from tile_deploy.steps import archive_source, generate_tiles, publish_tiles, report
from tile_deploy.tools import (
    ZOOM_MAX,
    ZOOM_MIN,
    Gdal2TilesGenerator,
    GdalInfoInspector,
    GitVersionControl,
    RasterInspector,
    RasterioInspector,
    TileGenerator,
    VersionControl,
)
from tile_deploy.validate import check_raster, parse_request


log = get_logger("tile_deploy")

INSPECT_PREVIEW_LINES = 20


class Stage(str, Enum):
    START = "start"
    VALIDATED = "validated"
    ARCHIVED = "archived"
    TILED = "tiled"
    PUBLISHED = "published"
    REPORTED = "reported"
    FAILED = "failed"


class DeployCommand:
    """
    One-shot orchestrator: validate -> archive -> tile -> publish -> report.

    Stages only move forward. Any DeployError moves to FAILED and is re-raised;
    effects of earlier stages (archive copy, partial tiles, local commit) are
    left in place.
    """

    def __init__(
        self,
        config: DeployConfig,
        *,
        inspector: Optional[RasterInspector] = None,
        tiler: Optional[TileGenerator] = None,
        vcs: Optional[VersionControl] = None,
    ):
        self.config = config
        self.inspector = inspector or _default_inspector(config)
        self.tiler = tiler or Gdal2TilesGenerator(config.gdal2tiles)
        self.vcs = vcs or GitVersionControl(config.repo_root, config.git)
        self.stage = Stage.START
        self.history: List[Stage] = [Stage.START]
        self.request: Optional[DeployRequest] = None
        self.plan: Optional[StoragePlan] = None
        self.url: Optional[str] = None

    def _advance(self, stage: Stage, **extra) -> None:
        self.stage = stage
        self.history.append(stage)
        log.info(f"Stage {stage.value}", extra={"extra": {"stage": stage.value, **extra}})

    def run(self, args: Sequence[str], cwd: Optional[Path] = None) -> str:
        """Execute the whole pipeline for raw positional args; returns the tile URL template."""
        try:
            return self._run(args, cwd)
        except DeployError as e:
            self.stage = Stage.FAILED
            self.history.append(Stage.FAILED)
            log.error(
                f"Deploy failed: {e}",
                extra={"extra": {"error": type(e).__name__, "stage": e.stage, "output": e.output}},
            )
            raise

    def _run(self, args: Sequence[str], cwd: Optional[Path]) -> str:
        root = self.config.repo_root

        req = parse_request(args, cwd=cwd)
        plan = plan_storage(req)
        self.request, self.plan = req, plan

        print("=== Tile Deploy ===")
        print(f"Source:  {req.raster_path}")
        print(f"Paddock: {req.paddock_id}")
        print(f"Date:    {req.capture_date}")
        print(f"Variant: {req.variant.value if req.variant else 'none'}")
        print("")

        print("--- Inspecting GeoTIFF ---")
        info = check_raster(self.inspector, req.raster_path)
        preview = info.output.splitlines()[:INSPECT_PREVIEW_LINES]
        if preview:
            print("\n".join(preview))
        print("")
        self._advance(Stage.VALIDATED, raster=str(req.raster_path))

        print(f"--- Copying source to {plan.archive_path} ---")
        archived = archive_source(req, plan, root)
        print("Done.")
        print("")
        self._advance(Stage.ARCHIVED, archive=plan.archive_path)

        print(f"--- Generating tiles (zoom {ZOOM_MIN}-{ZOOM_MAX}) ---")
        generate_tiles(self.tiler, archived, plan, root)
        print("Done.")
        print("")
        self._advance(Stage.TILED, tile_dir=plan.tile_dir)

        print("--- Committing and pushing ---")
        publish_tiles(self.vcs, req, plan)
        print("")
        self._advance(Stage.PUBLISHED)

        self.url = report(self.config.base_url, plan)
        self._advance(Stage.REPORTED, url=self.url)
        return self.url


def _default_inspector(config: DeployConfig) -> RasterInspector:
    if config.inspector == "rasterio":
        return RasterioInspector()
    return GdalInfoInspector(config.gdalinfo)
