"""
Tile Deploy — publish a GeoTIFF orthophoto as a static XYZ tile pyramid

- Validates <geotiff> <paddock> <date> [variant]
- Archives the raster to src/{paddock}/{date}/{paddock}-{date}[-{variant}].tif
- Runs gdal2tiles.py (zoom 17-22, XYZ) into tiles/{paddock}/{date}[-{variant}]/
- Commits and pushes the tile directory, prints the {z}/{x}/{y}.png URL template

Entry point:
    python -m tile_deploy <geotiff> <paddock> <date> [variant] --config config/deploy.yaml
"""
from .pipeline import DeployCommand, Stage
from .planner import plan_storage, tile_url_template

__all__ = ["DeployCommand", "Stage", "plan_storage", "tile_url_template"]
