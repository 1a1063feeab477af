from __future__ import annotations

from common.types import DeployRequest, StoragePlan


TILE_URL_SUFFIX = "{z}/{x}/{y}.png"


def plan_storage(req: DeployRequest) -> StoragePlan:
    """
    Canonical layout for a request:

        src/{paddock}/{date}/{paddock}-{date}[-{variant}].tif
        tiles/{paddock}/{date}[-{variant}]/

    Pure; the same (paddock, date, variant) always maps to the same paths.
    """
    label = req.capture_label
    return StoragePlan(
        archive_file_name=f"{req.paddock_id}-{label}.tif",
        archive_dir=f"src/{req.paddock_id}/{req.capture_date}",
        tile_dir=f"tiles/{req.paddock_id}/{label}",
    )


def commit_message(req: DeployRequest) -> str:
    return f"Add tiles: {req.paddock_id}/{req.capture_label}"


def tile_url_template(base_url: str, plan: StoragePlan) -> str:
    """XYZ layer URL; {z}/{x}/{y} are left as literal placeholders for the client."""
    return f"{base_url.rstrip('/')}/{plan.tile_dir}/{TILE_URL_SUFFIX}"
