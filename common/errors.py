from __future__ import annotations

from typing import Optional


class DeployError(Exception):
    """
    Base class for every failure that aborts a tile deploy.

    All deploy errors are terminal for the invocation and map to exit status 1.
    `stage` names the pipeline step that raised; `output` carries whatever a
    collaborator tool printed, verbatim, when one was involved.
    """
    stage: str = "deploy"
    exit_code: int = 1

    def __init__(self, message: str, output: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.output = output

    def __str__(self) -> str:
        return self.message


# --- validation ---
class UsageError(DeployError):
    stage = "validate"


class RasterNotFoundError(DeployError, FileNotFoundError):
    stage = "validate"


class InvalidNameError(DeployError, ValueError):
    stage = "validate"


class InvalidDateError(DeployError, ValueError):
    stage = "validate"


class InvalidVariantError(DeployError, ValueError):
    stage = "validate"


class InvalidRasterError(DeployError):
    stage = "validate"


# --- steps ---
class ArchiveIOError(DeployError):
    stage = "archive"


class TileGenerationError(DeployError):
    stage = "tile"


class PublishError(DeployError):
    stage = "publish"
