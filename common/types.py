from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from common.errors import InvalidDateError, InvalidNameError, InvalidVariantError


PADDOCK_RE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")
# Token shape only; month/day ranges are not checked.
DATE_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")


class Variant(str, Enum):
    """Alternate rendering of the same capture."""
    RGB = "rgb"
    RAW = "raw"

    @classmethod
    def parse(cls, value: str) -> "Variant":
        try:
            return cls(value)
        except ValueError:
            raise InvalidVariantError("Variant must be 'rgb' or 'raw' (or omit)") from None


@dataclass(frozen=True, slots=True)
class DeployRequest:
    """
    One validated deploy invocation.

    Attributes:
        raster_path: source GeoTIFF (existence is checked by the validator).
        paddock_id: lowercase kebab-case paddock name, e.g. "p1" or "p1-p2".
        capture_date: YYYY-MM-DD token.
        variant: optional rendering variant; None means "no variant".
    """
    raster_path: Path
    paddock_id: str
    capture_date: str
    variant: Optional[Variant] = None

    def __post_init__(self) -> None:
        if not PADDOCK_RE.fullmatch(self.paddock_id):
            raise InvalidNameError("Paddock name must be lowercase kebab-case (e.g. p1, p1-p2)")
        if not DATE_RE.fullmatch(self.capture_date):
            raise InvalidDateError("Date must be ISO format YYYY-MM-DD")
        if self.variant is not None and not isinstance(self.variant, Variant):
            object.__setattr__(self, "variant", Variant.parse(self.variant))

    @property
    def capture_label(self) -> str:
        """Date plus optional variant suffix, e.g. "2026-02-09-rgb"."""
        if self.variant is None:
            return self.capture_date
        return f"{self.capture_date}-{self.variant.value}"


@dataclass(frozen=True, slots=True)
class StoragePlan:
    """
    Canonical locations for one request, relative to the repository root.
    Paths use forward slashes since they also appear in git and URLs.
    """
    archive_file_name: str
    archive_dir: str
    tile_dir: str

    @property
    def archive_path(self) -> str:
        return f"{self.archive_dir}/{self.archive_file_name}"
