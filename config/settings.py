# Path: config/settings.py
# Purpose: Provide typed application configuration models.
# Layer: config.
# Details: Centralizes settings for directory scanning, tile grid layout, and the GUI host loop.

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional, Set

from pydantic import BaseModel, Field, field_validator

DEFAULT_IMAGE_EXTENSIONS = {
    ".jpg",
    ".jpeg",
    ".png",
    ".gif",
    ".bmp",
    ".tiff",
    ".tif",
    ".webp",
    ".ico",
    ".svg",
}


class ScanSettings(BaseModel):
    """Settings describing which directories are watched and how they are traversed."""

    roots: List[Path] = Field(default_factory=list, description="Root directories scanned for images.")
    interval_seconds: float = Field(default=5.0, ge=0, description="Minimum time between two scan passes.")
    extensions: Set[str] = Field(
        default_factory=lambda: set(DEFAULT_IMAGE_EXTENSIONS),
        description="Allow-list of file extensions, compared case-insensitively.",
    )
    follow_symlinks: bool = Field(default=True, description="Descend into symlinked directories.")
    max_depth: Optional[int] = Field(default=None, ge=0, description="Recursion bound below each root.")
    background: bool = Field(default=False, description="Run traversal on a worker thread.")

    @field_validator("extensions")
    @classmethod
    def _normalize_extensions(cls, value: Set[str]) -> Set[str]:
        normalized = set()
        for ext in value:
            ext = ext.strip().lower()
            if not ext:
                continue
            normalized.add(ext if ext.startswith(".") else f".{ext}")
        return normalized


class GridSettings(BaseModel):
    """Settings controlling tile placement on the world grid."""

    spacing: float = Field(default=2.5, gt=0, description="Distance between neighbouring tile centres.")
    tile_size: float = Field(default=2.0, gt=0, description="Edge length of a square tile.")
    evict_stale: bool = Field(default=False, description="Remove tiles whose file is no longer found.")
    relayout_on_growth: bool = Field(default=False, description="Reposition tiles when the grid size changes.")


class AppSettings(BaseModel):
    """Top-level application settings shared across the core and host interfaces."""

    scan: ScanSettings = Field(default_factory=ScanSettings)
    grid: GridSettings = Field(default_factory=GridSettings)
    log_level: str = Field(default="INFO", description="Verbosity level for application logs.")
    tick_ms: int = Field(default=100, gt=0, description="Host loop cadence in milliseconds.")
    world_scale: float = Field(default=64.0, gt=0, description="Pixels per world unit in the GUI scene.")

    @classmethod
    def from_env(cls) -> "AppSettings":
        """Instantiate settings from environment variables when available."""

        scan: dict = {}
        roots = os.environ.get("PHOTOVIEW_ROOTS")
        if roots:
            scan["roots"] = [Path(part) for part in roots.split(os.pathsep) if part]
        interval = os.environ.get("PHOTOVIEW_SCAN_INTERVAL")
        if interval:
            scan["interval_seconds"] = float(interval)

        payload: dict = {"scan": ScanSettings(**scan)}
        log_level = os.environ.get("PHOTOVIEW_LOG_LEVEL")
        if log_level:
            payload["log_level"] = log_level
        return cls(**payload)


__all__ = ["AppSettings", "DEFAULT_IMAGE_EXTENSIONS", "GridSettings", "ScanSettings"]
