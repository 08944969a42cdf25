# Path: core/tiles/reconciler.py
# Purpose: Diff the scanned found-set against existing tiles and place new tiles on a grid.
# Layer: core/tiles.
# Details: Creates exactly one tile per unseen path; eviction and relayout are opt-in via GridSettings.

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import List, Optional

from config.settings import GridSettings
from core.models.domain import ReconcileResult, Vec3, WatchedSet
from .registry import TileRegistry

logger = logging.getLogger(__name__)


def grid_size_for(count: int) -> int:
    """Return the edge length of the smallest square grid holding ``count`` tiles."""

    if count <= 0:
        return 0
    return math.ceil(math.sqrt(count))


def calculate_grid_position(index: int, grid_size: int, spacing: float) -> Vec3:
    """Return the world position of slot ``index`` on a grid centred on the origin."""

    if grid_size <= 0:
        raise ValueError("grid_size must be positive")
    row = index // grid_size
    col = index % grid_size
    offset = (grid_size - 1) * spacing * 0.5
    return Vec3(col * spacing - offset, 0.0, row * spacing - offset)


class TileReconciler:
    """Create tiles for newly found paths without touching already-represented ones."""

    def __init__(self, settings: Optional[GridSettings] = None) -> None:
        self.settings = settings or GridSettings()
        self._last_grid_size: Optional[int] = None

    def should_run(self, watched: WatchedSet) -> bool:
        """Skip work entirely until something has been found, unless stale tiles may need eviction."""

        return bool(watched.found) or self.settings.evict_stale

    def step(self, watched: WatchedSet, registry: TileRegistry) -> ReconcileResult:
        """Run one reconciliation pass against ``registry``."""

        if not self.should_run(watched):
            return ReconcileResult()

        found = watched.found
        existing = registry.existing_paths()
        spacing = self.settings.spacing
        grid_size = grid_size_for(len(found))

        removed: List[Path] = []
        if self.settings.evict_stale:
            current = set(found)
            for path in sorted(existing - current):
                registry.remove_tile(path)
                removed.append(path)
            existing -= set(removed)

        moved: List[Path] = []
        if (
            self.settings.relayout_on_growth
            and self._last_grid_size is not None
            and grid_size > self._last_grid_size
        ):
            for index, path in enumerate(found):
                if path in existing:
                    registry.move_tile(path, calculate_grid_position(index, grid_size, spacing))
                    moved.append(path)
        self._last_grid_size = grid_size

        created: List[Path] = []
        for index, path in enumerate(found):
            if path in existing:
                continue
            registry.create_tile(path, calculate_grid_position(index, grid_size, spacing))
            existing.add(path)
            created.append(path)

        if created:
            logger.info("Created %d tiles (grid %dx%d)", len(created), grid_size, grid_size)
        if removed:
            logger.info("Evicted %d stale tiles", len(removed))
        if moved:
            logger.info("Relaid out %d tiles for grid %dx%d", len(moved), grid_size, grid_size)
        return ReconcileResult(created=tuple(created), removed=tuple(removed), moved=tuple(moved))
