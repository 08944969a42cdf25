# Path: core/tiles/registry.py
# Purpose: Define the presentation-layer contract for materialized tiles.
# Layer: core/tiles.
# Details: Provides the TileRegistry protocol and an in-memory implementation used by scripts and tests.

from __future__ import annotations

from collections import OrderedDict
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Protocol, Set

from core.models.domain import DuplicateTileError, Tile, Vec3


class TileRegistry(Protocol):
    """Presentation layer that owns tile lifetime, keyed by source path."""

    def create_tile(self, path: Path, position: Vec3) -> Any:
        """Materialize one tile for ``path`` at ``position`` and return its handle."""

    def existing_paths(self) -> Set[Path]:
        """Return the paths currently represented by a tile."""

    def remove_tile(self, path: Path) -> None:
        """Destroy the tile for ``path`` if one exists."""

    def move_tile(self, path: Path, position: Vec3) -> None:
        """Reposition the tile for ``path``."""


class InMemoryTileRegistry:
    """TileRegistry that keeps tiles in creation order without rendering anything."""

    def __init__(self) -> None:
        self._tiles: "OrderedDict[Path, Tile]" = OrderedDict()
        self._next_handle = 0

    def create_tile(self, path: Path, position: Vec3) -> int:
        if path in self._tiles:
            raise DuplicateTileError(path)
        handle = self._next_handle
        self._next_handle += 1
        self._tiles[path] = Tile(source_path=path, grid_position=position, handle=handle)
        return handle

    def existing_paths(self) -> Set[Path]:
        return set(self._tiles)

    def remove_tile(self, path: Path) -> None:
        self._tiles.pop(path, None)

    def move_tile(self, path: Path, position: Vec3) -> None:
        tile = self._tiles.get(path)
        if tile is not None:
            self._tiles[path] = replace(tile, grid_position=position)

    def get(self, path: Path) -> Optional[Tile]:
        return self._tiles.get(path)

    def tiles(self) -> List[Tile]:
        return list(self._tiles.values())

    def positions(self) -> Dict[Path, Vec3]:
        return {path: tile.grid_position for path, tile in self._tiles.items()}

    def __contains__(self, path: object) -> bool:
        return path in self._tiles

    def __len__(self) -> int:
        return len(self._tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(list(self._tiles.values()))
