# Path: gui/widgets/tile_scene.py
# Purpose: Present reconciled tiles in a Qt graphics scene.
# Layer: gui.
# Details: Implements the TileRegistry contract; images are decoded off the UI thread.

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Set

from PySide6.QtCore import QObject, QRunnable, QSize, Qt, QThreadPool, Signal
from PySide6.QtGui import QImage, QPixmap
from PySide6.QtWidgets import QGraphicsScene

from core.models.domain import DuplicateTileError, Vec3
from .image_tile import ImageTile


class _TileLoaderSignals(QObject):
    tileImageReady = Signal(object, QImage)


class TileScene(QGraphicsScene):
    """Graphics scene that owns one ImageTile per source path.

    World coordinates map onto the scene plane as (x, z) * ``world_scale``; y is ignored
    because every tile lies on the ground plane.
    """

    def __init__(
        self,
        tile_size: float = 2.0,
        world_scale: float = 64.0,
        load_images: bool = True,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.world_scale = world_scale
        self.tile_edge = tile_size * world_scale
        self.load_images = load_images
        self._path_to_tile: Dict[Path, ImageTile] = {}
        self._loader_signals = _TileLoaderSignals()
        self._loader_signals.tileImageReady.connect(self._on_tile_image_ready)
        self._thread_pool = QThreadPool.globalInstance()

    def create_tile(self, path: Path, position: Vec3) -> ImageTile:
        if path in self._path_to_tile:
            raise DuplicateTileError(path)
        tile = ImageTile(path, self.tile_edge)
        tile.setPos(*self.to_scene(position))
        self.addItem(tile)
        self._path_to_tile[path] = tile
        if self.load_images:
            self._queue_load(path)
        return tile

    def existing_paths(self) -> Set[Path]:
        return set(self._path_to_tile)

    def remove_tile(self, path: Path) -> None:
        tile = self._path_to_tile.pop(path, None)
        if tile is not None:
            self.removeItem(tile)

    def move_tile(self, path: Path, position: Vec3) -> None:
        tile = self._path_to_tile.get(path)
        if tile is not None:
            tile.setPos(*self.to_scene(position))

    def tile_for(self, path: Path) -> Optional[ImageTile]:
        return self._path_to_tile.get(path)

    def tile_count(self) -> int:
        return len(self._path_to_tile)

    def to_scene(self, position: Vec3) -> tuple[float, float]:
        return position.x * self.world_scale, position.z * self.world_scale

    def _queue_load(self, path: Path) -> None:
        self._thread_pool.start(_TileDecodeTask(path, int(self.tile_edge), self._loader_signals))

    def _on_tile_image_ready(self, path: Path, image: QImage) -> None:
        # the tile may have been evicted while its image was decoding
        tile = self._path_to_tile.get(path)
        if tile is not None:
            tile.set_image(None if image.isNull() else QPixmap.fromImage(image))


class _TileDecodeTask(QRunnable):
    """Decode one tile image on a pool thread, pre-scaled to the tile edge."""

    def __init__(self, source_path: Path, edge: int, signals: _TileLoaderSignals) -> None:
        super().__init__()
        self.source_path = source_path
        self.edge = edge
        self.signals = signals

    def run(self) -> None:
        image = QImage(str(self.source_path))
        if not image.isNull() and self.edge > 0:
            image = image.scaled(QSize(self.edge, self.edge), Qt.KeepAspectRatio, Qt.SmoothTransformation)
        self.signals.tileImageReady.emit(self.source_path, image)
