# Path: gui/__init__.py
# Purpose: Package initializer for GUI layer.
# Layer: gui.
# Details: Provide lightweight exports without importing MainWindow to avoid side effects.

from .widgets.image_tile import ImageTile
from .widgets.tile_scene import TileScene

__all__ = ["ImageTile", "TileScene"]
