# Path: core/tiles/__init__.py
# Purpose: Package initializer for tile reconciliation.
# Layer: core/tiles.
# Details: Exposes grid placement helpers, the reconciler, and tile registry implementations.

from .reconciler import TileReconciler, calculate_grid_position, grid_size_for
from .registry import InMemoryTileRegistry, TileRegistry

__all__ = [
    "InMemoryTileRegistry",
    "TileReconciler",
    "TileRegistry",
    "calculate_grid_position",
    "grid_size_for",
]
