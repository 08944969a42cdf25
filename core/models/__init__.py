# Path: core/models/__init__.py
# Purpose: Package initializer for domain model definitions.
# Layer: core/models.
# Details: Exposes dataclasses used across scanning, reconciliation, and presentation layers.

from .domain import (
    DuplicateTileError,
    ReconcileResult,
    ScanErrorKind,
    ScanIssue,
    ScanReport,
    Tile,
    Vec3,
    WatchedSet,
)

__all__ = [
    "DuplicateTileError",
    "ReconcileResult",
    "ScanErrorKind",
    "ScanIssue",
    "ScanReport",
    "Tile",
    "Vec3",
    "WatchedSet",
]
