# Path: core/models/domain.py
# Purpose: Define domain models shared across scanning, reconciliation, and presentation.
# Layer: core/models.
# Details: Lightweight dataclasses for the watched-directory state, tiles, and scan diagnostics.

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, List, NamedTuple, Optional, Tuple


class Vec3(NamedTuple):
    """World-space position; tiles lie on the y=0 plane."""

    x: float
    y: float
    z: float


@dataclass
class WatchedSet:
    """Process-wide scan state owned by the session and mutated in place on each pass.

    ``found`` is always replaced wholesale by the scanner, never merged, so readers
    holding a reference to the previous tuple see a consistent snapshot.
    """

    roots: List[Path] = field(default_factory=list)
    found: Tuple[Path, ...] = ()
    last_scan_time: Optional[float] = None


@dataclass(frozen=True)
class Tile:
    """One materialized visual element representing a single image file."""

    source_path: Path
    grid_position: Vec3
    handle: Any = None


class ScanErrorKind(str, Enum):
    """Recoverable problems recorded during a scan pass."""

    DIRECTORY_MISSING = "directory_missing"
    TRAVERSAL_IO_ERROR = "traversal_io_error"


@dataclass(frozen=True)
class ScanIssue:
    """A skipped root or subtree, with the reason it was skipped."""

    kind: ScanErrorKind
    path: Path
    message: str


@dataclass
class ScanReport:
    """Outcome of one completed scan pass."""

    found: Tuple[Path, ...] = ()
    issues: List[ScanIssue] = field(default_factory=list)
    roots_scanned: int = 0
    started_at: Optional[float] = None
    duration_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        return not self.issues


@dataclass(frozen=True)
class ReconcileResult:
    """Paths touched by one reconciliation pass."""

    created: Tuple[Path, ...] = ()
    removed: Tuple[Path, ...] = ()
    moved: Tuple[Path, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.created or self.removed or self.moved)


class DuplicateTileError(RuntimeError):
    """Raised when a registry is asked to create a second tile for the same path."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Tile already exists for {path}")
        self.path = path
