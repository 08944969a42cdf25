# Path: core/session.py
# Purpose: Own the watched-directory state and run the scan and reconcile steps in order.
# Layer: core.
# Details: Explicit context object injected into both steps; hosts call tick() from their own loop.

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional, Union

from config.settings import AppSettings
from core.indexing import BackgroundScanner, DirectoryScanner
from core.models.domain import ReconcileResult, ScanReport, WatchedSet
from core.tiles import TileReconciler, TileRegistry

logger = logging.getLogger(__name__)


@dataclass
class TickResult:
    """What happened during one host tick."""

    scan: Optional[ScanReport]
    reconcile: ReconcileResult


class WatchSession:
    """Lifecycle owner for one WatchedSet, its scanner, reconciler, and tile registry.

    The session has no timer. A host loop calls ``tick`` at whatever cadence it likes;
    the scanner's own interval bounds how often the filesystem is actually walked.
    """

    def __init__(self, settings: AppSettings, registry: TileRegistry) -> None:
        self.settings = settings
        self.registry = registry
        self.watched = WatchedSet(roots=list(settings.scan.roots))
        self.scanner: Union[DirectoryScanner, BackgroundScanner]
        if settings.scan.background:
            self.scanner = BackgroundScanner(settings.scan)
        else:
            self.scanner = DirectoryScanner(settings.scan)
        self.reconciler = TileReconciler(settings.grid)
        self._closed = False

    def tick(self, now: Optional[float] = None) -> TickResult:
        """Run the scan step, then the reconcile step, against the same WatchedSet."""

        if self._closed:
            raise RuntimeError("WatchSession is closed")
        if now is None:
            now = time.monotonic()
        report = self.scanner.step(self.watched, now)
        result = self.reconciler.step(self.watched, self.registry)
        return TickResult(scan=report, reconcile=result)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if isinstance(self.scanner, BackgroundScanner):
            self.scanner.shutdown()
        logger.debug("Watch session closed")

    def __enter__(self) -> "WatchSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
