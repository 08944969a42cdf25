# Path: core/indexing/background.py
# Purpose: Offload directory traversal to a worker thread without stalling the host loop.
# Layer: core/indexing.
# Details: Same rate-limit contract as DirectoryScanner.step; results are published on the caller's thread.

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import wait as wait_futures
from typing import Optional

from config.settings import ScanSettings
from core.models.domain import ScanReport, WatchedSet
from .scanner import DirectoryScanner

logger = logging.getLogger(__name__)


class BackgroundScanner:
    """Run scan passes on a single worker thread and publish completed passes atomically.

    The worker never touches ``WatchedSet``; it only returns a ``ScanReport``. The
    found-set and last scan time are swapped in by ``step`` on the host thread, so a
    reconciler running on that thread never observes a half-built list.
    """

    def __init__(self, settings: Optional[ScanSettings] = None) -> None:
        self.scanner = DirectoryScanner(settings)
        self.settings = self.scanner.settings
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="photoview-scan")
        self._pending: Optional[Future] = None
        self._pending_started: Optional[float] = None

    @property
    def scanning(self) -> bool:
        return self._pending is not None

    def step(self, watched: WatchedSet, now: float) -> Optional[ScanReport]:
        """Publish a finished pass, or submit a new one when due.

        Returns the report when a pass was published during this call, otherwise None.
        """

        if self._pending is not None:
            if not self._pending.done():
                return None
            return self._publish(watched, now)

        if self.scanner.due(watched, now):
            roots = list(watched.roots)
            self._pending = self._executor.submit(self.scanner.scan, roots)
            self._pending_started = now
            logger.debug("Submitted background scan of %d roots", len(roots))
        return None

    def wait(self, watched: WatchedSet, now: float) -> Optional[ScanReport]:
        """Block until the in-flight pass finishes, then publish it."""

        if self._pending is None:
            return None
        wait_futures([self._pending])
        return self._publish(watched, now)

    def shutdown(self) -> None:
        """Stop accepting work; an in-flight pass runs to completion."""

        self._executor.shutdown(wait=True)
        self._pending = None

    def _publish(self, watched: WatchedSet, now: float) -> Optional[ScanReport]:
        future = self._pending
        self._pending = None
        try:
            report: ScanReport = future.result()
        except Exception:  # noqa: BLE001 - the scan step must not raise into the host loop
            logger.exception("Background scan failed")
            watched.last_scan_time = now
            return None
        report.started_at = self._pending_started
        self.scanner.publish(watched, report, now)
        return report
