# Path: core/indexing/scanner.py
# Purpose: Scan watched root directories and collect image file paths.
# Layer: core/indexing.
# Details: Rate-limited, error-tolerant recursive traversal that replaces the watched found-set each pass.

from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from typing import FrozenSet, Iterable, List, Optional, Tuple

from config.settings import DEFAULT_IMAGE_EXTENSIONS, ScanSettings
from core.models.domain import ScanErrorKind, ScanIssue, ScanReport, WatchedSet

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = frozenset(DEFAULT_IMAGE_EXTENSIONS)


def is_supported_image(path: Path | str, extensions: Iterable[str] = SUPPORTED_EXTENSIONS) -> bool:
    """Return True when the file extension is in the allow-list (case-insensitive)."""

    suffix = os.path.splitext(str(path))[1].lower()
    return bool(suffix) and suffix in extensions


class DirectoryScanner:
    """Walk watched roots on a fixed minimum interval and publish matching files."""

    def __init__(self, settings: Optional[ScanSettings] = None) -> None:
        self.settings = settings or ScanSettings()
        self.extensions = frozenset(self.settings.extensions)

    def due(self, watched: WatchedSet, now: float) -> bool:
        """Return True when enough time has passed since the last completed pass."""

        if watched.last_scan_time is None:
            return True
        return now - watched.last_scan_time >= self.settings.interval_seconds

    def step(self, watched: WatchedSet, now: float) -> Optional[ScanReport]:
        """Run one scan pass if due and publish it into ``watched``.

        Returns the report of the executed pass, or None when the call was rate limited.
        Never raises for filesystem problems; those are logged and recorded on the report.
        """

        if not self.due(watched, now):
            return None
        report = self.scan(watched.roots)
        report.started_at = now
        self.publish(watched, report, now)
        return report

    @staticmethod
    def publish(watched: WatchedSet, report: ScanReport, now: float) -> None:
        """Replace the found-set with the result of a completed pass."""

        watched.found = report.found
        watched.last_scan_time = now

    def scan(self, roots: Iterable[Path]) -> ScanReport:
        """Traverse all roots once and return the deduplicated list of image files."""

        started = time.perf_counter()
        roots = list(roots)
        found: List[Path] = []
        issues: List[ScanIssue] = []

        for root in roots:
            root = Path(os.path.abspath(root))
            if not root.exists():
                logger.warning("Directory does not exist: %s", root)
                issues.append(ScanIssue(ScanErrorKind.DIRECTORY_MISSING, root, "directory does not exist"))
                continue
            if not root.is_dir():
                logger.warning("Watched root is not a directory: %s", root)
                issues.append(ScanIssue(ScanErrorKind.DIRECTORY_MISSING, root, "not a directory"))
                continue
            self._collect(root, found, issues)

        unique = tuple(dict.fromkeys(found))
        logger.debug("Found %d images across %d directories", len(unique), len(roots))
        return ScanReport(
            found=unique,
            issues=issues,
            roots_scanned=len(roots),
            duration_seconds=time.perf_counter() - started,
        )

    def _collect(self, root: Path, found: List[Path], issues: List[ScanIssue]) -> None:
        """Depth-first walk below ``root`` in name order, skipping unreadable subtrees.

        Each pending directory carries the identities of its ancestors. A directory that
        is its own ancestor (a symlink loop) is cut; a symlink alias of an unrelated
        directory is walked again under its own path.
        """

        follow = self.settings.follow_symlinks
        max_depth = self.settings.max_depth
        stack: List[Tuple[Path, int, FrozenSet[Tuple[int, int]]]] = [(root, 0, frozenset())]
        while stack:
            directory, depth, ancestors = stack.pop()
            try:
                identity = _identity(os.stat(directory))
                if identity in ancestors:
                    logger.debug("Skipping symlink loop at %s", directory)
                    continue
                with os.scandir(directory) as entries:
                    ordered = sorted(entries, key=lambda item: item.name)
            except OSError as exc:
                logger.warning("Error scanning directory %s: %s", directory, exc)
                issues.append(ScanIssue(ScanErrorKind.TRAVERSAL_IO_ERROR, directory, str(exc)))
                continue

            lineage = ancestors | {identity}
            subdirs: List[Path] = []
            for entry in ordered:
                try:
                    if entry.is_dir(follow_symlinks=follow):
                        if max_depth is None or depth < max_depth:
                            subdirs.append(Path(entry.path))
                        continue
                    if entry.is_file() and is_supported_image(entry.name, self.extensions):
                        found.append(Path(entry.path))
                except OSError as exc:
                    logger.warning("Error reading entry %s: %s", entry.path, exc)
                    issues.append(ScanIssue(ScanErrorKind.TRAVERSAL_IO_ERROR, Path(entry.path), str(exc)))

            for subdir in reversed(subdirs):
                stack.append((subdir, depth + 1, lineage))


def _identity(stat: os.stat_result) -> Tuple[int, int]:
    return stat.st_dev, stat.st_ino
