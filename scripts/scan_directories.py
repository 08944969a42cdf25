# Path: scripts/scan_directories.py
# Purpose: CLI tool to scan image folders and print the resulting tile layout.
# Layer: scripts.
# Details: Demonstrates how to wire the scanner, reconciler, and an in-memory tile registry together.

from __future__ import annotations

import argparse
import time
from pathlib import Path
from typing import List, Optional

from config import AppSettings, GridSettings, ScanSettings, configure_logging
from core.models import ScanIssue
from core.session import WatchSession
from core.tiles import InMemoryTileRegistry


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Scan folders for images and lay them out on a grid")
    parser.add_argument("roots", nargs="+", type=Path, help="Directories to scan")
    parser.add_argument("--interval", type=float, default=5.0, help="Seconds between scan passes")
    parser.add_argument("--passes", type=int, default=1, help="Number of scan + reconcile passes to run")
    parser.add_argument("--spacing", type=float, default=2.5, help="Distance between tile centres")
    parser.add_argument("--evict-stale", action="store_true", help="Remove tiles whose file disappeared")
    parser.add_argument("--max-depth", type=int, default=None, help="Recursion bound below each root")
    parser.add_argument("--no-follow-symlinks", action="store_true", help="Do not descend into symlinked directories")
    parser.add_argument("--log-level", default="WARNING", help="Logging verbosity")
    return parser


def build_settings(args: argparse.Namespace) -> AppSettings:
    """Translate parsed CLI arguments into application settings."""

    return AppSettings(
        scan=ScanSettings(
            roots=args.roots,
            interval_seconds=args.interval,
            max_depth=args.max_depth,
            follow_symlinks=not args.no_follow_symlinks,
        ),
        grid=GridSettings(spacing=args.spacing, evict_stale=args.evict_stale),
        log_level=args.log_level,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Run scan + reconcile passes over the given folders, then print the layout."""

    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    settings = build_settings(args)

    registry = InMemoryTileRegistry()
    issues: List[ScanIssue] = []
    with WatchSession(settings, registry) as session:
        for index in range(max(1, args.passes)):
            if index:
                time.sleep(settings.scan.interval_seconds)
            result = session.tick()
            if result.scan is not None:
                issues = result.scan.issues

    for tile in registry:
        x, y, z = tile.grid_position
        print(f"{x:8.2f} {y:5.2f} {z:8.2f}  {tile.source_path}")
    for issue in issues:
        print(f"skipped {issue.path}: {issue.kind.value} ({issue.message})")
    print(f"Placed {len(registry)} tiles from {len(args.roots)} roots")
    return 1 if issues else 0


if __name__ == "__main__":
    raise SystemExit(main())
