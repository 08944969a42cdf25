# Path: gui/main_window.py
# Purpose: Define the desktop window that hosts the tile scene and drives the watch session.
# Layer: gui.
# Details: A QTimer is the host loop; each tick runs the scan step then the reconcile step.

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QAction, QKeySequence, QPainter
from PySide6.QtWidgets import QApplication, QGraphicsView, QLabel, QMainWindow

from config import AppSettings, configure_logging
from core.session import WatchSession
from .widgets.tile_scene import TileScene

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main application window showing one tile per discovered image."""

    def __init__(self, settings: AppSettings) -> None:
        super().__init__()
        self.settings = settings
        self.scene = TileScene(
            tile_size=settings.grid.tile_size,
            world_scale=settings.world_scale,
            parent=self,
        )
        self.session = WatchSession(settings, self.scene)
        self.setWindowTitle("PhotoView")

        self.view = QGraphicsView(self.scene)
        self.view.setRenderHint(QPainter.SmoothPixmapTransform)
        self.view.setDragMode(QGraphicsView.ScrollHandDrag)
        self.setCentralWidget(self.view)

        self.status_label = QLabel("No images yet")
        self.statusBar().addWidget(self.status_label)

        self._configure_shortcuts()
        self.timer = QTimer(self)
        self.timer.setInterval(settings.tick_ms)
        self.timer.timeout.connect(self._on_tick)
        self.timer.start()

    def _configure_shortcuts(self) -> None:
        toggle_action = QAction(self)
        toggle_action.setShortcut(QKeySequence(Qt.Key_F11))
        toggle_action.triggered.connect(self.toggle_fullscreen)
        self.addAction(toggle_action)

    def _on_tick(self) -> None:
        """
        External calls:
        - core/session.py::WatchSession.tick - scan (rate limited) then reconcile into the scene.
        """

        result = self.session.tick()
        if result.reconcile.changed:
            self.view.setSceneRect(self.scene.itemsBoundingRect())
        if result.scan is not None or result.reconcile.changed:
            self._update_status()

    def _update_status(self) -> None:
        found = len(self.session.watched.found)
        tiles = self.scene.tile_count()
        self.status_label.setText(f"Found {found} images, showing {tiles} tiles")

    def toggle_fullscreen(self) -> None:
        if self.isFullScreen():
            self.showNormal()
        else:
            self.showFullScreen()

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self.timer.stop()
        self.session.close()
        super().closeEvent(event)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the desktop viewer over the given roots."""

    parser = argparse.ArgumentParser(description="Show images from watched directories as tiles")
    parser.add_argument("roots", nargs="*", type=Path, help="Directories to watch (defaults to PHOTOVIEW_ROOTS)")
    parser.add_argument("--background", action="store_true", help="Scan on a worker thread")
    args = parser.parse_args(argv)

    settings = AppSettings.from_env()
    if args.roots:
        settings.scan.roots = list(args.roots)
    if args.background:
        settings.scan.background = True
    configure_logging(settings.log_level)
    if not settings.scan.roots:
        logger.warning("No directories to watch; pass roots or set PHOTOVIEW_ROOTS")

    app = QApplication(sys.argv[:1])
    window = MainWindow(settings)
    window.resize(1280, 800)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
