# Path: gui/widgets/image_tile.py
# Purpose: Provide the scene item that displays one discovered image.
# Layer: gui.
# Details: Square framed item centred on its position; the pixmap is attached once decoded.

from __future__ import annotations

from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QPen, QPixmap
from PySide6.QtWidgets import QGraphicsItem, QGraphicsPixmapItem, QGraphicsRectItem


class ImageTile(QGraphicsRectItem):
    """Framed square tile tagged with the file it represents."""

    def __init__(self, source_path: Path, edge: float, parent: Optional[QGraphicsItem] = None) -> None:
        super().__init__(-edge / 2.0, -edge / 2.0, edge, edge, parent)
        self.source_path = source_path
        self.edge = edge
        self._pixmap_item = QGraphicsPixmapItem(self)
        self.setPen(QPen(QColor("#4caf50"), 1.0))
        self.setToolTip(str(source_path))

    @property
    def has_image(self) -> bool:
        return not self._pixmap_item.pixmap().isNull()

    def set_image(self, pixmap: Optional[QPixmap] = None) -> None:
        if pixmap is None or pixmap.isNull():
            self._pixmap_item.setPixmap(QPixmap())
            return
        side = max(1, int(self.edge))
        scaled = pixmap.scaled(side, side, Qt.KeepAspectRatio, Qt.SmoothTransformation)
        self._pixmap_item.setPixmap(scaled)
        self._pixmap_item.setOffset(-scaled.width() / 2.0, -scaled.height() / 2.0)
