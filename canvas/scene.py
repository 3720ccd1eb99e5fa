"""
canvas/scene.py

QGraphicsScene that serves as the import target canvas.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from PyQt6.QtWidgets import QGraphicsItem, QGraphicsScene

from canvas.items import NodeEllipseItem, NodeRectItem, NodeTextItem
from settings import get_settings
from utils import hex_to_rgba
from debug_trace import trace

RGBA = Tuple[float, float, float, float]

# Quick-shape defaults: fixed geometry at (10, 10) and a per-shape colour
QUICK_ORIGIN = (10.0, 10.0)
QUICK_RECT_SIZE = (240.0, 180.0)
QUICK_SQUARE_SIZE = (200.0, 200.0)
QUICK_CIRCLE_RADIUS = 100.0
QUICK_RECT_RGBA: RGBA = (0.32, 0.34, 0.89, 1.0)
QUICK_SQUARE_RGBA: RGBA = (0.89, 0.32, 0.34, 1.0)
QUICK_CIRCLE_RGBA: RGBA = (0.34, 0.89, 0.32, 1.0)


def _get_z_index_base() -> int:
    """Get z-index base from settings. Default: 1000."""
    return get_settings().settings.canvas.zorder.base


def _get_z_index_step() -> int:
    """Get z-index step from settings. Default: 10."""
    return get_settings().settings.canvas.zorder.step


class DocumentScene(QGraphicsScene):
    """
    Graphics scene that owns the imported shape and text items.

    The insertion point is the scene's top level.  Appended items are
    tracked in append order and stacked with increasing z-values, so later
    items paint on top.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self._children: List[QGraphicsItem] = []

    # ---- Primitive creation (detached items) ----

    def create_rectangle(self, x: float, y: float, width: float, height: float, rgba: RGBA) -> NodeRectItem:
        return NodeRectItem(x, y, width, height, rgba)

    def create_ellipse(self, x: float, y: float, rx: float, ry: float, rgba: RGBA) -> NodeEllipseItem:
        return NodeEllipseItem(x, y, rx, ry, rgba)

    def create_text(self, x: float, y: float, text: str, font_size: float, rgba: RGBA,
                    font_family: Optional[str] = None) -> NodeTextItem:
        return NodeTextItem(x, y, text, font_size, rgba, font_family)

    # ---- Insertion point ----

    def append(self, item: QGraphicsItem) -> None:
        """Attach *item* at the insertion point, on top of existing items."""
        item.setZValue(self._get_next_z_index())
        self.addItem(item)
        self._children.append(item)

    def remove(self, item: QGraphicsItem) -> None:
        """Detach *item* from the insertion point.

        Raises:
            ValueError: If *item* is not attached here.
        """
        self._children.remove(item)
        self.removeItem(item)

    def children(self) -> List[QGraphicsItem]:
        """Items at the insertion point, in append order.

        This is the live list; copy it before removing items while iterating.
        """
        return self._children

    def _get_next_z_index(self) -> float:
        """Get the next z-index for a new item (higher than all existing items)."""
        if not self._children:
            return _get_z_index_base()
        max_z = max(i.zValue() for i in self._children)
        return max_z + _get_z_index_step()

    # ---- Quick shapes ----

    def _quick_rgba(self, color: Optional[str], default: RGBA) -> RGBA:
        return hex_to_rgba(color) if color else default

    def add_quick_rectangle(self, color: Optional[str] = None) -> NodeRectItem:
        """Add a 240x180 rectangle at (10, 10)."""
        x, y = QUICK_ORIGIN
        item = self.create_rectangle(x, y, *QUICK_RECT_SIZE, self._quick_rgba(color, QUICK_RECT_RGBA))
        self.append(item)
        trace("Added quick rectangle", "SCENE")
        return item

    def add_quick_square(self, color: Optional[str] = None) -> NodeRectItem:
        """Add a 200x200 square at (10, 10)."""
        x, y = QUICK_ORIGIN
        item = self.create_rectangle(x, y, *QUICK_SQUARE_SIZE, self._quick_rgba(color, QUICK_SQUARE_RGBA))
        self.append(item)
        trace("Added quick square", "SCENE")
        return item

    def add_quick_circle(self, color: Optional[str] = None) -> NodeEllipseItem:
        """Add a circle of radius 100 at (10, 10)."""
        x, y = QUICK_ORIGIN
        r = QUICK_CIRCLE_RADIUS
        item = self.create_ellipse(x, y, r, r, self._quick_rgba(color, QUICK_CIRCLE_RGBA))
        self.append(item)
        trace("Added quick circle", "SCENE")
        return item
