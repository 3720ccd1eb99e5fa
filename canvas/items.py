"""
canvas/items.py

Graphics items created on the canvas when Figma nodes are imported:
filled rectangles, ellipses, and text.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from PyQt6.QtCore import Qt, QPointF, QRectF
from PyQt6.QtGui import QBrush, QFont, QPen
from PyQt6.QtWidgets import (
    QGraphicsItem,
    QGraphicsEllipseItem,
    QGraphicsRectItem,
    QGraphicsTextItem,
)

from canvas.mixins import NODE_ID_KEY, FillMixin, LinkedMixin

RGBA = Tuple[float, float, float, float]

_ITEM_FLAGS = (
    QGraphicsItem.GraphicsItemFlag.ItemIsSelectable
    | QGraphicsItem.GraphicsItemFlag.ItemIsMovable
)


def round2(value: float) -> float:
    """Round a value to 2 decimal place precision for geometry."""
    return round(value, 2)


class NodeRectItem(QGraphicsRectItem, FillMixin, LinkedMixin):
    """Filled rectangle with no outline, positioned by its top-left corner."""

    def __init__(self, x: float, y: float, w: float, h: float, rgba: RGBA, node_id: str = ""):
        QGraphicsRectItem.__init__(self, QRectF(0, 0, w, h))
        FillMixin.__init__(self, rgba)
        LinkedMixin.__init__(self, node_id)
        self.setData(NODE_ID_KEY, node_id)

        self.kind = "rect"
        self.setPos(QPointF(x, y))
        self.setFlags(_ITEM_FLAGS)
        self.setPen(QPen(Qt.PenStyle.NoPen))
        self._apply_fill()

    def _apply_fill(self):
        self.setBrush(QBrush(self.fill_color))

    def to_record(self) -> Dict[str, Any]:
        p = self.pos()
        r = self.rect()
        return {
            "node_id": self.node_id,
            "kind": self.kind,
            "geom": {
                "x": round2(p.x()),
                "y": round2(p.y()),
                "w": round2(r.width()),
                "h": round2(r.height()),
            },
            **self._fill_dict(),
        }


class NodeEllipseItem(QGraphicsEllipseItem, FillMixin, LinkedMixin):
    """Filled ellipse given by its top-left corner and radii."""

    def __init__(self, x: float, y: float, rx: float, ry: float, rgba: RGBA, node_id: str = ""):
        QGraphicsEllipseItem.__init__(self, QRectF(0, 0, 2 * rx, 2 * ry))
        FillMixin.__init__(self, rgba)
        LinkedMixin.__init__(self, node_id)
        self.setData(NODE_ID_KEY, node_id)

        self.kind = "ellipse"
        self.rx = rx
        self.ry = ry
        self.setPos(QPointF(x, y))
        self.setFlags(_ITEM_FLAGS)
        self.setPen(QPen(Qt.PenStyle.NoPen))
        self._apply_fill()

    def _apply_fill(self):
        self.setBrush(QBrush(self.fill_color))

    def to_record(self) -> Dict[str, Any]:
        p = self.pos()
        return {
            "node_id": self.node_id,
            "kind": self.kind,
            "geom": {
                "x": round2(p.x()),
                "y": round2(p.y()),
                "rx": round2(self.rx),
                "ry": round2(self.ry),
            },
            **self._fill_dict(),
        }


class NodeTextItem(QGraphicsTextItem, FillMixin, LinkedMixin):
    """Plain text item; the fill colour is the text colour."""

    def __init__(self, x: float, y: float, text: str, font_size: float, rgba: RGBA,
                 font_family: Optional[str] = None, node_id: str = ""):
        QGraphicsTextItem.__init__(self, text)
        FillMixin.__init__(self, rgba)
        LinkedMixin.__init__(self, node_id)
        self.setData(NODE_ID_KEY, node_id)

        self.kind = "text"
        self.font_size = font_size
        self.font_family = font_family
        self.setPos(QPointF(x, y))
        self.setFlags(_ITEM_FLAGS)
        self.setTextInteractionFlags(Qt.TextInteractionFlag.NoTextInteraction)
        self._apply_font()
        self._apply_fill()

    def _apply_font(self):
        f = QFont(self.font())
        if self.font_family:
            f.setFamily(self.font_family)
        # Qt rejects non-positive point sizes
        if self.font_size > 0:
            f.setPointSizeF(float(self.font_size))
        self.setFont(f)

    def _apply_fill(self):
        self.setDefaultTextColor(self.fill_color)

    def to_record(self) -> Dict[str, Any]:
        p = self.pos()
        rec = {
            "node_id": self.node_id,
            "kind": self.kind,
            "geom": {
                "x": round2(p.x()),
                "y": round2(p.y()),
            },
            "text": self.toPlainText(),
            "font_size": round2(self.font_size),
            **self._fill_dict(),
        }
        if self.font_family:
            rec["font_family"] = self.font_family
        return rec
