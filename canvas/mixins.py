"""
canvas/mixins.py

Mixin classes for graphics items providing source-node linking and fill handling.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from PyQt6.QtGui import QColor

from models import DEFAULT_FILL
from utils import hex_to_qcolor, qcolor_to_hex, rgba_to_qcolor

NODE_ID_KEY = 1  # QGraphicsItem.data key for the source Figma node id


class LinkedMixin:
    """
    Mixin that links a graphics item back to the Figma node it was built from.
    """

    def __init__(self, node_id: str = ""):
        self.node_id = node_id

    def set_node_id(self, node_id: str):
        """Set the source node ID for this item."""
        self.node_id = node_id
        self.setData(NODE_ID_KEY, node_id)


class FillMixin:
    """
    Mixin that adds a solid fill colour to graphics items.

    Subclasses implement ``_apply_fill`` to push ``fill_color`` onto the
    underlying Qt item.
    """

    def __init__(self, rgba: Optional[Tuple[float, float, float, float]] = None):
        self.kind = "unknown"
        self.fill_color = rgba_to_qcolor(rgba) if rgba is not None else QColor(DEFAULT_FILL)

    def set_fill_hex(self, hex_color: str) -> None:
        """Set the fill from a ``#rrggbb`` string (invalid input keeps the default)."""
        self.fill_color = hex_to_qcolor(hex_color, QColor(DEFAULT_FILL))
        self._apply_fill()

    def _apply_fill(self):
        raise NotImplementedError

    def _fill_dict(self) -> Dict[str, Any]:
        """Get fill as dict for JSON serialization."""
        return {"fill": qcolor_to_hex(self.fill_color)}
