"""
canvas package

PyQt6 graphics items, scene, and view for the import target canvas.
"""

from canvas.mixins import FillMixin, LinkedMixin
from canvas.items import (
    NodeEllipseItem,
    NodeRectItem,
    NodeTextItem,
)
from canvas.scene import DocumentScene
from canvas.view import DocumentView

__all__ = [
    "FillMixin",
    "LinkedMixin",
    "NodeEllipseItem",
    "NodeRectItem",
    "NodeTextItem",
    "DocumentScene",
    "DocumentView",
]
