"""
figma/renderer.py

Materialize normalized ``Node`` trees as primitive items on a target canvas.

Every position, size and font size is multiplied by a uniform scale factor
(0.5 by default).  Only RECTANGLE, TEXT and FRAME nodes produce output;
GROUP and unknown types are walked for their children only.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Protocol, Sequence, Tuple

from errors import DocumentTooDeepError
from models import Node, NodeType
from settings import get_settings
from utils import hex_to_rgba
from debug_trace import trace, trace_call

RGBA = Tuple[float, float, float, float]


class TargetCanvas(Protocol):
    """Primitive creation/removal calls the renderer issues.

    ``create_*`` build a detached item; ``append`` attaches it at the
    canvas's insertion point.  ``children`` returns the items currently
    attached there, in append order.
    """

    def create_rectangle(self, x: float, y: float, width: float, height: float, rgba: RGBA) -> Any: ...

    def create_ellipse(self, x: float, y: float, rx: float, ry: float, rgba: RGBA) -> Any: ...

    def create_text(self, x: float, y: float, text: str, font_size: float, rgba: RGBA,
                    font_family: Optional[str] = None) -> Any: ...

    def append(self, item: Any) -> None: ...

    def remove(self, item: Any) -> None: ...

    def children(self) -> Sequence[Any]: ...


class CanvasRenderer:
    """
    Walks ``Node`` trees and creates matching primitives on a canvas.

    Holds no state between visits; each node is handled purely by its type.
    Creation failures propagate to the caller and leave earlier primitives
    in place.

    Args:
        canvas: The target canvas.
        scale: Uniform scale factor; defaults to ``settings.render.scale_factor``.
        max_depth: Maximum nesting depth; defaults to
            ``settings.figma_import.max_depth``.
    """

    def __init__(self, canvas: TargetCanvas, scale: Optional[float] = None, max_depth: Optional[int] = None):
        s = get_settings().settings
        self.canvas = canvas
        self.scale = s.render.scale_factor if scale is None else scale
        self.max_depth = s.figma_import.max_depth if max_depth is None else max_depth
        self.default_fill = s.render.default_fill
        self.default_font_size = s.render.default_font_size
        self.default_font_family = s.render.default_font_family

    # ---- Public API ----

    def render(self, node: Node) -> int:
        """Render *node* and its subtree in painter's order.

        Returns:
            Number of primitives created.

        Raises:
            DocumentTooDeepError: If the tree nests deeper than ``max_depth``.
        """
        created = 0
        stack: List[Tuple[Node, int]] = [(node, 0)]
        while stack:
            current, depth = stack.pop()
            if depth > self.max_depth:
                raise DocumentTooDeepError(self.max_depth, current.id)
            if self._render_self(current):
                created += 1
            if current.children:
                for child in reversed(current.children):
                    stack.append((child, depth + 1))
        return created

    @trace_call("IMPORT")
    def render_many(self, nodes: Iterable[Node]) -> int:
        """Render each node in order; equivalent to calling ``render`` per node."""
        created = 0
        for node in nodes:
            created += self.render(node)
        trace(f"Rendered {created} primitives", "IMPORT")
        return created

    def clear(self) -> int:
        """Remove every item at the canvas insertion point.

        Returns:
            Number of items removed.
        """
        # Removing mutates the live child list, so iterate over a copy
        snapshot = tuple(self.canvas.children())
        for item in snapshot:
            self.canvas.remove(item)
        trace(f"Cleared {len(snapshot)} items from canvas", "IMPORT")
        return len(snapshot)

    # ---- Per-type handling ----

    def _render_self(self, node: Node) -> bool:
        """Create the node's own primitive, if any. Returns True if one was created."""
        if node.type == NodeType.RECTANGLE:
            if node.has_geometry:
                self._add_rectangle(node)
                return True
        elif node.type == NodeType.TEXT:
            if node.text is not None and node.x is not None and node.y is not None:
                self._add_text(node)
                return True
        elif node.type == NodeType.FRAME:
            # Frames draw only their background fill
            if node.fill and node.has_geometry:
                self._add_rectangle(node)
                return True
        return False

    def _add_rectangle(self, node: Node):
        s = self.scale
        x, y = node.x * s, node.y * s
        w, h = node.width * s, node.height * s
        rgba = hex_to_rgba(node.fill or self.default_fill)
        trace(f"rect {node.id!r} at ({x}, {y}) size ({w}, {h})", "RENDER")
        item = self.canvas.create_rectangle(x, y, w, h, rgba)
        self._tag(item, node)
        self.canvas.append(item)

    def _add_text(self, node: Node):
        s = self.scale
        x, y = node.x * s, node.y * s
        font_size = (node.font_size or self.default_font_size) * s
        rgba = hex_to_rgba(node.fill or self.default_fill)
        family = node.font_family or self.default_font_family
        trace(f"text {node.id!r} at ({x}, {y}) size {font_size}", "RENDER")
        item = self.canvas.create_text(x, y, node.text, font_size, rgba, family)
        self._tag(item, node)
        self.canvas.append(item)

    @staticmethod
    def _tag(item: Any, node: Node):
        """Record the source node id on items that support it."""
        set_node_id = getattr(item, "set_node_id", None)
        if callable(set_node_id):
            set_node_id(node.id)
