"""
figma package

Figma REST fetch, node tree normalization, and canvas rendering.
"""

from figma.client import FigmaClient, parse_file_key, parse_node_ids
from figma.parser import find_node, normalize_document, normalize_node
from figma.renderer import CanvasRenderer, TargetCanvas

__all__ = [
    "FigmaClient",
    "parse_file_key",
    "parse_node_ids",
    "find_node",
    "normalize_document",
    "normalize_node",
    "CanvasRenderer",
    "TargetCanvas",
]
