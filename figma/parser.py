"""
figma/parser.py

Convert Figma REST node trees into normalized ``Node`` values.

Figma's payload is loosely typed: any field may be missing, and container
nodes nest to arbitrary depth.  Parsing is therefore

- field-tolerant: every access goes through the ``Raw*`` models, which
  return explicit optionals with stated defaults;
- fault-isolated per node: a node whose fields cannot be read degrades to
  a stub holding only ``id``, ``name`` and ``type``;
- iterative: an explicit work stack replaces recursion, and a depth
  counter fails closed past ``settings.figma_import.max_depth``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from errors import DocumentTooDeepError, MalformedDocumentError
from models import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    Node,
    NodeType,
    RawNode,
)
from settings import get_settings
from utils import resolve_fill_color
from debug_trace import trace

log = logging.getLogger(__name__)


def _resolve_max_depth(max_depth: Optional[int]) -> int:
    if max_depth is not None:
        return max_depth
    return get_settings().settings.figma_import.max_depth


def _node_fields(raw: RawNode) -> Dict[str, Any]:
    """Build the ``Node`` keyword arguments for *raw*, excluding children."""
    out: Dict[str, Any] = {"id": raw.id, "name": raw.name, "type": raw.type}

    bbox = raw.bounding_box
    # Position falls back to 0; size stays unset so 0 remains a real size
    out["x"] = bbox.x if bbox is not None and bbox.x is not None else 0.0
    out["y"] = bbox.y if bbox is not None and bbox.y is not None else 0.0
    if bbox is not None:
        out["width"] = bbox.width
        out["height"] = bbox.height

    if raw.type == NodeType.RECTANGLE and raw.fills is not None:
        out["fill"] = resolve_fill_color(raw.fills)

    elif raw.type == NodeType.TEXT and raw.characters:
        style = raw.style
        out["text"] = raw.characters
        out["font_size"] = (
            style.font_size if style is not None and style.font_size is not None else DEFAULT_FONT_SIZE
        )
        out["font_family"] = (
            style.font_family if style is not None and style.font_family else DEFAULT_FONT_FAMILY
        )
        out["fill"] = resolve_fill_color(raw.fills)

    return out


def _stub_fields(source: Any) -> Dict[str, Any]:
    """Identity-only fields for a node whose other fields could not be read."""
    def pick(key: str) -> str:
        try:
            value = source.get(key)
        except (AttributeError, TypeError):
            return ""
        return value if isinstance(value, str) else ""

    return {"id": pick("id"), "name": pick("name"), "type": pick("type")}


@dataclass
class _Frame:
    """One node on the normalization work stack."""
    fields: Dict[str, Any]
    depth: int
    pending: List[Any] = field(default_factory=list)
    done: List[Node] = field(default_factory=list)
    next_index: int = 0


def _open_frame(source: Any, depth: int, max_depth: int) -> _Frame:
    if depth > max_depth:
        raise DocumentTooDeepError(max_depth, _stub_fields(source)["id"])
    try:
        raw = source if isinstance(source, RawNode) else RawNode.from_dict(source)
        fields = _node_fields(raw)
        pending = list(raw.children or ())
    except (AttributeError, KeyError, TypeError, ValueError, ArithmeticError) as e:
        stub = _stub_fields(source)
        log.warning("Could not read node %r (%s); keeping a stub", stub["id"], e)
        trace(f"Stubbed node {stub['id']!r}: {type(e).__name__}: {e}", "PARSE")
        return _Frame(fields=stub, depth=depth)
    return _Frame(fields=fields, depth=depth, pending=pending)


def _close_frame(frame: _Frame) -> Node:
    # An empty child list is reported as "no children"
    children = tuple(frame.done) if frame.done else None
    return Node(children=children, **frame.fields)


def normalize_node(raw: Any, max_depth: Optional[int] = None) -> Node:
    """
    Normalize one Figma node and its whole subtree.

    Args:
        raw: A Figma node dict (or an already parsed ``RawNode``).
        max_depth: Maximum nesting depth below *raw*; defaults to
            ``settings.figma_import.max_depth``.

    Returns:
        The normalized ``Node``; children keep source order.

    Raises:
        DocumentTooDeepError: If the subtree nests deeper than *max_depth*.
    """
    return _normalize_subtree(raw, _resolve_max_depth(max_depth), 0)


def _normalize_subtree(raw: Any, limit: int, start_depth: int) -> Node:
    """Iterative post-order build of the subtree rooted at *raw*."""
    stack: List[_Frame] = [_open_frame(raw, start_depth, limit)]
    result: Optional[Node] = None

    while stack:
        frame = stack[-1]
        if frame.next_index < len(frame.pending):
            child = frame.pending[frame.next_index]
            frame.next_index += 1
            if not isinstance(child, (dict, RawNode)):
                log.warning("Skipping non-object child of node %r", frame.fields.get("id"))
                continue
            stack.append(_open_frame(child, frame.depth + 1, limit))
            continue

        stack.pop()
        node = _close_frame(frame)
        if stack:
            stack[-1].done.append(node)
        else:
            result = node

    return result


def _document_root(payload: Any) -> Dict[str, Any]:
    if isinstance(payload, dict):
        document = payload.get("document")
        if isinstance(document, dict):
            return document
        if "children" in payload or payload.get("type") == "DOCUMENT":
            return payload
    raise MalformedDocumentError("Payload does not contain a Figma document.")


def normalize_document(payload: Any, max_depth: Optional[int] = None) -> List[Node]:
    """
    Normalize a fetched Figma file into its top-level nodes.

    Accepts a ``GET /v1/files/:key`` response, a ``GET /v1/files/:key/nodes``
    response, or a bare document node.

    Args:
        payload: Decoded JSON payload.
        max_depth: Maximum nesting depth; defaults to the configured value.

    Returns:
        Normalized children of the document root, in source order.  For a
        ``/nodes`` response, one node per requested id.

    Raises:
        MalformedDocumentError: If *payload* holds no document.
        DocumentTooDeepError: If any subtree nests too deeply.
    """
    limit = _resolve_max_depth(max_depth)

    nodes_map = payload.get("nodes") if isinstance(payload, dict) else None
    if isinstance(nodes_map, dict):
        out = []
        for entry in nodes_map.values():
            doc = entry.get("document") if isinstance(entry, dict) else None
            if isinstance(doc, dict):
                out.append(_normalize_subtree(doc, limit, 0))
        trace(f"Normalized {len(out)} requested nodes", "PARSE")
        return out

    root = _document_root(payload)
    children = root.get("children")
    if not isinstance(children, list):
        return []

    out = []
    for child in children:
        if not isinstance(child, dict):
            log.warning("Skipping non-object entry in document children")
            continue
        # The document root itself sits at depth 0
        out.append(_normalize_subtree(child, limit, 1))
    trace(f"Normalized document: {len(out)} top-level nodes", "PARSE")
    return out


def find_node(nodes: Iterable[Node], node_id: str) -> Optional[Node]:
    """Return the first node with *node_id* in a depth-first walk, or None."""
    for root in nodes:
        for node in root.iter_tree():
            if node.id == node_id:
                return node
    return None
