"""
models.py

Data models and constants for the FigSync importer.

``Raw*`` classes model the loosely-typed Figma REST payload at the ingestion
boundary.  Every field is optional and ``from_dict`` never raises on missing
or wrongly typed values; unknown keys are preserved in ``extras``.

``Node`` is the normalized, immutable representation produced by
``figma.parser`` and consumed by ``figma.renderer``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Iterator, List, Optional, Tuple


# ----------------------------
# Constants
# ----------------------------

DEFAULT_FILL = "#5256e3"
DEFAULT_FONT_SIZE = 16
DEFAULT_FONT_FAMILY = "Arial"

# Uniform multiplier for positions, sizes and font sizes on the target canvas
SCALE_FACTOR = 0.5


class NodeType:
    """Figma node type constants the renderer knows how to draw."""
    RECTANGLE = "RECTANGLE"
    TEXT = "TEXT"
    FRAME = "FRAME"
    GROUP = "GROUP"


class FillType:
    """Figma paint type constants."""
    SOLID = "SOLID"


# ----------------------------
# Raw (ingestion boundary) models
# ----------------------------

def _opt_number(value: Any) -> Optional[float]:
    """Return *value* as a float, or None if it is not a usable number."""
    if isinstance(value, bool):
        return None
    if not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        # JSON integers are unbounded; anything past float range is unusable
        return None
    return number if math.isfinite(number) else None


def _opt_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _split_extras(cls, d: Dict[str, Any], aliases: Dict[str, str]) -> Dict[str, Any]:
    """Collect keys of *d* that are not fields of *cls* (after aliasing)."""
    known = {f.name for f in fields(cls) if f.name != "extras"}
    return {k: v for k, v in d.items() if aliases.get(k, k) not in known}


@dataclass(frozen=True)
class RawColor:
    """Figma RGBA colour with channels in the 0.0 - 1.0 range."""
    r: Optional[float] = None
    g: Optional[float] = None
    b: Optional[float] = None
    a: Optional[float] = None

    @classmethod
    def from_dict(cls, d: Any) -> Optional["RawColor"]:
        if not isinstance(d, dict):
            return None
        return cls(
            r=_opt_number(d.get("r")),
            g=_opt_number(d.get("g")),
            b=_opt_number(d.get("b")),
            a=_opt_number(d.get("a")),
        )

    def channels(self) -> Optional[Tuple[float, float, float]]:
        """Return ``(r, g, b)`` if all three channels are present."""
        if self.r is None or self.g is None or self.b is None:
            return None
        return (self.r, self.g, self.b)


@dataclass(frozen=True)
class RawFill:
    """One entry of a Figma ``fills`` list."""
    type: Optional[str] = None
    color: Optional[RawColor] = None

    @classmethod
    def from_dict(cls, d: Any) -> Optional["RawFill"]:
        if not isinstance(d, dict):
            return None
        return cls(type=_opt_str(d.get("type")), color=RawColor.from_dict(d.get("color")))

    @property
    def is_solid(self) -> bool:
        return (self.type or "").upper() == FillType.SOLID


@dataclass(frozen=True)
class RawBoundingBox:
    """Figma ``absoluteBoundingBox``."""
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None

    @classmethod
    def from_dict(cls, d: Any) -> Optional["RawBoundingBox"]:
        if not isinstance(d, dict):
            return None
        return cls(
            x=_opt_number(d.get("x")),
            y=_opt_number(d.get("y")),
            width=_opt_number(d.get("width")),
            height=_opt_number(d.get("height")),
        )


@dataclass(frozen=True)
class RawTextStyle:
    """Subset of the Figma ``style`` object used for TEXT nodes."""
    font_size: Optional[float] = None
    font_family: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Any) -> Optional["RawTextStyle"]:
        if not isinstance(d, dict):
            return None
        return cls(
            font_size=_opt_number(d.get("fontSize")),
            font_family=_opt_str(d.get("fontFamily")),
        )


@dataclass(frozen=True)
class RawNode:
    """A single Figma node as received from the REST API.

    ``children`` holds the raw child dicts untouched so that each child is
    parsed (and can fail) on its own.  ``fills`` is None when the source has
    no fills list at all, and an empty tuple when the list is present but empty.
    """
    id: str = ""
    name: str = ""
    type: str = ""
    bounding_box: Optional[RawBoundingBox] = None
    fills: Optional[Tuple[RawFill, ...]] = None
    characters: Optional[str] = None
    style: Optional[RawTextStyle] = None
    children: Optional[Tuple[Any, ...]] = None
    extras: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    _ALIASES = {
        "absoluteBoundingBox": "bounding_box",
    }

    @classmethod
    def from_dict(cls, d: Any) -> "RawNode":
        """Create a RawNode from a Figma node dict.

        Args:
            d: Node dict; anything that is not a dict yields an empty node.

        Returns:
            A ``RawNode`` with unknown keys kept in ``extras``.
        """
        if not isinstance(d, dict):
            return cls()

        fills = d.get("fills")
        parsed_fills: Optional[Tuple[RawFill, ...]] = None
        if isinstance(fills, list):
            # Unreadable entries become empty fills so list positions are kept
            parsed_fills = tuple(RawFill.from_dict(x) or RawFill() for x in fills)

        children = d.get("children")
        parsed_children = tuple(children) if isinstance(children, list) else None

        return cls(
            id=_opt_str(d.get("id")) or "",
            name=_opt_str(d.get("name")) or "",
            type=_opt_str(d.get("type")) or "",
            bounding_box=RawBoundingBox.from_dict(d.get("absoluteBoundingBox")),
            fills=parsed_fills,
            characters=_opt_str(d.get("characters")),
            style=RawTextStyle.from_dict(d.get("style")),
            children=parsed_children,
            extras=_split_extras(cls, d, cls._ALIASES),
        )


# ----------------------------
# Normalized node
# ----------------------------

@dataclass(frozen=True)
class Node:
    """Normalized, immutable representation of one Figma node and its subtree.

    Optional geometry is None when the source did not provide it; callers must
    not confuse None with 0.  ``children`` is None for leaves and never an
    empty tuple.
    """
    id: str
    name: str
    type: str
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    fill: Optional[str] = None
    text: Optional[str] = None
    font_size: Optional[float] = None
    font_family: Optional[str] = None
    children: Optional[Tuple["Node", ...]] = None

    @property
    def has_geometry(self) -> bool:
        """True when position and size are all known."""
        return None not in (self.x, self.y, self.width, self.height)

    def iter_tree(self) -> Iterator["Node"]:
        """Yield this node and all descendants, depth-first in painter's order."""
        stack: List[Node] = [self]
        while stack:
            node = stack.pop()
            yield node
            if node.children:
                stack.extend(reversed(node.children))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a camelCase dict, omitting unset fields.

        Library-level convenience for dumping normalized trees (e.g. to JSON);
        the application itself does not call it.
        """
        out: Dict[str, Any] = {"id": self.id, "name": self.name, "type": self.type}
        for key, value in (
            ("x", self.x),
            ("y", self.y),
            ("width", self.width),
            ("height", self.height),
            ("fill", self.fill),
            ("text", self.text),
            ("fontSize", self.font_size),
            ("fontFamily", self.font_family),
        ):
            if value is not None:
                out[key] = value
        if self.children is not None:
            out["children"] = [c.to_dict() for c in self.children]
        return out


def is_finite(value: Optional[float]) -> bool:
    """True if *value* is a real, finite number."""
    return value is not None and math.isfinite(value)
