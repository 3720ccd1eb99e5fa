"""
utils.py

Colour helpers shared by the parser, renderer and canvas items.
"""

from __future__ import annotations

import re
from typing import Any, Optional, Sequence, Tuple, Union

from PyQt6.QtGui import QColor

from models import DEFAULT_FILL, RawFill, is_finite

# Fallback RGBA used when a hex string cannot be parsed (matches DEFAULT_FILL)
FALLBACK_RGBA: Tuple[float, float, float, float] = (0.32, 0.34, 0.89, 1.0)

_HEX6_RE = re.compile(r"^[0-9A-Fa-f]{6}$")


def _channel_to_byte(c: float) -> int:
    """Convert a 0.0 - 1.0 colour channel to a 0 - 255 byte."""
    # Clamp before scaling so huge finite channels cannot overflow to inf
    c = max(0.0, min(1.0, c))
    return int(round(c * 255))


def resolve_fill_color(fills: Optional[Sequence[Union[RawFill, dict, Any]]]) -> str:
    """
    Pick a single representative colour from a Figma fills list.

    Only the first entry is considered.  A SOLID fill with a colour becomes
    ``#rrggbb`` (lowercase); anything else yields ``DEFAULT_FILL``.

    Args:
        fills: Fills as ``RawFill`` objects or raw Figma dicts, or None.

    Returns:
        A ``#rrggbb`` hex string.  Never raises.
    """
    if not fills:
        return DEFAULT_FILL

    first = fills[0]
    if not isinstance(first, RawFill):
        first = RawFill.from_dict(first)
    if first is None or not first.is_solid or first.color is None:
        return DEFAULT_FILL

    rgb = first.color.channels()
    if rgb is None or not all(is_finite(c) for c in rgb):
        return DEFAULT_FILL

    r, g, b = (_channel_to_byte(c) for c in rgb)
    return "#{:02x}{:02x}{:02x}".format(r, g, b)


def hex_to_rgba(s: Optional[str]) -> Tuple[float, float, float, float]:
    """
    Convert ``#rrggbb`` to an ``(r, g, b, a)`` tuple of floats in 0.0 - 1.0.

    Each channel is ``byte / 255.0``; alpha is always 1.0.  Invalid input
    returns ``FALLBACK_RGBA``.
    """
    h = (s or "").strip().lstrip("#")
    if not _HEX6_RE.match(h):
        return FALLBACK_RGBA
    r = int(h[0:2], 16) / 255.0
    g = int(h[2:4], 16) / 255.0
    b = int(h[4:6], 16) / 255.0
    return (r, g, b, 1.0)


def rgba_to_qcolor(rgba: Tuple[float, float, float, float]) -> QColor:
    """Build a QColor from an ``(r, g, b, a)`` float tuple."""
    r, g, b, a = rgba
    return QColor.fromRgbF(r, g, b, a)


def qcolor_to_hex(c: QColor, include_alpha: bool = False) -> str:
    """
    Convert a QColor to a hex string.

    Args:
        c: The QColor to convert
        include_alpha: If True, include alpha channel as 4th byte

    Returns:
        Lowercase hex string like "#rrggbb" or "#rrggbbaa"
    """
    if include_alpha:
        return "#{:02x}{:02x}{:02x}{:02x}".format(c.red(), c.green(), c.blue(), c.alpha())
    return "#{:02x}{:02x}{:02x}".format(c.red(), c.green(), c.blue())


def hex_to_qcolor(s: str, fallback: QColor) -> QColor:
    """
    Parse a hex string to a QColor.

    Args:
        s: Hex string like "#RRGGBB" or "#RRGGBBAA"
        fallback: Color to return if parsing fails

    Returns:
        Parsed QColor or fallback
    """
    try:
        if not s:
            return QColor(fallback)
        s = s.strip()
        if s.startswith("#"):
            s = s[1:]
        if len(s) == 6:
            r = int(s[0:2], 16)
            g = int(s[2:4], 16)
            b = int(s[4:6], 16)
            return QColor(r, g, b)
        if len(s) == 8:
            r = int(s[0:2], 16)
            g = int(s[2:4], 16)
            b = int(s[4:6], 16)
            a = int(s[6:8], 16)
            return QColor(r, g, b, a)
    except ValueError:
        pass
    return QColor(fallback)
