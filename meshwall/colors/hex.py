"""
Hex color parsing.

``hex_to_rgb`` is lenient: anything it cannot read becomes black, with an
``InvalidColorWarning``, instead of raising. ``parse_css_hex`` is the strict variant used by
the linear gradient parser, where bad input has to be reported.
"""
from __future__ import annotations
import re
import warnings
from typing import Optional, Tuple
from ..errors import InvalidColorWarning
from ..types.color_types import RGBTuple, RGBATuple
from ..utils.num_utils import clamp_int

_HEX6 = re.compile(r"#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})", re.IGNORECASE)
_CSS_HEX = re.compile(r"#([a-f\d]{3}|[a-f\d]{4}|[a-f\d]{6}|[a-f\d]{8})", re.IGNORECASE)

FALLBACK_RGB: RGBTuple = (0, 0, 0)


def is_hex_color(value: object) -> bool:
    """Return True if ``value`` is a 6-digit hex color with optional ``#``."""
    return isinstance(value, str) and _HEX6.fullmatch(value) is not None


def hex_to_rgb(value: str) -> RGBTuple:
    """
    Convert a ``#rrggbb`` (or ``rrggbb``) string to integer channels.

    Args:
        value: Hex color, case-insensitive, leading ``#`` optional.

    Returns:
        (r, g, b) with each channel in [0, 255]. Malformed input returns
        ``(0, 0, 0)`` and emits an ``InvalidColorWarning``.
    """
    match = _HEX6.fullmatch(value) if isinstance(value, str) else None
    if match is None:
        warnings.warn(
            f"Could not parse color {value!r}; falling back to black",
            InvalidColorWarning,
            stacklevel=2,
        )
        return FALLBACK_RGB
    r, g, b = (int(group, 16) for group in match.groups())
    return (r, g, b)


def rgb_to_hex(rgb: Tuple[float, float, float]) -> str:
    """Format channels as ``#rrggbb``, rounding and clamping each to [0, 255]."""
    r, g, b = (clamp_int(c) for c in rgb)
    return f"#{r:02x}{g:02x}{b:02x}"


def parse_css_hex(value: str) -> Optional[RGBATuple]:
    """
    Parse a CSS hex color (``#rgb``, ``#rgba``, ``#rrggbb``, ``#rrggbbaa``).

    Returns:
        (r, g, b, a) in [0, 255], or None when ``value`` is not a CSS hex color.
    """
    match = _CSS_HEX.fullmatch(value.strip())
    if match is None:
        return None
    digits = match.group(1)
    if len(digits) in (3, 4):
        digits = "".join(d * 2 for d in digits)
    if len(digits) == 6:
        digits += "ff"
    r, g, b, a = (int(digits[i:i + 2], 16) for i in range(0, 8, 2))
    return (r, g, b, a)
