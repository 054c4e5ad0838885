"""
Meshwall Color Model
====================

Control points and the inverse distance weighting that blends them.

Usage
-----
>>> from meshwall.colors import ColorPoint, sample_color
>>> red = ColorPoint(0.0, 0.0, "#ff0000")
>>> blue = ColorPoint(1.0, 1.0, "#0000ff")
>>> sample_color((red, blue), 0.0, 0.0, blend_radius=0.4)[0] > 250
True

Notes
-----
- ``hex_to_rgb`` never raises; malformed colors become black and emit an
  ``InvalidColorWarning``.
- ColorPoint positions and opacity are clamped to [0, 1] on construction.
- Point editing helpers return new tuples instead of mutating.
"""

from .hex import hex_to_rgb, rgb_to_hex, is_hex_color, parse_css_hex
from .color_point import (
    ColorPoint,
    DEFAULT_POINTS,
    MAX_POINTS,
    as_points,
    add_point,
    remove_point,
    move_point,
    recolor_point,
)
from .color_sample import idw_weight, PixelAccumulator, sample_color, PointArrays, accumulate_rows, resolve_rows

__all__ = [
    "hex_to_rgb",
    "rgb_to_hex",
    "is_hex_color",
    "parse_css_hex",
    "ColorPoint",
    "DEFAULT_POINTS",
    "MAX_POINTS",
    "as_points",
    "add_point",
    "remove_point",
    "move_point",
    "recolor_point",
    "idw_weight",
    "PixelAccumulator",
    "sample_color",
    "PointArrays",
    "accumulate_rows",
    "resolve_rows",
]
