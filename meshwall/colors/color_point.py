from __future__ import annotations
from typing import Any, Mapping, Optional, Sequence, Tuple
from boundednumbers.functions import clamp
from ..types.color_types import HexColor, RGBTuple
from .hex import hex_to_rgb

MAX_POINTS = 10
DEFAULT_NEW_COLOR: HexColor = "#ffffff"


class ColorPoint:
    """
    A mesh gradient control point.

    Position is normalized to the canvas ([0, 1] on both axes, top-left
    origin) and opacity is independent of the color. Out-of-range values are
    clamped. Instances are frozen once built; use the ``with_*`` methods to
    derive modified copies.
    """
    __slots__ = ('_x', '_y', '_color', '_opacity', '_rgb', '_is_frozen')

    def __setattr__(self, name, value):
        """Block attribute changes after __init__ finishes."""
        if getattr(self, '_is_frozen', False):
            raise AttributeError(f"{self.__class__.__name__} is immutable; cannot assign to {name}")
        super().__setattr__(name, value)

    def __init__(self, x: float, y: float, color: HexColor = DEFAULT_NEW_COLOR, opacity: float = 1.0) -> None:
        self._x = float(clamp(float(x), 0.0, 1.0))
        self._y = float(clamp(float(y), 0.0, 1.0))
        self._opacity = float(clamp(float(opacity), 0.0, 1.0))
        self._color = color
        self._rgb = hex_to_rgb(color)
        super().__setattr__('_is_frozen', True)

    # ------------------ READ-ONLY PROPERTIES ------------------
    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    @property
    def color(self) -> HexColor:
        return self._color

    @property
    def opacity(self) -> float:
        return self._opacity

    @property
    def rgb(self) -> RGBTuple:
        """Parsed (r, g, b) channels; black if ``color`` is malformed."""
        return self._rgb

    # ------------------ DERIVED COPIES ------------------
    def with_position(self, x: float, y: float) -> ColorPoint:
        return ColorPoint(x, y, self._color, self._opacity)

    def with_color(self, color: HexColor, opacity: Optional[float] = None) -> ColorPoint:
        return ColorPoint(self._x, self._y, color, self._opacity if opacity is None else opacity)

    def with_opacity(self, opacity: float) -> ColorPoint:
        return ColorPoint(self._x, self._y, self._color, opacity)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ColorPoint:
        """Build a point from ``{"x", "y", "color", "opacity"}``."""
        return cls(data["x"], data["y"], data.get("color", DEFAULT_NEW_COLOR), data.get("opacity", 1.0))

    def as_dict(self) -> dict:
        return {"x": self._x, "y": self._y, "color": self._color, "opacity": self._opacity}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColorPoint):
            return NotImplemented
        return (self._x, self._y, self._color.lower(), self._opacity) == (
            other._x, other._y, other._color.lower(), other._opacity
        )

    def __hash__(self) -> int:
        return hash((self._x, self._y, self._color.lower(), self._opacity))

    def __repr__(self) -> str:
        return f"ColorPoint(x={self._x:g}, y={self._y:g}, color={self._color!r}, opacity={self._opacity:g})"


DEFAULT_POINTS: Tuple[ColorPoint, ...] = (
    ColorPoint(0.2, 0.2, "#ff6b6b", 1.0),
    ColorPoint(0.8, 0.3, "#4ecdc4", 1.0),
    ColorPoint(0.3, 0.8, "#ffe66d", 1.0),
    ColorPoint(0.7, 0.7, "#a8e6cf", 1.0),
)


def as_points(points: Sequence[Any]) -> Tuple[ColorPoint, ...]:
    """Snapshot a sequence of ColorPoint instances or mappings as a tuple."""
    return tuple(p if isinstance(p, ColorPoint) else ColorPoint.from_mapping(p) for p in points)


# ===================== Point sequence editing =====================
# Every helper returns a new tuple; the input sequence is never touched.

def _check_index(points: Sequence[ColorPoint], index: int) -> None:
    if not 0 <= index < len(points):
        raise IndexError(f"point index {index} out of range for {len(points)} points")


def add_point(
    points: Sequence[ColorPoint],
    point: Optional[ColorPoint] = None,
    max_points: int = MAX_POINTS,
) -> Tuple[ColorPoint, ...]:
    """Append ``point`` (a white point at the center by default)."""
    if len(points) >= max_points:
        raise ValueError(f"A mesh gradient holds at most {max_points} points")
    if point is None:
        point = ColorPoint(0.5, 0.5, DEFAULT_NEW_COLOR, 1.0)
    return tuple(points) + (point,)


def remove_point(points: Sequence[ColorPoint], index: int) -> Tuple[ColorPoint, ...]:
    """Drop the point at ``index``; the last remaining point cannot be removed."""
    _check_index(points, index)
    if len(points) <= 1:
        raise ValueError("A mesh gradient needs at least one point")
    return tuple(p for i, p in enumerate(points) if i != index)


def move_point(points: Sequence[ColorPoint], index: int, x: float, y: float) -> Tuple[ColorPoint, ...]:
    _check_index(points, index)
    return tuple(p.with_position(x, y) if i == index else p for i, p in enumerate(points))


def recolor_point(
    points: Sequence[ColorPoint],
    index: int,
    color: HexColor,
    opacity: Optional[float] = None,
) -> Tuple[ColorPoint, ...]:
    _check_index(points, index)
    return tuple(p.with_color(color, opacity) if i == index else p for i, p in enumerate(points))
