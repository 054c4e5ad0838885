"""
Linear Gradient Module
======================

Parses and renders CSS style ``linear-gradient(...)`` descriptions.

Supported syntax
----------------
- Direction: ``<number>deg|grad|rad|turn`` or ``to <side> [<side>]``;
  defaults to ``to bottom`` (180deg).
- Colors: ``#rgb``, ``#rgba``, ``#rrggbb``, ``#rrggbbaa``, ``rgb()``,
  ``rgba()``, ``transparent`` and the basic CSS color keywords (``red``,
  ``navy``, ...). Extended keywords such as ``coral`` are not recognized.
- Optional stop positions in percent.

Rendering follows CSS: the gradient line runs through the canvas center at
the given angle (0deg points up, angles grow clockwise) with length
``|w*sin(a)| + |h*cos(a)|``, so the first and last stops land exactly on
the corners. Colors are interpolated premultiplied by alpha through a
lookup ramp that is then projected over the canvas.
"""
from __future__ import annotations
import math
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
import numpy as np
from numpy import ndarray
from unitfield import flat_1d_upbm
from ..colors.hex import parse_css_hex
from ..errors import InvalidGradientError
from ..raster.config import validate_size
from ..raster.target import RenderTarget
from ..types.color_types import RGBATuple
from ..utils.num_utils import clamp_channels

LUT_STEPS = 1024
DEFAULT_ANGLE = 180.0

_FUNCTION = re.compile(r"^\s*linear-gradient\s*\((.*)\)\s*;?\s*$", re.IGNORECASE | re.DOTALL)
_ANGLE = re.compile(r"^([+-]?(?:\d+\.?\d*|\.\d+))(deg|grad|rad|turn)$", re.IGNORECASE)
_POSITION = re.compile(r"^([+-]?(?:\d+\.?\d*|\.\d+))%$")
_RGB_FUNCTION = re.compile(r"^rgba?\((.*)\)$", re.IGNORECASE)

_ANGLE_UNITS = {
    "deg": 1.0,
    "grad": 360.0 / 400.0,
    "rad": 180.0 / math.pi,
    "turn": 360.0,
}
_SIDES = {"top": 0.0, "right": 90.0, "bottom": 180.0, "left": 270.0}
# CSS basic color keywords.
_NAMED_COLORS = {
    "black": (0, 0, 0, 255),
    "silver": (192, 192, 192, 255),
    "gray": (128, 128, 128, 255),
    "grey": (128, 128, 128, 255),
    "white": (255, 255, 255, 255),
    "maroon": (128, 0, 0, 255),
    "red": (255, 0, 0, 255),
    "purple": (128, 0, 128, 255),
    "fuchsia": (255, 0, 255, 255),
    "magenta": (255, 0, 255, 255),
    "green": (0, 128, 0, 255),
    "lime": (0, 255, 0, 255),
    "olive": (128, 128, 0, 255),
    "yellow": (255, 255, 0, 255),
    "navy": (0, 0, 128, 255),
    "blue": (0, 0, 255, 255),
    "teal": (0, 128, 128, 255),
    "aqua": (0, 255, 255, 255),
    "cyan": (0, 255, 255, 255),
    "orange": (255, 165, 0, 255),
    "transparent": (0, 0, 0, 0),
}


@dataclass(frozen=True)
class ColorStop:
    color: RGBATuple
    position: Optional[float] = None  # fraction of the gradient line


@dataclass(frozen=True)
class LinearGradient:
    """
    A parsed linear gradient.

    Attributes:
        stops: Two or more color stops in declaration order.
        angle: Direction in degrees, or None when ``corner`` is set.
        corner: ``(vertical, horizontal)`` side keywords for ``to top right``
            style directions, resolved against the canvas aspect ratio.
    """
    stops: Tuple[ColorStop, ...]
    angle: Optional[float] = DEFAULT_ANGLE
    corner: Optional[Tuple[str, str]] = None

    def __post_init__(self) -> None:
        if len(self.stops) < 2:
            raise InvalidGradientError("A linear gradient needs at least two color stops")

    def angle_for(self, width: int, height: int) -> float:
        """Direction in degrees for a ``width`` x ``height`` canvas."""
        if self.corner is None:
            return float(self.angle) % 360.0
        vertical, horizontal = self.corner
        # Perpendicular to the diagonal joining the two neighbouring corners.
        base = math.degrees(math.atan2(height, width))
        if vertical == "top":
            return base if horizontal == "right" else 360.0 - base
        return 180.0 - base if horizontal == "right" else 180.0 + base

    def resolved_positions(self) -> ndarray:
        """Stop positions with CSS fix-up applied (ends pinned, monotonic, gaps spread)."""
        raw: List[Optional[float]] = [s.position for s in self.stops]
        if raw[0] is None:
            raw[0] = 0.0
        if raw[-1] is None:
            raw[-1] = 1.0

        largest = -math.inf
        for i, pos in enumerate(raw):
            if pos is not None:
                largest = max(largest, pos)
                raw[i] = largest

        i = 1
        while i < len(raw):
            if raw[i] is None:
                j = i
                while raw[j] is None:
                    j += 1
                start, end = raw[i - 1], raw[j]
                gap = j - i + 1
                for k in range(i, j):
                    raw[k] = start + (end - start) * (k - i + 1) / gap
                i = j
            i += 1
        return np.array(raw, dtype=np.float64)

    def ramp(self, steps: int = LUT_STEPS) -> ndarray:
        """
        Sample the gradient line at ``steps`` evenly spaced points in [0, 1].

        Returns:
            (steps, 4) float64 RGBA in [0, 255], not premultiplied.
        """
        u = np.asarray(flat_1d_upbm(steps), dtype=np.float64).reshape(-1)
        return interpolate_stops(self.resolved_positions(), self.stop_colors(), u)

    def stop_colors(self) -> ndarray:
        return np.array([s.color for s in self.stops], dtype=np.float64)

    def render(self, width: int, height: int, lut_steps: int = LUT_STEPS) -> RenderTarget:
        """Rasterize the gradient into a ``width`` x ``height`` RGBA8 target."""
        validate_size(width, height)
        theta = math.radians(self.angle_for(width, height))
        dx, dy = math.sin(theta), -math.cos(theta)
        length = abs(width * dx) + abs(height * dy)

        xs = np.arange(width, dtype=np.float64) + 0.5 - width / 2
        ys = np.arange(height, dtype=np.float64) + 0.5 - height / 2
        t = (xs[None, :] * dx + ys[:, None] * dy) / length + 0.5
        t = np.clip(t, 0.0, 1.0)

        lut = clamp_channels(self.ramp(lut_steps)).astype(np.uint8)
        idx = np.rint(t * (lut_steps - 1)).astype(np.intp)
        return RenderTarget.from_array(lut[idx])

    def to_css(self) -> str:
        if self.corner is not None:
            direction = "to " + " ".join(self.corner)
        else:
            direction = f"{self.angle:g}deg"
        parts = [direction]
        for stop in self.stops:
            r, g, b, a = stop.color
            text = f"#{r:02x}{g:02x}{b:02x}" + ("" if a == 255 else f"{a:02x}")
            if stop.position is not None:
                text += f" {stop.position * 100:g}%"
            parts.append(text)
        return f"linear-gradient({', '.join(parts)})"


def interpolate_stops(positions: ndarray, colors: ndarray, u: ndarray) -> ndarray:
    """
    Interpolate RGBA stop colors at parameters ``u`` in premultiplied space.

    Positions must be non-decreasing; coinciding positions form hard edges
    where the later stop wins. Parameters outside the stop range take the
    nearest end color.
    """
    premul = colors.copy()
    premul[:, :3] *= colors[:, 3:4] / 255.0

    idx = np.searchsorted(positions, u, side="right") - 1
    idx = np.clip(idx, 0, len(positions) - 2)
    p0 = positions[idx]
    p1 = positions[idx + 1]
    delta = p1 - p0
    frac = np.divide(u - p0, delta, out=np.zeros_like(u), where=delta > 0)
    frac = np.clip(frac, 0.0, 1.0)
    # At or past a hard edge the later color applies.
    frac = np.where((delta <= 0) & (u >= p1), 1.0, frac)

    out = premul[idx] * (1 - frac)[:, None] + premul[idx + 1] * frac[:, None]
    alpha = out[:, 3:4]
    safe = np.where(alpha > 0, alpha, 1.0)
    out[:, :3] = np.where(alpha > 0, out[:, :3] * 255.0 / safe, 0.0)
    return out


# ===================== Parsing =====================

def _split_arguments(body: str) -> List[str]:
    """Split on commas that are not inside parentheses."""
    parts, depth, current = [], 0, []
    for ch in body:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth < 0:
                raise InvalidGradientError("Unbalanced parentheses in gradient")
        if ch == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
    if depth != 0:
        raise InvalidGradientError("Unbalanced parentheses in gradient")
    parts.append("".join(current).strip())
    return parts


def _parse_direction(text: str) -> Optional[Tuple[Optional[float], Optional[Tuple[str, str]]]]:
    """Return (angle, corner) if ``text`` is a direction, else None."""
    match = _ANGLE.match(text)
    if match:
        return float(match.group(1)) * _ANGLE_UNITS[match.group(2).lower()], None
    words = text.lower().split()
    if not words or words[0] != "to":
        return None
    sides = words[1:]
    if len(sides) == 1 and sides[0] in _SIDES:
        return _SIDES[sides[0]], None
    if len(sides) == 2:
        vertical = [s for s in sides if s in ("top", "bottom")]
        horizontal = [s for s in sides if s in ("left", "right")]
        if len(vertical) == 1 and len(horizontal) == 1:
            return None, (vertical[0], horizontal[0])
    raise InvalidGradientError(f"Invalid gradient direction {text!r}")


def _parse_channel(text: str, scale: float) -> float:
    text = text.strip()
    if text.endswith("%"):
        return float(text[:-1]) * scale / 100.0
    return float(text)


def parse_color(text: str) -> RGBATuple:
    """Parse one CSS color into RGBA8 channels."""
    text = text.strip()
    named = _NAMED_COLORS.get(text.lower())
    if named is not None:
        return named
    if text.startswith("#"):
        rgba = parse_css_hex(text)
        if rgba is None:
            raise InvalidGradientError(f"Invalid hex color {text!r}")
        return rgba
    match = _RGB_FUNCTION.match(text)
    if match:
        fields = [f for f in re.split(r"[\s,/]+", match.group(1).strip()) if f]
        if len(fields) not in (3, 4):
            raise InvalidGradientError(f"Invalid color {text!r}")
        try:
            channels = [_parse_channel(f, 255.0) for f in fields[:3]]
            alpha = _parse_channel(fields[3], 1.0) if len(fields) == 4 else 1.0
        except ValueError as exc:
            raise InvalidGradientError(f"Invalid color {text!r}") from exc
        r, g, b = (int(v) for v in clamp_channels(np.array(channels)))
        a = int(clamp_channels(np.array(alpha * 255.0)))
        return (r, g, b, a)
    raise InvalidGradientError(f"Unsupported color {text!r}")


def _parse_stop(text: str) -> ColorStop:
    # The color may itself contain spaces (rgb(1 2 3)), so the position is
    # taken from the last token only.
    head, _, tail = text.rpartition(" ")
    position = _POSITION.match(tail) if head else None
    if position:
        return ColorStop(parse_color(head), float(position.group(1)) / 100.0)
    return ColorStop(parse_color(text))


def parse_linear_gradient(text: str) -> LinearGradient:
    """
    Parse ``linear-gradient(<direction>?, <stop>, <stop>, ...)``.

    Raises:
        InvalidGradientError: On any syntax error or fewer than two stops.
    """
    if not isinstance(text, str):
        raise InvalidGradientError("Gradient must be a string")
    match = _FUNCTION.match(text)
    if match is None:
        raise InvalidGradientError("Expected linear-gradient(...)")
    args = _split_arguments(match.group(1))
    if any(not a for a in args):
        raise InvalidGradientError("Empty argument in gradient")

    angle: Optional[float] = DEFAULT_ANGLE
    corner = None
    direction = _parse_direction(args[0])
    if direction is not None:
        angle, corner = direction
        args = args[1:]

    stops = tuple(_parse_stop(a) for a in args)
    if len(stops) < 2:
        raise InvalidGradientError("A linear gradient needs at least two color stops")
    return LinearGradient(stops=stops, angle=angle, corner=corner)


def is_valid_gradient(text: str) -> bool:
    try:
        parse_linear_gradient(text)
    except InvalidGradientError:
        return False
    return True


def linear_gradient(colors: Sequence[str], angle: float = DEFAULT_ANGLE) -> LinearGradient:
    """Build an evenly spaced gradient from hex colors."""
    return LinearGradient(stops=tuple(ColorStop(parse_color(c)) for c in colors), angle=angle)
