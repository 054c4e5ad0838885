"""
Inverse distance weighting (IDW) of control point colors.

Each point contributes ``weight = 1 / ((dist / radius)**2 + EPSILON)`` to a
query location. Colors are accumulated premultiplied by opacity and only
normalized once every point has been added, so a point's influence relative
to the others depends on its inverse squared adjusted distance alone.

``PixelAccumulator`` is the scalar reference; ``PointArrays`` holds the same
data as numpy arrays for the vectorized rasterizer.
"""
from __future__ import annotations
import math
from typing import Sequence, Tuple, Union
import numpy as np
from numpy import ndarray
from ..types.color_types import EPSILON, RGBATuple
from ..utils.num_utils import clamp_int
from .color_point import ColorPoint


def idw_weight(dist: Union[float, ndarray], blend_radius: float) -> Union[float, ndarray]:
    """Weight of a point at distance ``dist`` for the given blend radius."""
    adjusted = dist / blend_radius
    return 1.0 / (adjusted ** 2 + EPSILON)


class PixelAccumulator:
    """Running IDW sums for a single query location."""
    __slots__ = ('total_weight', 'r', 'g', 'b', 'a')

    def __init__(self) -> None:
        self.total_weight = 0.0
        self.r = 0.0
        self.g = 0.0
        self.b = 0.0
        self.a = 0.0

    def add(self, point: ColorPoint, nx: float, ny: float, blend_radius: float) -> float:
        """Accumulate ``point``'s contribution at (nx, ny) and return its weight."""
        dist = math.sqrt((point.x - nx) ** 2 + (point.y - ny) ** 2)
        weight = idw_weight(dist, blend_radius)
        self.total_weight += weight

        pr, pg, pb = point.rgb
        opacity = point.opacity
        self.r += pr * weight * opacity
        self.g += pg * weight * opacity
        self.b += pb * weight * opacity
        self.a += opacity * weight
        return weight

    def resolve(self) -> RGBATuple:
        """Normalize the sums and return RGBA8 channels."""
        r, g, b, a = self.r, self.g, self.b, self.a
        if self.total_weight > 0:
            r /= self.total_weight
            g /= self.total_weight
            b /= self.total_weight
            a = min(1.0, a / self.total_weight)
        return (clamp_int(r), clamp_int(g), clamp_int(b), clamp_int(a * 255))


def sample_color(points: Sequence[ColorPoint], nx: float, ny: float, blend_radius: float) -> RGBATuple:
    """Blend every point at the normalized location (nx, ny)."""
    acc = PixelAccumulator()
    for point in points:
        acc.add(point, nx, ny, blend_radius)
    return acc.resolve()


class PointArrays:
    """
    Column view of a point sequence.

    Attributes:
        xy: (N, 2) positions
        rgb: (N, 3) channels
        opacity: (N,) opacities
    """
    __slots__ = ('xy', 'rgb', 'opacity')

    def __init__(self, points: Sequence[ColorPoint]) -> None:
        self.xy = np.array([(p.x, p.y) for p in points], dtype=np.float64).reshape(-1, 2)
        self.opacity = np.array([p.opacity for p in points], dtype=np.float64)
        self.rgb = np.array([p.rgb for p in points], dtype=np.float64).reshape(-1, 3)

    def __len__(self) -> int:
        return len(self.opacity)


def accumulate_rows(
    arrays: PointArrays,
    nx: ndarray,
    ny: ndarray,
    blend_radius: float,
) -> Tuple[ndarray, ndarray, ndarray]:
    """
    Accumulate IDW sums for a block of query locations.

    Args:
        arrays: Point data
        nx: (W,) normalized column coordinates
        ny: (H,) normalized row coordinates
        blend_radius: Spatial falloff

    Returns:
        ``(total_weight, rgb, alpha)`` with shapes (H, W), (H, W, 3), (H, W).
    """
    total = np.zeros((ny.shape[0], nx.shape[0]), dtype=np.float64)
    rgb = np.zeros(total.shape + (3,), dtype=np.float64)
    alpha = np.zeros_like(total)
    # Points are added one at a time so the summation order matches PixelAccumulator.
    for i in range(len(arrays)):
        px, py = arrays.xy[i]
        dist = np.sqrt((px - nx)[None, :] ** 2 + (py - ny)[:, None] ** 2)
        weight = idw_weight(dist, blend_radius)
        total += weight
        rgb += arrays.rgb[i] * weight[..., None] * arrays.opacity[i]
        alpha += arrays.opacity[i] * weight
    return total, rgb, alpha


def resolve_rows(total: ndarray, rgb: ndarray, alpha: ndarray) -> ndarray:
    """Normalize accumulated sums into float RGBA in [0, 255] (not yet rounded)."""
    out = np.zeros(total.shape + (4,), dtype=np.float64)
    positive = total > 0
    safe_total = np.where(positive, total, 1.0)
    out[..., :3] = np.where(positive[..., None], rgb / safe_total[..., None], rgb)
    out[..., 3] = np.where(positive, np.minimum(1.0, alpha / safe_total), alpha) * 255
    return out
