"""
Mesh Gradient Rasterizer
========================

Turns a sparse set of ColorPoints into a dense RGBA8 buffer by inverse
distance weighting.

Quality Modes
-------------
- ``RenderQuality.FULL``: every target pixel is computed. Used for export.
- ``RenderQuality.PREVIEW``: the render width is capped (300 px while
  interacting, 600 px otherwise, see ``PreviewSettings``), the height is
  scaled to match, and the low resolution buffer is upsampled bilinearly.

Example
-------
>>> from meshwall.colors import ColorPoint
>>> from meshwall.raster import MeshRasterizer, RenderQuality
>>> points = (ColorPoint(0, 0, "#ff0000"), ColorPoint(1, 1, "#0000ff"))
>>> target = MeshRasterizer().render(points, 0.4, 4, 4, RenderQuality.FULL)
>>> target.pixel(0, 0)[0] > target.pixel(0, 0)[2]
True
"""
from __future__ import annotations
from typing import Optional, Sequence
import numpy as np
from numpy import ndarray
from ..colors.color_point import ColorPoint, as_points
from ..colors.color_sample import PointArrays, accumulate_rows, resolve_rows, sample_color
from ..errors import AllocationError
from ..types.format_type import RenderQuality
from ..utils.default import value_or_default
from ..utils.num_utils import clamp_channels
from .config import PreviewSettings, RenderConfig, render_size, validate_blend_radius, validate_size
from .resample import resize
from .target import CHANNELS, RenderTarget

# Largest buffer a single render may request (a 16384 x 16384 canvas).
MAX_PIXELS = 2 ** 28
# Rows accumulated per numpy block; bounds the float64 scratch memory.
ROW_BLOCK = 128


class MeshRasterizer:
    """
    Stateless IDW renderer.

    The only state is the preview tuning; every ``render`` call takes an
    immutable snapshot of its points and returns a fresh RenderTarget.
    """

    def __init__(self, settings: Optional[PreviewSettings] = None, row_block: int = ROW_BLOCK) -> None:
        if row_block <= 0:
            raise ValueError("row_block must be > 0")
        self.settings = value_or_default(settings, PreviewSettings())
        self.row_block = row_block

    def render(
        self,
        points: Sequence[ColorPoint],
        blend_radius: float,
        width: int,
        height: int,
        quality: RenderQuality = RenderQuality.FULL,
        *,
        interacting: bool = False,
    ) -> RenderTarget:
        """
        Render ``points`` into a ``width`` x ``height`` RGBA8 target.

        Args:
            points: One or more control points (ColorPoint or mappings).
            blend_radius: Positive spatial falloff; larger blends further.
            width, height: Target size in pixels.
            quality: FULL for exact resolution, PREVIEW for capped + upsampled.
            interacting: Use the tighter preview cap (ignored for FULL).

        Raises:
            InvalidDimensionsError: Non-positive size or blend radius.
            ValueError: Empty point sequence.
            AllocationError: The buffer is too large to allocate.
        """
        validate_size(width, height)
        validate_blend_radius(blend_radius)
        snapshot = as_points(points)
        if not snapshot:
            raise ValueError("render requires at least one color point")

        render_width, render_height = render_size(width, height, quality, interacting, self.settings)
        buffer = self.rasterize(snapshot, blend_radius, render_width, render_height)
        target = RenderTarget.from_array(buffer)
        if target.size != (width, height):
            target = resize(target, (width, height))
        return target

    def render_config(
        self,
        points: Sequence[ColorPoint],
        config: RenderConfig,
        width: int,
        height: int,
    ) -> RenderTarget:
        return self.render(
            points, config.blend_radius, width, height, config.quality, interacting=config.interacting
        )

    def rasterize(self, points: Sequence[ColorPoint], blend_radius: float, width: int, height: int) -> ndarray:
        """
        Compute the (height, width, 4) uint8 buffer at exactly this size.

        Pixel (x, y) samples the normalized location (x / width, y / height).
        """
        out = _allocate(width, height)
        arrays = PointArrays(points)
        nx = np.arange(width, dtype=np.float64) / width
        try:
            for row0 in range(0, height, self.row_block):
                row1 = min(row0 + self.row_block, height)
                ny = np.arange(row0, row1, dtype=np.float64) / height
                rgba = resolve_rows(*accumulate_rows(arrays, nx, ny, blend_radius))
                out[row0:row1] = clamp_channels(rgba).astype(np.uint8)
        except MemoryError as exc:
            raise AllocationError(f"Out of memory while rendering {width}x{height}") from exc
        return out

    def rasterize_reference(self, points: Sequence[ColorPoint], blend_radius: float, width: int, height: int) -> ndarray:
        """Pixel-by-pixel scalar version of ``rasterize``; slow, for verification."""
        out = _allocate(width, height)
        snapshot = as_points(points)
        for y in range(height):
            for x in range(width):
                out[y, x] = sample_color(snapshot, x / width, y / height, blend_radius)
        return out


def _allocate(width: int, height: int) -> ndarray:
    if width * height > MAX_PIXELS:
        raise AllocationError(f"{width}x{height} exceeds the {MAX_PIXELS} pixel limit")
    try:
        return np.zeros((height, width, CHANNELS), dtype=np.uint8)
    except MemoryError as exc:
        raise AllocationError(f"Could not allocate a {width}x{height} RGBA buffer") from exc


def render_mesh(
    points: Sequence[ColorPoint],
    blend_radius: float,
    width: int,
    height: int,
    quality: RenderQuality = RenderQuality.FULL,
    *,
    interacting: bool = False,
    settings: Optional[PreviewSettings] = None,
) -> RenderTarget:
    """Render with a throwaway ``MeshRasterizer``."""
    return MeshRasterizer(settings).render(
        points, blend_radius, width, height, quality, interacting=interacting
    )
