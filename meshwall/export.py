"""
Wallpaper Export
================

Full quality renders at preset or custom resolutions, encoded as PNG.

>>> from meshwall.export import find_aspect_ratio, export_filename
>>> export_filename(find_aspect_ratio("Square"), "mesh")
'mesh-wallpaper-square.png'
"""
from __future__ import annotations
import io
import logging
import os
from dataclasses import dataclass
from typing import Literal, Optional, Sequence, Tuple, Union
from PIL import Image
from .colors.color_point import ColorPoint
from .errors import InvalidDimensionsError
from .gradients.linear import LinearGradient, parse_linear_gradient
from .raster.mesh import MeshRasterizer
from .raster.target import RenderTarget
from .types.format_type import RenderQuality

logger = logging.getLogger(__name__)

ExportKind = Literal["mesh", "linear"]
_FILENAME_PREFIX = {"mesh": "mesh-wallpaper", "linear": "wallpaper"}


@dataclass(frozen=True)
class AspectRatio:
    name: str
    width: int
    height: int
    is_custom: bool = False

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise InvalidDimensionsError(f"{self.name}: width and height must be positive")

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @property
    def label(self) -> str:
        return f"{self.name} ({self.width}x{self.height})"


ASPECT_RATIOS: Tuple[AspectRatio, ...] = (
    AspectRatio("16:9", 1920, 1080),
    AspectRatio("4:3", 1600, 1200),
    AspectRatio("21:9", 2560, 1080),
    AspectRatio("Square", 1440, 1440),
    AspectRatio("Mobile", 1080, 1920),
    AspectRatio("32:9", 3840, 1080),
)
DEFAULT_ASPECT_RATIO = ASPECT_RATIOS[0]


def find_aspect_ratio(name: str) -> AspectRatio:
    """Look up a preset by name, case-insensitively."""
    for ratio in ASPECT_RATIOS:
        if ratio.name.lower() == name.lower():
            return ratio
    raise KeyError(f"Unknown aspect ratio {name!r}")


def custom_ratio(width: Union[int, str], height: Union[int, str]) -> AspectRatio:
    """
    Build the "Custom" preset from user input.

    Strings are parsed as integers, as a width/height form field would be.

    Raises:
        InvalidDimensionsError: If either value is not a positive integer.
    """
    try:
        w, h = int(width), int(height)
    except (TypeError, ValueError) as exc:
        raise InvalidDimensionsError(f"Invalid custom size {width!r}x{height!r}") from exc
    if w <= 0 or h <= 0:
        raise InvalidDimensionsError(f"Custom size must be positive, got {w}x{h}")
    return AspectRatio("Custom", w, h, is_custom=True)


def export_filename(ratio: AspectRatio, kind: ExportKind = "mesh") -> str:
    return f"{_FILENAME_PREFIX[kind]}-{ratio.name.lower()}.png"


def encode_png(target: RenderTarget) -> bytes:
    buffer = io.BytesIO()
    target.to_image().save(buffer, format="PNG")
    return buffer.getvalue()


def decode_png(data: bytes) -> RenderTarget:
    with Image.open(io.BytesIO(data)) as image:
        return RenderTarget.from_image(image)


@dataclass(frozen=True)
class ExportResult:
    filename: str
    png: bytes
    target: RenderTarget
    path: Optional[str] = None


def _finish(target: RenderTarget, filename: str, directory: Optional[Union[str, os.PathLike]]) -> ExportResult:
    png = encode_png(target)
    path = None
    if directory is not None:
        path = os.path.join(os.fspath(directory), filename)
        with open(path, "wb") as fh:
            fh.write(png)
        logger.info("Wrote %s (%dx%d, %d bytes)", path, target.width, target.height, len(png))
    return ExportResult(filename, png, target, path)


def export_mesh(
    points: Sequence[ColorPoint],
    blend_radius: float,
    ratio: AspectRatio = DEFAULT_ASPECT_RATIO,
    directory: Optional[Union[str, os.PathLike]] = None,
    rasterizer: Optional[MeshRasterizer] = None,
) -> ExportResult:
    """Render the mesh at full quality for ``ratio`` and encode it."""
    rasterizer = rasterizer if rasterizer is not None else MeshRasterizer()
    target = rasterizer.render(points, blend_radius, ratio.width, ratio.height, RenderQuality.FULL)
    return _finish(target, export_filename(ratio, "mesh"), directory)


def export_linear(
    gradient: Union[LinearGradient, str],
    ratio: AspectRatio = DEFAULT_ASPECT_RATIO,
    directory: Optional[Union[str, os.PathLike]] = None,
) -> ExportResult:
    """Render a linear gradient (or its CSS text) for ``ratio`` and encode it."""
    if isinstance(gradient, str):
        gradient = parse_linear_gradient(gradient)
    target = gradient.render(ratio.width, ratio.height)
    return _finish(target, export_filename(ratio, "linear"), directory)
