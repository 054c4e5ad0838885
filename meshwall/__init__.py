"""Meshwall: mesh and linear gradient wallpapers."""

from .colors import (
    ColorPoint,
    DEFAULT_POINTS,
    MAX_POINTS,
    hex_to_rgb,
    rgb_to_hex,
    is_hex_color,
    add_point,
    remove_point,
    move_point,
    recolor_point,
    idw_weight,
    sample_color,
)
from .raster import (
    RenderQuality,
    PreviewSettings,
    RenderConfig,
    RenderTarget,
    MeshRasterizer,
    render_mesh,
    render_size,
)
from .gradients import LinearGradient, parse_linear_gradient, is_valid_gradient
from .scheduling import RenderRequest, RenderScheduler, PreviewSession, Debouncer, Throttle
from .export import (
    AspectRatio,
    ASPECT_RATIOS,
    find_aspect_ratio,
    custom_ratio,
    export_filename,
    encode_png,
    export_mesh,
    export_linear,
)
from .errors import (
    MeshwallError,
    InvalidColorWarning,
    InvalidDimensionsError,
    AllocationError,
    InvalidGradientError,
)
from .types import FormatType

__version__ = "0.1.0"

__all__ = [
    # color model
    "ColorPoint",
    "DEFAULT_POINTS",
    "MAX_POINTS",
    "hex_to_rgb",
    "rgb_to_hex",
    "is_hex_color",
    "add_point",
    "remove_point",
    "move_point",
    "recolor_point",
    "idw_weight",
    "sample_color",
    # rasterizer
    "RenderQuality",
    "PreviewSettings",
    "RenderConfig",
    "RenderTarget",
    "MeshRasterizer",
    "render_mesh",
    "render_size",
    # linear gradients
    "LinearGradient",
    "parse_linear_gradient",
    "is_valid_gradient",
    # scheduling
    "RenderRequest",
    "RenderScheduler",
    "PreviewSession",
    "Debouncer",
    "Throttle",
    # export
    "AspectRatio",
    "ASPECT_RATIOS",
    "find_aspect_ratio",
    "custom_ratio",
    "export_filename",
    "encode_png",
    "export_mesh",
    "export_linear",
    # errors
    "MeshwallError",
    "InvalidColorWarning",
    "InvalidDimensionsError",
    "AllocationError",
    "InvalidGradientError",
    "FormatType",
]
