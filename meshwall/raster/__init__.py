from ..types.format_type import RenderQuality
from .config import PreviewSettings, RenderConfig, DEFAULT_BLEND_RADIUS, render_size
from .target import RenderTarget
from .resample import resize
from .mesh import MeshRasterizer, render_mesh, MAX_PIXELS

__all__ = [
    "RenderQuality",
    "PreviewSettings",
    "RenderConfig",
    "DEFAULT_BLEND_RADIUS",
    "render_size",
    "RenderTarget",
    "resize",
    "MeshRasterizer",
    "render_mesh",
    "MAX_PIXELS",
]
