from .format_type import FormatType, RenderQuality, max_channel, default_format_dtypes
from .color_types import RGBTuple, RGBATuple, HexColor, EPSILON

__all__ = [
    "FormatType",
    "RenderQuality",
    "max_channel",
    "default_format_dtypes",
    "RGBTuple",
    "RGBATuple",
    "HexColor",
    "EPSILON",
]
