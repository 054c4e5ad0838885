from .linear import (
    ColorStop,
    LinearGradient,
    LUT_STEPS,
    interpolate_stops,
    is_valid_gradient,
    linear_gradient,
    parse_color,
    parse_linear_gradient,
)

__all__ = [
    "ColorStop",
    "LinearGradient",
    "LUT_STEPS",
    "interpolate_stops",
    "is_valid_gradient",
    "linear_gradient",
    "parse_color",
    "parse_linear_gradient",
]
