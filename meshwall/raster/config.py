from __future__ import annotations
import math
import numbers
import os
import warnings
from dataclasses import dataclass, replace
from typing import Mapping, Optional, Tuple
from ..errors import InvalidDimensionsError
from ..types.format_type import RenderQuality
from ..utils.default import value_or_default

DEFAULT_BLEND_RADIUS = 0.4
MIN_PREVIEW_WIDTH = 16
MAX_PREVIEW_WIDTH = 4096

ENV_PREVIEW_WIDTH = "MESHWALL_PREVIEW_WIDTH"
ENV_INTERACTIVE_WIDTH = "MESHWALL_INTERACTIVE_WIDTH"
ENV_DEBOUNCE_MS = "MESHWALL_DEBOUNCE_MS"
ENV_THROTTLE_MS = "MESHWALL_THROTTLE_MS"


@dataclass(frozen=True)
class PreviewSettings:
    """
    Tuning constants for interactive previews.

    Attributes:
        interactive_width: Render width cap while the user drags or slides.
        idle_width: Render width cap for previews between interactions.
        debounce_seconds: Quiet period before an idle preview is rendered.
        throttle_seconds: Minimum spacing of previews during interaction.
    """
    interactive_width: int = 300
    idle_width: int = 600
    debounce_seconds: float = 0.2
    throttle_seconds: float = 0.032

    def __post_init__(self) -> None:
        if self.interactive_width <= 0 or self.idle_width <= 0:
            raise InvalidDimensionsError("preview widths must be positive")
        if self.debounce_seconds < 0 or self.throttle_seconds < 0:
            raise ValueError("debounce and throttle intervals must be non-negative")

    def cap_width(self, interacting: bool = False) -> int:
        return self.interactive_width if interacting else self.idle_width

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> PreviewSettings:
        """
        Build settings from ``MESHWALL_*`` environment variables.

        Missing values keep the defaults; malformed ones warn and keep the
        defaults; widths are clamped to [16, 4096].
        """
        env = value_or_default(environ, os.environ)
        defaults = cls()

        def read(name: str, default: float) -> float:
            raw = env.get(name)
            if raw is None or raw == "":
                return default
            try:
                value = float(raw)
            except ValueError:
                value = math.nan
            if not math.isfinite(value):
                warnings.warn(f"Ignoring malformed {name}={raw!r}", stacklevel=3)
                return default
            return value

        def width(name: str, default: int) -> int:
            value = int(read(name, default))
            return max(MIN_PREVIEW_WIDTH, min(value, MAX_PREVIEW_WIDTH))

        return cls(
            interactive_width=width(ENV_INTERACTIVE_WIDTH, defaults.interactive_width),
            idle_width=width(ENV_PREVIEW_WIDTH, defaults.idle_width),
            debounce_seconds=max(0.0, read(ENV_DEBOUNCE_MS, defaults.debounce_seconds * 1000) / 1000),
            throttle_seconds=max(0.0, read(ENV_THROTTLE_MS, defaults.throttle_seconds * 1000) / 1000),
        )

    def with_overrides(self, **changes) -> PreviewSettings:
        return replace(self, **changes)


@dataclass(frozen=True)
class RenderConfig:
    """Blend radius and quality of one render request."""
    blend_radius: float = DEFAULT_BLEND_RADIUS
    quality: RenderQuality = RenderQuality.FULL
    interacting: bool = False

    def __post_init__(self) -> None:
        validate_blend_radius(self.blend_radius)
        object.__setattr__(self, "quality", RenderQuality(self.quality))


def validate_blend_radius(blend_radius: float) -> None:
    if not (isinstance(blend_radius, numbers.Real) and math.isfinite(blend_radius) and blend_radius > 0):
        raise InvalidDimensionsError(f"blend_radius must be a positive number, got {blend_radius!r}")


def validate_size(width: int, height: int) -> None:
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value <= 0:
            raise InvalidDimensionsError(f"{name} must be a positive integer, got {value!r}")


def render_size(
    width: int,
    height: int,
    quality: RenderQuality = RenderQuality.FULL,
    interacting: bool = False,
    settings: Optional[PreviewSettings] = None,
) -> Tuple[int, int]:
    """
    Internal resolution for a render of ``width`` x ``height``.

    Full quality renders at the target size. Preview quality caps the width
    at the interactive or idle budget and scales the height to match.
    """
    validate_size(width, height)
    if RenderQuality(quality) == RenderQuality.FULL:
        return (width, height)
    cap = value_or_default(settings, PreviewSettings()).cap_width(interacting)
    if width <= cap:
        return (width, height)
    scale = cap / width
    return (cap, max(1, math.floor(height * scale)))
