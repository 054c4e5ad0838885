from .default import value_or_default
from .num_utils import clamp_int, clamp_channels, round_half_up

__all__ = ["value_or_default", "clamp_int", "clamp_channels", "round_half_up"]
