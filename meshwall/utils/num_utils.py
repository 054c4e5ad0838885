import math
import numpy as np
from boundednumbers import BoundType, bound_type_to_np_function
from boundednumbers.functions import clamp


def round_half_up(value):
    """Round to the nearest integer with ties going up, for scalars or arrays."""
    if isinstance(value, np.ndarray):
        return np.floor(value + 0.5)
    return math.floor(value + 0.5)


def clamp_int(value, low: int = 0, high: int = 255) -> int:
    """Round a scalar channel value and clamp it into [low, high]."""
    return int(clamp(round_half_up(value), low, high))


def clamp_channels(values: np.ndarray, low: float = 0.0, high: float = 255.0) -> np.ndarray:
    """Round channel values and clamp them into [low, high]."""
    fn = bound_type_to_np_function[BoundType.CLAMP]
    return fn(round_half_up(values), low, high)
