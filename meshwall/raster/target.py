from __future__ import annotations
from typing import Tuple
import numpy as np
from numpy import ndarray
from PIL import Image
from ..errors import InvalidDimensionsError
from ..types.color_types import RGBATuple
from ..types.format_type import FormatType, default_format_dtypes, max_channel

CHANNELS = 4


class RenderTarget:
    """
    An RGBA8 pixel buffer produced by one render call.

    ``pixels`` is a flat, row-major ``bytes`` object with a top-left origin
    and length ``width * height * 4``. The buffer is immutable; conversions
    return copies.
    """
    __slots__ = ('_width', '_height', '_pixels', '_is_frozen')

    def __setattr__(self, name, value):
        """Block attribute changes after __init__ finishes."""
        if getattr(self, '_is_frozen', False):
            raise AttributeError(f"{self.__class__.__name__} is immutable; cannot assign to {name}")
        super().__setattr__(name, value)

    def __init__(self, width: int, height: int, pixels: bytes) -> None:
        if width <= 0 or height <= 0:
            raise InvalidDimensionsError("width and height must be positive integers")
        expected = width * height * CHANNELS
        if len(pixels) != expected:
            raise ValueError(f"RGBA8 buffer for {width}x{height} needs {expected} bytes, got {len(pixels)}")
        self._width = int(width)
        self._height = int(height)
        self._pixels = bytes(pixels)
        super().__setattr__('_is_frozen', True)

    @classmethod
    def from_array(cls, arr: ndarray) -> RenderTarget:
        """Wrap a (height, width, 4) uint8 array."""
        if arr.ndim != 3 or arr.shape[-1] != CHANNELS:
            raise ValueError(f"RenderTarget expects (H, W, 4) array, got shape {arr.shape}")
        if arr.dtype != np.uint8:
            raise TypeError(f"RenderTarget expects uint8 array, got {arr.dtype}")
        height, width = arr.shape[:2]
        return cls(width, height, np.ascontiguousarray(arr).tobytes())

    @classmethod
    def from_image(cls, image: Image.Image) -> RenderTarget:
        return cls.from_array(np.asarray(image.convert("RGBA"), dtype=np.uint8))

    # ------------------ READ-ONLY PROPERTIES ------------------
    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height), the order Pillow uses."""
        return (self._width, self._height)

    @property
    def pixels(self) -> bytes:
        return self._pixels

    def pixel(self, x: int, y: int) -> RGBATuple:
        """Return the (r, g, b, a) channels at column ``x``, row ``y``."""
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"pixel ({x}, {y}) outside {self._width}x{self._height} target")
        idx = (y * self._width + x) * CHANNELS
        r, g, b, a = self._pixels[idx:idx + CHANNELS]
        return (r, g, b, a)

    def to_array(self, format_type: FormatType = FormatType.INT) -> ndarray:
        """
        Copy the buffer into a (height, width, 4) array.

        Args:
            format_type: INT gives uint8 in [0, 255], FLOAT gives float32 in [0, 1].
        """
        arr = np.frombuffer(self._pixels, dtype=np.uint8).reshape(self._height, self._width, CHANNELS)
        if format_type == FormatType.INT:
            return arr.copy()
        return (arr.astype(default_format_dtypes[format_type]) / max_channel[FormatType.INT]).astype(
            default_format_dtypes[format_type]
        )

    def to_image(self) -> Image.Image:
        return Image.frombytes("RGBA", self.size, self._pixels)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RenderTarget):
            return NotImplemented
        return self.size == other.size and self._pixels == other._pixels

    def __hash__(self) -> int:
        return hash((self._width, self._height, self._pixels))

    def __repr__(self) -> str:
        return f"RenderTarget({self._width}x{self._height})"
