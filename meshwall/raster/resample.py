"""Smooth resizing of render targets."""
from __future__ import annotations
from typing import Tuple
from PIL import Image
from .config import validate_size
from .target import RenderTarget

# Bilinear is deterministic for a given Pillow build and close to the
# browser's high quality canvas smoothing.
UPSAMPLE_FILTER = Image.Resampling.BILINEAR


def resize(target: RenderTarget, new_size: Tuple[int, int], resample: Image.Resampling = UPSAMPLE_FILTER) -> RenderTarget:
    """
    Resize a render target.

    Args:
        target: Source buffer.
        new_size: (width, height) of the result.
        resample: Pillow resampling filter.

    Returns:
        A new RenderTarget; ``target`` itself when the size already matches.
    """
    if len(new_size) != 2:
        raise ValueError("new_size must be a tuple of (width, height)")
    width, height = new_size
    validate_size(width, height)
    if target.size == (width, height):
        return target
    resized = target.to_image().resize((width, height), resample=resample)
    return RenderTarget.from_image(resized)
