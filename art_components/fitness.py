# art_components/fitness.py
"""
Module: fitness.py

Purpose:
Scores how far a rendered candidate is from the target image. The score is the
sum of squared per-channel differences over every pixel (lower is better) and
is only ever used as a sorting key.
"""

import numpy as np

from .art_constants import PixelBuffer


def squared_difference(rendered: PixelBuffer, target: PixelBuffer) -> int:
    """
    Sum of squared differences between two RGB buffers.

    Both buffers are read as integers in 0..255. The accumulation is done in
    int64: width * height * 3 * 255**2 overflows 32 bits for large canvases.

    Args:
        rendered (PixelBuffer): Candidate pixels, shape (height, width, 3).
        target (PixelBuffer): Target pixels with the same shape.

    Returns:
        int: The dissimilarity score, 0 for identical images.

    Raises:
        ValueError: If the two buffers do not have the same shape.
    """
    if rendered.shape != target.shape:
        raise ValueError(f"Cannot compare buffers of shape {rendered.shape} and {target.shape}.")

    diff = rendered.astype(np.int64) - target.astype(np.int64)
    return int(np.sum(diff * diff, dtype=np.int64))
