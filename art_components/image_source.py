# art_components/image_source.py
"""
Module: image_source.py

Purpose:
Loads the target picture the algorithm tries to reproduce. pygame decodes the
file (BMP always, PNG/JPEG/etc. when pygame is built with SDL_image) and the
pixels are returned as a (height, width, 3) uint8 array with rows from top to
bottom, the same orientation RenderTarget produces, so the two can be compared
directly. The alpha channel of the file, if any, is dropped.
"""

import logging
import os
from typing import Optional, Tuple

import numpy as np
import pygame

from .art_constants import PixelBuffer
from .errors import ImageSourceError

logger = logging.getLogger(__name__)


def surface_to_buffer(surface: pygame.Surface) -> PixelBuffer:
    """Copies a surface's RGB pixels into a (height, width, 3) uint8 array."""
    # surfarray is indexed (x, y); swap to (row, column).
    return np.ascontiguousarray(pygame.surfarray.array3d(surface).transpose(1, 0, 2), dtype=np.uint8)


def buffer_to_surface(buffer: PixelBuffer) -> pygame.Surface:
    """Inverse of surface_to_buffer, used to blit rendered pixels."""
    return pygame.surfarray.make_surface(buffer.transpose(1, 0, 2))


def load_target_image(file_path: str, expected_size: Optional[Tuple[int, int]] = None) -> PixelBuffer:
    """
    Decodes an image file into an RGB pixel buffer.

    Args:
        file_path (str): Path of the image to load.
        expected_size (Optional[Tuple[int, int]]): Required (width, height); the
            canvas size the rasterizer will use. Not checked when None.

    Returns:
        PixelBuffer: The decoded pixels, shape (height, width, 3), dtype uint8.

    Raises:
        ImageSourceError: If the file does not exist, cannot be decoded, or its
                          size differs from expected_size.
    """
    if not os.path.isfile(file_path):
        raise ImageSourceError(f"Target image '{file_path}' does not exist or is not a file.")

    try:
        surface = pygame.image.load(file_path)
    except (pygame.error, FileNotFoundError) as e:
        raise ImageSourceError(f"Could not decode target image '{os.path.basename(file_path)}': {e}") from e

    size = surface.get_size()
    if expected_size is not None and tuple(size) != tuple(expected_size):
        raise ImageSourceError(
            f"Target image '{os.path.basename(file_path)}' is {size[0]}x{size[1]} pixels, "
            f"expected {expected_size[0]}x{expected_size[1]}.")

    pixels = surface_to_buffer(surface)
    logger.info("Loaded target image '%s' (%dx%d).", os.path.basename(file_path), size[0], size[1])
    return pixels
