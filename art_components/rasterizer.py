# art_components/rasterizer.py
"""
Module: rasterizer.py

Purpose:
This module turns a chromosome's triangles into pixels. It is the phenotype
builder of the genetic algorithm: every fitness evaluation and every redraw of
the best individual goes through a RenderTarget.

Key Functionalities:
- RenderTarget: an explicit rendering resource of fixed width x height. It owns
  a private pygame mask surface (used to rasterize triangle coverage) and a
  floating point colour accumulator. Each render clears the accumulator to the
  background colour first, so a target can be reused for any number of
  evaluations one after another.
- Painter's algorithm: triangles are drawn in gene order; each one is blended
  over what is already on the canvas with standard source-over compositing,
  out = src * alpha + dst * (1 - alpha), per channel.

Coordinates are normalized: (0, 0) is the top-left corner of the canvas and
(1, 1) the bottom-right one. The returned buffer has shape (height, width, 3),
dtype uint8, rows top to bottom, which is the same orientation the image
source produces.
"""

# Standard library imports
from typing import Optional, Tuple

# Third-party library imports
import numpy as np
import pygame

# Local application/library specific imports
from .art_constants import BACKGROUND_COLOR, RGB, ColorArray, PixelBuffer, PointArray
from .errors import RenderTargetError

_COVERED = (255, 255, 255)
_UNCOVERED = (0, 0, 0)


class RenderTarget:
    """
    A reusable canvas that rasterizes ordered triangle sequences.

    A RenderTarget is not shared between concurrent users: render() clears
    and rewrites it. Give each evaluator its own target if evaluations ever
    need to overlap.
    """

    def __init__(self, width: int, height: int, background: RGB = BACKGROUND_COLOR):
        """
        Creates the mask surface and the colour accumulator.

        Args:
            width (int): Canvas width in pixels.
            height (int): Canvas height in pixels.
            background (RGB): Colour the canvas is cleared to before each render.

        Raises:
            RenderTargetError: If the size is not positive or pygame cannot
                               allocate the surface.
        """
        if width <= 0 or height <= 0:
            raise RenderTargetError(f"Render target size must be positive, got {width}x{height}.")

        self.width: int = int(width)
        self.height: int = int(height)
        self.background: RGB = tuple(int(c) for c in background)

        try:
            # 32-bit surface so the red channel can be read back as coverage.
            self._mask: pygame.Surface = pygame.Surface((self.width, self.height), 0, 32)
        except pygame.error as e:
            raise RenderTargetError(f"Could not create a {self.width}x{self.height} render surface: {e}") from e
        self._mask.fill(_UNCOVERED)
        self._dirty: Optional[pygame.Rect] = None

        self._background = np.array(self.background, dtype=np.float64) / 255.0
        self._canvas = np.empty((self.height, self.width, 3), dtype=np.float64)
        self._scale = np.array([self.width, self.height], dtype=np.float64)

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def clear(self) -> None:
        """Resets the accumulator to the background colour."""
        self._canvas[...] = self._background

    def render(self, points: PointArray, colors: ColorArray) -> PixelBuffer:
        """
        Renders triangles back to front and returns the resulting pixels.

        Args:
            points (PointArray): Vertices, shape (N, 3, 2), normalized to [0, 1].
            colors (ColorArray): RGBA colours, shape (N, 4), values in [0, 1].

        Returns:
            PixelBuffer: A new uint8 array of shape (height, width, 3).
        """
        self.clear()
        for vertices, rgba in zip(points, colors):
            self._blend_triangle(vertices, rgba)
        return self.snapshot()

    def snapshot(self) -> PixelBuffer:
        """Quantizes the current accumulator to 8-bit channels."""
        return np.rint(np.clip(self._canvas, 0.0, 1.0) * 255.0).astype(np.uint8)

    def _blend_triangle(self, vertices: np.ndarray, rgba: np.ndarray) -> None:
        coverage = self._coverage(vertices)
        if coverage is None:
            return
        rect, mask = coverage

        alpha = float(rgba[3])
        region = self._canvas[rect.top:rect.bottom, rect.left:rect.right]
        region[mask] = rgba[:3] * alpha + region[mask] * (1.0 - alpha)

    def _coverage(self, vertices: np.ndarray) -> Optional[Tuple[pygame.Rect, np.ndarray]]:
        """
        Rasterizes one triangle onto the mask surface.

        Returns the bounding rectangle of the touched pixels and a boolean
        (rows, cols) coverage mask inside it, or None when nothing is covered.
        """
        # Only the area touched by the previous triangle needs wiping.
        if self._dirty is not None:
            self._mask.fill(_UNCOVERED, self._dirty)
            self._dirty = None

        pixel_vertices = (vertices * self._scale).tolist()
        rect = pygame.draw.polygon(self._mask, _COVERED, pixel_vertices)
        rect = rect.clip(self._mask.get_rect())
        if rect.width == 0 or rect.height == 0:
            return None
        self._dirty = rect

        # surfarray indexes (x, y); the canvas is (row, col).
        red = pygame.surfarray.array_red(self._mask.subsurface(rect).copy())
        return rect, red.T > 0
