import os

# Headless: no window is ever opened by the tests.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import numpy as np
import pygame
import pytest

from art_components.rasterizer import RenderTarget


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def small_target():
    """A 6x6 target with a fixed pseudo-random picture."""
    return np.random.default_rng(99).integers(0, 256, size=(6, 6, 3), dtype=np.uint8)


@pytest.fixture
def render_target():
    return RenderTarget(4, 4)


@pytest.fixture
def write_bmp(tmp_path):
    """Writes a BMP of the given size; pixels maps (x, y) -> (r, g, b)."""
    def _write(name, width, height, fill=(0, 0, 0), pixels=None):
        surface = pygame.Surface((width, height), 0, 24)
        surface.fill(fill)
        for (x, y), colour in (pixels or {}).items():
            surface.set_at((x, y), colour)
        path = tmp_path / name
        pygame.image.save(surface, str(path))
        return str(path)
    return _write
