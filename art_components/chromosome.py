# art_components/chromosome.py
"""
Module: chromosome.py

Purpose:
This module defines the Chromosome, the genome of one candidate image. A
chromosome is an ordered sequence of triangle genes (the order is the draw
order) together with a cached fitness score.

Key Functionalities:
- Gene storage: vertices live in a (N, 3, 2) array and colours in a (N, 4) RGBA
  array. The alpha column holds the run-wide opacity and is never evolved.
- Rendering and evaluation (`render`, `evaluate`): draw the genes on a
  RenderTarget and score them against the target image.
- Mutation (`mutate_change`, `mutate_disturb`): the two mutation variants used
  by the evolution engine. Values pushed outside [0, 1] are resampled, never
  clamped, so every gene always stays inside the unit range.

Fitness bookkeeping follows a compute-then-compare rule: any change of the genes
marks the cached fitness stale, and reading a stale fitness raises
StaleFitnessError instead of silently comparing an outdated score.
"""

# Standard library imports
from typing import Optional

# Third-party library imports
import numpy as np

# Local application/library specific imports
from .art_constants import (
    TRIANGLE_COUNT, TRIANGLE_ALPHA, VERTICES_PER_TRIANGLE,
    VERTEX_DISTURB_PROBABILITY, COLOR_DISTURB_PROBABILITY, COLOR_DISTURB_SCALE,
    CHANGE_PROBABILITY, PixelBuffer
)
from .errors import StaleFitnessError
from .fitness import squared_difference
from .rasterizer import RenderTarget


def _resample_out_of_range(values: np.ndarray, rng: np.random.Generator) -> None:
    """Replaces, in place, every value outside [0, 1] with a fresh uniform sample."""
    out_of_range = (values < 0.0) | (values > 1.0)
    count = int(np.count_nonzero(out_of_range))
    if count:
        values[out_of_range] = rng.random(count)


class Chromosome:
    """
    One candidate image: N semi-transparent triangles plus a cached fitness.
    """

    def __init__(self, triangle_count: int = TRIANGLE_COUNT, alpha: float = TRIANGLE_ALPHA):
        """
        Allocates the gene arrays. All vertices and colours start at zero; call
        `randomize` (or write into the chromosome with a crossover) before use.

        Args:
            triangle_count (int): Number of triangle genes (N).
            alpha (float): Fixed opacity for every triangle, in [0, 1].
        """
        if triangle_count <= 0:
            raise ValueError(f"A chromosome needs at least one triangle, got {triangle_count}.")
        if not 0.0 <= alpha <= 1.0:
            raise ValueError(f"Triangle alpha must lie in [0, 1], got {alpha}.")

        self.triangle_count: int = triangle_count
        self.alpha: float = alpha
        self.points: np.ndarray = np.zeros((triangle_count, VERTICES_PER_TRIANGLE, 2), dtype=np.float64)
        self.colors: np.ndarray = np.zeros((triangle_count, 4), dtype=np.float64)
        self.colors[:, 3] = alpha
        self._fitness: Optional[int] = None

    @classmethod
    def random(cls, rng: np.random.Generator, triangle_count: int = TRIANGLE_COUNT,
               alpha: float = TRIANGLE_ALPHA) -> "Chromosome":
        chromosome = cls(triangle_count, alpha)
        chromosome.randomize(rng)
        return chromosome

    def __len__(self) -> int:
        return self.triangle_count

    def __repr__(self) -> str:
        score = self._fitness if self._fitness is not None else "stale"
        return f"Chromosome(triangles={self.triangle_count}, fitness={score})"

    # --- Fitness bookkeeping ---

    @property
    def fitness(self) -> int:
        """The cached score. Raises StaleFitnessError if it needs recomputing."""
        if self._fitness is None:
            raise StaleFitnessError("Chromosome fitness read before evaluate() was called on its current genes.")
        return self._fitness

    @property
    def is_evaluated(self) -> bool:
        return self._fitness is not None

    def invalidate(self) -> None:
        """Marks the cached fitness stale. Called after every gene change."""
        self._fitness = None

    # --- Rendering and evaluation ---

    def render(self, render_target: RenderTarget) -> PixelBuffer:
        return render_target.render(self.points, self.colors)

    def evaluate(self, target: PixelBuffer, render_target: RenderTarget) -> int:
        """
        Renders this chromosome and caches its score against the target.

        Args:
            target (PixelBuffer): The image being approximated.
            render_target (RenderTarget): Canvas to draw on; must match the target size.

        Returns:
            int: The freshly computed fitness.
        """
        self._fitness = squared_difference(self.render(render_target), target)
        return self._fitness

    # --- Gene manipulation ---

    def randomize(self, rng: np.random.Generator) -> None:
        """Fills every vertex and RGB channel with uniform samples in [0, 1]."""
        self.points[...] = rng.random(self.points.shape)
        self.colors[:, :3] = rng.random((self.triangle_count, 3))
        self.colors[:, 3] = self.alpha
        self.invalidate()

    def copy(self) -> "Chromosome":
        clone = Chromosome(self.triangle_count, self.alpha)
        clone.points[...] = self.points
        clone.colors[...] = self.colors
        clone._fitness = self._fitness
        return clone

    def mutate_change(self, rng: np.random.Generator) -> None:
        """
        Large mutation: replaces genes outright with fresh random values.

        Every vertex coordinate is independently replaced with probability
        CHANGE_PROBABILITY. Independently, each triangle has its whole RGB
        colour replaced with the same probability. Alpha is left alone.
        """
        replace_points = rng.random(self.points.shape) < CHANGE_PROBABILITY
        fresh_points = rng.random(self.points.shape)
        self.points[replace_points] = fresh_points[replace_points]

        replace_colors = rng.random(self.triangle_count) < CHANGE_PROBABILITY
        fresh_colors = rng.random((self.triangle_count, 3))
        self.colors[replace_colors, :3] = fresh_colors[replace_colors]
        self.invalidate()

    def mutate_disturb(self, magnitude: float, rng: np.random.Generator) -> None:
        """
        Small mutation: nudges vertices and colours by offsets scaled by 1/magnitude.

        Each vertex is moved with probability VERTEX_DISTURB_PROBABILITY, both of
        its coordinates by an independent uniform(-1, 1) / magnitude offset. Each
        triangle's colour is moved with probability COLOR_DISTURB_PROBABILITY,
        every RGB channel by COLOR_DISTURB_SCALE * uniform(-1, 1) / magnitude.
        Any value leaving [0, 1] is replaced by a fresh uniform sample.

        Args:
            magnitude (float): Nonzero divisor; its sign does not matter since
                               the offsets are symmetric.
            rng (np.random.Generator): Source of randomness.

        Raises:
            ValueError: If magnitude is zero.
        """
        if magnitude == 0:
            raise ValueError("mutate_disturb needs a nonzero magnitude.")

        move_vertices = rng.random((self.triangle_count, VERTICES_PER_TRIANGLE)) < VERTEX_DISTURB_PROBABILITY
        vertex_offsets = rng.uniform(-1.0, 1.0, self.points.shape) / magnitude
        self.points += vertex_offsets * move_vertices[..., np.newaxis]
        _resample_out_of_range(self.points, rng)

        move_colors = rng.random(self.triangle_count) < COLOR_DISTURB_PROBABILITY
        color_offsets = COLOR_DISTURB_SCALE * rng.uniform(-1.0, 1.0, (self.triangle_count, 3)) / magnitude
        rgb = self.colors[:, :3]  # view, alpha column excluded
        rgb += color_offsets * move_colors[:, np.newaxis]
        _resample_out_of_range(rgb, rng)
        self.invalidate()
