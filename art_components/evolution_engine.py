# art_components/evolution_engine.py
"""
Module: evolution_engine.py

Purpose:
This module implements the core loop of the genetic algorithm (GA) that evolves
triangle images towards a target picture. It owns the population, its own
random number generator and the render target used for fitness evaluation,
and advances exactly one generation per `tick()` call.

A generation:
1. Sorts the population by fitness (lowest first, index 0 is the best).
2. Keeps the best ELITE_FRACTION of it untouched (elitism).
3. Rebuilds every other slot, either by crossover of two parents picked
   uniformly from the whole population, or by mutating the slot in place.
4. Re-evaluates each rebuilt slot and sorts the population again.

Because only the worst slots are overwritten and the elites are kept as they
are, the best fitness can never get worse from one generation to the next.
Nothing here runs on a timer: the host decides how often to call `tick()` and
when to redraw the best individual.
"""

# Standard library imports
import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

# Third-party library imports
import numpy as np

# Local application/library specific imports
from .art_constants import (
    POPULATION_SIZE, TRIANGLE_COUNT, TRIANGLE_ALPHA, ELITE_FRACTION,
    CROSSOVER_PROBABILITY, ONE_POINT_PROBABILITY, DISTURB_PROBABILITY,
    DISTURB_MAGNITUDE_RANGE, BACKGROUND_COLOR, LOG_EVERY_GENERATIONS,
    PixelBuffer
)
from .chromosome import Chromosome
from .genetic_operators import one_point_crossover, uniform_crossover
from .rasterizer import RenderTarget

logger = logging.getLogger(__name__)


def elite_count_for(population_size: int) -> int:
    """Number of top slots preserved each generation: ceil(size * ELITE_FRACTION)."""
    return math.ceil(population_size * ELITE_FRACTION)


@dataclass
class GenerationReport:
    """Summary of one completed tick."""
    generation: int
    best_fitness: int
    worst_fitness: int
    crossovers: int
    disturb_mutations: int
    change_mutations: int


class EvolutionEngine:
    """
    Manages the population of chromosomes and runs the evolutionary process.
    """

    def __init__(self, target: PixelBuffer,
                 triangle_count: int = TRIANGLE_COUNT,
                 population_size: int = POPULATION_SIZE,
                 alpha: float = TRIANGLE_ALPHA,
                 seed: Optional[int] = None,
                 render_target: Optional[RenderTarget] = None,
                 log_every: int = LOG_EVERY_GENERATIONS):
        """
        Builds and scores a random initial population.

        Args:
            target (PixelBuffer): Image to approximate, shape (height, width, 3), uint8.
            triangle_count (int): Triangles per chromosome.
            population_size (int): Number of chromosomes.
            alpha (float): Fixed opacity of every triangle.
            seed (Optional[int]): Seed for this engine's generator; None draws one from the OS.
            render_target (Optional[RenderTarget]): Canvas for fitness evaluation.
                A new one matching the target size is created if omitted.
            log_every (int): Log a progress line every this many generations (0 disables).
        """
        if target.ndim != 3 or target.shape[2] != 3:
            raise ValueError(f"Target must be an RGB buffer of shape (height, width, 3), got {target.shape}.")
        if population_size <= 0:
            raise ValueError(f"Population size must be positive, got {population_size}.")

        height, width = target.shape[:2]
        if render_target is None:
            render_target = RenderTarget(width, height, BACKGROUND_COLOR)
        elif render_target.size != (width, height):
            raise ValueError(
                f"Render target is {render_target.width}x{render_target.height} but the target image is {width}x{height}.")

        self.target: PixelBuffer = target
        self.render_target: RenderTarget = render_target
        self.triangle_count: int = triangle_count
        self.population_size: int = population_size
        self.alpha: float = alpha
        self.elite_count: int = elite_count_for(population_size)
        self.log_every: int = log_every
        self.rng: np.random.Generator = np.random.default_rng(seed)
        self.generation: int = 0

        self.population: List[Chromosome] = self._initialize_population()
        logger.info("Initialized population of %d chromosomes x %d triangles on a %dx%d canvas "
                    "(elites kept per generation: %d, initial best fitness: %d).",
                    population_size, triangle_count, width, height,
                    self.elite_count, self.best().fitness)

    @property
    def replaced_count(self) -> int:
        return self.population_size - self.elite_count

    def _initialize_population(self) -> List[Chromosome]:
        population = [Chromosome.random(self.rng, self.triangle_count, self.alpha)
                      for _ in range(self.population_size)]
        for chromosome in population:
            chromosome.evaluate(self.target, self.render_target)
        population.sort(key=lambda c: c.fitness)
        return population

    def _sort_population(self) -> None:
        # list.sort is stable, so equally fit elites keep their order.
        self.population.sort(key=lambda c: c.fitness)

    def _pick_parents(self) -> Tuple[int, int]:
        """Two indices drawn uniformly over the whole population, with replacement."""
        a, b = self.rng.integers(0, self.population_size, size=2)
        return int(a), int(b)

    def _disturb_magnitude(self) -> float:
        magnitude = 0.0
        while magnitude == 0.0:
            magnitude = DISTURB_MAGNITUDE_RANGE * self.rng.uniform(-1.0, 1.0)
        return magnitude

    def tick(self) -> GenerationReport:
        """
        Runs one generation and returns a summary of it.

        Slots [0, elite_count) are preserved. Every other slot is rebuilt and
        re-evaluated before the population is sorted again.
        """
        self._sort_population()

        crossovers = disturbs = changes = 0
        for i in range(self.elite_count, self.population_size):
            slot = self.population[i]
            if self.rng.random() < CROSSOVER_PROBABILITY:
                a, b = self._pick_parents()
                if self.rng.random() < ONE_POINT_PROBABILITY:
                    one_point_crossover(self.population[a], self.population[b], slot, self.rng)
                else:
                    uniform_crossover(self.population[a], self.population[b], slot, self.rng)
                crossovers += 1
            elif self.rng.random() < DISTURB_PROBABILITY:
                slot.mutate_disturb(self._disturb_magnitude(), self.rng)
                disturbs += 1
            else:
                slot.mutate_change(self.rng)
                changes += 1

            # Scored right away: later slots may pick this one as a parent.
            slot.evaluate(self.target, self.render_target)

        self._sort_population()
        self.generation += 1

        report = GenerationReport(
            generation=self.generation,
            best_fitness=self.population[0].fitness,
            worst_fitness=self.population[-1].fitness,
            crossovers=crossovers,
            disturb_mutations=disturbs,
            change_mutations=changes,
        )
        if self.log_every and self.generation % self.log_every == 0:
            logger.info("Generation %d: best fitness %d, worst fitness %d.",
                        report.generation, report.best_fitness, report.worst_fitness)
        return report

    # --- Access to the best individual (for display only) ---

    def best(self) -> Chromosome:
        return self.population[0]

    def best_genes(self) -> Tuple[np.ndarray, np.ndarray]:
        """Copies of the best chromosome's vertices and colours."""
        best = self.best()
        return best.points.copy(), best.colors.copy()

    def render_best(self, render_target: Optional[RenderTarget] = None) -> PixelBuffer:
        """
        Renders the current best chromosome.

        Args:
            render_target (Optional[RenderTarget]): Canvas to draw on, e.g. one
                sized for a display window. Defaults to the evaluation target.
        """
        return self.best().render(render_target or self.render_target)

    def fitness_values(self) -> List[int]:
        return [c.fitness for c in self.population]
