# art_backend.py
"""
Module: art_backend.py

Purpose:
This module is the backend of the Genetic Art application. It sits between the
pygame front end (genetic_art_app.py) and the genetic algorithm components in
the `art_components` package.

Key Responsibilities:
- Startup: loads and validates the target image, creates the render target used
  for fitness evaluation, and builds a scored initial population. Every failed
  precondition surfaces here as a GeneticArtError, before any generation runs.
- Evolution: runs batches of generations on an EvolutionEngine.
- Reporting: formats generation summaries for logs and the window caption.
"""

# Standard library imports
import logging
from typing import List, Optional

# Local application/library specific imports
from art_components.art_constants import (
    POPULATION_SIZE, TRIANGLE_COUNT, TRIANGLE_ALPHA, CANVAS_SIZE,
    BACKGROUND_COLOR, LOG_EVERY_GENERATIONS
)
from art_components.evolution_engine import EvolutionEngine, GenerationReport
from art_components.image_source import load_target_image
from art_components.rasterizer import RenderTarget

logger = logging.getLogger(__name__)


def build_engine(image_path: str,
                 canvas_size: int = CANVAS_SIZE,
                 population_size: int = POPULATION_SIZE,
                 triangle_count: int = TRIANGLE_COUNT,
                 alpha: float = TRIANGLE_ALPHA,
                 seed: Optional[int] = None,
                 log_every: int = LOG_EVERY_GENERATIONS) -> EvolutionEngine:
    """
    Prepares everything the generation loop needs.

    Args:
        image_path (str): Target image file; must be canvas_size x canvas_size.
        canvas_size (int): Side of the square canvas in pixels.
        population_size (int): Chromosomes in the population.
        triangle_count (int): Triangles per chromosome.
        alpha (float): Opacity shared by every triangle.
        seed (Optional[int]): Seed for reproducible runs.
        log_every (int): Generations between progress log lines.

    Returns:
        EvolutionEngine: An engine with a scored, sorted initial population.

    Raises:
        ImageSourceError: The image is missing, undecodable, or the wrong size.
        RenderTargetError: The evaluation canvas cannot be created.
        ValueError: A numeric parameter is out of range.
    """
    if canvas_size <= 0:
        raise ValueError(f"Canvas size must be positive, got {canvas_size}.")

    target = load_target_image(image_path, expected_size=(canvas_size, canvas_size))
    render_target = RenderTarget(canvas_size, canvas_size, BACKGROUND_COLOR)

    return EvolutionEngine(
        target,
        triangle_count=triangle_count,
        population_size=population_size,
        alpha=alpha,
        seed=seed,
        render_target=render_target,
        log_every=log_every,
    )


def evolve_generations(engine: EvolutionEngine, count: int) -> List[GenerationReport]:
    """Runs `count` generations back to back and returns their reports."""
    if count < 0:
        raise ValueError(f"Generation count cannot be negative, got {count}.")
    return [engine.tick() for _ in range(count)]


def describe_report(report: GenerationReport) -> str:
    """One line summary, e.g. 'Generation 12 | best 1034211 | worst 1290031'."""
    return f"Generation {report.generation} | best {report.best_fitness} | worst {report.worst_fitness}"
