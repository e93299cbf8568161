# art_components/__init__.py

"""
Genetic Art Components Package

This package contains the modules of a genetic algorithm that approximates a
target image with semi-transparent triangles.
It includes:
- art_constants: Type aliases and the tunable parameters of the algorithm.
- errors: Exception types for startup failures and stale fitness reads.
- rasterizer: RenderTarget, which draws triangle sequences into pixel buffers.
- fitness: The squared-difference score between a rendering and the target.
- chromosome: The Chromosome genome with its two mutation variants.
- genetic_operators: One-point and uniform crossover.
- evolution_engine: EvolutionEngine, which owns the population and runs one
                    generation per tick.
- image_source: Decoding of the target image with pygame.

The application scripts (art_backend.py, genetic_art_app.py) import directly
from the submodules, e.g. from art_components.evolution_engine import EvolutionEngine.
"""

__version__ = "1.0.0"
