# art_components/art_constants.py
"""
Module: art_constants.py

Purpose:
This module serves as a central repository for all constants, type definitions,
and configuration parameters used throughout the Genetic Algorithm (GA) for
triangle-based image approximation. Consolidating these values here keeps the
evolutionary behaviour easy to tune from one place.

Key Sections:
- Type Aliases: Define custom types for clarity and type checking (e.g., PixelBuffer).
- Genetic Algorithm Parameters: Control the core evolutionary process (e.g., population size).
- Operator Probabilities: How often each crossover and mutation variant is applied.
- Mutation Parameters: Scale and probabilities used by the two mutation variants.
- Canvas and Display Definitions: Canvas size, background colour, window scaling.
"""

from typing import Tuple

import numpy as np

# --- Type Aliases for Clarity ---

# RGB: A colour as three integer channels in 0..255, used for the canvas background.
RGB = Tuple[int, int, int]

# PixelBuffer: A rendered or decoded image as a numpy array of shape
# (height, width, 3) and dtype uint8. Rows run top to bottom.
PixelBuffer = np.ndarray

# PointArray: Triangle vertices of one chromosome, shape (N, 3, 2), values in [0, 1].
PointArray = np.ndarray

# ColorArray: Triangle colours of one chromosome, shape (N, 4) as RGBA, values in [0, 1].
ColorArray = np.ndarray

# --- Genetic Algorithm Parameters ---
POPULATION_SIZE: int = 30       # Number of chromosomes kept in the population.
TRIANGLE_COUNT: int = 150       # Triangles (genes) per chromosome.
VERTICES_PER_TRIANGLE: int = 3
ELITE_FRACTION: float = 0.25    # Best fraction of the sorted population that survives untouched.

# --- Operator Probabilities ---
CROSSOVER_PROBABILITY: float = 0.95  # Chance a replaced slot is bred by crossover rather than mutated.
ONE_POINT_PROBABILITY: float = 0.5   # Chance a crossover is one-point rather than uniform.
DISTURB_PROBABILITY: float = 0.95    # Chance a mutation is a small disturbance rather than a full change.
UNIFORM_CROSSOVER_BIAS: float = 0.5  # Coin bias for each vertex in uniform crossover.

# --- Mutation Parameters ---
DISTURB_MAGNITUDE_RANGE: float = 500.0   # Magnitudes are sampled from [-range, range].
VERTEX_DISTURB_PROBABILITY: float = 0.25  # Per vertex chance of being nudged by mutate_disturb.
COLOR_DISTURB_PROBABILITY: float = 0.5    # Per triangle chance of its colour being nudged.
COLOR_DISTURB_SCALE: float = 10.0         # Colours move ten times further than vertices.
CHANGE_PROBABILITY: float = 0.5           # Per coordinate / per colour chance in mutate_change.

# --- Canvas and Display Definitions ---
CANVAS_SIZE: int = 512              # Target image, canvas and window are CANVAS_SIZE x CANVAS_SIZE.
TRIANGLE_ALPHA: float = 0.15        # Fixed opacity of every triangle for the whole run.
BACKGROUND_COLOR: RGB = (0, 0, 0)   # Canvas is cleared to this colour before every render.
DISPLAY_SCALE: int = 1              # Window pixels per canvas pixel.
WINDOW_TITLE: str = "Genetic Art"
FRAMES_PER_SECOND: int = 0          # 0 lets the loop run as fast as evolution allows.

# --- Reporting ---
LOG_EVERY_GENERATIONS: int = 100    # Progress is logged once per this many generations.
