# art_components/genetic_operators.py
"""
Module: genetic_operators.py

Purpose:
Crossover operators that breed a child chromosome from two parents. Both
operators write into an existing chromosome (a population slot) rather than
allocating a new one. The destination may be one of the parents: every value
is computed from the parents before anything is written.

- one_point_crossover: genes before a cut point come from parent A, the rest
  from parent B.
- uniform_crossover: every vertex of every triangle flips its own coin.

Alpha is never copied by either operator; the destination keeps its own.
"""

import math
from typing import Optional

import numpy as np

from .art_constants import UNIFORM_CROSSOVER_BIAS, VERTICES_PER_TRIANGLE
from .chromosome import Chromosome


def _check_compatible(parent_a: Chromosome, parent_b: Chromosome, child: Chromosome) -> None:
    if not len(parent_a) == len(parent_b) == len(child):
        raise ValueError(
            f"Crossover needs equally sized chromosomes, got {len(parent_a)}, {len(parent_b)} and {len(child)}.")


def draw_cut_point(triangle_count: int, rng: np.random.Generator) -> int:
    """
    Draws a one-point crossover cut in [1, triangle_count].

    The cut is ceil(u * N) with u uniform in (0, 1], so it is never 0.
    """
    u = 1.0 - rng.random()
    return max(1, min(triangle_count, math.ceil(u * triangle_count)))


def one_point_crossover(parent_a: Chromosome, parent_b: Chromosome, child: Chromosome,
                        rng: np.random.Generator, cut_point: Optional[int] = None) -> int:
    """
    Single-point crossover into `child`.

    Genes with index < cut_point take their vertices and RGB colour from
    parent_a; genes with index >= cut_point take them from parent_b. With
    cut_point == N the child is a copy of parent_a's vertices and colours.

    Args:
        parent_a (Chromosome): Supplies the genes before the cut.
        parent_b (Chromosome): Supplies the genes from the cut onwards.
        child (Chromosome): Destination slot, overwritten in place.
        rng (np.random.Generator): Used to draw the cut when none is given.
        cut_point (Optional[int]): Fixed cut in [1, N]; drawn at random if None.

    Returns:
        int: The cut point that was used.
    """
    _check_compatible(parent_a, parent_b, child)
    n = len(child)
    if cut_point is None:
        cut_point = draw_cut_point(n, rng)
    elif not 1 <= cut_point <= n:
        raise ValueError(f"Cut point must lie in [1, {n}], got {cut_point}.")

    from_a = np.arange(n) < cut_point
    points = np.where(from_a[:, np.newaxis, np.newaxis], parent_a.points, parent_b.points)
    rgb = np.where(from_a[:, np.newaxis], parent_a.colors[:, :3], parent_b.colors[:, :3])

    child.points[...] = points
    child.colors[:, :3] = rgb
    child.invalidate()
    return cut_point


def uniform_crossover(parent_a: Chromosome, parent_b: Chromosome, child: Chromosome,
                      rng: np.random.Generator) -> np.ndarray:
    """
    Uniform ("n-points") crossover into `child`.

    For every triangle, each of its vertices flips a coin. Heads copies that
    vertex from parent_a together with the triangle's RGB colour; tails copies
    both from parent_b. The colour is decided again at every vertex, so the
    colour a triangle ends up with is the one picked by its last vertex.

    Returns:
        np.ndarray: The (N, 3) boolean coin flips, True where parent_a was used.
    """
    _check_compatible(parent_a, parent_b, child)
    n = len(child)
    heads = rng.random((n, VERTICES_PER_TRIANGLE)) < UNIFORM_CROSSOVER_BIAS

    points = np.where(heads[..., np.newaxis], parent_a.points, parent_b.points)
    # The last vertex's coin is the last colour decision made for each triangle.
    last_heads = heads[:, -1]
    rgb = np.where(last_heads[:, np.newaxis], parent_a.colors[:, :3], parent_b.colors[:, :3])

    child.points[...] = points
    child.colors[:, :3] = rgb
    child.invalidate()
    return heads
