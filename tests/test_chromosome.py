"""Tests for art_components.chromosome — genes, fitness caching and mutation."""

import numpy as np
import pytest

from art_components.chromosome import Chromosome
from art_components.errors import StaleFitnessError
from art_components.fitness import squared_difference
from art_components.rasterizer import RenderTarget


def assert_in_unit_range(chromosome):
    assert ((chromosome.points >= 0.0) & (chromosome.points <= 1.0)).all()
    assert ((chromosome.colors[:, :3] >= 0.0) & (chromosome.colors[:, :3] <= 1.0)).all()


class TestConstruction:
    def test_shapes(self):
        c = Chromosome(7, alpha=0.2)
        assert len(c) == 7
        assert c.points.shape == (7, 3, 2)
        assert c.colors.shape == (7, 4)

    def test_alpha_column_is_constant(self, rng):
        c = Chromosome.random(rng, 10, alpha=0.15)
        assert (c.colors[:, 3] == 0.15).all()

    def test_random_genes_in_unit_range(self, rng):
        assert_in_unit_range(Chromosome.random(rng, 50))

    def test_invalid_triangle_count(self):
        with pytest.raises(ValueError):
            Chromosome(0)

    def test_invalid_alpha(self):
        with pytest.raises(ValueError):
            Chromosome(3, alpha=1.5)


class TestFitnessCache:
    def test_new_chromosome_is_stale(self, rng):
        c = Chromosome.random(rng, 3)
        assert not c.is_evaluated
        with pytest.raises(StaleFitnessError):
            _ = c.fitness

    def test_evaluate_caches_score(self, rng, render_target):
        target = np.zeros((4, 4, 3), dtype=np.uint8)
        c = Chromosome.random(rng, 3)
        score = c.evaluate(target, render_target)
        assert c.is_evaluated
        assert c.fitness == score
        assert score == squared_difference(c.render(render_target), target)

    def test_evaluate_is_deterministic(self, rng, small_target):
        render_target = RenderTarget(6, 6)
        c = Chromosome.random(rng, 12)
        assert c.evaluate(small_target, render_target) == c.evaluate(small_target, render_target)

    def test_black_triangles_on_black_target(self, render_target):
        c = Chromosome(2, alpha=0.5)
        c.points[...] = [[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]]
        assert c.evaluate(np.zeros((4, 4, 3), dtype=np.uint8), render_target) == 0

    @pytest.mark.parametrize("mutation", ["change", "disturb", "randomize"])
    def test_mutation_marks_fitness_stale(self, rng, render_target, mutation):
        c = Chromosome.random(rng, 3)
        c.evaluate(np.zeros((4, 4, 3), dtype=np.uint8), render_target)
        if mutation == "change":
            c.mutate_change(rng)
        elif mutation == "disturb":
            c.mutate_disturb(50.0, rng)
        else:
            c.randomize(rng)
        with pytest.raises(StaleFitnessError):
            _ = c.fitness

    def test_copy_is_independent(self, rng, render_target):
        c = Chromosome.random(rng, 4)
        c.evaluate(np.zeros((4, 4, 3), dtype=np.uint8), render_target)
        clone = c.copy()
        assert clone.fitness == c.fitness
        clone.mutate_change(rng)
        assert c.is_evaluated
        assert not np.array_equal(clone.points, c.points) or not np.array_equal(clone.colors, c.colors)


class TestMutateChange:
    def test_keeps_genes_in_range_and_alpha(self, rng):
        c = Chromosome.random(rng, 100, alpha=0.15)
        for _ in range(20):
            c.mutate_change(rng)
        assert_in_unit_range(c)
        assert (c.colors[:, 3] == 0.15).all()

    def test_replaces_about_half_of_the_coordinates(self, rng):
        c = Chromosome.random(rng, 200)
        before = c.points.copy()
        c.mutate_change(rng)
        changed = np.mean(before != c.points)
        assert 0.4 < changed < 0.6

    def test_colour_channels_change_together(self, rng):
        c = Chromosome.random(rng, 200)
        before = c.colors.copy()
        c.mutate_change(rng)
        changed = before[:, :3] != c.colors[:, :3]
        # A triangle's colour is either fully replaced or untouched.
        assert (changed.all(axis=1) | ~changed.any(axis=1)).all()
        assert 0.35 < changed.all(axis=1).mean() < 0.65


class TestMutateDisturb:
    def test_keeps_genes_in_range_and_alpha(self, rng):
        c = Chromosome.random(rng, 100, alpha=0.15)
        for magnitude in (500.0, -3.0, 1.0, 0.5, -250.0):
            c.mutate_disturb(magnitude, rng)
        assert_in_unit_range(c)
        assert (c.colors[:, 3] == 0.15).all()

    def test_large_magnitude_makes_small_moves(self, rng):
        c = Chromosome.random(rng, 100)
        before = c.points.copy()
        c.mutate_disturb(500.0, rng)
        moved = before != c.points
        # Only resampled coordinates can move further than 1/500.
        small = np.abs(c.points - before) <= 1.0 / 500.0
        assert moved.any()
        assert small.mean() > 0.95

    def test_out_of_range_values_are_resampled_not_clamped(self, rng):
        c = Chromosome.random(rng, 300)
        before_points = c.points.copy()
        before_colors = c.colors.copy()
        # Offsets of up to 1e6 push every moved value far outside [0, 1].
        c.mutate_disturb(1e-6, rng)
        assert_in_unit_range(c)
        moved_points = before_points != c.points
        moved_colors = before_colors[:, :3] != c.colors[:, :3]
        assert moved_points.any() and moved_colors.any()
        assert not np.isin(c.points[moved_points], (0.0, 1.0)).any()
        assert not np.isin(c.colors[:, :3][moved_colors], (0.0, 1.0)).any()

    def test_vertex_moves_follow_per_vertex_probability(self, rng):
        c = Chromosome.random(rng, 400)
        before = c.points.copy()
        c.mutate_disturb(1000.0, rng)
        moved_vertices = (before != c.points).any(axis=2)
        assert 0.18 < moved_vertices.mean() < 0.32

    def test_zero_magnitude_rejected(self, rng):
        with pytest.raises(ValueError):
            Chromosome.random(rng, 3).mutate_disturb(0.0, rng)
