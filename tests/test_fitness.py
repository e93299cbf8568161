"""Tests for art_components.fitness — squared pixel difference."""

import numpy as np
import pytest

from art_components.fitness import squared_difference


class TestSquaredDifference:
    def test_identical_buffers_score_zero(self, small_target):
        assert squared_difference(small_target, small_target.copy()) == 0

    def test_black_against_white(self):
        black = np.zeros((4, 4, 3), dtype=np.uint8)
        white = np.full((4, 4, 3), 255, dtype=np.uint8)
        assert squared_difference(black, white) == 4 * 4 * 3 * 255 ** 2

    def test_symmetry(self, small_target):
        other = small_target[::-1].copy()
        assert squared_difference(small_target, other) == squared_difference(other, small_target)

    def test_no_uint8_wraparound(self):
        """(0 - 200) must be -200, not 56."""
        a = np.zeros((1, 1, 3), dtype=np.uint8)
        b = np.full((1, 1, 3), 200, dtype=np.uint8)
        assert squared_difference(a, b) == 3 * 200 ** 2

    def test_exceeds_32_bit_range(self):
        black = np.zeros((1000, 1000, 3), dtype=np.uint8)
        white = np.full((1000, 1000, 3), 255, dtype=np.uint8)
        score = squared_difference(black, white)
        assert score == 1000 * 1000 * 3 * 255 ** 2
        assert score > 2 ** 32

    def test_returns_python_int(self, small_target):
        assert type(squared_difference(small_target, small_target)) is int

    def test_single_channel_difference(self):
        a = np.zeros((2, 2, 3), dtype=np.uint8)
        b = a.copy()
        b[1, 0, 2] = 10
        assert squared_difference(a, b) == 100

    def test_shape_mismatch(self):
        with pytest.raises(ValueError):
            squared_difference(np.zeros((4, 4, 3), np.uint8), np.zeros((4, 5, 3), np.uint8))
