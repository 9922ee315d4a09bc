"""Tests for the wall score heuristic."""

import numpy as np
import pytest

from wallhue.core.sampler import Pixel
from wallhue.core.wall_score import WallScoreEstimator, position_wall_score, wall_score


def _block(x_range, y_range, color):
    return [Pixel(x, y, *color) for x in x_range for y in y_range]


class TestWallScore:
    """Position, uniformity and brightness terms."""

    def setup_method(self):
        self.estimator = WallScoreEstimator()

    def test_empty_set_scores_zero(self):
        assert self.estimator.score([], 100, 100) == 0.0

    def test_uniform_upper_corner_is_wall(self):
        pixels = _block(range(10), range(10), (120, 120, 120))
        # 0.4 upper + 0.3 sides + 0.3 uniformity + 0.1 brightness, clamped
        assert self.estimator.score(pixels, 100, 100) == pytest.approx(1.0)

    def test_bright_floor_region_scores_low(self):
        pixels = _block(range(40, 60), range(80, 100), (255, 255, 255))
        # -0.2 floor + 0.3 uniformity, no brightness bonus
        assert self.estimator.score(pixels, 100, 100) == pytest.approx(0.1)

    def test_varied_colors_lower_uniformity(self):
        uniform = _block(range(40, 60), range(40, 50), (90, 90, 90))
        varied = [
            Pixel(p.x, p.y, (p.x * 37) % 256, (p.y * 91) % 256, (p.x * p.y) % 256)
            for p in uniform
        ]

        assert self.estimator.score(varied, 100, 100) < self.estimator.score(
            uniform, 100, 100
        )

    def test_score_never_negative(self):
        pixels = _block(range(40, 60), range(80, 100), (0, 0, 0))
        pixels += [Pixel(50, 90, 255, 255, 255)] * 400
        assert self.estimator.score(pixels, 100, 100) >= 0.0

    def test_random_sets_stay_in_range(self):
        rng = np.random.default_rng(11)
        for _ in range(25):
            count = int(rng.integers(1, 60))
            xs = rng.integers(0, 64, count)
            ys = rng.integers(0, 48, count)
            colors = rng.integers(0, 256, (count, 3))
            pixels = [
                Pixel(int(x), int(y), *(int(c) for c in color))
                for x, y, color in zip(xs, ys, colors)
            ]

            score = self.estimator.score(pixels, 64, 48)
            assert 0.0 <= score <= 1.0

    def test_score_is_reproducible(self):
        rng = np.random.default_rng(5)
        pixels = [
            Pixel(int(x), int(y), int(r), int(g), int(b))
            for x, y, r, g, b in rng.integers(0, 50, (40, 5))
        ]

        assert wall_score(pixels, 50, 50) == wall_score(list(pixels), 50, 50)


class TestPositionWallScore:
    """Per-pixel position-only score used for masks."""

    def test_upper_side_corner(self):
        assert position_wall_score(5, 5, 100, 100) == pytest.approx(0.7)

    def test_upper_center(self):
        assert position_wall_score(50, 10, 100, 100) == pytest.approx(0.4)

    def test_floor_center(self):
        assert position_wall_score(50, 90, 100, 100) == pytest.approx(-0.2)

    def test_array_input(self):
        xs = np.arange(100)[None, :]
        ys = np.arange(100)[:, None]
        scores = position_wall_score(xs, ys, 100, 100)

        assert scores.shape == (100, 100)
        assert scores.max() == pytest.approx(0.7)
        assert scores.min() == pytest.approx(-0.2)
