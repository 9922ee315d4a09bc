"""Heuristic estimate of how likely a set of pixels belongs to a wall."""

from typing import Sequence, Union

import numpy as np

from .sampler import Pixel

UPPER_BAND_WEIGHT = 0.4
SIDE_BAND_WEIGHT = 0.3
FLOOR_PENALTY_WEIGHT = 0.2
UNIFORMITY_WEIGHT = 0.3
BRIGHTNESS_BONUS = 0.1

# Mean distance from the group color at which uniformity drops to zero.
UNIFORMITY_SCALE = 100.0
# Groups at or above this mean brightness get no brightness bonus.
HIGHLIGHT_BRIGHTNESS = 200.0


def position_wall_score(
    x: Union[int, np.ndarray],
    y: Union[int, np.ndarray],
    width: int,
    height: int,
) -> Union[float, np.ndarray]:
    """Position-only wall score for individual pixels.

    Works on scalars or on broadcastable coordinate arrays. The score is the
    upper-band bonus plus the side-band bonus minus the floor penalty, so a
    single pixel ranges over [-0.2, 0.7].
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)

    upper = y < 0.3 * height
    sides = (x < 0.2 * width) | (x > 0.8 * width)
    floor = (x > 0.3 * width) & (x < 0.7 * width) & (y > 0.4 * height)

    score = (
        UPPER_BAND_WEIGHT * upper
        + SIDE_BAND_WEIGHT * sides
        - FLOOR_PENALTY_WEIGHT * floor
    )
    if score.ndim == 0:
        return float(score)
    return score


class WallScoreEstimator:
    """Scores a group of pixels for "wall-ness" in [0, 1].

    The score combines where the pixels sit in the frame (walls tend to fill
    the upper band and the sides, floors the lower center), how uniform their
    color is, and a small bonus for groups that are not blown-out highlights.
    """

    def score(self, pixels: Sequence[Pixel], width: int, height: int) -> float:
        """Compute the wall score of a pixel group.

        Args:
            pixels: Member pixels of the region
            width: Image width
            height: Image height

        Returns:
            Score in [0, 1]; 0.0 for an empty group
        """
        if len(pixels) == 0:
            return 0.0

        coords = np.array([(p.x, p.y) for p in pixels], dtype=np.float64)
        colors = np.array([(p.r, p.g, p.b) for p in pixels], dtype=np.float64)
        return self.score_arrays(coords[:, 0], coords[:, 1], colors, width, height)

    def score_arrays(
        self,
        xs: np.ndarray,
        ys: np.ndarray,
        colors: np.ndarray,
        width: int,
        height: int,
    ) -> float:
        """Array form of :meth:`score`."""
        if len(xs) == 0:
            return 0.0

        upper = np.mean(ys < 0.3 * height)
        sides = np.mean((xs < 0.2 * width) | (xs > 0.8 * width))
        floor = np.mean(
            (xs > 0.3 * width) & (xs < 0.7 * width) & (ys > 0.4 * height)
        )

        mean_color = colors.mean(axis=0)
        variance = np.mean(np.sqrt(np.sum((colors - mean_color) ** 2, axis=1)))
        uniformity = max(0.0, 1.0 - variance / UNIFORMITY_SCALE)

        mean_brightness = float(np.mean(colors.sum(axis=1) / 3.0))

        score = (
            UPPER_BAND_WEIGHT * upper
            + SIDE_BAND_WEIGHT * sides
            - FLOOR_PENALTY_WEIGHT * floor
            + UNIFORMITY_WEIGHT * uniformity
        )
        if mean_brightness < HIGHLIGHT_BRIGHTNESS:
            score += BRIGHTNESS_BONUS

        return float(min(1.0, max(0.0, score)))


def wall_score(pixels: Sequence[Pixel], width: int, height: int) -> float:
    """Module-level shortcut for :meth:`WallScoreEstimator.score`."""
    return WallScoreEstimator().score(pixels, width, height)
