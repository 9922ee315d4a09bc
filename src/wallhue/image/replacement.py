"""Luminance-preserving wall color replacement."""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..core.clustering import ColorVariation
from ..core.sampler import PixelBuffer, to_pixel_array
from ..utils.color import (
    brightness,
    brightness_array,
    euclidean_distance_array,
    hex_to_rgb,
    hue_array,
    hue_distance_array,
    rgb_to_hue,
)
from ..utils.logging import PerformanceLogger, get_logger
from .chunks import process_in_row_chunks

logger = get_logger(__name__)

DEFAULT_TOLERANCE = 80
DEFAULT_VARIATION_WALL_THRESHOLD = 0.5

# Exponents applied to the blend factor.
BLEND_MODES = {
    "linear": 1.0,
    "natural": 0.7,
    "smooth": 0.5,
}

_EPS = 1e-6


@dataclass
class ReplacementRequest:
    """What to recolor and how.

    Attributes:
        target_hex: Color to replace, ``#RRGGBB``
        new_hex: Replacement color, ``#RRGGBB``
        tolerance: Maximum distance for a pixel to count as a match
        variations: Optional shades of the target color from clustering
    """

    target_hex: str
    new_hex: str
    tolerance: float = DEFAULT_TOLERANCE
    variations: Optional[List[ColorVariation]] = None


@dataclass
class ReplacementResult:
    """Output of a replacement pass."""

    image: np.ndarray
    pixels_changed: int

    @property
    def total_pixels(self) -> int:
        return self.image.shape[0] * self.image.shape[1]

    @property
    def changed_fraction(self) -> float:
        total = self.total_pixels
        return self.pixels_changed / total if total else 0.0

    def to_bytes(self) -> bytes:
        return self.image.tobytes()


class ColorReplacementEngine:
    """Recolor every pixel that matches a target color or its wall variations.

    A pixel matches a candidate color when any of these hold, with ``t`` the
    tolerance:

    * RGB distance < t
    * RGB distance < 1.5t and brightness distance < 0.5t
    * RGB distance < 1.2t and hue distance < 0.3t

    Each satisfied rule contributes ``1 - distance / limit`` for its deciding
    metric (RGB distance, brightness or hue); the blend factor is the largest
    contribution over rules and candidates. The new color is rescaled to the
    original pixel's brightness before blending, which keeps shadows and
    highlights in place.
    """

    def __init__(
        self,
        variation_wall_threshold: float = DEFAULT_VARIATION_WALL_THRESHOLD,
        blend_mode: str = "linear",
        workers: int = 1,
    ):
        if blend_mode not in BLEND_MODES:
            raise ValueError(
                f"Unknown blend mode: {blend_mode}. Available: {list(BLEND_MODES)}"
            )
        self.variation_wall_threshold = variation_wall_threshold
        self.blend_mode = blend_mode
        self.workers = workers
        self.perf = PerformanceLogger()

    def candidate_colors(
        self, request: ReplacementRequest, target: Tuple[int, int, int]
    ) -> List[Tuple[int, int, int]]:
        """Colors to match against for a request.

        With variations only those scoring at least the wall threshold are
        used, so a request whose variations are all non-wall recolors nothing.
        """
        if request.variations:
            return [
                tuple(v.rgb)
                for v in request.variations
                if v.wall_score >= self.variation_wall_threshold
            ]
        return [target]

    def replace(
        self,
        image: PixelBuffer,
        request: ReplacementRequest,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> ReplacementResult:
        """Replace the target color in an image.

        Args:
            image: (H, W, 3) array or flat RGB buffer; never modified
            request: Colors, tolerance and optional variations
            width: Image width for flat buffers
            height: Image height for flat buffers

        Returns:
            A new image of the same shape plus the number of matched pixels

        Raises:
            InvalidHexColor: If either color does not parse
            BufferSizeMismatch: If the buffer disagrees with the dimensions
            ValueError: If the tolerance is negative
        """
        target = hex_to_rgb(request.target_hex)
        new_color = hex_to_rgb(request.new_hex)
        if request.tolerance < 0:
            raise ValueError(f"tolerance must not be negative, got {request.tolerance}")

        pixels = to_pixel_array(image, width, height)
        if request.tolerance == 0:
            return ReplacementResult(image=pixels.copy(), pixels_changed=0)
        candidates = self.candidate_colors(request, target)
        tolerance = float(request.tolerance)

        self.perf.start_timer("replacement")

        def run(start: int, end: int):
            return self._process_rows(pixels[start:end], candidates, new_color, tolerance)

        chunks = process_in_row_chunks(run, pixels.shape[0], self.workers)
        self.perf.end_timer("replacement")

        if chunks:
            output = np.concatenate([rows for rows, _ in chunks], axis=0)
        else:
            output = pixels.copy()
        pixels_changed = int(sum(changed for _, changed in chunks))

        result = ReplacementResult(image=output, pixels_changed=pixels_changed)
        logger.debug(
            f"Replaced {request.target_hex} with {request.new_hex}: "
            f"{pixels_changed} pixels ({result.changed_fraction * 100:.2f}%)"
        )
        return result

    def match_factors(
        self,
        pixels: np.ndarray,
        candidates: Sequence[Tuple[int, int, int]],
        tolerance: float,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Per-pixel match flags and blend factors.

        Args:
            pixels: Float array of shape (..., 3)
            candidates: Colors to match against
            tolerance: Match tolerance

        Returns:
            Tuple of (matched, factor) arrays of shape ``pixels.shape[:-1]``
        """
        shape = pixels.shape[:-1]
        matched = np.zeros(shape, dtype=bool)
        factor = np.zeros(shape, dtype=np.float64)
        if not candidates:
            return matched, factor

        pixel_brightness = brightness_array(pixels)
        pixel_hue = hue_array(pixels)

        for color in candidates:
            euclid = euclidean_distance_array(pixels, color)
            bright = np.abs(pixel_brightness - brightness(color))
            hue = hue_distance_array(pixel_hue, rgb_to_hue(color))

            by_distance = euclid < tolerance
            by_brightness = (euclid < 1.5 * tolerance) & (bright < 0.5 * tolerance)
            by_hue = (euclid < 1.2 * tolerance) & (hue < 0.3 * tolerance)

            candidate_factor = np.maximum.reduce(
                [
                    np.where(by_distance, 1 - euclid / tolerance, 0.0),
                    np.where(by_brightness, 1 - bright / (0.5 * tolerance), 0.0),
                    np.where(by_hue, 1 - hue / (0.3 * tolerance), 0.0),
                ]
            )

            matched |= by_distance | by_brightness | by_hue
            factor = np.maximum(factor, candidate_factor)

        return matched, np.clip(factor, 0.0, 1.0)

    def _process_rows(
        self,
        rows: np.ndarray,
        candidates: Sequence[Tuple[int, int, int]],
        new_color: Tuple[int, int, int],
        tolerance: float,
    ) -> Tuple[np.ndarray, int]:
        source = rows.astype(np.float64)
        matched, factor = self.match_factors(source, candidates, tolerance)

        exponent = BLEND_MODES[self.blend_mode]
        if exponent != 1.0:
            factor = factor**exponent

        new_arr = np.asarray(new_color, dtype=np.float64)
        ratio = brightness_array(source) / max(brightness(new_color), _EPS)
        adjusted = np.clip(new_arr * ratio[..., None], 0.0, 255.0)

        blended = source + (adjusted - source) * factor[..., None]
        blended = np.clip(np.round(blended), 0, 255)

        output = np.where(matched[..., None], blended, source).astype(np.uint8)
        return output, int(matched.sum())


def replace_color(
    image: PixelBuffer,
    request: ReplacementRequest,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> ReplacementResult:
    """Module-level shortcut using a default :class:`ColorReplacementEngine`."""
    return ColorReplacementEngine().replace(image, request, width, height)
