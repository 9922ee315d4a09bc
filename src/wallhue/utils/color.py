"""Color conversion and distance utilities for wallhue."""

import re
from typing import Tuple

import numpy as np

from ..errors import InvalidHexColor

_HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color string to RGB tuple.

    Accepts ``#RRGGBB`` or ``RRGGBB`` in either case.

    Raises:
        InvalidHexColor: If the value is not a 6-digit hex color
    """
    if not isinstance(hex_color, str):
        raise InvalidHexColor(hex_color)

    match = _HEX_PATTERN.match(hex_color.strip())
    if match is None:
        raise InvalidHexColor(hex_color)

    return tuple(int(part, 16) for part in match.groups())


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Convert RGB components to an uppercase ``#RRGGBB`` string."""
    r, g, b = (int(max(0, min(255, round(c)))) for c in (r, g, b))
    return f"#{r:02X}{g:02X}{b:02X}"


def is_valid_hex(hex_color) -> bool:
    """Check whether a value parses as a hex color."""
    try:
        hex_to_rgb(hex_color)
    except InvalidHexColor:
        return False
    return True


def brightness(rgb) -> float:
    """Approximate brightness as the mean of the R, G and B channels."""
    r, g, b = rgb
    return (r + g + b) / 3.0


def saturation(rgb) -> float:
    """Saturation as the spread between the largest and smallest channel."""
    return float(max(rgb) - min(rgb))


def rgb_to_hue(rgb) -> float:
    """Hue in degrees [0, 360) from the standard RGB to HSV formula.

    Achromatic colors have hue 0.
    """
    r, g, b = (float(c) for c in rgb)
    max_c = max(r, g, b)
    min_c = min(r, g, b)
    delta = max_c - min_c

    if delta == 0:
        return 0.0
    if max_c == r:
        hue = 60.0 * (((g - b) / delta) % 6)
    elif max_c == g:
        hue = 60.0 * ((b - r) / delta + 2)
    else:
        hue = 60.0 * ((r - g) / delta + 4)
    return hue % 360.0


def hue_distance(h1: float, h2: float) -> float:
    """Circular distance between two hues in degrees."""
    diff = abs(h1 - h2) % 360.0
    return min(diff, 360.0 - diff)


def euclidean_distance(c1, c2) -> float:
    """Euclidean distance between two RGB colors."""
    return float(
        np.sqrt(
            (float(c1[0]) - c2[0]) ** 2
            + (float(c1[1]) - c2[1]) ** 2
            + (float(c1[2]) - c2[2]) ** 2
        )
    )


def brightness_distance(c1, c2) -> float:
    """Absolute difference of the two colors' brightness."""
    return abs(brightness(c1) - brightness(c2))


def saturation_distance(c1, c2) -> float:
    """Absolute difference of the two colors' saturation."""
    return abs(saturation(c1) - saturation(c2))


def color_hue_distance(c1, c2) -> float:
    """Circular hue distance between two RGB colors."""
    return hue_distance(rgb_to_hue(c1), rgb_to_hue(c2))


# Array variants. ``pixels`` is a float array with a trailing axis of 3.


def brightness_array(pixels: np.ndarray) -> np.ndarray:
    """Per-pixel brightness for an (..., 3) array."""
    return pixels.sum(axis=-1) / 3.0


def hue_array(pixels: np.ndarray) -> np.ndarray:
    """Per-pixel hue in degrees for an (..., 3) array.

    Follows the branch order of :func:`rgb_to_hue` so both agree exactly.
    """
    r = pixels[..., 0]
    g = pixels[..., 1]
    b = pixels[..., 2]
    max_c = pixels.max(axis=-1)
    min_c = pixels.min(axis=-1)
    delta = max_c - min_c
    safe_delta = np.where(delta == 0, 1.0, delta)

    hue_r = 60.0 * (((g - b) / safe_delta) % 6)
    hue_g = 60.0 * ((b - r) / safe_delta + 2)
    hue_b = 60.0 * ((r - g) / safe_delta + 4)

    hue = np.select(
        [delta == 0, max_c == r, max_c == g],
        [0.0, hue_r, hue_g],
        default=hue_b,
    )
    return hue % 360.0


def hue_distance_array(hues: np.ndarray, hue: float) -> np.ndarray:
    """Circular distance of every hue in ``hues`` from ``hue``."""
    diff = np.abs(hues - hue) % 360.0
    return np.minimum(diff, 360.0 - diff)


def euclidean_distance_array(pixels: np.ndarray, color) -> np.ndarray:
    """Euclidean distance of every pixel from a single RGB color."""
    diff = pixels - np.asarray(color, dtype=np.float64)
    return np.sqrt(np.sum(diff**2, axis=-1))
