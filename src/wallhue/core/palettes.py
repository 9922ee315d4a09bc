"""Harmony palette suggestions around the detected colors."""

import colorsys
from typing import Dict, List, Sequence

from ..utils.color import rgb_to_hex
from .clustering import ColorCluster

HARMONY_OFFSETS = {
    "complementary": [0, 180],
    "triadic": [0, 120, 240],
    "analogous": [0, 30, -30],
}

HARMONY_NAMES = {
    "complementary": "Complementary palette",
    "triadic": "Triadic palette",
    "analogous": "Analogous palette",
}


def rotate_hue(rgb: Sequence[int], degrees: float) -> str:
    """Rotate a color's HSV hue and return it as hex."""
    r, g, b = (c / 255.0 for c in rgb)
    h, s, v = colorsys.rgb_to_hsv(r, g, b)
    h = (h + degrees / 360.0) % 1.0
    r, g, b = colorsys.hsv_to_rgb(h, s, v)
    return rgb_to_hex(r * 255, g * 255, b * 255)


def suggest_palettes(clusters: List[ColorCluster]) -> List[Dict]:
    """Build harmony palettes around the highest ranked cluster.

    Args:
        clusters: Ranked clusters, best first

    Returns:
        One entry per harmony with ``name``, ``harmony`` and ``colors`` (hex);
        empty when there are no clusters
    """
    if not clusters:
        return []

    base = clusters[0].rgb
    return [
        {
            "name": HARMONY_NAMES[harmony],
            "harmony": harmony,
            "colors": [rotate_hue(base, offset) for offset in offsets],
        }
        for harmony, offsets in HARMONY_OFFSETS.items()
    ]
