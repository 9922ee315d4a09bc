#!/usr/bin/env python3
"""Basic usage example for wallhue."""

import sys
from pathlib import Path

from wallhue import ColorAnalyzer, ColorReplacementEngine, ReplacementRequest
from wallhue.core.palettes import suggest_palettes
from wallhue.image.io import load_image, save_image
from wallhue.utils.logging import setup_logging


def recolor_first_wall(image_path: Path, new_hex: str, output_path: Path) -> None:
    """Analyze a room photo and repaint its most likely wall color."""
    image = load_image(image_path)
    clusters = ColorAnalyzer().analyze(image)

    print(f"Found {len(clusters)} colors in {image_path}:")
    for cluster in clusters:
        marker = "wall" if cluster.is_wall else "    "
        print(f"  {marker} {cluster.hex}  {cluster.percentage:5.1f}%  score {cluster.wall_score:.2f}")

    walls = [c for c in clusters if c.is_wall]
    if not walls:
        print("No wall color detected")
        return

    wall = walls[0]
    request = ReplacementRequest(
        target_hex=wall.hex, new_hex=new_hex, variations=wall.variations
    )
    result = ColorReplacementEngine(blend_mode="natural").replace(image, request)
    save_image(result.image, output_path)

    print(f"Repainted {wall.hex} -> {new_hex}: {result.pixels_changed} pixels")
    for palette in suggest_palettes(clusters):
        print(f"  {palette['harmony']}: {', '.join(palette['colors'])}")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: basic_usage.py ROOM_PHOTO [NEW_HEX] [OUTPUT]")
        sys.exit(1)

    setup_logging()
    recolor_first_wall(
        Path(sys.argv[1]),
        sys.argv[2] if len(sys.argv) > 2 else "#6B8E9E",
        Path(sys.argv[3]) if len(sys.argv) > 3 else Path("recolored.png"),
    )
