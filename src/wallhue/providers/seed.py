"""Interface to the external vision service that proposes dominant colors."""

import json
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Tuple

import numpy as np

from ..errors import InvalidHexColor
from ..utils.color import hex_to_rgb, rgb_to_hex
from ..utils.logging import get_logger

logger = get_logger(__name__)

_FENCE_START = re.compile(r"^```(?:json)?\s*")
_FENCE_END = re.compile(r"\s*```$")


@dataclass
class SeedColor:
    """A dominant color proposed by the vision collaborator."""

    hex: str
    rgb: Tuple[int, int, int]
    percentage: float = 0.0
    position: Optional[Tuple[float, float]] = None


class ColorSeedProvider(Protocol):
    """Anything that can propose dominant colors for an image."""

    def propose_colors(self, image: np.ndarray) -> List[Dict]:
        """Return raw ``{hex, rgb, percentage, position}`` entries."""
        ...


class NullSeedProvider:
    """Seed provider that never proposes anything."""

    def propose_colors(self, image: np.ndarray) -> List[Dict]:
        return []


class StaticSeedProvider:
    """Seed provider returning a fixed list of entries."""

    def __init__(self, entries: List[Dict]):
        self.entries = list(entries)

    def propose_colors(self, image: np.ndarray) -> List[Dict]:
        return [dict(entry) for entry in self.entries]


def parse_seed_entries(entries) -> List[SeedColor]:
    """Validate raw seed entries, dropping those without a usable hex color."""
    seeds = []
    for entry in entries or []:
        if not isinstance(entry, dict):
            continue
        try:
            rgb = hex_to_rgb(entry.get("hex"))
        except InvalidHexColor:
            logger.debug(f"Ignoring seed entry without valid hex: {entry!r}")
            continue

        try:
            percentage = float(entry.get("percentage", 0.0))
        except (TypeError, ValueError):
            percentage = 0.0

        position = entry.get("position")
        try:
            position = (float(position["x"]), float(position["y"]))
        except (KeyError, TypeError, ValueError):
            position = None

        seeds.append(
            SeedColor(hex=rgb_to_hex(*rgb), rgb=rgb, percentage=percentage, position=position)
        )
    return seeds


def parse_seed_response(text: str) -> List[Dict]:
    """Extract the JSON color array from a vision model's text reply.

    Markdown code fences and any prose around the outermost ``[...]`` are
    stripped. Replies that do not contain a JSON array yield an empty list.
    """
    if not text:
        return []

    content = _FENCE_END.sub("", _FENCE_START.sub("", text.strip()))

    first = content.find("[")
    last = content.rfind("]")
    if first == -1 or last < first:
        logger.warning("Vision reply contains no JSON array")
        return []

    try:
        colors = json.loads(content[first : last + 1])
    except json.JSONDecodeError as e:
        logger.warning(f"Could not parse vision reply: {e}")
        return []

    if not isinstance(colors, list):
        return []
    return colors
