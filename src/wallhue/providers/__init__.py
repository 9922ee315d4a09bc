"""Interfaces to the external vision and inpainting services."""

from .seed import (
    ColorSeedProvider,
    NullSeedProvider,
    SeedColor,
    StaticSeedProvider,
    parse_seed_entries,
    parse_seed_response,
)
from .inpainting import (
    InpaintingProvider,
    PassthroughInpaintingProvider,
    RecolorOutcome,
    WallRecolorer,
    build_instruction,
)

__all__ = [
    "ColorSeedProvider",
    "NullSeedProvider",
    "StaticSeedProvider",
    "SeedColor",
    "parse_seed_entries",
    "parse_seed_response",
    "InpaintingProvider",
    "PassthroughInpaintingProvider",
    "RecolorOutcome",
    "WallRecolorer",
    "build_instruction",
]
