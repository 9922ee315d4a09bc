"""wallhue: wall color analysis and recoloring for room photographs."""

__version__ = "0.1.0"
__author__ = "Wallhue Team"

from .core.analyzer import ColorAnalyzer
from .core.clustering import ColorCluster, ColorVariation
from .errors import (
    BufferSizeMismatch,
    EmptyClusterSet,
    InpaintingError,
    InvalidHexColor,
    WallhueError,
)
from .image.mask import MaskGenerator
from .image.replacement import ColorReplacementEngine, ReplacementRequest
from .providers.inpainting import WallRecolorer

__all__ = [
    "ColorAnalyzer",
    "ColorCluster",
    "ColorVariation",
    "ColorReplacementEngine",
    "ReplacementRequest",
    "MaskGenerator",
    "WallRecolorer",
    "WallhueError",
    "BufferSizeMismatch",
    "InvalidHexColor",
    "EmptyClusterSet",
    "InpaintingError",
]
