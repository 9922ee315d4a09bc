"""Per-pixel recoloring, masking and image file handling."""

from .io import load_image, save_image, save_mask
from .mask import MaskGenerator
from .replacement import (
    ColorReplacementEngine,
    ReplacementRequest,
    ReplacementResult,
    replace_color,
)

__all__ = [
    "ColorReplacementEngine",
    "ReplacementRequest",
    "ReplacementResult",
    "replace_color",
    "MaskGenerator",
    "load_image",
    "save_image",
    "save_mask",
]
