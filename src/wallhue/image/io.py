"""Loading and saving images for the calling layer."""

from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
from PIL import Image

from ..utils.logging import get_logger

logger = get_logger(__name__)


def load_image(
    image_path: Union[str, Path],
    max_size: Optional[Tuple[int, int]] = (800, 600),
) -> np.ndarray:
    """Load an image file as an RGB array.

    Args:
        image_path: Path to image file
        max_size: Optional (width, height) box the image is shrunk to fit
            inside, keeping its aspect ratio; smaller images are left alone

    Returns:
        uint8 array of shape (H, W, 3)
    """
    with Image.open(image_path) as image:
        image = image.convert("RGB")

        if max_size is not None:
            image.thumbnail(max_size, Image.LANCZOS)

        logger.debug(f"Loaded {image_path} as {image.width}x{image.height}")
        return np.asarray(image, dtype=np.uint8).copy()


def save_image(
    pixels: np.ndarray,
    output_path: Union[str, Path],
    quality: int = 90,
) -> Path:
    """Write an (H, W, 3) array to disk; the format follows the extension."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    image = Image.fromarray(np.asarray(pixels, dtype=np.uint8))
    with open(output_path, "wb") as f:
        if output_path.suffix.lower() in (".jpg", ".jpeg"):
            image.save(f, format="JPEG", quality=quality)
        else:
            image.save(f, format=_format_for(output_path))

    return output_path


def save_mask(mask: np.ndarray, output_path: Union[str, Path]) -> Path:
    """Write a mask as a single-channel image (PNG unless told otherwise)."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    channel = np.asarray(mask, dtype=np.uint8)
    if channel.ndim == 3:
        channel = np.ascontiguousarray(channel[..., 0])

    with open(output_path, "wb") as f:
        Image.fromarray(channel).save(f, format=_format_for(output_path))

    return output_path


def _format_for(path: Path) -> str:
    extension = path.suffix.lower()
    return Image.registered_extensions().get(extension, "PNG")
