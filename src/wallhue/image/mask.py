"""Binary wall masks for the external inpainting service."""

from typing import Optional, Sequence, Union

import numpy as np

from ..core.sampler import PixelBuffer, to_pixel_array
from ..core.wall_score import position_wall_score
from ..utils.color import euclidean_distance_array, hex_to_rgb
from ..utils.logging import get_logger
from .chunks import process_in_row_chunks

logger = get_logger(__name__)

DEFAULT_MASK_WALL_THRESHOLD = 0.6


class MaskGenerator:
    """Mark pixels that match a color and sit where walls usually are."""

    def __init__(
        self,
        wall_threshold: float = DEFAULT_MASK_WALL_THRESHOLD,
        workers: int = 1,
    ):
        self.wall_threshold = wall_threshold
        self.workers = workers

    def generate_mask(
        self,
        image: PixelBuffer,
        target_color: Union[str, Sequence[int]],
        tolerance: float = 80,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> np.ndarray:
        """Build a binary mask of wall pixels matching ``target_color``.

        A pixel is 255 when its RGB distance to the target is below
        ``tolerance`` and its position-only wall score exceeds the wall
        threshold; otherwise 0.

        Args:
            image: (H, W, 3) array or flat RGB buffer
            target_color: ``#RRGGBB`` string or RGB triple
            tolerance: Maximum RGB distance for a match
            width: Image width for flat buffers
            height: Image height for flat buffers

        Returns:
            uint8 array of shape (H, W, 3) holding only 0 and 255

        Raises:
            InvalidHexColor: If ``target_color`` is a malformed string
            BufferSizeMismatch: If the buffer disagrees with the dimensions
        """
        if isinstance(target_color, str):
            target = hex_to_rgb(target_color)
        else:
            target = tuple(int(c) for c in target_color)

        pixels = to_pixel_array(image, width, height)
        img_height, img_width = pixels.shape[:2]
        xs = np.arange(img_width)[None, :]

        def run(start: int, end: int) -> np.ndarray:
            ys = np.arange(start, end)[:, None]
            position = position_wall_score(xs, ys, img_width, img_height)
            distance = euclidean_distance_array(
                pixels[start:end].astype(np.float64), target
            )
            return (distance < tolerance) & (position > self.wall_threshold)

        parts = process_in_row_chunks(run, img_height, self.workers)
        if parts:
            selected = np.concatenate(parts, axis=0)
        else:
            selected = np.zeros((img_height, img_width), dtype=bool)

        mask = np.where(selected, 255, 0).astype(np.uint8)
        logger.debug(f"Mask marks {int(selected.sum())} of {selected.size} pixels")
        return np.repeat(mask[..., None], 3, axis=2)
