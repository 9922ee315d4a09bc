"""Interface to the external generative inpainting service."""

from dataclasses import dataclass
from typing import Optional, Protocol

import numpy as np

from ..core.sampler import PixelBuffer, to_pixel_array
from ..errors import InpaintingError
from ..image.mask import MaskGenerator
from ..image.replacement import ColorReplacementEngine, ReplacementRequest
from ..utils.color import hex_to_rgb, rgb_to_hex
from ..utils.logging import get_logger

logger = get_logger(__name__)


class InpaintingProvider(Protocol):
    """Anything that can repaint the masked part of an image."""

    def inpaint(self, image: np.ndarray, mask: np.ndarray, instruction: str) -> np.ndarray:
        """Return the repainted image; raise :class:`InpaintingError` on failure."""
        ...


class PassthroughInpaintingProvider:
    """Provider that returns the source image unchanged."""

    def inpaint(self, image: np.ndarray, mask: np.ndarray, instruction: str) -> np.ndarray:
        return np.array(image, copy=True)


def build_instruction(target_hex: str, new_hex: str) -> str:
    """Short natural-language repaint instruction for the inpainting service."""
    target = rgb_to_hex(*hex_to_rgb(target_hex))
    new = rgb_to_hex(*hex_to_rgb(new_hex))
    return (
        f"Repaint the masked wall areas colored {target} with the color {new}. "
        "Keep the lighting, shadows and textures, preserve the shape of every "
        "object, and blend the edges smoothly."
    )


@dataclass
class RecolorOutcome:
    """Image produced by :class:`WallRecolorer` and the path that made it."""

    image: np.ndarray
    method: str
    pixels_changed: Optional[int] = None


class WallRecolorer:
    """Recolor a wall through the inpainting service or the local engine.

    With a provider, the image, a wall mask and an instruction are handed to
    it; the returned image is used as is. If the provider raises
    :class:`InpaintingError` or returns an image of the wrong shape, the
    local :class:`ColorReplacementEngine` output is used instead.
    """

    def __init__(
        self,
        engine: Optional[ColorReplacementEngine] = None,
        mask_generator: Optional[MaskGenerator] = None,
        provider: Optional[InpaintingProvider] = None,
    ):
        self.engine = engine or ColorReplacementEngine()
        self.mask_generator = mask_generator or MaskGenerator()
        self.provider = provider

    def recolor(
        self,
        image: PixelBuffer,
        request: ReplacementRequest,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> RecolorOutcome:
        """Recolor ``image`` according to ``request``.

        Raises:
            InvalidHexColor: If either color does not parse
            BufferSizeMismatch: If the buffer disagrees with the dimensions
        """
        hex_to_rgb(request.target_hex)
        hex_to_rgb(request.new_hex)
        pixels = to_pixel_array(image, width, height)

        if self.provider is not None:
            mask = self.mask_generator.generate_mask(
                pixels, request.target_hex, request.tolerance
            )
            instruction = build_instruction(request.target_hex, request.new_hex)
            try:
                repainted = np.asarray(self.provider.inpaint(pixels, mask, instruction))
            except InpaintingError as e:
                logger.warning(f"Inpainting failed, using local replacement: {e}")
            else:
                if repainted.shape == pixels.shape:
                    return RecolorOutcome(
                        image=repainted.astype(np.uint8, copy=False), method="inpainting"
                    )
                logger.warning(
                    f"Inpainting returned shape {repainted.shape}, expected "
                    f"{pixels.shape}; using local replacement"
                )

        result = self.engine.replace(pixels, request)
        return RecolorOutcome(
            image=result.image, method="local", pixels_changed=result.pixels_changed
        )
