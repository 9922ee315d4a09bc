"""Coarse RGB quantization of sampled pixels."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from .sampler import Pixel

BinKey = Tuple[int, int, int]

DEFAULT_BUCKET_SIZE = 15


@dataclass
class ColorBin:
    """Running aggregate of the pixels that fell into one quantization bucket."""

    key: BinKey
    count: int = 0
    avg_r: float = 0.0
    avg_g: float = 0.0
    avg_b: float = 0.0
    members: List[Pixel] = field(default_factory=list)

    @property
    def average(self) -> Tuple[float, float, float]:
        return (self.avg_r, self.avg_g, self.avg_b)

    def add(self, pixel: Pixel, biased: bool = False) -> None:
        """Fold a pixel into the running average.

        Args:
            pixel: Pixel to add
            biased: Use the ``avg = (avg + new) / 2`` update instead of a true mean
        """
        self.members.append(pixel)
        self.count += 1

        if self.count == 1:
            self.avg_r, self.avg_g, self.avg_b = float(pixel.r), float(pixel.g), float(pixel.b)
        elif biased:
            self.avg_r = (self.avg_r + pixel.r) / 2
            self.avg_g = (self.avg_g + pixel.g) / 2
            self.avg_b = (self.avg_b + pixel.b) / 2
        else:
            self.avg_r += (pixel.r - self.avg_r) / self.count
            self.avg_g += (pixel.g - self.avg_g) / self.count
            self.avg_b += (pixel.b - self.avg_b) / self.count


class ColorQuantizer:
    """Bucket pixels into coarse RGB bins to collapse near-duplicate colors."""

    def __init__(self, bucket_size: int = DEFAULT_BUCKET_SIZE, biased_average: bool = False):
        if bucket_size < 1:
            raise ValueError(f"bucket_size must be at least 1, got {bucket_size}")
        self.bucket_size = bucket_size
        self.biased_average = biased_average

    def key_for(self, r: int, g: int, b: int) -> BinKey:
        size = self.bucket_size
        return (r // size * size, g // size * size, b // size * size)

    def quantize(self, pixels: Iterable[Pixel]) -> Dict[BinKey, ColorBin]:
        """Group pixels by quantization key.

        Returns:
            Bins keyed by quantization key, in order of first appearance
        """
        bins: Dict[BinKey, ColorBin] = {}
        for pixel in pixels:
            key = self.key_for(pixel.r, pixel.g, pixel.b)
            color_bin = bins.get(key)
            if color_bin is None:
                color_bin = bins[key] = ColorBin(key=key)
            color_bin.add(pixel, biased=self.biased_average)
        return bins
