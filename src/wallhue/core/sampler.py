"""Pixel buffer decoding and strided sampling."""

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union

import numpy as np

from ..errors import BufferSizeMismatch

PixelBuffer = Union[np.ndarray, bytes, bytearray, memoryview]


@dataclass(frozen=True)
class Pixel:
    """A single sampled pixel with its coordinates."""

    x: int
    y: int
    r: int
    g: int
    b: int

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)


def to_pixel_array(
    buffer: PixelBuffer,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> np.ndarray:
    """Interpret a raw RGB buffer as a (height, width, 3) uint8 array.

    Args:
        buffer: Either an (H, W, 3) array, or flat RGB data (bytes or 1-D array)
        width: Image width, required for flat data and checked otherwise
        height: Image height, required for flat data and checked otherwise

    Returns:
        A uint8 array of shape (height, width, 3). May share memory with
        ``buffer``; callers must not write to it.

    Raises:
        BufferSizeMismatch: If the buffer size disagrees with the dimensions
    """
    if isinstance(buffer, (bytes, bytearray, memoryview)):
        data = np.frombuffer(buffer, dtype=np.uint8)
    else:
        data = np.asarray(buffer)

    if data.ndim == 3:
        h, w, channels = data.shape
        if channels != 3:
            raise BufferSizeMismatch(data.size, w, h)
        if (width is not None and width != w) or (height is not None and height != h):
            raise BufferSizeMismatch(data.size, width or w, height or h)
        return data.astype(np.uint8, copy=False)

    if width is None or height is None:
        raise ValueError("width and height are required for flat pixel buffers")

    if width < 0 or height < 0 or data.size != width * height * 3:
        raise BufferSizeMismatch(data.size, width, height)

    return data.astype(np.uint8, copy=False).reshape(height, width, 3)


class PixelSampler:
    """Lazy, restartable strided sample over an RGB pixel buffer.

    Every ``stride``-th pixel in row-major order is yielded, starting with the
    first one. Iterating again starts over from the beginning.
    """

    def __init__(
        self,
        buffer: PixelBuffer,
        width: Optional[int] = None,
        height: Optional[int] = None,
        stride: int = 5,
    ):
        if stride < 1:
            raise ValueError(f"stride must be at least 1, got {stride}")

        self.pixels = to_pixel_array(buffer, width, height)
        self.height, self.width = self.pixels.shape[:2]
        self.stride = stride

    def __iter__(self) -> Iterator[Pixel]:
        flat = self.pixels.reshape(-1, 3)
        width = self.width
        for index in range(0, flat.shape[0], self.stride):
            r, g, b = flat[index]
            y, x = divmod(index, width)
            yield Pixel(x=x, y=y, r=int(r), g=int(g), b=int(b))

    def __len__(self) -> int:
        total = self.width * self.height
        return (total + self.stride - 1) // self.stride
