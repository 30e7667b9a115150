"""
Raster images for the video wall stream.

A raster is a (height, width, channels) uint8 array of interleaved RGB or
RGBA pixels. Sketches hand the library numpy arrays or Pillow images; both
are wrapped in a Raster before resampling.
"""

from typing import Sequence, Tuple

import numpy as np
from PIL import Image


class Raster:
    """Rectangular grid of 8-bit RGB(A) pixels."""

    def __init__(self, pixels: np.ndarray):
        """
        Wrap a pixel array.

        Args:
            pixels: uint8 array of shape (height, width, 3) or (height, width, 4)
        """
        pixels = np.asarray(pixels)
        if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
            raise ValueError(
                f"pixels must have shape (height, width, 3|4), got {pixels.shape}"
            )
        if pixels.dtype != np.uint8:
            raise ValueError(f"pixels must be uint8, got {pixels.dtype}")
        self._pixels = pixels

    @classmethod
    def blank(cls, width: int, height: int, channels: int = 3) -> "Raster":
        """Allocate a black raster (opaque when it has an alpha channel)."""
        if channels not in (3, 4):
            raise ValueError(f"channels must be 3 or 4, got {channels}")
        pixels = np.zeros((height, width, channels), dtype=np.uint8)
        if channels == 4:
            pixels[:, :, 3] = 255
        return cls(pixels)

    @classmethod
    def solid(cls, width: int, height: int, color: Sequence[int]) -> "Raster":
        """
        Allocate a raster filled with one color.

        Args:
            width: Width in pixels
            height: Height in pixels
            color: (r, g, b) or (r, g, b, a), each 0-255
        """
        if len(color) not in (3, 4):
            raise ValueError(f"color must be RGB or RGBA, got {tuple(color)}")
        pixels = np.empty((height, width, len(color)), dtype=np.uint8)
        pixels[:, :] = color
        return cls(pixels)

    @classmethod
    def from_bytes(cls, data: bytes, width: int, height: int,
                   channels: int = 3) -> "Raster":
        """Build a raster from interleaved pixel bytes, row-major."""
        expected = width * height * channels
        if len(data) != expected:
            raise ValueError(
                f"expected {expected} bytes for {width}x{height}x{channels}, "
                f"got {len(data)}"
            )
        pixels = np.frombuffer(data, dtype=np.uint8).reshape(height, width, channels)
        return cls(pixels.copy())

    @classmethod
    def from_image(cls, image: Image.Image) -> "Raster":
        """Build a raster from a Pillow image, converting to RGB or RGBA."""
        if image.mode not in ("RGB", "RGBA"):
            has_alpha = image.mode in ("LA", "PA") or "transparency" in image.info
            image = image.convert("RGBA" if has_alpha else "RGB")
        return cls(np.array(image, dtype=np.uint8))

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def channels(self) -> int:
        return self._pixels.shape[2]

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height), the same order Pillow uses."""
        return (self.width, self.height)

    @property
    def has_alpha(self) -> bool:
        return self.channels == 4

    def rgb(self) -> np.ndarray:
        """View of the R, G, B channels with alpha left out."""
        return self._pixels[:, :, :3]

    def copy(self) -> "Raster":
        return Raster(self._pixels.copy())

    def to_image(self) -> Image.Image:
        """Convert to a Pillow image (RGB or RGBA)."""
        return Image.fromarray(np.ascontiguousarray(self._pixels))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Raster):
            return NotImplemented
        return (self._pixels.shape == other._pixels.shape
                and bool(np.array_equal(self._pixels, other._pixels)))

    def __repr__(self) -> str:
        return f"Raster(width={self.width}, height={self.height}, channels={self.channels})"


def as_raster(image, copy: bool = False) -> Raster:
    """
    Coerce a sketch frame into a Raster.

    Args:
        image: Raster, numpy array of shape (h, w, 3|4) or PIL Image
        copy: Return a raster that does not share memory with ``image``

    Returns:
        Raster wrapping the image pixels
    """
    if isinstance(image, Raster):
        return image.copy() if copy else image
    if isinstance(image, np.ndarray):
        return Raster(image.copy() if copy else image)
    if isinstance(image, Image.Image):
        return Raster.from_image(image)
    raise TypeError("image must be Raster, PIL Image or numpy array")
