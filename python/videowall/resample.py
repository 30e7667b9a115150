"""
Resize sketch frames to the fixed stream resolution.

Two policies:
    CROP     take a rectangle of the stream size from the center of the frame
    STRETCH  scale the whole frame onto the stream size, ignoring aspect ratio

Stretching uses nearest-neighbour sampling so the same frame always
produces the same packet.
"""

from enum import IntEnum

import numpy as np
from PIL import Image

from .raster import Raster


class ScaleMode(IntEnum):
    """How frames that are not at the stream resolution get resized."""

    CROP = 1
    STRETCH = 2


def crop_origin(source_width: int, source_height: int,
                target_width: int, target_height: int):
    """Top-left corner of the centered crop; negative when the source is smaller."""
    return (source_width // 2 - target_width // 2,
            source_height // 2 - target_height // 2)


def _crop(source: Raster, target_width: int, target_height: int) -> Raster:
    x0, y0 = crop_origin(source.width, source.height, target_width, target_height)
    out = np.zeros((target_height, target_width, source.channels), dtype=np.uint8)

    # Overlap of the crop window with the source; the rest stays black
    sx0, sy0 = max(x0, 0), max(y0, 0)
    sx1 = min(x0 + target_width, source.width)
    sy1 = min(y0 + target_height, source.height)
    if sx1 > sx0 and sy1 > sy0:
        out[sy0 - y0:sy1 - y0, sx0 - x0:sx1 - x0] = source.pixels[sy0:sy1, sx0:sx1]
    return Raster(out)


def _stretch(source: Raster, target_width: int, target_height: int) -> Raster:
    img = source.to_image().resize((target_width, target_height),
                                   Image.Resampling.NEAREST)
    return Raster(np.array(img, dtype=np.uint8))


def resample(source: Raster, target_width: int, target_height: int,
             mode: ScaleMode) -> Raster:
    """
    Resize a raster to exactly target_width x target_height.

    Args:
        source: Frame to resize, left untouched
        target_width: Output width in pixels
        target_height: Output height in pixels
        mode: ScaleMode.CROP or ScaleMode.STRETCH

    Returns:
        New raster with the source's channel count. A frame that already
        has the target size comes back as a plain copy.

    Cropping a frame smaller than the target keeps the centered origin;
    pixels outside the source are black (and transparent for RGBA).
    """
    if target_width <= 0 or target_height <= 0:
        raise ValueError(f"invalid target size {target_width}x{target_height}")

    if source.width == target_width and source.height == target_height:
        return source.copy()

    if mode == ScaleMode.CROP:
        return _crop(source, target_width, target_height)
    if mode == ScaleMode.STRETCH:
        return _stretch(source, target_width, target_height)
    raise ValueError(f"Unrecognized scale mode: {mode!r}")
