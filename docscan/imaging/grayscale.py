"""Luma and grayscale conversion."""

import numpy as np

from docscan.imaging.buffer import PixelBuffer, round_half_up

# ITU-R BT.601 weights
LUMA_R = 0.299
LUMA_G = 0.587
LUMA_B = 0.114


def luma(data: np.ndarray) -> np.ndarray:
    """Compute the rounded luma of every pixel in an ``(..., 4)`` RGBA array.

    This is the single brightness formula used across the package: grayscale,
    adaptive thresholding and mean brightness all go through it.

    Args:
        data: RGBA pixel array (any leading shape)

    Returns:
        ``int64`` array of luma values in [0, 255] with the leading shape of ``data``
    """
    channels = data.astype(np.float64)
    weighted = (
        LUMA_R * channels[..., 0] + LUMA_G * channels[..., 1] + LUMA_B * channels[..., 2]
    )
    return round_half_up(weighted).astype(np.int64)


def to_grayscale(buffer: PixelBuffer) -> PixelBuffer:
    """Replace R, G and B with the pixel's luma, keeping alpha.

    Args:
        buffer: Source buffer

    Returns:
        New buffer with the same dimensions
    """
    gray = luma(buffer.data).astype(np.uint8)
    result = buffer.data.copy()
    result[..., 0] = gray
    result[..., 1] = gray
    result[..., 2] = gray
    return PixelBuffer(width=buffer.width, height=buffer.height, data=result)
