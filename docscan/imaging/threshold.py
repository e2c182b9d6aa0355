"""Adaptive (local mean) binarization."""

import numpy as np

from docscan.imaging.buffer import PixelBuffer
from docscan.imaging.grayscale import luma


def _window_bounds(size: int, radius: int) -> tuple[np.ndarray, np.ndarray]:
    """Inclusive-start, exclusive-end window bounds per index, clipped to the axis."""
    index = np.arange(size)
    return np.clip(index - radius, 0, size), np.clip(index + radius + 1, 0, size)


def adaptive_threshold(buffer: PixelBuffer, block_size: int = 15, c: float = 8) -> PixelBuffer:
    """Binarize ``buffer`` against the mean luma of each pixel's neighbourhood.

    A pixel turns white when its luma is above ``mean - c``, where ``mean`` is
    taken over the in-bounds part of the ``(2 * radius + 1)`` square window
    around it. Near the borders the window shrinks instead of padding.

    Args:
        buffer: Source buffer (any colour; luma is computed per pixel)
        block_size: Window size; the radius is ``block_size // 2``
        c: Constant subtracted from the local mean

    Returns:
        New buffer whose R, G, B are 0 or 255 and whose alpha is 255

    Raises:
        ValueError: If ``block_size`` is below 1
    """
    if block_size < 1:
        raise ValueError(f"block_size must be at least 1, got {block_size}")

    height, width = buffer.height, buffer.width
    radius = block_size // 2
    gray = luma(buffer.data)

    # Summed-area table with a zero row and column in front
    integral = np.zeros((height + 1, width + 1), dtype=np.int64)
    integral[1:, 1:] = gray.cumsum(axis=0).cumsum(axis=1)

    top, bottom = _window_bounds(height, radius)
    left, right = _window_bounds(width, radius)

    window_sum = (
        integral[np.ix_(bottom, right)]
        - integral[np.ix_(top, right)]
        - integral[np.ix_(bottom, left)]
        + integral[np.ix_(top, left)]
    )
    count = np.outer(bottom - top, right - left)
    mean = window_sum / count

    value = np.where(gray > mean - c, 255, 0).astype(np.uint8)
    result = np.empty_like(buffer.data)
    result[..., 0] = value
    result[..., 1] = value
    result[..., 2] = value
    result[..., 3] = 255
    return PixelBuffer(width=width, height=height, data=result)
