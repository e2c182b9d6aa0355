"""Bilinear resampling at fractional coordinates with edge clamping."""

import numpy as np

from docscan.imaging.buffer import PixelBuffer, Sample, round_half_up


def sample_points(buffer: PixelBuffer, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    """Bilinearly sample ``buffer`` at every ``(xs[i], ys[i])``.

    Coordinates are clamped into the buffer before interpolating, so requests
    outside the image return edge pixels instead of failing.

    Args:
        buffer: Source buffer
        xs: Fractional x coordinates (any shape)
        ys: Fractional y coordinates, broadcastable against ``xs``

    Returns:
        ``uint8`` array shaped ``broadcast(xs, ys).shape + (4,)``
    """
    xs, ys = np.broadcast_arrays(
        np.asarray(xs, dtype=np.float64), np.asarray(ys, dtype=np.float64)
    )
    max_x = buffer.width - 1
    max_y = buffer.height - 1

    x = np.clip(xs, 0, max_x)
    y = np.clip(ys, 0, max_y)

    x0 = np.floor(x).astype(np.intp)
    y0 = np.floor(y).astype(np.intp)
    x1 = np.minimum(x0 + 1, max_x)
    y1 = np.minimum(y0 + 1, max_y)

    dx = (x - x0)[..., np.newaxis]
    dy = (y - y0)[..., np.newaxis]
    one_minus_dx = 1 - dx
    one_minus_dy = 1 - dy

    data = buffer.data
    top_left = data[y0, x0].astype(np.float64)
    top_right = data[y0, x1].astype(np.float64)
    bottom_left = data[y1, x0].astype(np.float64)
    bottom_right = data[y1, x1].astype(np.float64)

    blended = (
        one_minus_dx * one_minus_dy * top_left
        + dx * one_minus_dy * top_right
        + one_minus_dx * dy * bottom_left
        + dx * dy * bottom_right
    )
    return np.clip(round_half_up(blended), 0, 255).astype(np.uint8)


def sample(buffer: PixelBuffer, x: float, y: float) -> Sample:
    """Bilinearly sample a single point. See :func:`sample_points`."""
    values = sample_points(buffer, np.array([x], dtype=np.float64), np.array([y], dtype=np.float64))
    r, g, b, a = (int(value) for value in values[0])
    return Sample(r, g, b, a)
