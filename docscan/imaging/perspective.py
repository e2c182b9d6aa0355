"""Perspective correction by bilinear corner mapping."""

import numpy as np

from docscan.imaging.buffer import PixelBuffer, Quadrilateral
from docscan.imaging.resample import sample_points


def _normalized_axis(size: int) -> np.ndarray:
    """Return ``i / (size - 1)`` for each index, or zeros for a single-pixel axis."""
    if size == 1:
        return np.zeros(1, dtype=np.float64)
    return np.arange(size, dtype=np.float64) / (size - 1)


def warp(
    source: PixelBuffer,
    corners: Quadrilateral,
    dest_width: int,
    dest_height: int,
) -> PixelBuffer:
    """Map a source quadrilateral onto a ``dest_width`` x ``dest_height`` rectangle.

    Each destination pixel ``(x, y)`` gets normalized parameters
    ``u = x / (dest_width - 1)`` and ``v = y / (dest_height - 1)`` and is sampled
    from the bilinear blend of the four corners. This is not a projective
    homography: it is exact for parallelograms and approximate otherwise.

    Args:
        source: Image to sample from
        corners: Source-space corners, top-left, top-right, bottom-right, bottom-left
        dest_width: Output width in pixels
        dest_height: Output height in pixels

    Returns:
        New buffer of exactly ``dest_width`` x ``dest_height``

    Raises:
        ValueError: If either destination dimension is below 1
    """
    if dest_width < 1 or dest_height < 1:
        raise ValueError(
            f"Destination dimensions must be positive, got {dest_width}x{dest_height}"
        )

    u = _normalized_axis(dest_width)[np.newaxis, :]
    v = _normalized_axis(dest_height)[:, np.newaxis]
    one_minus_u = 1 - u
    one_minus_v = 1 - v

    top_left, top_right, bottom_right, bottom_left = corners.corners
    w_tl = one_minus_u * one_minus_v
    w_tr = u * one_minus_v
    w_br = u * v
    w_bl = one_minus_u * v

    src_x = w_tl * top_left.x + w_tr * top_right.x + w_br * bottom_right.x + w_bl * bottom_left.x
    src_y = w_tl * top_left.y + w_tr * top_right.y + w_br * bottom_right.y + w_bl * bottom_left.y

    pixels = sample_points(source, src_x, src_y)
    return PixelBuffer(width=dest_width, height=dest_height, data=pixels)
