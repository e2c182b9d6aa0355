"""Edge-preserving bilateral smoothing."""

import numpy as np

from docscan.imaging.buffer import PixelBuffer
from docscan.imaging.window import overlap, window_offsets


def bilateral_filter(
    buffer: PixelBuffer,
    diameter: int = 9,
    sigma_color: float = 75.0,
    sigma_space: float = 75.0,
) -> PixelBuffer:
    """Smooth ``buffer`` while keeping sharp colour edges.

    Every neighbour inside the ``(2 * radius + 1)`` square window contributes
    with weight ``exp(-d_space^2 / (2 sigma_space^2)) * exp(-d_color^2 / (2 sigma_color^2))``
    where ``d_color^2`` is the squared RGB distance to the centre pixel.
    Neighbours outside the image are skipped rather than clamped.

    Args:
        buffer: Source buffer
        diameter: Window diameter; the radius is ``diameter // 2``
        sigma_color: Colour-similarity falloff, larger smooths across stronger edges
        sigma_space: Spatial falloff, larger widens each pixel's influence

    Returns:
        New buffer with the same dimensions; alpha copied from the source

    Raises:
        ValueError: If either sigma is not positive
    """
    if sigma_color <= 0 or sigma_space <= 0:
        raise ValueError(
            f"Sigmas must be positive, got sigma_color={sigma_color}, sigma_space={sigma_space}"
        )

    height, width = buffer.height, buffer.width
    radius = diameter // 2
    two_sigma_space_sq = 2 * sigma_space * sigma_space
    two_sigma_color_sq = 2 * sigma_color * sigma_color

    rgb = buffer.data[..., :3].astype(np.float64)
    weighted_sum = np.zeros_like(rgb)
    total_weight = np.zeros((height, width), dtype=np.float64)

    for dy, dx in window_offsets(radius):
        rows = overlap(dy, height)
        cols = overlap(dx, width)
        if rows is None or cols is None:
            continue
        center_rows, neighbor_rows = rows
        center_cols, neighbor_cols = cols

        center = rgb[center_rows, center_cols]
        neighbor = rgb[neighbor_rows, neighbor_cols]

        spatial_weight = np.exp(-(dx * dx + dy * dy) / two_sigma_space_sq)
        color_dist_sq = np.sum((center - neighbor) ** 2, axis=-1)
        weight = spatial_weight * np.exp(-color_dist_sq / two_sigma_color_sq)

        total_weight[center_rows, center_cols] += weight
        weighted_sum[center_rows, center_cols] += neighbor * weight[..., np.newaxis]

    # Zero total weight only happens for an empty window; keep the centre value.
    has_weight = total_weight != 0
    divisor = np.where(has_weight, total_weight, 1.0)[..., np.newaxis]
    smoothed = np.where(has_weight[..., np.newaxis], weighted_sum / divisor, rgb)

    result = np.empty_like(buffer.data)
    result[..., :3] = np.clip(np.rint(smoothed), 0, 255).astype(np.uint8)
    result[..., 3] = buffer.data[..., 3]
    return PixelBuffer(width=width, height=height, data=result)
