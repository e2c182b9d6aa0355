"""Black-and-white enhancement pipeline for photographed documents."""

from docscan.imaging.bilateral import bilateral_filter
from docscan.imaging.buffer import PixelBuffer
from docscan.imaging.grayscale import luma, to_grayscale
from docscan.imaging.threshold import adaptive_threshold

# Below this mean luma the page is treated as light text on a dark background
DARK_BACKGROUND_THRESHOLD = 120

BILATERAL_DIAMETER = 9
BILATERAL_SIGMA_COLOR = 75.0
BILATERAL_SIGMA_SPACE = 75.0
THRESHOLD_BLOCK_SIZE = 15
THRESHOLD_C = 8


def mean_brightness(buffer: PixelBuffer) -> float:
    """Return the mean luma over every pixel, or 0 for an empty buffer."""
    gray = luma(buffer.data)
    if gray.size == 0:
        return 0.0
    return float(gray.sum()) / gray.size


def invert(buffer: PixelBuffer) -> PixelBuffer:
    """Return the colour negative of ``buffer``; alpha is left unchanged."""
    result = buffer.data.copy()
    result[..., :3] = 255 - result[..., :3]
    return PixelBuffer(width=buffer.width, height=buffer.height, data=result)


def enhance(buffer: PixelBuffer) -> PixelBuffer:
    """Turn a document photo into a clean black-and-white scan.

    Steps, in order:
    1. Measure mean brightness
    2. Invert dark-background images so text ends up dark on light
    3. Convert to grayscale
    4. Bilateral filter to remove noise without blurring strokes
    5. Adaptive threshold so shading across the page does not matter

    Args:
        buffer: Source image

    Returns:
        Binarized buffer with the same dimensions
    """
    working = buffer
    if mean_brightness(working) < DARK_BACKGROUND_THRESHOLD:
        working = invert(working)

    gray = to_grayscale(working)
    smoothed = bilateral_filter(
        gray,
        diameter=BILATERAL_DIAMETER,
        sigma_color=BILATERAL_SIGMA_COLOR,
        sigma_space=BILATERAL_SIGMA_SPACE,
    )
    return adaptive_threshold(smoothed, block_size=THRESHOLD_BLOCK_SIZE, c=THRESHOLD_C)
