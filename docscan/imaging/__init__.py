"""Imaging package - Pixel buffers and the document-scan pixel engine."""

from docscan.imaging.bilateral import bilateral_filter
from docscan.imaging.buffer import PixelBuffer, Point, Quadrilateral, Sample
from docscan.imaging.enhancement import enhance, invert, mean_brightness
from docscan.imaging.grayscale import luma, to_grayscale
from docscan.imaging.perspective import warp
from docscan.imaging.resample import sample, sample_points
from docscan.imaging.threshold import adaptive_threshold

__all__ = [
    "PixelBuffer",
    "Point",
    "Quadrilateral",
    "Sample",
    "adaptive_threshold",
    "bilateral_filter",
    "enhance",
    "invert",
    "luma",
    "mean_brightness",
    "sample",
    "sample_points",
    "to_grayscale",
    "warp",
]
