"""Pytest configuration and fixtures."""

import io

import numpy as np
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from docscan.imaging import PixelBuffer
from docscan.main import app


@pytest.fixture
def client():
    """Create a test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def make_buffer():
    """Factory for uniform buffers: ``make_buffer(width, height, (r, g, b, a))``."""

    def _make(width: int, height: int, color=(255, 255, 255, 255)) -> PixelBuffer:
        return PixelBuffer.blank(width, height, fill=color)

    return _make


@pytest.fixture
def gradient_buffer():
    """A 6x5 buffer where every pixel and channel differs."""
    height, width = 5, 6
    ys, xs = np.mgrid[0:height, 0:width]
    data = np.empty((height, width, 4), dtype=np.uint8)
    data[..., 0] = xs * 40
    data[..., 1] = ys * 50
    data[..., 2] = (xs * 7 + ys * 13) % 256
    data[..., 3] = 200 + xs + ys
    return PixelBuffer(width=width, height=height, data=data)


@pytest.fixture
def random_buffer():
    """A 12x9 buffer of seeded random pixels."""
    rng = np.random.default_rng(1234)
    data = rng.integers(0, 256, size=(9, 12, 4), dtype=np.uint8)
    return PixelBuffer(width=12, height=9, data=data)


@pytest.fixture
def sample_png_bytes():
    """An 8x6 RGB PNG: white page with a dark block in the middle."""
    img = Image.new("RGB", (8, 6), (250, 250, 250))
    for x in range(3, 5):
        for y in range(2, 4):
            img.putpixel((x, y), (20, 20, 20))
    output = io.BytesIO()
    img.save(output, format="PNG")
    return output.getvalue()
