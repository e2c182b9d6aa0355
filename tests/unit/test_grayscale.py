"""Unit tests for luma and grayscale conversion."""

import numpy as np

from docscan.imaging.buffer import PixelBuffer, Sample
from docscan.imaging.grayscale import luma, to_grayscale


class TestLuma:
    """Tests for the luma formula."""

    def test_primaries(self):
        """Test BT.601 weights on pure primaries, rounded to nearest."""
        data = np.array(
            [[[255, 0, 0, 255], [0, 255, 0, 255], [0, 0, 255, 255], [255, 255, 255, 255]]],
            dtype=np.uint8,
        )

        assert luma(data).tolist() == [[76, 150, 29, 255]]

    def test_ignores_alpha(self):
        """Test that alpha does not contribute."""
        opaque = np.array([[[10, 20, 30, 255]]], dtype=np.uint8)
        clear = np.array([[[10, 20, 30, 0]]], dtype=np.uint8)

        assert luma(opaque)[0, 0] == luma(clear)[0, 0] == 18


class TestToGrayscale:
    """Tests for to_grayscale."""

    def test_channels_equal_luma(self, random_buffer):
        """Test that R, G and B all carry the luma and alpha is kept."""
        result = to_grayscale(random_buffer)
        expected = luma(random_buffer.data)

        assert result.size == random_buffer.size
        for channel in range(3):
            assert np.array_equal(result.data[..., channel], expected)
        assert np.array_equal(result.data[..., 3], random_buffer.data[..., 3])

    def test_idempotent(self, random_buffer):
        """Test that a second pass changes nothing."""
        once = to_grayscale(random_buffer)
        twice = to_grayscale(once)

        assert twice == once

    def test_every_gray_level_is_fixed_point(self):
        """Test that gray inputs keep their level for all 256 values."""
        levels = np.arange(256, dtype=np.uint8)
        data = np.stack([levels, levels, levels, np.full(256, 255, dtype=np.uint8)], axis=-1)
        buffer = PixelBuffer(width=256, height=1, data=data[np.newaxis])

        result = to_grayscale(buffer)

        assert np.array_equal(result.data, buffer.data)

    def test_single_pixel(self):
        """Test a hand-computed pixel."""
        buffer = PixelBuffer.blank(1, 1, (100, 150, 200, 42))
        # 0.299*100 + 0.587*150 + 0.114*200 = 140.75
        assert to_grayscale(buffer).pixel(0, 0) == Sample(141, 141, 141, 42)
