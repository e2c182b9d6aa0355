"""Pixel buffer model - The RGBA8 raster every imaging operation reads and writes."""

from dataclasses import dataclass
from typing import NamedTuple, Sequence

import numpy as np

CHANNELS = 4


class Sample(NamedTuple):
    """Interpolated channel values, already rounded to integers."""

    r: int
    g: int
    b: int
    a: int


class Point(NamedTuple):
    """A fractional coordinate in source image space."""

    x: float
    y: float


@dataclass(frozen=True)
class Quadrilateral:
    """Four source-space corners matching the destination rectangle's corners.

    Order is top-left, top-right, bottom-right, bottom-left. Nothing checks that
    the shape is convex or that the order is sensible; swapped corners simply
    produce a flipped or twisted warp.
    """

    top_left: Point
    top_right: Point
    bottom_right: Point
    bottom_left: Point

    @classmethod
    def from_flat(cls, corners: Sequence[float]) -> "Quadrilateral":
        """Build a quadrilateral from ``[x0, y0, x1, y1, x2, y2, x3, y3]``.

        Raises:
            ValueError: If ``corners`` does not hold exactly eight numbers
        """
        values = [float(value) for value in corners]
        if len(values) != 8:
            raise ValueError(f"Expected 8 corner coordinates, got {len(values)}")
        points = [Point(values[i], values[i + 1]) for i in range(0, 8, 2)]
        return cls(*points)

    def to_flat(self) -> list[float]:
        """Return the corners as a flat list of eight floats."""
        return [coord for point in self.corners for coord in point]

    @property
    def corners(self) -> tuple[Point, Point, Point, Point]:
        return (self.top_left, self.top_right, self.bottom_right, self.bottom_left)


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Row-major RGBA8 pixels with explicit dimensions.

    Attributes:
        width: Number of columns (>= 1)
        height: Number of rows (>= 1)
        data: ``uint8`` array shaped ``(height, width, 4)``

    The array is frozen on construction. Operations never modify a buffer,
    they always return a new one.
    """

    width: int
    height: int
    data: np.ndarray

    def __post_init__(self) -> None:
        """Validate dimensions and storage layout."""
        if self.width < 1 or self.height < 1:
            raise ValueError(
                f"Buffer dimensions must be positive, got {self.width}x{self.height}"
            )
        if not isinstance(self.data, np.ndarray) or self.data.dtype != np.uint8:
            raise ValueError("Buffer data must be a uint8 numpy array")
        expected = (self.height, self.width, CHANNELS)
        if self.data.shape != expected:
            raise ValueError(f"Buffer data shape {self.data.shape} does not match {expected}")
        self.data.setflags(write=False)

    @classmethod
    def blank(
        cls, width: int, height: int, fill: tuple[int, int, int, int] = (0, 0, 0, 0)
    ) -> "PixelBuffer":
        """Create a buffer with every pixel set to ``fill``."""
        data = np.empty((height, width, CHANNELS), dtype=np.uint8)
        data[...] = np.asarray(fill, dtype=np.uint8)
        return cls(width=width, height=height, data=data)

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """Copy an ``(height, width, 4)`` array into a new buffer.

        Values are clamped into [0, 255] and rounded when the array is not
        already ``uint8``.
        """
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] != CHANNELS:
            raise ValueError(f"Expected an array shaped (height, width, 4), got {array.shape}")
        if array.dtype != np.uint8:
            array = np.clip(np.rint(array), 0, 255)
        data = np.array(array, dtype=np.uint8, copy=True)
        return cls(width=data.shape[1], height=data.shape[0], data=data)

    @classmethod
    def from_bytes(cls, width: int, height: int, data: bytes | bytearray | memoryview) -> "PixelBuffer":
        """Wrap flat RGBA8 bytes (the transport form) in a buffer.

        Raises:
            ValueError: If the byte length is not ``width * height * 4``
        """
        expected = width * height * CHANNELS
        if len(data) != expected:
            raise ValueError(
                f"Pixel data has {len(data)} bytes, expected {expected} for {width}x{height}"
            )
        array = np.frombuffer(bytes(data), dtype=np.uint8).reshape(height, width, CHANNELS)
        return cls(width=width, height=height, data=array.copy())

    def to_bytes(self) -> bytes:
        """Return the pixels as flat row-major RGBA8 bytes."""
        return self.data.tobytes()

    def pixel(self, x: int, y: int) -> Sample:
        """Return the channel values stored at integer coordinate ``(x, y)``."""
        r, g, b, a = (int(value) for value in self.data[y, x])
        return Sample(r, g, b, a)

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self.data, other.data))

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"


def round_half_up(values: np.ndarray) -> np.ndarray:
    """Round to the nearest integer with halves going up."""
    return np.floor(values + 0.5)
