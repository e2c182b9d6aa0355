"""Neighbourhood helpers shared by the windowed filters."""

from typing import Iterator


def window_offsets(radius: int) -> Iterator[tuple[int, int]]:
    """Yield every ``(dy, dx)`` in the square window of ``radius``."""
    for dy in range(-radius, radius + 1):
        for dx in range(-radius, radius + 1):
            yield dy, dx


def overlap(offset: int, size: int) -> tuple[slice, slice] | None:
    """Slices pairing each index with its neighbour at ``offset`` along one axis.

    Returns ``(centers, neighbours)`` such that ``neighbours`` is ``centers``
    shifted by ``offset`` and both stay inside ``[0, size)``. Centres whose
    neighbour would fall outside the axis are left out, which is how the
    filters skip out-of-bounds neighbours. Returns None when no index has an
    in-bounds neighbour.
    """
    if abs(offset) >= size:
        return None
    if offset >= 0:
        return slice(0, size - offset), slice(offset, size)
    return slice(-offset, size), slice(0, size + offset)
