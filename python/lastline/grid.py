"""Point layout for the lastline board.

The board is a square lattice of ``size * size`` points laid out in
row-major order. A point's ``index`` doubles as its arena id: every other
module refers to points by index and keeps per-point state (connections,
blocked flags) in its own tables, so the points themselves never change
after :func:`generate` has built them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence


GRID_SIZE = 4


@dataclass(frozen=True)
class Point:
    """A fixed location on the board.

    Attributes
    ----------
    index:
        Stable arena id, ``row * size + col``.
    row, col:
        Lattice coordinates, counted from the top-left corner.
    """

    index: int
    row: int
    col: int


def generate(size: int = GRID_SIZE) -> List[Point]:
    """Return the ``size * size`` points of a board in row-major order."""

    if size < 1:
        raise ValueError(f"Grid size must be positive, got {size}")
    return [
        Point(index=row * size + col, row=row, col=col)
        for row in range(size)
        for col in range(size)
    ]


def point_at(points: Sequence[Point], size: int, row: int, col: int) -> Point:
    """Look up the point at ``(row, col)`` on a board built by :func:`generate`."""

    if not (0 <= row < size and 0 <= col < size):
        raise ValueError(f"Point ({row}, {col}) is outside a {size}x{size} grid")
    return points[row * size + col]
