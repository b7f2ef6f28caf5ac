"""Pure geometric helpers over grid points.

Coordinates are taken as ``x = col`` and ``y = row``. The pixel layout used
by the graphical client is an affine image of this lattice, so alignment and
intersection answers do not depend on the screen size.
"""

from __future__ import annotations

from fractions import Fraction
from typing import List, Optional, Sequence, Tuple

from .grid import Point


INTERMEDIATE_LIMIT = 100

Line = Tuple[Point, Point]


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def is_aligned_path(a: Point, b: Point) -> bool:
    """True when ``b`` lies on one of the eight compass rays from ``a``."""

    row_diff = b.row - a.row
    col_diff = b.col - a.col
    return row_diff == 0 or col_diff == 0 or abs(row_diff) == abs(col_diff)


def intermediate_points(
    a: Point,
    b: Point,
    points: Sequence[Point],
    size: int,
) -> List[Point]:
    """Points strictly between ``a`` and ``b``, walking from ``a``.

    Returns an empty list for pairs that are not aligned. The walk stops
    early once more than :data:`INTERMEDIATE_LIMIT` points were collected.
    """

    found: List[Point] = []
    if not is_aligned_path(a, b):
        return found

    row_step = _sign(b.row - a.row)
    col_step = _sign(b.col - a.col)

    r = a.row + row_step
    c = a.col + col_step
    while (r, c) != (b.row, b.col):
        if 0 <= r < size and 0 <= c < size:
            found.append(points[r * size + c])
        r += row_step
        c += col_step
        if len(found) > INTERMEDIATE_LIMIT:
            break
    return found


def _coefficients(line: Line) -> Tuple[int, int, int]:
    # A*x + B*y = C through both endpoints
    start, end = line
    a = end.row - start.row
    b = start.col - end.col
    c = a * start.col + b * start.row
    return a, b, c


def _within_bounds(line: Line, x: Fraction, y: Fraction) -> bool:
    start, end = line
    return (
        min(start.col, end.col) <= x <= max(start.col, end.col)
        and min(start.row, end.row) <= y <= max(start.row, end.row)
    )


def line_intersection(first: Line, second: Line) -> Optional[Tuple[Fraction, Fraction]]:
    """Crossing point of the infinite lines through two segments.

    Returns ``None`` for parallel lines, collinear ones included.
    """

    a1, b1, c1 = _coefficients(first)
    a2, b2, c2 = _coefficients(second)

    det = a1 * b2 - a2 * b1
    if det == 0:
        return None

    x = Fraction(b2 * c1 - b1 * c2, det)
    y = Fraction(a1 * c2 - a2 * c1, det)
    return x, y


def segments_intersect(first: Line, second: Line) -> bool:
    """True when two segments cross or touch.

    Collinear segments are never reported as intersecting, even when they
    overlap, because their lines are parallel.
    """

    crossing = line_intersection(first, second)
    if crossing is None:
        return False
    x, y = crossing
    return _within_bounds(first, x, y) and _within_bounds(second, x, y)
