"""Direction vectors and line geometry on the square grid.

Directions are numbered 0..7. The row increment is 0 when ``d % 4 == 0``,
+1 when ``d % 8 < 4`` and -1 otherwise; the column increment is the row
increment of ``d + 2``.
"""

from typing import Iterable, Set, Tuple

from .errors import InvalidArgumentError

Point = Tuple[int, int]


def _sign(x: int) -> int:
    return (x > 0) - (x < 0)


def increment(d: int) -> int:
    if d % 4 == 0:
        return 0
    elif d % 8 < 4:
        return 1
    else:
        return -1


def increments(d: int) -> Tuple[int, int]:
    """(row increment, column increment) for direction d."""
    return increment(d), increment(d + 2)


def index_bounds(side: int, length: int, inc: int) -> Tuple[int, int]:
    """Half-open range of start indices for a window of ``length`` cells
    stepping by ``inc`` that stays on an axis of ``side`` cells."""
    if length > side:
        return 0, 0

    if inc == -1:
        return length - 1, side
    elif inc == 0:
        return 0, side
    elif inc == 1:
        return 0, side - length + 1
    raise InvalidArgumentError(f"Invalid increment: {inc}")


def _axis_extent(side: int, coord: int, inc: int) -> Tuple[int, int]:
    # (cells available behind the point, cells available from the point onwards)
    if inc == -1:
        front = coord + 1
        return side - front, front
    elif inc == 0:
        return side, side
    elif inc == 1:
        return coord, side - coord
    raise InvalidArgumentError(f"Invalid increment: {inc}")


def index_bounds_incl(
    side: int, length: int, x: int, y: int, row_inc: int, col_inc: int
) -> Tuple[int, int]:
    """Half-open range of offsets ``h`` such that the window starting at
    ``(x + row_inc * h, y + col_inc * h)`` is fully on the grid and covers
    the point ``(x, y)``."""
    row_b, row_f = _axis_extent(side, x, row_inc)
    col_b, col_f = _axis_extent(side, y, col_inc)

    back = min(row_b, col_b)
    front = min(row_f, col_f)
    return -min(back, length - 1), min(front, length) - (length - 1)


def point_on_line(start: Point, end: Point, i: int) -> Point:
    """The point ``i`` steps from ``start`` towards ``end``."""
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    if not (dx * dy == 0 or abs(dx) == abs(dy)):
        raise InvalidArgumentError(f"Not a straight line: {start} -> {end}")
    return start[0] + _sign(dx) * i, start[1] + _sign(dy) * i


def point_is_on_line(point: Point, start: Point, end: Point, segment_only: bool) -> bool:
    dx1 = point[0] - start[0]
    dy1 = point[1] - start[1]
    dx2 = point[0] - end[0]
    dy2 = point[1] - end[1]
    collinear = dx1 * dy2 == dx2 * dy1
    return collinear and (not segment_only or (dx1 * dx2 <= 0 and dy1 * dy2 <= 0))


def point_set_on_line(start: Point, end: Point, idxs: Iterable[int]) -> Set[Point]:
    """Translate pattern-relative indices to board points along a line."""
    return {point_on_line(start, end, i) for i in idxs}


def is_normal_line(start: Point, end: Point) -> bool:
    """True for a non-degenerate horizontal, vertical or diagonal line."""
    adx = abs(end[0] - start[0])
    ady = abs(end[1] - start[1])
    return (adx * ady == 0 or adx == ady) and adx + ady > 0


def chebyshev_distance(start: Point, end: Point) -> int:
    return max(abs(end[0] - start[0]), abs(end[1] - start[1]))
