"""Search for one-dimensional patterns on the two-dimensional board.

All search functions take a generic pattern (BLACK's point of view) and the
color to search for, and leave the board untouched. A match is the ordered
line segment ``(a, b)`` covered by the pattern; since every straight line is
swept from both ends, ``(a, b)`` and ``(b, a)`` are the same match and only
one of them is returned.

The ``*_next_sq`` variants tolerate exactly one mismatch, provided the
pattern asks for the searched color there and the board cell is EMPTY. That
cell is the "next square": playing it would complete the match.
"""

from functools import lru_cache
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from ..consts import BLACK, EMPTY, NUM_DIRECTIONS, STONE, WHITE
from ..errors import InvalidArgumentError
from ..geometry import Point, increments, index_bounds, index_bounds_incl

Match = Tuple[Point, Point]

# (next_sq, match)
NSQMatch = Tuple[Point, Match]


@lru_cache(maxsize=None)
def _specialize(gen_pattern: Tuple[int, ...], color: int) -> Tuple[int, ...]:
    if color == BLACK:
        return gen_pattern
    elif color == WHITE:
        # Swap the BLACK and WHITE bits where exactly one of them is set.
        return tuple(
            v if (v & STONE == 0 or v & STONE == STONE) else v ^ STONE for v in gen_pattern
        )
    raise InvalidArgumentError(f"Invalid color: {color}")


def get_pattern(gen_pattern: Sequence[int], color: int) -> Tuple[int, ...]:
    """Specialize a generic pattern for the given color."""
    return _specialize(tuple(gen_pattern), color)


def _canonical(m: Match) -> Match:
    a, b = m
    return (a, b) if a <= b else (b, a)


def dedupe_matches(matches: Iterable[Match]) -> List[Match]:
    """Drop repeated and mirrored matches, keeping first occurrences."""
    seen = set()
    result = []
    for m in matches:
        key = _canonical(m)
        if key not in seen:
            seen.add(key)
            result.append(m)
    return result


def dedupe_next_sq_match_pairs(pairs: Iterable[NSQMatch]) -> List[NSQMatch]:
    seen = set()
    result = []
    for next_sq, m in pairs:
        key = (next_sq, _canonical(m))
        if key not in seen:
            seen.add(key)
            result.append((next_sq, m))
    return result


def _matches_at(item, pattern: Tuple[int, ...], i: int, j: int, row_inc: int, col_inc: int) -> bool:
    for k, p_val in enumerate(pattern):
        if p_val & item(i + row_inc * k, j + col_inc * k) == 0:
            return False
    return True


def _next_sq_at(
    item, pattern: Tuple[int, ...], color: int, i: int, j: int, row_inc: int, col_inc: int
) -> Optional[int]:
    """Index of the single fillable mismatch in the window, if any."""
    k_next_sq = None
    for k, p_val in enumerate(pattern):
        b_val = item(i + row_inc * k, j + col_inc * k)
        if p_val & b_val == 0:
            if k_next_sq is None and p_val == color and b_val == EMPTY:
                k_next_sq = k
            else:
                return None
    return k_next_sq


def _segment(i: int, j: int, row_inc: int, col_inc: int, length: int) -> Match:
    return (i, j), (i + row_inc * (length - 1), j + col_inc * (length - 1))


def _board_starts(side: int, length: int):
    """All (i, j, row_inc, col_inc) windows fully on the board."""
    for d in range(NUM_DIRECTIONS):
        row_inc, col_inc = increments(d)
        row_min, row_max = index_bounds(side, length, row_inc)
        col_min, col_max = index_bounds(side, length, col_inc)
        for i in range(row_min, row_max):
            for j in range(col_min, col_max):
                yield i, j, row_inc, col_inc


def _point_starts(side: int, length: int, point: Point):
    """Windows fully on the board that cover ``point``."""
    x, y = point
    for d in range(NUM_DIRECTIONS):
        row_inc, col_inc = increments(d)
        s_min, s_max = index_bounds_incl(side, length, x, y, row_inc, col_inc)
        for h in range(s_min, s_max):
            yield x + row_inc * h, y + col_inc * h, row_inc, col_inc


def _point_own_starts(side: int, length: int, point: Point, own_sqs: Sequence[int]):
    """Windows fully on the board placing ``point`` on one of ``own_sqs``."""
    x, y = point
    for d in range(NUM_DIRECTIONS):
        row_inc, col_inc = increments(d)
        s_min, s_max = index_bounds_incl(side, length, x, y, row_inc, col_inc)
        for own_sq in own_sqs:
            if s_min <= -own_sq < s_max:
                yield x - row_inc * own_sq, y - col_inc * own_sq, row_inc, col_inc


def _collect_matches(board: np.ndarray, pattern: Tuple[int, ...], starts) -> List[Match]:
    item = board.item
    length = len(pattern)
    matches = [
        _segment(i, j, row_inc, col_inc, length)
        for i, j, row_inc, col_inc in starts
        if _matches_at(item, pattern, i, j, row_inc, col_inc)
    ]
    return dedupe_matches(matches)


def _collect_next_sqs(board: np.ndarray, pattern: Tuple[int, ...], color: int, starts) -> List[NSQMatch]:
    item = board.item
    length = len(pattern)
    pairs = []
    for i, j, row_inc, col_inc in starts:
        k = _next_sq_at(item, pattern, color, i, j, row_inc, col_inc)
        if k is not None:
            next_sq = (i + row_inc * k, j + col_inc * k)
            pairs.append((next_sq, _segment(i, j, row_inc, col_inc, length)))
    return dedupe_next_sq_match_pairs(pairs)


def search_board(board: np.ndarray, gen_pattern: Sequence[int], color: int) -> List[Match]:
    """Search the whole board for a pattern."""
    pattern = get_pattern(gen_pattern, color)
    return _collect_matches(board, pattern, _board_starts(board.shape[0], len(pattern)))


def search_point(board: np.ndarray, gen_pattern: Sequence[int], color: int, point: Point) -> List[Match]:
    """Search for matches covering ``point`` anywhere in the pattern."""
    pattern = get_pattern(gen_pattern, color)
    return _collect_matches(board, pattern, _point_starts(board.shape[0], len(pattern), point))


def search_point_own(
    board: np.ndarray, gen_pattern: Sequence[int], color: int, point: Point, own_sqs: Sequence[int]
) -> List[Match]:
    """Search for matches where ``point`` is one of the pattern's own squares.

    Used after a stone is played at ``point``: only patterns the new stone
    takes part in are looked at.
    """
    pattern = get_pattern(gen_pattern, color)
    if board.item(*point) != color:
        return []
    starts = _point_own_starts(board.shape[0], len(pattern), point, own_sqs)
    return _collect_matches(board, pattern, starts)


def search_board_next_sq(board: np.ndarray, gen_pattern: Sequence[int], color: int) -> List[NSQMatch]:
    """Next squares and the matches they would complete, whole board."""
    pattern = get_pattern(gen_pattern, color)
    return _collect_next_sqs(board, pattern, color, _board_starts(board.shape[0], len(pattern)))


def search_point_next_sq(
    board: np.ndarray, gen_pattern: Sequence[int], color: int, point: Point
) -> List[NSQMatch]:
    """Next squares whose would-be match covers ``point``."""
    pattern = get_pattern(gen_pattern, color)
    starts = _point_starts(board.shape[0], len(pattern), point)
    return _collect_next_sqs(board, pattern, color, starts)


def search_point_own_next_sq(
    board: np.ndarray, gen_pattern: Sequence[int], color: int, point: Point, own_sqs: Sequence[int]
) -> List[NSQMatch]:
    """Next squares whose would-be match holds ``point`` as an own square."""
    pattern = get_pattern(gen_pattern, color)
    if board.item(*point) != color:
        return []
    starts = _point_own_starts(board.shape[0], len(pattern), point, own_sqs)
    return _collect_next_sqs(board, pattern, color, starts)


def apply_pattern(board: np.ndarray, pattern: Sequence[int], point: Point, d: int) -> bool:
    """Write ``pattern`` onto the board starting at ``point`` in direction ``d``.

    Returns False, leaving the board unchanged, if the pattern does not fit.
    Cell values are written as given, so generic elements (and walls) may be
    overwritten. Only meant for building test boards.
    """
    if not 0 <= d < NUM_DIRECTIONS:
        raise InvalidArgumentError(f"Invalid direction: {d}")

    side = board.shape[0]
    x, y = point
    row_inc, col_inc = increments(d)
    cells = [(x + row_inc * k, y + col_inc * k) for k in range(len(pattern))]

    if not all(0 <= i < side and 0 <= j < side for i, j in cells):
        return False

    for cell, value in zip(cells, pattern):
        board[cell] = value
    return True


def matches_are_subset(x: Iterable[Match], y: Iterable[Match]) -> bool:
    """True if every match in x is in y, direction ignored."""
    y_keys = {_canonical(m) for m in y}
    return all(_canonical(m) in y_keys for m in x)


def matches_are_equal(x: Sequence[Match], y: Sequence[Match]) -> bool:
    return matches_are_subset(x, y) and matches_are_subset(y, x)


def next_sq_matches_are_subset(x: Iterable[NSQMatch], y: Iterable[NSQMatch]) -> bool:
    y_keys = {(n, _canonical(m)) for n, m in y}
    return all((n, _canonical(m)) in y_keys for n, m in x)


def next_sq_matches_are_equal(x: Sequence[NSQMatch], y: Sequence[NSQMatch]) -> bool:
    return next_sq_matches_are_subset(x, y) and next_sq_matches_are_subset(y, x)


__all__ = [
    "Match",
    "NSQMatch",
    "apply_pattern",
    "dedupe_matches",
    "dedupe_next_sq_match_pairs",
    "get_pattern",
    "matches_are_equal",
    "matches_are_subset",
    "next_sq_matches_are_equal",
    "next_sq_matches_are_subset",
    "search_board",
    "search_board_next_sq",
    "search_point",
    "search_point_next_sq",
    "search_point_own",
    "search_point_own_next_sq",
]
