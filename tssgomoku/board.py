"""Board grid: a SIDE_LEN x SIDE_LEN array of cell flags with a wall border.

Rows are numbered for display from the bottom (row 1 is the last playable
row) and columns are lettered from the left, so ``"h8"`` is the center of a
15x15 board.
"""

from contextlib import contextmanager
from typing import Iterable, Iterator, List, Sequence

import numpy as np

from .consts import (
    ACT_ELEMS_TO_CHRS,
    BLACK,
    COLORS,
    EMPTY,
    SIDE_LEN,
    SIDE_LEN_ACT,
    SPL_ELEM_CHR,
    WALL,
    WHITE,
)
from .errors import IllegalMoveError, InvalidArgumentError
from .geometry import Point


def row_idx_to_num(x: int) -> int:
    """Display row number from internal row index."""
    if not 1 <= x <= SIDE_LEN_ACT:
        raise InvalidArgumentError(f"Row index out of range: {x}")
    return SIDE_LEN_ACT + 1 - x


# The mapping is its own inverse.
row_num_to_idx = row_idx_to_num


def col_idx_to_chr(x: int) -> str:
    """Display column letter from internal column index."""
    if not 1 <= x <= SIDE_LEN_ACT:
        raise InvalidArgumentError(f"Column index out of range: {x}")
    return chr(ord("a") + x - 1)


def col_chr_to_idx(x: str) -> int:
    idx = ord(x.lower()) - ord("a") + 1
    if not 1 <= idx <= SIDE_LEN_ACT:
        raise InvalidArgumentError(f"Column letter out of range: {x!r}")
    return idx


def point_to_algebraic(point: Point) -> str:
    return f"{col_idx_to_chr(point[1])}{row_idx_to_num(point[0])}"


def algebraic_to_point(text: str) -> Point:
    text = text.strip()
    if len(text) < 2 or not text[1:].isdigit():
        raise InvalidArgumentError(f"Invalid algebraic point: {text!r}")
    return row_num_to_idx(int(text[1:])), col_chr_to_idx(text[0])


def new_board() -> np.ndarray:
    """Empty board surrounded by a one-cell wall."""
    board = np.full((SIDE_LEN, SIDE_LEN), EMPTY, dtype=np.uint8)
    board[0, :] = WALL
    board[-1, :] = WALL
    board[:, 0] = WALL
    board[:, -1] = WALL
    return board


def get_board(blacks: Sequence[str], whites: Sequence[str]) -> np.ndarray:
    """Board from lists of black and white points in algebraic notation."""
    common = set(blacks) & set(whites)
    if common:
        raise ValueError(f"Points given for both colors: {sorted(common)}")

    board = new_board()
    for color, points in ((BLACK, blacks), (WHITE, whites)):
        for text in points:
            set_sq(board, color, algebraic_to_point(text))
    return board


def _check_color(color: int) -> None:
    if color not in COLORS:
        raise InvalidArgumentError(f"Invalid color: {color}")


def set_sq(board: np.ndarray, color: int, point: Point) -> None:
    """Place a stone of ``color`` on an empty point."""
    _check_color(color)
    found = board[point]
    if found != EMPTY:
        raise IllegalMoveError(
            f"Cannot place on {point}: point holds {found}", point=point, found=found
        )
    board[point] = color


def clear_sq(board: np.ndarray, color: int, point: Point) -> None:
    """Remove a stone of ``color`` from a point."""
    _check_color(color)
    found = board[point]
    if found != color:
        raise IllegalMoveError(
            f"Cannot clear {color} from {point}: point holds {found}", point=point, found=found
        )
    board[point] = EMPTY


@contextmanager
def stones_placed(board: np.ndarray, color: int, points: Iterable[Point]) -> Iterator[List[Point]]:
    """Place stones for the duration of a ``with`` block.

    Every stone placed here is cleared again on exit, in reverse order,
    however the block is left.
    """
    placed: List[Point] = []
    try:
        for point in points:
            set_sq(board, color, point)
            placed.append(point)
        yield placed
    finally:
        for point in reversed(placed):
            clear_sq(board, color, point)


def board_to_str(board: np.ndarray) -> str:
    """Board as text with row numbers and column letters."""
    lines = [""]
    for i in range(board.shape[0]):
        label = f"{row_idx_to_num(i):>2}" if 1 <= i <= SIDE_LEN_ACT else "  "
        cells = " ".join(ACT_ELEMS_TO_CHRS.get(int(v), SPL_ELEM_CHR) for v in board[i])
        lines.append(f"{label} {cells} ")
    cols = " ".join(col_idx_to_chr(j) for j in range(1, SIDE_LEN_ACT + 1))
    lines.append(f"     {cols} ")
    lines.append("")
    return "\n".join(lines) + "\n"
