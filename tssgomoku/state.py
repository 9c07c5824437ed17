"""Game state for TSS analysis."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

import numpy as np

from .board import board_to_str, get_board
from .consts import ACT_ELEMS_TO_NAMES, BLACK, EMPTY, SIDE_LEN, WALL, WHITE
from .tss.pattern import get_catalog
from .tss.pattern_search import search_board


class Status(Enum):
    ONGOING = "ongoing"
    BLACK_WON = "black_won"
    WHITE_WON = "white_won"


@dataclass
class GameState:
    """Board, side to move and game status."""

    board: np.ndarray  # SIDE_LEN x SIDE_LEN cell flags, wall border included
    turn: int  # BLACK or WHITE
    strict_stone_count: bool = False
    status: Status = field(init=False)

    def __post_init__(self):
        if self.board.shape != (SIDE_LEN, SIDE_LEN):
            raise ValueError(f"Board must be {SIDE_LEN}x{SIDE_LEN}")
        if self.turn not in (BLACK, WHITE):
            raise ValueError("Turn must be BLACK or WHITE")

        border = np.ones_like(self.board, dtype=bool)
        border[1:-1, 1:-1] = False
        if not np.all(self.board[border] == WALL):
            raise ValueError("Board border must be all WALL")
        if not np.all(np.isin(self.board[~border], [EMPTY, BLACK, WHITE])):
            raise ValueError("Invalid values inside the board")

        if self.strict_stone_count:
            diff = self.black_count - self.white_count
            if diff not in (0, 1):
                raise ValueError(
                    f"Invalid number of stones: Black: {self.black_count}, White: {self.white_count}"
                )
            if self.turn != (WHITE if diff == 1 else BLACK):
                raise ValueError("Turn does not match the stone count")

        p_win = get_catalog().by_name("P_WIN")
        black_won = bool(search_board(self.board, p_win.pattern, BLACK))
        white_won = bool(search_board(self.board, p_win.pattern, WHITE))

        if black_won and white_won:
            raise ValueError("Both BLACK and WHITE cannot have won")
        elif black_won:
            if self.turn != WHITE:
                raise ValueError("BLACK has won but is to move")
            self.status = Status.BLACK_WON
        elif white_won:
            if self.turn != BLACK:
                raise ValueError("WHITE has won but is to move")
            self.status = Status.WHITE_WON
        else:
            self.status = Status.ONGOING

    @property
    def black_count(self) -> int:
        return int(np.sum(self.board == BLACK))

    @property
    def white_count(self) -> int:
        return int(np.sum(self.board == WHITE))

    def copy(self) -> "GameState":
        return GameState(board=self.board.copy(), turn=self.turn, strict_stone_count=self.strict_stone_count)

    def __str__(self) -> str:
        return (
            f"board:{board_to_str(self.board)}"
            f"turn: {ACT_ELEMS_TO_NAMES[self.turn]}\n"
            f"status: {self.status.value}\n"
        )


def get_state(
    blacks: Sequence[str], whites: Sequence[str], turn: int, strict_stone_count: bool = False
) -> GameState:
    """Build a state from stone lists in algebraic notation."""
    return GameState(board=get_board(blacks, whites), turn=turn, strict_stone_count=strict_stone_count)
