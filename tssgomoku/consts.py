"""Board, element and search constants."""

from .errors import InvalidArgumentError

# Playable side length.
SIDE_LEN_ACT = 15

# Side length including the wall on both sides.
SIDE_LEN = SIDE_LEN_ACT + 2

# Actual elements. Exactly one bit is set for every cell on a live board.
EMPTY = 1
BLACK = 1 << 1
WHITE = 1 << 2
WALL = 1 << 3

ACT_ELEMS = (EMPTY, BLACK, WHITE, WALL)
COLORS = (BLACK, WHITE)

ACT_ELEMS_TO_NAMES = {
    EMPTY: "EMPTY",
    BLACK: "BLACK",
    WHITE: "WHITE",
    WALL: "WALL",
}

# Swap these if your terminal uses a dark theme.
BLACK_CHR = "●"
WHITE_CHR = "○"
EMPTY_CHR = "+"
WALL_CHR = " "

# Printed for cells holding a generic element (synthetic test boards).
SPL_ELEM_CHR = "!"

ACT_ELEMS_TO_CHRS = {
    EMPTY: EMPTY_CHR,
    BLACK: BLACK_CHR,
    WHITE: WHITE_CHR,
    WALL: WALL_CHR,
}

# Generic elements, written from BLACK's point of view.
OWN = BLACK
ENEMY = WHITE
STONE = OWN | ENEMY
ANY = EMPTY | STONE | WALL
NOT_EMPTY = ANY ^ EMPTY
NOT_WALL = ANY ^ WALL
NOT_STONE = ANY ^ STONE
NOT_OWN = ANY ^ OWN
WALL_ENEMY = WALL | ENEMY

GEN_ELEMS = (
    EMPTY, WALL, OWN, ENEMY, STONE, ANY, NOT_EMPTY, NOT_WALL, NOT_STONE, NOT_OWN, WALL_ENEMY,
)

GEN_ELEMS_TO_NAMES = {
    EMPTY: "EMPTY",
    WALL: "WALL",
    OWN: "OWN",
    ENEMY: "ENEMY",
    STONE: "STONE",
    ANY: "ANY",
    NOT_EMPTY: "NOT_EMPTY",
    NOT_WALL: "NOT_WALL",
    NOT_STONE: "NOT_STONE",
    NOT_OWN: "NOT_OWN",
    WALL_ENEMY: "WALL_ENEMY",
}

# 4 cardinal + 4 ordinal directions.
NUM_DIRECTIONS = 8

# Pattern definitions assume a win length of 5.
WIN_LENGTH = 5

# Moves left before the game is lost if nothing is done. 0 is game over.
MAX_DEFCON = WIN_LENGTH

# Max defcon of an immediate threat.
MDFIT = 2

DEFCON_RANGE = range(0, MAX_DEFCON + 1)

# Pause between frames when replaying a variation.
ANIMATION_TIMESTEP_SECS = 2.0


def opponent(color: int) -> int:
    """Return the other stone color."""
    if color not in COLORS:
        raise InvalidArgumentError(f"Invalid color: {color}")
    return color ^ STONE
