from .agony import AgonyBoard, agony_board_from_rows
from .grids import board_from_rows
from .types import STANDARD_ORIENTATION, Board

# Bottom-face constraints; the die has to come home to the north-east corner
# in the orientation it started with.
DEFAULT_ROWS: tuple[str, ...] = (
    "56 .  2  4  G",
    ".  1  .  5  16",
    "3  4  12 3  .",
    "25 2  6  .  4",
    "S  3  45 .  1",
)

DIE_AGONY_VALUES: tuple[tuple[int, ...], ...] = (
    (57, 33, 132, 268, 492, 732),
    (81, 123, 240, 443, 353, 508),
    (186, 42, 195, 704, 452, 228),
    (-7, 2, 357, 452, 317, 395),
    (5, 23, -4, 592, 445, 620),
    (0, 77, 32, 403, 337, 452),
)


def default_board() -> Board:
    return board_from_rows(
        DEFAULT_ROWS,
        start_orientation=STANDARD_ORIENTATION,
        goal_orientation=STANDARD_ORIENTATION,
        name="corner-to-corner",
    )


def agony_board() -> AgonyBoard:
    return agony_board_from_rows(DIE_AGONY_VALUES)
