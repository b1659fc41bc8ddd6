import pytest

from rolling_die.agony import (
    UNKNOWN_FACES,
    AgonyBoard,
    AgonyState,
    advance,
    agony_board_from_rows,
    describe_faces,
    explain_agony,
    solve_agony,
)
from rolling_die.puzzles import DIE_AGONY_VALUES, agony_board
from rolling_die.types import OutOfBoundsError


@pytest.fixture
def small_board() -> AgonyBoard:
    return agony_board_from_rows([[10, 7], [0, 3]])


def test_board_corners(small_board):
    assert small_board.start == (1, 0)
    assert small_board.end == (0, 1)
    assert small_board.value((0, 0)) == 10
    with pytest.raises(OutOfBoundsError):
        small_board.value((2, 0))


def test_board_rejects_ragged_values():
    with pytest.raises(ValueError):
        AgonyBoard(values=((1, 2), (3,)), start=(1, 0), end=(0, 1))


def test_board_rejects_start_off_board():
    with pytest.raises(ValueError):
        AgonyBoard(values=((1, 2),), start=(1, 0), end=(0, 1))


def test_unknown_top_is_inferred(small_board):
    start = AgonyState(coordinate=(1, 0), turn=0)
    state = advance(small_board, start, "east")
    assert state == AgonyState((1, 1), 1, (3, None, None, None, None, None))


def test_known_top_must_match_score(small_board):
    state = AgonyState((1, 1), 1, (3, None, None, None, None, None))
    # rolling west brings the unknown east face up: (0 - 3) / 2 is not integral
    assert advance(small_board, state, "west") is None
    nxt = advance(small_board, state, "north")
    assert nxt.coordinate == (0, 1)
    assert nxt.turn == 2
    assert nxt.top == 2


def test_known_top_mismatch_is_rejected():
    board = agony_board_from_rows([[0, 4, 9]], start=(0, 0), end=(0, 2))
    state = AgonyState((0, 1), 1, (None, None, None, None, None, 4))
    # rolling east brings the known west face (4) to the top: 4 + 2*4 != 9
    assert advance(board, state, "east") is None


def test_advance_off_board_raises(small_board):
    start = AgonyState(coordinate=(1, 0), turn=0)
    with pytest.raises(OutOfBoundsError):
        advance(small_board, start, "west")


def test_solves_small_board(small_board):
    solution = solve_agony(small_board)
    assert solution is not None
    assert solution.directions == ("east", "north")
    assert solution.coordinates == ((1, 0), (1, 1), (0, 1))
    assert solution.visited_cells == frozenset({(1, 0), (1, 1), (0, 1)})
    assert solution.unvisited_sum == 10
    assert solution.final_die == (2, None, 3, None, None, None)
    assert solution.initial_die == (None, None, None, 2, None, 3)


def test_explains_small_board(small_board):
    solution = solve_agony(small_board)
    assert list(explain_agony(solution)) == [
        "Turn 1: rolled east to (1, 1) (top=3). "
        "Score was 0, now 0 + (1 x 3) = 3 (cell value = 3).",
        "Turn 2: rolled north to (0, 1) (top=2). "
        "Score was 3, now 3 + (2 x 2) = 7 (cell value = 7).",
    ]


def test_unsolvable_board_returns_none():
    board = agony_board_from_rows([[0, 1, 100]])
    assert solve_agony(board) is None


def test_max_turns_limits_search(small_board):
    assert solve_agony(small_board, max_turns=1) is None
    assert solve_agony(small_board, max_turns=2) is not None


def test_describe_faces():
    assert describe_faces(UNKNOWN_FACES) == (
        "top=? bottom=? north=? south=? east=? west=?"
    )


def test_die_agony_board():
    board = agony_board()
    assert board.start == (5, 0)
    assert board.end == (0, 5)
    assert board.value(board.start) == 0

    solution = solve_agony(board)
    assert solution is not None
    assert solution.coordinates[-1] == board.end
    assert len(solution) == 32
    assert solution.unvisited_sum == 1935

    for turn, (prev, state) in enumerate(
        zip(solution.states, solution.states[1:]), start=1
    ):
        assert state.turn == turn
        assert board.value(prev.coordinate) + turn * state.top == board.value(
            state.coordinate
        )

    total = sum(sum(row) for row in DIE_AGONY_VALUES)
    visited = sum(board.value(c) for c in solution.visited_cells)
    assert solution.unvisited_sum == total - visited
    assert len(list(explain_agony(solution))) == len(solution)
