import pytest

from rolling_die.dice import (
    OPPOSITE_DIRECTION,
    reachable_orientations,
    roll,
    roll_faces,
    roll_on,
    roll_orientation,
)
from rolling_die.grids import board_from_rows
from rolling_die.types import (
    DIRECTIONS,
    STANDARD_ORIENTATION,
    DieState,
    Orientation,
    OutOfBoundsError,
)

ALL_ORIENTATIONS = reachable_orientations(STANDARD_ORIENTATION)


def _assert_valid(o: Orientation) -> None:
    assert sorted(o.faces) == [1, 2, 3, 4, 5, 6]
    assert o.value("top") + o.value("bottom") == 7
    assert o.value("north") + o.value("south") == 7
    assert o.value("east") + o.value("west") == 7


def test_standard_orientation_faces():
    o = STANDARD_ORIENTATION
    assert o.as_dict() == {
        "top": 1,
        "bottom": 6,
        "north": 2,
        "south": 5,
        "east": 3,
        "west": 4,
    }
    assert o.top == 1
    assert o.bottom == 6


def test_orientation_rejects_repeated_values():
    with pytest.raises(ValueError):
        Orientation((1, 1, 2, 5, 3, 4))


def test_orientation_rejects_broken_opposites():
    with pytest.raises(ValueError):
        Orientation((1, 6, 2, 3, 5, 4))


def test_orientation_rejects_wrong_length():
    with pytest.raises(ValueError):
        Orientation((1, 6, 2, 5, 3))


def test_orientation_from_mapping():
    o = Orientation.from_mapping(STANDARD_ORIENTATION.as_dict())
    assert o == STANDARD_ORIENTATION
    with pytest.raises(ValueError):
        Orientation.from_mapping({"top": 1, "bottom": 6})


def test_roll_east_tips_top_to_east():
    rolled = roll_orientation(STANDARD_ORIENTATION, "east")
    assert rolled == Orientation((4, 3, 2, 5, 1, 6))


def test_roll_north_tips_top_to_north():
    rolled = roll_orientation(STANDARD_ORIENTATION, "north")
    assert rolled == Orientation((5, 2, 1, 6, 3, 4))


def test_travel_face_becomes_bottom():
    for direction in DIRECTIONS:
        rolled = roll_orientation(STANDARD_ORIENTATION, direction)
        assert rolled.bottom == STANDARD_ORIENTATION.value(direction)
        assert rolled.value(direction) == STANDARD_ORIENTATION.top


def test_twenty_four_orientations_reachable():
    assert len(ALL_ORIENTATIONS) == 24
    assert len(set(ALL_ORIENTATIONS)) == 24
    for o in ALL_ORIENTATIONS:
        _assert_valid(o)


def test_invariants_hold_after_every_roll():
    for o in ALL_ORIENTATIONS:
        for direction in DIRECTIONS:
            _assert_valid(roll_orientation(o, direction))


def test_roll_then_opposite_roll_is_identity():
    for o in ALL_ORIENTATIONS:
        for direction in DIRECTIONS:
            back = roll_orientation(
                roll_orientation(o, direction), OPPOSITE_DIRECTION[direction]
            )
            assert back == o


def test_four_rolls_in_one_direction_is_identity():
    for direction in DIRECTIONS:
        o = STANDARD_ORIENTATION
        seen = []
        for _ in range(4):
            o = roll_orientation(o, direction)
            seen.append(o)
        assert seen[-1] == STANDARD_ORIENTATION
        assert STANDARD_ORIENTATION not in seen[:-1]


def test_mirror_orientation_is_not_reachable():
    mirror = Orientation((1, 6, 2, 5, 4, 3))
    assert mirror not in ALL_ORIENTATIONS


def test_roll_moves_coordinate():
    state = DieState((2, 2), STANDARD_ORIENTATION)
    assert roll(state, "north").coordinate == (1, 2)
    assert roll(state, "east").coordinate == (2, 3)
    assert roll(state, "south").coordinate == (3, 2)
    assert roll(state, "west").coordinate == (2, 1)


def test_roll_round_trip_on_board():
    board = board_from_rows([". . .", ". S .", ". . G"])
    start = DieState(board.start, board.start_orientation)
    for direction in DIRECTIONS:
        there = roll_on(board, start, direction)
        assert roll_on(board, there, OPPOSITE_DIRECTION[direction]) == start


def test_roll_on_rejects_leaving_board():
    board = board_from_rows(["S G"])
    start = DieState(board.start, board.start_orientation)
    with pytest.raises(OutOfBoundsError):
        roll_on(board, start, "west")
    with pytest.raises(OutOfBoundsError):
        roll_on(board, start, "north")
    assert roll_on(board, start, "east").coordinate == (0, 1)


def test_roll_faces_handles_unknown_values():
    # top, bottom, north, south, east, west
    faces = (1, 3, 0, 2, 5, 4)
    assert roll_faces(faces, "west") == (5, 4, 0, 2, 3, 1)
    assert roll_faces((None,) * 6, "east") == (None,) * 6
    partial = (7, None, None, None, None, None)
    assert roll_faces(partial, "east") == (None, None, None, None, 7, None)


def test_roll_faces_needs_six_values():
    with pytest.raises(ValueError):
        roll_faces((1, 2, 3), "north")
