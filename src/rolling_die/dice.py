from collections import deque
from typing import TypeVar

from .grids import neighbor
from .types import DIRECTIONS, Board, DieState, Direction, Orientation

T = TypeVar("T")

# new_faces[i] = old_faces[_ROLL_SOURCE[direction][i]], faces in FACES order
# (top, bottom, north, south, east, west).
_ROLL_SOURCE: dict[Direction, tuple[int, ...]] = {
    "north": (3, 2, 0, 1, 4, 5),
    "south": (2, 3, 1, 0, 4, 5),
    "east": (5, 4, 2, 3, 0, 1),
    "west": (4, 5, 2, 3, 1, 0),
}

OPPOSITE_DIRECTION: dict[Direction, Direction] = {
    "north": "south",
    "south": "north",
    "east": "west",
    "west": "east",
}


def roll_faces(faces: tuple[T, ...], direction: Direction) -> tuple[T, ...]:
    """Permute six face values for one roll in ``direction``.

    The face on the travel side goes to the bottom, the bottom goes to the
    side opposite travel, that side goes to the top and the top goes to the
    travel side. Works on any 6-tuple, including partially known faces.
    """
    if len(faces) != 6:
        raise ValueError(f"faces must have length 6, got {len(faces)}")
    src = _ROLL_SOURCE[direction]
    return tuple(faces[i] for i in src)


def roll_orientation(orientation: Orientation, direction: Direction) -> Orientation:
    return Orientation(roll_faces(orientation.faces, direction))


def roll(state: DieState, direction: Direction) -> DieState:
    """Roll one cell in ``direction``. Pure; does not look at any board."""
    return DieState(
        coordinate=neighbor(state.coordinate, direction),
        orientation=roll_orientation(state.orientation, direction),
    )


def roll_on(board: Board, state: DieState, direction: Direction) -> DieState:
    """Like :func:`roll`, but raise ``OutOfBoundsError`` when leaving ``board``."""
    rolled = roll(state, direction)
    board.cell(rolled.coordinate)
    return rolled


def reachable_orientations(orientation: Orientation) -> list[Orientation]:
    """All orientations reachable from ``orientation`` by rolling, BFS order."""
    seen = {orientation}
    order = [orientation]
    queue = deque([orientation])
    while queue:
        current = queue.popleft()
        for direction in DIRECTIONS:
            nxt = roll_orientation(current, direction)
            if nxt not in seen:
                seen.add(nxt)
                order.append(nxt)
                queue.append(nxt)
    return order
