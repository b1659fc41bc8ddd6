"""The "Die Agony" variant.

The die starts with six unknown faces. On turn ``n`` it rolls onto a new cell
and the score moves from the previous cell's value to ``score + n * top``,
which must equal the new cell's value. An unknown top face is learned from
that equation when it has an integer solution. Reaching the end cell solves
the puzzle; the answer is the sum of the cells the die never visited.
"""

from collections import deque
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from .dice import OPPOSITE_DIRECTION, roll_faces
from .grids import direction_between, neighbor
from .types import DIRECTIONS, FACES, Coordinate, Direction, OutOfBoundsError

Faces = tuple[int | None, ...]

UNKNOWN_FACES: Faces = (None,) * 6


@dataclass(frozen=True)
class AgonyBoard:
    values: tuple[tuple[int, ...], ...]
    start: Coordinate
    end: Coordinate

    def __post_init__(self) -> None:
        values = tuple(tuple(int(v) for v in row) for row in self.values)
        if not values or not values[0]:
            raise ValueError("values must be non-empty")
        if any(len(row) != len(values[0]) for row in values):
            raise ValueError("values must be rectangular")
        object.__setattr__(self, "values", values)
        if not self.contains(self.start):
            raise ValueError(f"Start cell {self.start} is not on the board")
        if not self.contains(self.end):
            raise ValueError(f"End cell {self.end} is not on the board")

    @property
    def rows(self) -> int:
        return len(self.values)

    @property
    def cols(self) -> int:
        return len(self.values[0])

    def contains(self, coord: Coordinate) -> bool:
        r, c = coord
        return 0 <= r < self.rows and 0 <= c < self.cols

    def value(self, coord: Coordinate) -> int:
        if not self.contains(coord):
            raise OutOfBoundsError(
                f"{coord} is outside the {self.rows}x{self.cols} board"
            )
        return self.values[coord[0]][coord[1]]

    def coordinates(self) -> list[Coordinate]:
        return [(r, c) for r in range(self.rows) for c in range(self.cols)]


@dataclass(frozen=True)
class AgonyState:
    coordinate: Coordinate
    turn: int
    faces: Faces = UNKNOWN_FACES

    @property
    def top(self) -> int | None:
        return self.faces[0]


def describe_faces(faces: Faces) -> str:
    return " ".join(
        f"{f}={'?' if v is None else v}" for f, v in zip(FACES, faces, strict=True)
    )


@dataclass(frozen=True)
class AgonySolution:
    board: AgonyBoard
    states: tuple[AgonyState, ...]
    directions: tuple[Direction, ...]

    def __len__(self) -> int:
        return len(self.directions)

    @property
    def coordinates(self) -> tuple[Coordinate, ...]:
        return tuple(s.coordinate for s in self.states)

    @property
    def visited_cells(self) -> frozenset[Coordinate]:
        return frozenset(self.coordinates)

    @property
    def unvisited_sum(self) -> int:
        return sum(
            self.board.value(coord)
            for coord in self.board.coordinates()
            if coord not in self.visited_cells
        )

    @property
    def final_die(self) -> Faces:
        return self.states[-1].faces

    @property
    def initial_die(self) -> Faces:
        """Faces at the start, filled in with everything learned on the way."""
        faces = self.final_die
        for direction in reversed(self.directions):
            faces = roll_faces(faces, OPPOSITE_DIRECTION[direction])
        return faces


def advance(
    board: AgonyBoard, state: AgonyState, direction: Direction
) -> AgonyState | None:
    """Roll one turn; None when the score rule cannot hold on the new cell.

    Raises ``OutOfBoundsError`` when the roll leaves the board.
    """
    target = neighbor(state.coordinate, direction)
    cell_value = board.value(target)
    score = board.value(state.coordinate)
    turn = state.turn + 1
    faces = roll_faces(state.faces, direction)

    top = faces[0]
    if top is None:
        diff = cell_value - score
        if diff % turn != 0:
            return None
        faces = (diff // turn, *faces[1:])
    elif score + turn * top != cell_value:
        return None

    return AgonyState(coordinate=target, turn=turn, faces=faces)


def solve_agony(
    board: AgonyBoard, *, max_turns: int | None = None
) -> AgonySolution | None:
    """Breadth-first search for the shortest valid journey to the end cell."""
    start = AgonyState(coordinate=board.start, turn=0)
    visited: set[AgonyState] = {start}
    parents: dict[AgonyState, AgonyState] = {}
    frontier: deque[AgonyState] = deque([start])

    while frontier:
        state = frontier.popleft()
        if state.coordinate == board.end:
            return _rebuild(board, parents, start, state)
        if max_turns is not None and state.turn >= max_turns:
            continue

        for direction in DIRECTIONS:
            try:
                nxt = advance(board, state, direction)
            except OutOfBoundsError:
                continue
            if nxt is None or nxt in visited:
                continue
            visited.add(nxt)
            parents[nxt] = state
            frontier.append(nxt)

    return None


def _rebuild(
    board: AgonyBoard,
    parents: dict[AgonyState, AgonyState],
    start: AgonyState,
    goal: AgonyState,
) -> AgonySolution:
    states = [goal]
    while states[-1] != start:
        states.append(parents[states[-1]])
    states.reverse()
    directions = [
        direction_between(a.coordinate, b.coordinate)
        for a, b in zip(states, states[1:])
    ]
    return AgonySolution(
        board=board, states=tuple(states), directions=tuple(directions)
    )


def explain_agony(solution: AgonySolution) -> Iterator[str]:
    """One line per turn, replaying the journey from the reconstructed die."""
    board = solution.board
    faces = solution.initial_die
    score = board.value(solution.states[0].coordinate)
    for turn, (direction, state) in enumerate(
        zip(solution.directions, solution.states[1:], strict=True), start=1
    ):
        faces = roll_faces(faces, direction)
        top = faces[0]
        if top != state.top:
            raise RuntimeError(
                f"Turn {turn}: replayed top {top} disagrees with recorded {state.top}"
            )
        new_score = score + turn * top
        yield (
            f"Turn {turn}: rolled {direction} to {state.coordinate} (top={top}). "
            f"Score was {score}, now {score} + ({turn} x {top}) = {new_score} "
            f"(cell value = {board.value(state.coordinate)})."
        )
        score = new_score


def agony_board_from_rows(
    rows: Sequence[Sequence[int]],
    *,
    start: Coordinate | None = None,
    end: Coordinate | None = None,
) -> AgonyBoard:
    """Board with the classic corners: start south-west, end north-east."""
    height = len(rows)
    width = len(rows[0]) if rows else 0
    return AgonyBoard(
        values=tuple(tuple(r) for r in rows),
        start=start if start is not None else (height - 1, 0),
        end=end if end is not None else (0, width - 1),
    )
