from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal

Coordinate = tuple[int, int]
Face = Literal["top", "bottom", "north", "south", "east", "west"]
Direction = Literal["north", "east", "south", "west"]

FACES: tuple[Face, ...] = ("top", "bottom", "north", "south", "east", "west")
DIRECTIONS: tuple[Direction, ...] = ("north", "east", "south", "west")

OPPOSITE_FACE: dict[Face, Face] = {
    "top": "bottom",
    "bottom": "top",
    "north": "south",
    "south": "north",
    "east": "west",
    "west": "east",
}

DIE_VALUES: frozenset[int] = frozenset(range(1, 7))


class OutOfBoundsError(IndexError):
    """A coordinate lies outside the board."""


@dataclass(frozen=True)
class Orientation:
    """Face values of the die, indexed in ``FACES`` order."""

    faces: tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "faces", tuple(self.faces))
        if len(self.faces) != 6:
            raise ValueError(f"Orientation needs 6 face values, got {self.faces}")
        if set(self.faces) != DIE_VALUES:
            raise ValueError(
                f"Orientation faces must be a permutation of 1..6, got {self.faces}"
            )
        for face, other in (("top", "bottom"), ("north", "south"), ("east", "west")):
            a = self.faces[FACES.index(face)]
            b = self.faces[FACES.index(other)]
            if a + b != 7:
                raise ValueError(
                    f"Opposite faces {face}={a} and {other}={b} must sum to 7"
                )

    @classmethod
    def from_mapping(cls, values: Mapping[str, int]) -> "Orientation":
        missing = [f for f in FACES if f not in values]
        if missing:
            raise ValueError(f"Orientation is missing faces: {missing}")
        unknown = sorted(set(values) - set(FACES))
        if unknown:
            raise ValueError(f"Unknown faces in orientation: {unknown}")
        return cls(tuple(int(values[f]) for f in FACES))

    def value(self, face: Face) -> int:
        return self.faces[FACES.index(face)]

    @property
    def top(self) -> int:
        return self.faces[0]

    @property
    def bottom(self) -> int:
        return self.faces[1]

    def as_dict(self) -> dict[str, int]:
        return dict(zip(FACES, self.faces, strict=True))

    def describe(self) -> str:
        return " ".join(f"{f}={v}" for f, v in zip(FACES, self.faces, strict=True))


STANDARD_ORIENTATION = Orientation((1, 6, 2, 5, 3, 4))


@dataclass(frozen=True)
class Constraint:
    """Allowed values for one face of the die while it sits on a cell."""

    values: frozenset[int]
    face: Face = "bottom"

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", frozenset(self.values))
        if not self.values:
            raise ValueError("Constraint needs at least one allowed value")
        if not self.values <= DIE_VALUES:
            raise ValueError(
                f"Constraint values must lie in 1..6, got {sorted(self.values)}"
            )
        if self.face not in FACES:
            raise ValueError(f"Unknown face: {self.face!r}")

    @classmethod
    def exact(cls, value: int, face: Face = "bottom") -> "Constraint":
        return cls(frozenset({int(value)}), face)

    @classmethod
    def one_of(cls, values, face: Face = "bottom") -> "Constraint":
        return cls(frozenset(int(v) for v in values), face)

    @property
    def kind(self) -> Literal["exact", "one_of"]:
        return "exact" if len(self.values) == 1 else "one_of"

    def satisfied_by(self, orientation: Orientation) -> bool:
        return orientation.value(self.face) in self.values

    def describe(self) -> str:
        if self.kind == "exact":
            (v,) = self.values
            return f"{self.face} == {v}"
        allowed = ", ".join(str(v) for v in sorted(self.values))
        return f"{self.face} in {{{allowed}}}"


@dataclass(frozen=True)
class Cell:
    coordinate: Coordinate
    constraint: Constraint | None = None
    is_start: bool = False
    is_goal: bool = False


@dataclass(frozen=True)
class Board:
    """Static puzzle definition; never mutated once built."""

    rows: int
    cols: int
    start: Coordinate
    goal: Coordinate
    start_orientation: Orientation = STANDARD_ORIENTATION
    goal_orientation: Orientation | None = None
    constraints: Mapping[Coordinate, Constraint] = field(default_factory=dict)
    name: str = "board"

    def __post_init__(self) -> None:
        if self.rows < 1 or self.cols < 1:
            raise ValueError(f"Board must be at least 1x1, got {self.rows}x{self.cols}")
        if not self.contains(self.start):
            raise ValueError(f"Start cell {self.start} is not on the board")
        if not self.contains(self.goal):
            raise ValueError(f"Goal cell {self.goal} is not on the board")
        for coord in self.constraints:
            if not self.contains(coord):
                raise ValueError(f"Constrained cell {coord} is not on the board")
        object.__setattr__(
            self, "constraints", MappingProxyType(dict(self.constraints))
        )

    @property
    def cell_count(self) -> int:
        return self.rows * self.cols

    def contains(self, coord: Coordinate) -> bool:
        r, c = coord
        return 0 <= r < self.rows and 0 <= c < self.cols

    def cell(self, coord: Coordinate) -> Cell:
        if not self.contains(coord):
            raise OutOfBoundsError(
                f"{coord} is outside the {self.rows}x{self.cols} board"
            )
        return Cell(
            coordinate=coord,
            constraint=self.constraints.get(coord),
            is_start=coord == self.start,
            is_goal=coord == self.goal,
        )

    def is_goal_coordinate(self, coord: Coordinate) -> bool:
        return coord == self.goal

    def coordinates(self) -> list[Coordinate]:
        return [(r, c) for r in range(self.rows) for c in range(self.cols)]


@dataclass(frozen=True)
class DieState:
    coordinate: Coordinate
    orientation: Orientation


@dataclass(frozen=True)
class Step:
    direction: Direction
    state: DieState


@dataclass(frozen=True)
class RollSolution:
    start: DieState
    steps: tuple[Step, ...]

    def __len__(self) -> int:
        return len(self.steps)

    @property
    def directions(self) -> tuple[Direction, ...]:
        return tuple(s.direction for s in self.steps)

    @property
    def states(self) -> tuple[DieState, ...]:
        return (self.start, *(s.state for s in self.steps))

    @property
    def coordinates(self) -> tuple[Coordinate, ...]:
        return tuple(s.coordinate for s in self.states)

    @property
    def final_state(self) -> DieState:
        return self.steps[-1].state if self.steps else self.start


@dataclass(frozen=True)
class SearchResult:
    solution: RollSolution | None
    expanded: int
    visited: int

    @property
    def solved(self) -> bool:
        return self.solution is not None
