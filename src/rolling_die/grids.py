from collections.abc import Iterable, Sequence

from .types import (
    Board,
    Constraint,
    Coordinate,
    Direction,
    Orientation,
    STANDARD_ORIENTATION,
)

DIRECTION_OFFSETS: dict[Direction, Coordinate] = {
    "north": (-1, 0),
    "east": (0, 1),
    "south": (1, 0),
    "west": (0, -1),
}


def neighbor(coord: Coordinate, direction: Direction) -> Coordinate:
    dr, dc = DIRECTION_OFFSETS[direction]
    return (coord[0] + dr, coord[1] + dc)


def direction_between(a: Coordinate, b: Coordinate) -> Direction:
    """Direction of the single roll that moves from ``a`` to ``b``."""
    delta = (b[0] - a[0], b[1] - a[1])
    for direction, offset in DIRECTION_OFFSETS.items():
        if offset == delta:
            return direction
    raise ValueError(f"{a} and {b} are not orthogonally adjacent")


def _parse_constraint(token: str, label: str) -> Constraint | None:
    if token == ".":
        return None
    if not token.isdigit():
        raise ValueError(f"{label}: invalid token {token!r}")
    values = {int(ch) for ch in token}
    if len(values) != len(token):
        raise ValueError(f"{label}: repeated value in {token!r}")
    return Constraint(frozenset(values))


def board_from_rows(
    rows: Sequence[str],
    *,
    start_orientation: Orientation = STANDARD_ORIENTATION,
    goal_orientation: Orientation | None = None,
    name: str = "board",
) -> Board:
    """Build a board from whitespace-separated text rows.

    Tokens:
      - ``.``: free cell
      - ``3``: bottom face must be 3
      - ``25``: bottom face must be 2 or 5
      - ``S`` / ``G``: start / goal cell, optionally ``G:6`` or ``S:25``
        to constrain it as well
    """
    if not rows:
        raise ValueError("rows must be non-empty")

    grid = [row.split() for row in rows]
    width = len(grid[0])
    if width == 0 or any(len(r) != width for r in grid):
        raise ValueError("all rows must have the same, non-zero number of cells")

    start: Coordinate | None = None
    goal: Coordinate | None = None
    constraints: dict[Coordinate, Constraint] = {}

    for r, row in enumerate(grid):
        for c, token in enumerate(row):
            label = f"row {r} col {c}"
            head, _, rest = token.partition(":")
            if head in ("S", "G"):
                if head == "S":
                    if start is not None:
                        raise ValueError(f"{label}: second start cell")
                    start = (r, c)
                else:
                    if goal is not None:
                        raise ValueError(f"{label}: second goal cell")
                    goal = (r, c)
                token = rest or "."
            constraint = _parse_constraint(token, label)
            if constraint is not None:
                constraints[(r, c)] = constraint

    if start is None:
        raise ValueError("rows define no start cell 'S'")
    if goal is None:
        raise ValueError("rows define no goal cell 'G'")

    return Board(
        rows=len(grid),
        cols=width,
        start=start,
        goal=goal,
        start_orientation=start_orientation,
        goal_orientation=goal_orientation,
        constraints=constraints,
        name=name,
    )


def _cell_token(board: Board, coord: Coordinate) -> str:
    constraint = board.constraints.get(coord)
    values = (
        "".join(str(v) for v in sorted(constraint.values)) if constraint else ""
    )
    if coord == board.start:
        return f"S:{values}" if values else "S"
    if coord == board.goal:
        return f"G:{values}" if values else "G"
    return values or "."


def board_to_rows(board: Board) -> list[str]:
    """Inverse of :func:`board_from_rows` for bottom-face constraints."""
    return [
        " ".join(_cell_token(board, (r, c)) for c in range(board.cols))
        for r in range(board.rows)
    ]


def render_board(board: Board, visited: Iterable[Coordinate] = ()) -> str:
    """Plain-text board; cells in ``visited`` are shown in brackets."""
    marked = set(visited)
    tokens = [
        [_cell_token(board, (r, c)) for c in range(board.cols)]
        for r in range(board.rows)
    ]
    width = max(len(t) for row in tokens for t in row) + 2
    lines = []
    for r, row in enumerate(tokens):
        cells = []
        for c, t in enumerate(row):
            t = f"[{t}]" if (r, c) in marked else f" {t} "
            cells.append(t.center(width))
        lines.append("".join(cells).rstrip())
    return "\n".join(lines)
