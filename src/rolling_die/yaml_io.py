from pathlib import Path

import yaml

from .types import FACES, Board, Constraint, Coordinate, Orientation


def _coerce_int(value: object, *, label: str) -> int:
    if isinstance(value, bool):
        raise TypeError(f"{label} must be an integer, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise ValueError(f"{label} invalid integer string: {value!r}") from None
    raise TypeError(f"{label} must be an integer, got {type(value).__name__}")


def _coerce_coordinate(value: object, *, label: str) -> Coordinate:
    if not isinstance(value, (list, tuple)):
        raise TypeError(f"{label} must be a [row, col] list")
    if len(value) != 2:
        raise ValueError(f"{label} must have length 2")
    return (
        _coerce_int(value[0], label=f"{label}[0]"),
        _coerce_int(value[1], label=f"{label}[1]"),
    )


def _coerce_orientation(value: object, *, label: str) -> Orientation:
    if not isinstance(value, dict):
        raise TypeError(f"{label} must be a mapping of face -> value")
    unknown = sorted(str(k) for k in value if k not in FACES)
    if unknown:
        raise ValueError(f"{label} has unknown faces: {unknown}")
    faces = {
        str(k): _coerce_int(v, label=f"{label}.{k}") for k, v in value.items()
    }
    return Orientation.from_mapping(faces)


def _coerce_constraint(item: object, *, label: str) -> tuple[Coordinate, Constraint]:
    if not isinstance(item, dict):
        raise ValueError(f"{label} must be a mapping")
    coord = _coerce_coordinate(item.get("cell"), label=f"{label}.cell")
    face = item.get("face", "bottom")
    if face not in FACES:
        raise ValueError(f"{label}.face unknown face: {face!r}")

    has_exact = "exact" in item
    has_one_of = "one_of" in item
    if has_exact == has_one_of:
        raise ValueError(f"{label} needs exactly one of 'exact' or 'one_of'")
    if has_exact:
        return coord, Constraint.exact(
            _coerce_int(item["exact"], label=f"{label}.exact"), face
        )

    values = item["one_of"]
    if not isinstance(values, (list, tuple)):
        raise TypeError(f"{label}.one_of must be a list")
    return coord, Constraint.one_of(
        [_coerce_int(v, label=f"{label}.one_of[{i}]") for i, v in enumerate(values)],
        face,
    )


def board_from_mapping(raw: object) -> Board:
    """Build a board from an already parsed YAML document."""
    if not isinstance(raw, dict):
        raise ValueError("YAML root must be a mapping")

    rows = _coerce_int(raw.get("rows"), label="rows")
    cols = _coerce_int(raw.get("cols"), label="cols")
    start = _coerce_coordinate(raw.get("start"), label="start")
    goal = _coerce_coordinate(raw.get("goal"), label="goal")

    start_node = raw.get("start_orientation")
    if start_node is None:
        raise ValueError("YAML must contain mapping key 'start_orientation'")
    start_orientation = _coerce_orientation(start_node, label="start_orientation")

    goal_node = raw.get("goal_orientation")
    if goal_node is None:
        goal_orientation = None
    elif goal_node == "start":
        goal_orientation = start_orientation
    else:
        goal_orientation = _coerce_orientation(goal_node, label="goal_orientation")

    constraints_node = raw.get("constraints") or []
    if not isinstance(constraints_node, list):
        raise ValueError("constraints must be a list")
    constraints: dict[Coordinate, Constraint] = {}
    for idx, item in enumerate(constraints_node):
        coord, constraint = _coerce_constraint(item, label=f"constraints[{idx}]")
        if coord in constraints:
            raise ValueError(f"constraints[{idx}]: cell {coord} constrained twice")
        constraints[coord] = constraint

    name = raw.get("name", "board")
    if not isinstance(name, str) or not name:
        raise ValueError("name must be a non-empty string")

    return Board(
        rows=rows,
        cols=cols,
        start=start,
        goal=goal,
        start_orientation=start_orientation,
        goal_orientation=goal_orientation,
        constraints=constraints,
        name=name,
    )


def load_puzzle_yaml(path: str | Path) -> Board:
    """Load a puzzle definition from a YAML file."""
    path = Path(path)
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    return board_from_mapping(raw)


def dump_puzzle_yaml(board: Board) -> str:
    """Construct a YAML document (as string) describing ``board``."""
    constraints = []
    for (r, c), constraint in sorted(board.constraints.items()):
        item: dict[str, object] = {"cell": [r, c]}
        if constraint.kind == "exact":
            item["exact"] = min(constraint.values)
        else:
            item["one_of"] = sorted(constraint.values)
        if constraint.face != "bottom":
            item["face"] = constraint.face
        constraints.append(item)

    if board.goal_orientation is None:
        goal_orientation: object = None
    elif board.goal_orientation == board.start_orientation:
        goal_orientation = "start"
    else:
        goal_orientation = board.goal_orientation.as_dict()

    doc = {
        "version": 1,
        "name": board.name,
        "rows": board.rows,
        "cols": board.cols,
        "start": list(board.start),
        "goal": list(board.goal),
        "start_orientation": board.start_orientation.as_dict(),
        "goal_orientation": goal_orientation,
        "constraints": constraints,
    }
    return yaml.safe_dump(doc, sort_keys=False)


def write_puzzle_yaml(
    path: str | Path, board: Board, *, overwrite: bool = False
) -> None:
    p = Path(path)
    if p.exists() and not overwrite:
        raise FileExistsError(f"Refusing to overwrite existing file: {p}")
    p.write_text(dump_puzzle_yaml(board), encoding="utf-8")
