from pathlib import Path

import plotly.graph_objects as go

from .plotting import plot_board, plot_roll_path
from .puzzles import default_board
from .search import solve
from .types import Board, SearchResult
from .yaml_io import load_puzzle_yaml

PUZZLE_SUFFIX = ".yaml"


def puzzles_assets_dir() -> Path:
    """Bundled puzzle files, two levels above this package."""
    return Path(__file__).resolve().parents[2] / "assets" / "puzzles"


def list_puzzle_assets() -> list[str]:
    folder = puzzles_assets_dir()
    if not folder.is_dir():
        return []
    return sorted(
        path.name for path in folder.glob(f"*{PUZZLE_SUFFIX}") if path.is_file()
    )


def resolve_puzzle_asset(name: str) -> Path:
    """Path of a bundled puzzle, by file name with or without ``.yaml``.

    Names naming another directory or a hidden file are rejected.
    """
    puzzle = (name or "").strip()
    if not puzzle:
        raise ValueError("Puzzle name is empty")
    if puzzle.startswith(".") or any(sep in puzzle for sep in ("/", "\\")):
        raise ValueError(f"Invalid puzzle name: {puzzle!r}")
    if not puzzle.lower().endswith(PUZZLE_SUFFIX):
        puzzle += PUZZLE_SUFFIX

    path = puzzles_assets_dir() / puzzle
    if not path.exists():
        raise FileNotFoundError(f"No bundled puzzle named {puzzle}")
    return path


def load_puzzle(path: str | Path | None = None) -> Board:
    """Load a puzzle YAML file, or the built-in puzzle when ``path`` is None."""
    if path is None:
        return default_board()
    return load_puzzle_yaml(path)


def solve_and_plot(
    *,
    path: str | Path | None = None,
) -> tuple[go.Figure, SearchResult]:
    """Solve a puzzle and return (figure, search result).

    An unsolvable puzzle still returns a figure, showing only the board.
    """
    board = load_puzzle(path)
    result = solve(board)
    if result.solution is None:
        return plot_board(board), result
    return plot_roll_path(board, result.solution), result
