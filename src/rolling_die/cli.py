from __future__ import annotations

import argparse
from pathlib import Path

from .agony import describe_faces, explain_agony, solve_agony
from .api import resolve_puzzle_asset
from .explain import describe_start, explain
from .grids import render_board
from .interactive import interactive_path_viewer
from .plotting import plot_roll_path
from .puzzles import agony_board, default_board
from .search import solve, solve_pool
from .types import Board
from .yaml_io import load_puzzle_yaml, write_puzzle_yaml


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rolling-die",
        description="Find the shortest sequence of die rolls solving a grid puzzle.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default="puzzle.yaml",
        help="Path to YAML puzzle definition (falls back to the built-in puzzle)",
    )
    parser.add_argument(
        "--puzzle",
        type=str,
        default=None,
        help="Name of a puzzle under assets/puzzles (overrides --config)",
    )
    parser.add_argument(
        "--variant",
        choices=("roll", "agony"),
        default="roll",
        help="'roll' for constraint boards, 'agony' for the built-in Die Agony board",
    )
    parser.add_argument(
        "-e",
        "--explain",
        action="store_true",
        help="Print a step-by-step explanation of the solution",
    )
    parser.add_argument(
        "--write-template",
        action="store_true",
        help="Write the built-in puzzle as YAML to --config and exit",
    )
    parser.add_argument(
        "--max-solutions",
        type=int,
        default=1,
        help="Also count up to this many distinct shortest solutions",
    )
    parser.add_argument(
        "--max-turns",
        type=int,
        default=None,
        help="Turn limit for the agony variant search",
    )
    parser.add_argument(
        "--plot-html",
        type=str,
        default=None,
        help="Write an HTML plot of the solution to this path",
    )
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Open interactive viewer to step through shortest solutions",
    )
    return parser


def _load_board(args: argparse.Namespace) -> Board:
    if args.puzzle:
        return load_puzzle_yaml(resolve_puzzle_asset(args.puzzle))
    config_path = Path(args.config)
    if config_path.exists():
        return load_puzzle_yaml(config_path)
    print(f"Config not found: {config_path}. Using built-in puzzle.")
    return default_board()


def _run_agony(args: argparse.Namespace) -> int:
    solution = solve_agony(agony_board(), max_turns=args.max_turns)
    if solution is None:
        print("Oops, no solution found.")
        return 1

    print(f"The sum of values in the unvisited cells is {solution.unvisited_sum}.")
    print(f"Turns: {len(solution)}")
    if args.explain:
        print(f"We started with the following die: {describe_faces(solution.initial_die)}")
        for line in explain_agony(solution):
            print(line)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    if args.max_solutions < 1:
        print("--max-solutions must be >= 1")
        return 2

    if args.variant == "agony":
        return _run_agony(args)

    if args.write_template:
        write_puzzle_yaml(args.config, default_board(), overwrite=True)
        print(f"Wrote template config to {args.config}")
        return 0

    board = _load_board(args)
    result = solve(board)
    print(
        f"Searched {board.name}: expanded {result.expanded} states, "
        f"visited {result.visited}."
    )

    if result.solution is None:
        print("Unsolvable: no sequence of rolls reaches the goal.")
        print(render_board(board))
        return 1

    solution = result.solution
    print(f"Shortest solution: {len(solution)} rolls")
    print("Rolls: " + (", ".join(solution.directions) or "(none)"))
    print("Cells: " + " -> ".join(str(c) for c in solution.coordinates))
    print(render_board(board, visited=solution.coordinates))

    if args.explain:
        print(describe_start(solution.start))
        for line in explain(board, solution):
            print(line)

    if args.max_solutions > 1 or args.interactive:
        pool = solve_pool(board, max_solutions=args.max_solutions)
        print(f"Distinct shortest solutions (up to {args.max_solutions}): {len(pool)}")
    else:
        pool = [solution]

    if args.plot_html:
        plot_roll_path(board, solution).write_html(args.plot_html)
        print(f"Wrote plot to {args.plot_html}")

    if args.interactive:
        interactive_path_viewer(board=board, solutions=pool)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
