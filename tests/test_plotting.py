import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pytest  # noqa: E402

from rolling_die.grids import board_from_rows  # noqa: E402
from rolling_die.interactive import draw_roll_step, step_status  # noqa: E402
from rolling_die.plotting import (  # noqa: E402
    board_categories,
    plot_board,
    plot_roll_path,
)
from rolling_die.puzzles import default_board  # noqa: E402
from rolling_die.search import solve  # noqa: E402


def test_board_categories():
    grid = board_categories(board_from_rows(["S 3 25", ". . G"]))
    assert grid.tolist() == [[3, 1, 2], [0, 0, 4]]


def test_plot_board_single_heatmap():
    fig = plot_board(default_board())
    assert len(fig.data) == 1
    assert fig.layout.title.text == "corner-to-corner"


def test_plot_roll_path_partial_step():
    board = default_board()
    solution = solve(board).solution
    fig = plot_roll_path(board, solution, step=3)
    path = fig.data[1]
    assert len(path.x) == 4
    assert list(path.text) == [str(s.orientation.bottom) for s in solution.states[:4]]
    pips = fig.data[2]
    assert len(pips.x) == solution.states[3].orientation.bottom


def test_plot_roll_path_rejects_bad_step():
    board = default_board()
    solution = solve(board).solution
    with pytest.raises(ValueError):
        plot_roll_path(board, solution, step=len(solution) + 1)


def test_draw_roll_step_on_matplotlib_axes():
    board = default_board()
    solution = solve(board).solution
    fig, ax = plt.subplots()
    draw_roll_step(ax, board, solution, len(solution))
    assert ax.get_title() == solution.final_state.orientation.describe()
    plt.close(fig)


def test_step_status_clamps_to_available_solutions():
    solution = solve(default_board()).solution
    third = solution.steps[2].direction
    assert step_status([solution], 1, 3) == f"solution 1/1, step 3/8 ({third})"
    assert step_status([solution], 0, 0) == "solution 1/1, step 0/8 (start)"
    assert step_status([solution], 0, 20).startswith("solution 1/1, step 8/8")
