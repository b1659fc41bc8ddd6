from __future__ import annotations

import matplotlib.pyplot as plt
import seaborn as sns
from matplotlib.colors import ListedColormap
from matplotlib.widgets import Button, Slider

from .plotting import board_categories
from .types import Board, RollSolution

_COLORS = ["#ffffff", "#c9b3f5", "#a8ecf7", "#99e6cf", "#ffd2ad"]


def draw_roll_step(ax, board: Board, solution: RollSolution, step: int) -> None:
    """Draw the board, the path up to ``step`` and the die faces at that step."""
    ax.clear()
    ax.imshow(
        board_categories(board),
        cmap=ListedColormap(_COLORS),
        vmin=0,
        vmax=len(_COLORS) - 1,
    )
    for (r, c), constraint in board.constraints.items():
        ax.text(
            c,
            r + 0.35,
            ",".join(str(v) for v in sorted(constraint.values)),
            ha="center",
            va="center",
            fontsize=8,
            color="dimgray",
        )

    states = solution.states[: step + 1]
    ax.plot(
        [s.coordinate[1] for s in states],
        [s.coordinate[0] for s in states],
        "-o",
        color="#EF553B",
        linewidth=2,
    )
    current = states[-1]
    r, c = current.coordinate
    ax.text(
        c,
        r,
        str(current.orientation.top),
        ha="center",
        va="center",
        fontsize=14,
        fontweight="bold",
        bbox=dict(boxstyle="square", facecolor="white", edgecolor="black"),
    )

    ax.set_xticks(range(board.cols))
    ax.set_yticks(range(board.rows))
    ax.set_title(current.orientation.describe(), fontsize=9)


def _clamp(value: float, upper: int) -> int:
    return max(0, min(int(value), upper))


def step_status(
    solutions: list[RollSolution], solution_val: float, step_val: float
) -> str:
    """Status line for slider positions, clamped to the solutions on hand."""
    index = _clamp(solution_val, len(solutions) - 1)
    solution = solutions[index]
    step = _clamp(step_val, len(solution))
    direction = solution.steps[step - 1].direction if step else "start"
    return (
        f"solution {index + 1}/{len(solutions)}, "
        f"step {step}/{len(solution)} ({direction})"
    )


def interactive_path_viewer(
    *,
    board: Board,
    solutions: list[RollSolution],
) -> None:
    """Interactive viewer to step through rolls and switch among solutions."""
    sns.set_theme(style="white")

    if not solutions:
        raise ValueError("solutions is empty")

    fig = plt.figure(figsize=(8, 8))
    ax = fig.add_axes((0.08, 0.25, 0.84, 0.7))

    ax_solution = fig.add_axes((0.2, 0.14, 0.6, 0.03))
    solution_slider = Slider(
        ax_solution,
        "solution",
        0,
        max(1, len(solutions) - 1),
        valinit=0,
        valstep=1,
    )
    ax_step = fig.add_axes((0.2, 0.09, 0.6, 0.03))
    step_slider = Slider(
        ax_step, "step", 0, max(1, len(solutions[0])), valinit=0, valstep=1
    )

    ax_prev = fig.add_axes((0.2, 0.02, 0.1, 0.04))
    btn_prev = Button(ax_prev, "Prev")
    ax_next = fig.add_axes((0.32, 0.02, 0.1, 0.04))
    btn_next = Button(ax_next, "Next")

    ax_text = fig.add_axes((0.48, 0.01, 0.45, 0.06))
    ax_text.axis("off")
    status_text = ax_text.text(0.0, 0.5, "", va="center")

    def _current() -> RollSolution:
        return solutions[_clamp(solution_slider.val, len(solutions) - 1)]

    def _sync_step_limits() -> None:
        n = len(_current())
        step_slider.valmax = max(1, n)
        step_slider.ax.set_xlim(step_slider.valmin, step_slider.valmax)
        if step_slider.val > n:
            step_slider.set_val(n)

    def _render() -> None:
        solution = _current()
        draw_roll_step(ax, board, solution, _clamp(step_slider.val, len(solution)))
        status_text.set_text(
            step_status(solutions, solution_slider.val, step_slider.val)
        )
        fig.canvas.draw_idle()

    def _on_solution(_val: float) -> None:
        _sync_step_limits()
        _render()

    def _on_step(_val: float) -> None:
        _render()

    def _on_prev(_event) -> None:
        step_slider.set_val(max(step_slider.valmin, step_slider.val - 1))

    def _on_next(_event) -> None:
        step_slider.set_val(min(len(_current()), step_slider.val + 1))

    solution_slider.on_changed(_on_solution)
    step_slider.on_changed(_on_step)
    btn_prev.on_clicked(_on_prev)
    btn_next.on_clicked(_on_next)

    _sync_step_limits()
    _render()
    plt.show()
