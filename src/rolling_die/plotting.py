import numpy as np
import plotly.graph_objects as go

from .types import Board, RollSolution

# free, exact, one-of, start, goal
_CATEGORY_COLORS = ["#ffffff", "#AB63FA", "#19D3F3", "#00CC96", "#FFA15A"]


def _stepped_colorscale(colors: list[str]) -> list[tuple[float, str]]:
    """One flat band per category so integer z values never blend."""
    n = len(colors)
    scale: list[tuple[float, str]] = []
    for i, color in enumerate(colors):
        scale += [(i / n, color), ((i + 1) / n, color)]
    return scale


_Q = 0.25
# pip positions relative to a cell centre, keyed by face value
_PIPS: dict[int, list[tuple[float, float]]] = {
    1: [(0.0, 0.0)],
    2: [(-_Q, -_Q), (_Q, _Q)],
    3: [(-_Q, -_Q), (0.0, 0.0), (_Q, _Q)],
    4: [(-_Q, -_Q), (-_Q, _Q), (_Q, -_Q), (_Q, _Q)],
    5: [(-_Q, -_Q), (-_Q, _Q), (0.0, 0.0), (_Q, -_Q), (_Q, _Q)],
    6: [(-_Q, -_Q), (-_Q, 0.0), (-_Q, _Q), (_Q, -_Q), (_Q, 0.0), (_Q, _Q)],
}


def board_categories(board: Board) -> np.ndarray:
    """Integer grid: 0 free, 1 exact, 2 one-of, 3 start, 4 goal."""
    grid = np.zeros((board.rows, board.cols), dtype=int)
    for (r, c), constraint in board.constraints.items():
        grid[r, c] = 1 if constraint.kind == "exact" else 2
    grid[board.start] = 3
    grid[board.goal] = 4
    return grid


def _cell_labels(board: Board) -> list[list[str]]:
    labels = [["" for _ in range(board.cols)] for _ in range(board.rows)]
    for (r, c), constraint in board.constraints.items():
        labels[r][c] = ",".join(str(v) for v in sorted(constraint.values))
    sr, sc = board.start
    labels[sr][sc] = ("S " + labels[sr][sc]).strip()
    gr, gc = board.goal
    labels[gr][gc] = ("G " + labels[gr][gc]).strip()
    return labels


def _style_axes(fig: go.Figure) -> None:
    fig.update_xaxes(
        showticklabels=False,
        showgrid=False,
        zeroline=False,
        constrain="domain",
    )
    fig.update_yaxes(
        showticklabels=False,
        showgrid=False,
        zeroline=False,
        scaleanchor="x",
        autorange="reversed",
    )


def plot_board(board: Board) -> go.Figure:
    """Plot the board with its constraints, without any path."""
    grid = board_categories(board)
    fig = go.Figure(
        data=[
            go.Heatmap(
                z=grid,
                zmin=0,
                zmax=len(_CATEGORY_COLORS) - 1,
                colorscale=_stepped_colorscale(_CATEGORY_COLORS),
                showscale=False,
                text=_cell_labels(board),
                texttemplate="%{text}",
                hoverinfo="skip",
                xgap=1,
                ygap=1,
            )
        ]
    )
    fig.update_layout(
        title=board.name,
        margin=dict(l=10, r=10, t=50, b=10),
        height=80 * board.rows + 80,
    )
    _style_axes(fig)
    return fig


def plot_roll_path(
    board: Board, solution: RollSolution, *, step: int | None = None
) -> go.Figure:
    """Plot ``solution`` on the board up to ``step`` (default: the whole path).

    The path is drawn through cell centres, each visited cell is labelled with
    the bottom face value after the roll, and the die's current bottom face is
    drawn as pips.
    """
    n_steps = len(solution)
    if step is None:
        step = n_steps
    if not 0 <= step <= n_steps:
        raise ValueError(f"step must be within 0..{n_steps}, got {step}")

    fig = plot_board(board)
    states = solution.states[: step + 1]
    xs = [s.coordinate[1] for s in states]
    ys = [s.coordinate[0] for s in states]
    labels = [str(s.orientation.bottom) for s in states]

    fig.add_trace(
        go.Scatter(
            x=xs,
            y=ys,
            mode="lines+markers+text",
            text=labels,
            textposition="top right",
            line=dict(width=3, color="#EF553B"),
            marker=dict(size=10, color="#EF553B"),
            showlegend=False,
            hoverinfo="skip",
        )
    )

    current = states[-1]
    pip_x, pip_y = [], []
    for dx, dy in _PIPS[current.orientation.bottom]:
        pip_x.append(current.coordinate[1] + dx)
        pip_y.append(current.coordinate[0] + dy)
    fig.add_trace(
        go.Scatter(
            x=pip_x,
            y=pip_y,
            mode="markers",
            marker=dict(size=8, color="black", line=dict(width=0)),
            showlegend=False,
            hoverinfo="skip",
        )
    )

    fig.update_layout(title=f"{board.name}: step {step}/{n_steps}")
    return fig
