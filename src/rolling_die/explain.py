from collections.abc import Iterator

from .constraints import checked_constraint
from .dice import roll
from .types import Board, DieState, RollSolution


def describe_start(state: DieState) -> str:
    return f"Start at {state.coordinate}: {state.orientation.describe()}"


def explain(board: Board, solution: RollSolution) -> Iterator[str]:
    """Yield one human-readable line per roll of ``solution``, in order.

    The path is re-walked from its start state; every recorded state must
    match what rolling produces.
    """
    state = solution.start
    for turn, step in enumerate(solution.steps, start=1):
        state = roll(state, step.direction)
        if state != step.state:
            raise RuntimeError(
                f"Step {turn}: rolling {step.direction} gives {state}, "
                f"but the path recorded {step.state}"
            )

        coord = state.coordinate
        constraint = checked_constraint(board, coord)
        if constraint is None:
            check = "no constraint"
        else:
            value = state.orientation.value(constraint.face)
            check = f"checked {constraint.describe()}: {constraint.face} is {value}"

        line = (
            f"Step {turn}: rolled {step.direction} to {coord}; "
            f"{state.orientation.describe()}; {check}"
        )
        if board.is_goal_coordinate(coord) and turn == len(solution):
            line += "; goal reached"
        yield line
