from .types import Board, Constraint, Coordinate, DieState


def checked_constraint(board: Board, coord: Coordinate) -> Constraint | None:
    """Constraint enforced when the die enters ``coord``, if any."""
    return board.cell(coord).constraint


def is_legal(board: Board, state: DieState) -> bool:
    """True when the die satisfies the constraint of the cell it sits on."""
    constraint = checked_constraint(board, state.coordinate)
    return constraint is None or constraint.satisfied_by(state.orientation)


def is_goal(board: Board, state: DieState) -> bool:
    """True on the goal cell, in the goal orientation when the board has one.

    Legality along the way is not re-checked: the search only ever reaches
    legal states.
    """
    if not board.is_goal_coordinate(state.coordinate):
        return False
    if board.goal_orientation is None:
        return True
    return state.orientation == board.goal_orientation
