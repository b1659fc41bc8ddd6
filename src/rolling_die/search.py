from collections import deque

from .constraints import is_goal, is_legal
from .dice import roll_on
from .types import (
    DIRECTIONS,
    Board,
    DieState,
    Direction,
    OutOfBoundsError,
    RollSolution,
    SearchResult,
    Step,
)


def start_state(board: Board) -> DieState:
    return DieState(board.start, board.start_orientation)


def reconstruct_path(
    parents: dict[DieState, tuple[DieState, Direction]],
    start: DieState,
    goal: DieState,
) -> RollSolution:
    """Follow predecessor links from ``goal`` back to ``start``."""
    steps: list[Step] = []
    state = goal
    while state != start:
        try:
            prev, direction = parents[state]
        except KeyError:
            raise RuntimeError(f"No predecessor recorded for {state}") from None
        steps.append(Step(direction, state))
        state = prev
    steps.reverse()
    return RollSolution(start=start, steps=tuple(steps))


def solve(board: Board) -> SearchResult:
    """Breadth-first search for a shortest roll sequence to a goal state.

    Directions are expanded in ``DIRECTIONS`` order, so ties between equally
    short solutions always resolve the same way. An unsolvable board yields
    a result whose ``solution`` is None.
    """
    start = start_state(board)
    visited: set[DieState] = {start}
    parents: dict[DieState, tuple[DieState, Direction]] = {}
    frontier: deque[DieState] = deque([start])
    expanded = 0

    while frontier:
        state = frontier.popleft()
        expanded += 1
        if is_goal(board, state):
            return SearchResult(
                solution=reconstruct_path(parents, start, state),
                expanded=expanded,
                visited=len(visited),
            )

        for direction in DIRECTIONS:
            try:
                nxt = roll_on(board, state, direction)
            except OutOfBoundsError:
                continue
            if nxt in visited:
                continue
            if not is_legal(board, nxt):
                continue
            visited.add(nxt)
            parents[nxt] = (state, direction)
            frontier.append(nxt)

    return SearchResult(solution=None, expanded=expanded, visited=len(visited))


def solve_pool(board: Board, *, max_solutions: int = 20) -> list[RollSolution]:
    """Return up to ``max_solutions`` distinct shortest solutions.

    Same traversal as :func:`solve`, but every predecessor at the shortest
    depth is kept so all equally short paths can be enumerated. The first
    entry is the path :func:`solve` returns.
    """
    if max_solutions < 1:
        raise ValueError("max_solutions must be >= 1")

    start = start_state(board)
    depth: dict[DieState, int] = {start: 0}
    parents: dict[DieState, list[tuple[DieState, Direction]]] = {start: []}
    frontier: deque[DieState] = deque([start])
    goal_depth: int | None = None
    goals: list[DieState] = []

    while frontier:
        state = frontier.popleft()
        d = depth[state]
        if goal_depth is not None and d > goal_depth:
            break
        if is_goal(board, state):
            goal_depth = d
            goals.append(state)
            continue
        if goal_depth is not None:
            continue

        for direction in DIRECTIONS:
            try:
                nxt = roll_on(board, state, direction)
            except OutOfBoundsError:
                continue
            known = depth.get(nxt)
            if known is not None:
                if known == d + 1:
                    parents[nxt].append((state, direction))
                continue
            if not is_legal(board, nxt):
                continue
            depth[nxt] = d + 1
            parents[nxt] = [(state, direction)]
            frontier.append(nxt)

    solutions: list[RollSolution] = []
    # Depth-first over predecessor lists; predecessors are pushed in reverse
    # so they pop in discovery order.
    stack: list[tuple[DieState, tuple[Step, ...]]] = [
        (goal, ()) for goal in reversed(goals)
    ]
    while stack and len(solutions) < max_solutions:
        state, suffix = stack.pop()
        if state == start:
            solutions.append(RollSolution(start=start, steps=suffix))
            continue
        for prev, direction in reversed(parents[state]):
            stack.append((prev, (Step(direction, state), *suffix)))
    return solutions
