"""Elimination solver with a backtracking fallback for puzzles propagation cannot finish."""

from typing import Optional

from .bitset import BLANKED, add, candidates_of, is_unique, popcount
from .eliminator import eliminate_box, eliminate_col, eliminate_row
from .model import SIZE, BOX, Coord, Grid, SolveResult, SolveStatus, cell_name
from .validity import find_violation, needs_solving
from src.utils.trace import Tracer, get_tracer

STUCK_REASON = "Elimination made no progress"


def solve(grid: Grid, tracer: Optional[Tracer] = None) -> SolveResult:
    """
    Solve `grid` in place using row/column/box elimination only.
    Returns SOLVED, INVALID (bad input or a contradiction) or STUCK (fixed point
    reached with cells still open; the grid keeps everything deduced so far).
    Without `tracer` the global tracer records every pass; library callers
    should pass `Tracer(enabled=False)` or call `reset_tracer()` between puzzles.
    """
    tracer = tracer or get_tracer()
    violation = find_violation(grid)
    if violation:
        tracer.log_contradiction(violation)
        return SolveResult(SolveStatus.INVALID, grid, violation)

    passes = 0
    while needs_solving(grid):
        passes += 1
        changed = _elimination_pass(grid)
        tracer.log_elimination_pass(passes, changed, grid.resolved_count())

        violation = find_violation(grid)
        if violation:
            tracer.log_contradiction(violation)
            return SolveResult(SolveStatus.INVALID, grid, violation, passes)
        if not changed:
            tracer.log_stuck(grid.resolved_count())
            return SolveResult(SolveStatus.STUCK, grid, STUCK_REASON, passes)

    tracer.log_solution_found(grid.resolved_count())
    return SolveResult(SolveStatus.SOLVED, grid, passes=passes)


def _elimination_pass(grid: Grid) -> bool:
    changed = False
    for row in range(SIZE):
        changed = eliminate_row(grid, row) or changed
    for col in range(SIZE):
        changed = eliminate_col(grid, col) or changed
    for row in range(0, SIZE, BOX):
        for col in range(0, SIZE, BOX):
            changed = eliminate_box(grid, row, col) or changed
    return changed


def generic_solve(grid: Grid, tracer: Optional[Tracer] = None) -> SolveResult:
    """
    Depth-first search with elimination at every node.
    On failure the grid is restored to the contents it had on entry.
    """
    tracer = tracer or get_tracer()
    violation = find_violation(grid)
    if violation:
        tracer.log_contradiction(violation)
        return SolveResult(SolveStatus.INVALID, grid, violation)

    original = grid.copy()
    if _backtrack(grid, tracer, depth=0):
        return SolveResult(SolveStatus.SOLVED, grid)

    grid.restore(original)
    return SolveResult(SolveStatus.EXHAUSTED, grid, "No digit assignment leads to a solution")


def _first_undetermined(grid: Grid) -> Optional[Coord]:
    for row in range(SIZE):
        for col in range(SIZE):
            if not is_unique(grid.cells[row][col]):
                return row, col
    return None


def _backtrack(grid: Grid, tracer: Tracer, depth: int) -> bool:
    if find_violation(grid):
        return False

    coord = _first_undetermined(grid)
    if coord is None:
        tracer.log_solution_found(grid.resolved_count())
        return True

    snapshot = grid.copy()
    result = solve(grid, tracer)
    if result:
        return True
    if result.status is SolveStatus.INVALID:
        tracer.log_backtrack(cell_name(*coord), reason=result.reason)
        return False
    if is_unique(grid[coord]):
        return _backtrack(grid, tracer, depth + 1)

    # Trials start from the propagated state.
    propagated = grid.copy()
    options = snapshot[coord]
    for digit in candidates_of(options):
        grid.restore(propagated)
        grid[coord] = add(BLANKED, digit)
        tracer.log_assign(cell_name(*coord), digit, popcount(options), depth)
        if _backtrack(grid, tracer, depth + 1):
            return True

    grid.restore(snapshot)
    tracer.log_backtrack(cell_name(*coord))
    return False
