"""Top-level Sudoku solve interface.

Expose `solve_puzzle(puzzle)` that accepts either a pre-built Grid or puzzle text
in a format understood by `src.sudoku.parser.parse_puzzle`.
"""

from typing import Any, Optional

from src.sudoku import solver_core
from src.sudoku.model import Grid, SolveResult, SolveStatus
from src.sudoku.parser import parse_puzzle
from src.utils.trace import Tracer


def solve_puzzle(
    puzzle: Any, allow_backtracking: bool = True, tracer: Optional[Tracer] = None
) -> SolveResult:
    """
    Solve a puzzle and return the SolveResult; the caller's Grid is left untouched.
    Elimination runs first; when it gets stuck the backtracking search takes over.
    Accepts:
      - Grid instances (solved on a copy)
      - Puzzle text (parsed via `parse_puzzle`)
    """
    if isinstance(puzzle, Grid):
        grid = puzzle.copy()
    elif isinstance(puzzle, str):
        grid = parse_puzzle(puzzle)
    else:
        raise TypeError("solve_puzzle expects a Grid instance or puzzle text")

    result = solver_core.solve(grid, tracer)
    if result.status is SolveStatus.STUCK and allow_backtracking:
        result = solver_core.generic_solve(grid, tracer)
    return result


__all__ = ["solve_puzzle"]
