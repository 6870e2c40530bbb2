"""Unit tests for the elimination solver and the backtracking search."""

from src.sudoku import solver_core
from src.sudoku.bitset import ALL_CANDIDATES
from src.sudoku.model import SIZE, Grid, SolveStatus, box_origin
from src.sudoku.eliminator import eliminate_box, eliminate_col, eliminate_row
from src.sudoku.printer import format_numeric
from src.sudoku.validity import is_valid, needs_solving
from src.utils.trace import Tracer, get_tracer, reset_tracer

from conftest import HARD, HARD_SOLUTION, SOLUTION, grid_of


def _grid_with(placements):
    rows = [[0] * 9 for _ in range(9)]
    for (row, col), digit in placements.items():
        rows[row][col] = digit
    return Grid.from_digits(rows)


def _dead_end_grid():
    """R1C9 must be 8 or 9 by its row, but column 9 already holds both."""
    placements = {(0, c): c + 1 for c in range(7)}
    placements[(3, 8)] = 8
    placements[(6, 8)] = 9
    return _grid_with(placements)


def test_solve_finishes_easy_puzzle_by_elimination(easy_grid):
    tracer = Tracer()
    result = solver_core.solve(easy_grid, tracer)
    assert result.status is SolveStatus.SOLVED
    assert result.grid is easy_grid
    assert result.passes == 1
    assert is_valid(easy_grid)
    assert not needs_solving(easy_grid)
    assert format_numeric(easy_grid) == SOLUTION
    assert tracer.summary()["action_counts"]["solution_found"] == 1


def test_solve_rejects_duplicates_without_eliminating():
    grid = _grid_with({(0, 0): 5, (0, 6): 5})
    before = grid.copy()
    tracer = Tracer()
    result = solver_core.solve(grid, tracer)
    assert result.status is SolveStatus.INVALID
    assert "duplicate digit 5" in result.reason
    assert result.passes == 0
    assert grid == before
    assert tracer.summary()["num_passes"] == 0


def test_solve_reports_stuck_on_open_grid():
    grid = Grid()
    result = solver_core.solve(grid, Tracer())
    assert result.status is SolveStatus.STUCK
    assert result.reason == solver_core.STUCK_REASON
    assert result.passes == 1
    assert grid == Grid()


def test_solve_detects_contradiction():
    grid = _dead_end_grid()
    result = solver_core.solve(grid, Tracer())
    assert result.status is SolveStatus.INVALID
    assert result.passes == 1
    assert result.reason == "row 1: blanked cell at R1C9"


def test_solve_records_to_the_global_tracer_by_default(easy_grid):
    reset_tracer()
    try:
        assert solver_core.solve(easy_grid)
        assert get_tracer().summary()["num_passes"] == 1

        quiet = Tracer(enabled=False)
        assert solver_core.solve(grid_of(SOLUTION), quiet)
        assert quiet.steps == []
        assert get_tracer().summary()["num_passes"] == 1
    finally:
        reset_tracer()


def test_fixed_point_is_idempotent(puzzle_grid):
    solver_core.solve(puzzle_grid, Tracer())
    changed = False
    for i in range(SIZE):
        changed = eliminate_row(puzzle_grid, i) or changed
        changed = eliminate_col(puzzle_grid, i) or changed
        changed = eliminate_box(puzzle_grid, *box_origin(i)) or changed
    assert not changed


def test_generic_solve_finds_the_unique_solution(puzzle_grid):
    result = solver_core.generic_solve(puzzle_grid, Tracer())
    assert result.status is SolveStatus.SOLVED
    assert format_numeric(puzzle_grid) == SOLUTION


def test_generic_solve_searches_to_the_unique_solution():
    assert solver_core.solve(grid_of(HARD), Tracer(enabled=False)).status is SolveStatus.STUCK

    grid = grid_of(HARD)
    tracer = Tracer()
    result = solver_core.generic_solve(grid, tracer)
    assert result.status is SolveStatus.SOLVED
    assert format_numeric(grid) == HARD_SOLUTION
    assert tracer.summary()["num_assignments"] > 0
    assert tracer.summary()["num_backtracks"] > 0


def test_generic_solve_fills_an_open_grid():
    grid = Grid()
    tracer = Tracer()
    result = solver_core.generic_solve(grid, tracer)
    assert result
    assert is_valid(grid)
    assert not needs_solving(grid)
    assert tracer.summary()["num_assignments"] > 0


def test_generic_solve_restores_grid_when_unsolvable():
    grid = _dead_end_grid()
    before = grid.copy()
    result = solver_core.generic_solve(grid, Tracer())
    assert result.status is SolveStatus.EXHAUSTED
    assert grid == before


def test_generic_solve_rejects_invalid_input():
    grid = _grid_with({(2, 2): 3, (8, 2): 3})
    result = solver_core.generic_solve(grid, Tracer())
    assert result.status is SolveStatus.INVALID
    assert grid[(0, 0)] == ALL_CANDIDATES


def test_generic_solve_accepts_solved_grid(solved_grid):
    tracer = Tracer()
    assert solver_core.generic_solve(solved_grid, tracer)
    assert tracer.summary()["num_assignments"] == 0
