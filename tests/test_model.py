"""Tests for the Grid container, region helpers and result types."""

import pytest

from src.sudoku.bitset import ALL_CANDIDATES, from_digits
from src.sudoku.model import (
    Grid,
    SolveResult,
    SolveStatus,
    box_coords,
    box_origin,
    cell_name,
    col_coords,
    row_coords,
)

from conftest import SOLUTION


def test_new_grid_is_unconstrained():
    grid = Grid()
    assert all(value == ALL_CANDIDATES for row in grid.cells for value in row)
    assert grid.resolved_count() == 0
    assert grid == Grid.empty()


def test_grid_rejects_bad_shapes_and_values():
    with pytest.raises(ValueError):
        Grid([[ALL_CANDIDATES] * 9 for _ in range(8)])
    with pytest.raises(ValueError):
        Grid([[ALL_CANDIDATES] * 8 for _ in range(9)])
    cells = [[ALL_CANDIDATES] * 9 for _ in range(9)]
    cells[4][4] = 0x200
    with pytest.raises(ValueError):
        Grid(cells)


def test_grid_owns_its_rows():
    cells = [[ALL_CANDIDATES] * 9 for _ in range(9)]
    grid = Grid(cells)
    cells[0][0] = 1
    assert grid[(0, 0)] == ALL_CANDIDATES


def test_from_digits_maps_zero_to_all_candidates():
    rows = [[0] * 9 for _ in range(9)]
    rows[2][7] = 5
    grid = Grid.from_digits(rows)
    assert grid[(2, 7)] == from_digits([5])
    assert grid[(0, 0)] == ALL_CANDIDATES
    assert grid.digits()[2][7] == 5
    assert grid.digits()[0][0] is None


def test_copy_and_restore_do_not_alias(solved_grid):
    snapshot = solved_grid.copy()
    solved_grid[(0, 0)] = ALL_CANDIDATES
    assert snapshot[(0, 0)] == from_digits([int(SOLUTION[0])])

    solved_grid.restore(snapshot)
    assert solved_grid == snapshot
    snapshot[(8, 8)] = ALL_CANDIDATES
    assert solved_grid[(8, 8)] == from_digits([int(SOLUTION[80])])


def test_flat_indexing_is_row_major(solved_grid):
    assert solved_grid.get_flat(10) == solved_grid[(1, 1)]
    solved_grid.set_flat(80, ALL_CANDIDATES)
    assert solved_grid[(8, 8)] == ALL_CANDIDATES
    assert solved_grid.resolved_count() == 80


def test_region_coordinates():
    assert row_coords(3) == [(3, c) for c in range(9)]
    assert col_coords(5) == [(r, 5) for r in range(9)]
    assert box_origin(0) == (0, 0)
    assert box_origin(4) == (3, 3)
    assert box_origin(5) == (3, 6)
    assert box_origin(8) == (6, 6)
    box = box_coords(3, 6)
    assert len(box) == 9
    assert (5, 8) in box and (3, 6) in box
    assert cell_name(0, 8) == "R1C9"


def test_solve_result_truthiness():
    assert SolveResult(SolveStatus.SOLVED)
    assert SolveResult(SolveStatus.SOLVED).solved
    for status in (SolveStatus.INVALID, SolveStatus.STUCK, SolveStatus.EXHAUSTED):
        assert not SolveResult(status)
