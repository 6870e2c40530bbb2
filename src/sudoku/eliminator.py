"""Row/column/box constraint propagation over candidate sets."""

from typing import List

from .bitset import ALL_CANDIDATES, is_unique
from .model import Coord, Grid, box_coords, col_coords, row_coords


def make_bitset(grid: Grid, coords: List[Coord]) -> int:
    """
    Mask of digits not yet used by any resolved cell of the region.
    Must be computed before any cell of the region is narrowed in the same pass.
    """
    mask = ALL_CANDIDATES
    for coord in coords:
        value = grid[coord]
        if is_unique(value):
            mask = (mask ^ value) & ALL_CANDIDATES
    return mask


def _eliminate_region(grid: Grid, coords: List[Coord]) -> bool:
    mask = make_bitset(grid, coords)
    changed = False
    for coord in coords:
        original = grid[coord]
        if is_unique(original):
            continue
        narrowed = original & mask
        if narrowed != original:
            grid[coord] = narrowed
            changed = True
    return changed


def eliminate_row(grid: Grid, row: int) -> bool:
    return _eliminate_region(grid, row_coords(row))


def eliminate_col(grid: Grid, col: int) -> bool:
    return _eliminate_region(grid, col_coords(col))


def eliminate_box(grid: Grid, row_start: int, col_start: int) -> bool:
    """Eliminate within the 3x3 box whose top-left corner is (row_start, col_start)."""
    return _eliminate_region(grid, box_coords(row_start, col_start))
