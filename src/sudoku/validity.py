"""Region validity checks and the "still needs solving" predicate."""

from typing import List, Optional

from .bitset import BLANKED, digit_of, is_unique
from .model import SIZE, Coord, Grid, box_coords, box_origin, cell_name, col_coords, row_coords


def _region_violation(grid: Grid, coords: List[Coord], label: str) -> Optional[str]:
    seen = 0
    for row, col in coords:
        value = grid.cells[row][col]
        if value == BLANKED:
            return f"{label}: blanked cell at {cell_name(row, col)}"
        if is_unique(value):
            if seen & value:
                return f"{label}: duplicate digit {digit_of(value)} at {cell_name(row, col)}"
            seen |= value
    return None


def is_valid_row(grid: Grid, row: int) -> bool:
    return _region_violation(grid, row_coords(row), f"row {row + 1}") is None


def is_valid_col(grid: Grid, col: int) -> bool:
    return _region_violation(grid, col_coords(col), f"column {col + 1}") is None


def is_valid_box(grid: Grid, row_start: int, col_start: int) -> bool:
    return _region_violation(grid, box_coords(row_start, col_start), "box") is None


def find_violation(grid: Grid) -> Optional[str]:
    """
    Describe the first failed check, or None for a valid grid.
    Checks run per index in the order row, column, box.
    """
    for i in range(SIZE):
        for coords, label in (
            (row_coords(i), f"row {i + 1}"),
            (col_coords(i), f"column {i + 1}"),
            (box_coords(*box_origin(i)), f"box {i + 1}"),
        ):
            violation = _region_violation(grid, coords, label)
            if violation:
                return violation
    return None


def is_valid(grid: Grid) -> bool:
    return find_violation(grid) is None


def needs_solving(grid: Grid) -> bool:
    """True while any cell is not resolved. Blanked cells count as unresolved."""
    for row in grid.cells:
        for value in row:
            if not is_unique(value):
                return True
    return False
