"""Render grids in the bordered ASCII layout or the 81-digit numeric layout."""

from typing import List

from .bitset import BLANKED, digit_of
from .model import BOX, SIZE, Grid
from .parser import SEPARATOR


def _symbol(value: int) -> str:
    if value == BLANKED:
        return "!"
    digit = digit_of(value)
    return str(digit) if digit is not None else "."


def format_grid(grid: Grid) -> str:
    """Bordered layout; resolved cells print their digit, blanked `!`, open `.`."""
    lines: List[str] = []
    for row in range(SIZE):
        if row % BOX == 0:
            lines.append(SEPARATOR)
        parts = []
        for col in range(SIZE):
            if col % BOX == 0:
                parts.append("|")
            parts.append(_symbol(grid.cells[row][col]))
        parts.append("|")
        lines.append(" ".join(parts))
    lines.append(SEPARATOR)
    return "\n".join(lines) + "\n"


def format_numeric(grid: Grid) -> str:
    """81 digits; anything not resolved (open or blanked) prints as `0`."""
    return "".join(
        str(digit_of(value) or 0) for row in grid.cells for value in row
    )
