"""Shared puzzles for the Sudoku test-suite."""

import pytest

from src.sudoku.model import Grid
from src.sudoku.parser import parse_numeric

# Project Euler problem 96, grid 01, and its unique solution.
PUZZLE = (
    "003020600"
    "900305001"
    "001806400"
    "008102900"
    "700000008"
    "006708200"
    "002609500"
    "800203009"
    "005010300"
)
SOLUTION = (
    "483921657"
    "967345821"
    "251876493"
    "548132976"
    "729564138"
    "136798245"
    "372689514"
    "814253769"
    "695417382"
)

# A puzzle with a unique solution that elimination alone cannot finish.
HARD = (
    "800000000"
    "003600000"
    "070090200"
    "050007000"
    "000045700"
    "000100030"
    "001000068"
    "008500010"
    "090000400"
)
HARD_SOLUTION = (
    "812753649"
    "943682175"
    "675491283"
    "154237896"
    "369845721"
    "287169534"
    "521974368"
    "438526917"
    "796318452"
)

# The solution with its main diagonal opened: every row misses exactly one
# digit, so a single elimination pass finishes it.
EASY = "".join("0" if i % 10 == 0 else ch for i, ch in enumerate(SOLUTION))

BORDERED = """\
+-------+-------+-------+
| . . 3 | . 2 . | 6 . . |
| 9 . . | 3 . 5 | . . 1 |
| . . 1 | 8 . 6 | 4 . . |
+-------+-------+-------+
| . . 8 | 1 . 2 | 9 . . |
| 7 . . | . ! . | . . 8 |
| . . 6 | 7 . 8 | 2 . . |
+-------+-------+-------+
| . . 2 | 6 . 9 | 5 . . |
| 8 . . | 2 . 3 | . . 9 |
| . . 5 | . 1 . | 3 . . |
+-------+-------+-------+
"""


def grid_of(text: str) -> Grid:
    return parse_numeric(text)


@pytest.fixture
def solved_grid() -> Grid:
    return grid_of(SOLUTION)


@pytest.fixture
def easy_grid() -> Grid:
    return grid_of(EASY)


@pytest.fixture
def puzzle_grid() -> Grid:
    return grid_of(PUZZLE)
