"""Puzzle generation: carve a solved grid down to a locally minimal puzzle."""

import random
from typing import List, Optional

from .bitset import ALL_CANDIDATES, digit_of, from_digits, is_unique
from .model import BOX, CELL_COUNT, SIZE, Grid, box_coords, cell_name
from .solver_core import generic_solve, solve
from .validity import find_violation
from src.utils.trace import Tracer, get_tracer


def is_solvable(grid: Grid) -> List[int]:
    """
    Flat indices of the resolved cells that can each be opened on their own
    while the grid stays solvable by elimination.
    """
    quiet = Tracer(enabled=False)
    removable: List[int] = []
    for index in range(CELL_COUNT):
        if not is_unique(grid.get_flat(index)):
            continue
        trial = grid.copy()
        trial.set_flat(index, ALL_CANDIDATES)
        if solve(trial, quiet):
            removable.append(index)
    return removable


def generate(
    grid: Grid, rng: Optional[random.Random] = None, tracer: Optional[Tracer] = None
) -> List[int]:
    """
    Open givens one at a time, picked at random among those whose removal keeps
    the grid solvable by elimination, until none can be removed.
    Mutates `grid` in place and returns the removed flat indices in order.
    Without `tracer` removals go to the global tracer.
    """
    tracer = tracer or get_tracer()
    rng = rng or random.Random()
    violation = find_violation(grid)
    if violation:
        raise ValueError(f"Cannot generate from an invalid grid: {violation}")

    removed: List[int] = []
    removable = is_solvable(grid)
    while removable:
        index = removable[rng.randrange(len(removable))]
        value = grid.get_flat(index)
        grid.set_flat(index, ALL_CANDIDATES)
        removed.append(index)
        tracer.log_cell_removed(cell_name(index // SIZE, index % SIZE), digit_of(value), len(removable))
        removable = is_solvable(grid)
    return removed


def random_solution(rng: Optional[random.Random] = None, tracer: Optional[Tracer] = None) -> Grid:
    """A random fully solved grid: shuffle the diagonal boxes, then search the rest."""
    rng = rng or random.Random()
    grid = Grid.empty()
    # Diagonal boxes share no row, column or box, so any filling is consistent.
    for start in range(0, SIZE, BOX):
        digits = list(range(1, SIZE + 1))
        rng.shuffle(digits)
        for coord, digit in zip(box_coords(start, start), digits):
            grid[coord] = from_digits([digit])

    result = generic_solve(grid, tracer)
    if not result:
        raise RuntimeError(f"Failed to complete a random grid: {result.reason}")
    return grid


def generate_puzzle(rng: Optional[random.Random] = None, tracer: Optional[Tracer] = None) -> Grid:
    rng = rng or random.Random()
    grid = random_solution(rng, tracer)
    generate(grid, rng, tracer)
    return grid
