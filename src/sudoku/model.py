"""Sudoku grid data structures and solver result types."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from .bitset import ALL_CANDIDATES, BLANKED, add, digit_of, is_unique

SIZE = 9
BOX = 3
CELL_COUNT = SIZE * SIZE

Coord = Tuple[int, int]


# Shared read-only region coordinate lists.
_ROWS = [[(row, col) for col in range(SIZE)] for row in range(SIZE)]
_COLS = [[(row, col) for row in range(SIZE)] for col in range(SIZE)]
_BOXES = {
    (row_start, col_start): [
        (row, col)
        for row in range(row_start, row_start + BOX)
        for col in range(col_start, col_start + BOX)
    ]
    for row_start in range(0, SIZE, BOX)
    for col_start in range(0, SIZE, BOX)
}


def row_coords(row: int) -> List[Coord]:
    return _ROWS[row]


def col_coords(col: int) -> List[Coord]:
    return _COLS[col]


def box_coords(row_start: int, col_start: int) -> List[Coord]:
    """Cells of the box whose top-left corner is (row_start, col_start)."""
    return _BOXES[(row_start, col_start)]


def box_origin(index: int) -> Coord:
    """Top-left corner of box `index` (0..8, row-major over the 3x3 boxes)."""
    return (index // BOX) * BOX, (index % BOX) * BOX


def cell_name(row: int, col: int) -> str:
    return f"R{row + 1}C{col + 1}"


def _fresh_cells() -> List[List[int]]:
    return [[ALL_CANDIDATES] * SIZE for _ in range(SIZE)]


@dataclass
class Grid:
    """
    A 9x9 matrix of candidate sets, stored row-major.
    Grids are mutated in place by the eliminator, solver and generator; use
    `copy()` for a snapshot and `restore()` to roll back to one.
    """

    cells: List[List[int]] = field(default_factory=_fresh_cells)

    def __post_init__(self) -> None:
        if len(self.cells) != SIZE or any(len(row) != SIZE for row in self.cells):
            raise ValueError("Grid must have 9 rows of 9 cells")
        for row in self.cells:
            for value in row:
                if not isinstance(value, int) or not BLANKED <= value <= ALL_CANDIDATES:
                    raise ValueError(f"Cell value out of range: {value!r}")
        # Copy rows; the caller keeps no alias.
        self.cells = [list(row) for row in self.cells]

    @classmethod
    def empty(cls) -> "Grid":
        return cls()

    @classmethod
    def from_digits(cls, rows: Sequence[Sequence[int]]) -> "Grid":
        """Build a grid from digits where 0 means "all nine candidates open"."""
        cells = []
        for row in rows:
            cells.append([ALL_CANDIDATES if d == 0 else add(BLANKED, d) for d in row])
        return cls(cells)

    def __getitem__(self, coord: Coord) -> int:
        row, col = coord
        return self.cells[row][col]

    def __setitem__(self, coord: Coord, value: int) -> None:
        row, col = coord
        self.cells[row][col] = value

    def get_flat(self, index: int) -> int:
        return self.cells[index // SIZE][index % SIZE]

    def set_flat(self, index: int, value: int) -> None:
        self.cells[index // SIZE][index % SIZE] = value

    def copy(self) -> "Grid":
        return Grid([list(row) for row in self.cells])

    def restore(self, snapshot: "Grid") -> None:
        for row in range(SIZE):
            self.cells[row][:] = snapshot.cells[row]

    def coords(self) -> Iterable[Coord]:
        for row in range(SIZE):
            for col in range(SIZE):
                yield row, col

    def resolved_count(self) -> int:
        return sum(1 for row in self.cells for value in row if is_unique(value))

    def digits(self) -> List[List[Optional[int]]]:
        return [[digit_of(value) for value in row] for row in self.cells]


class SolveStatus(Enum):
    SOLVED = "solved"
    INVALID = "invalid"
    STUCK = "stuck"
    EXHAUSTED = "exhausted"


@dataclass
class SolveResult:
    """
    Outcome of `solve` / `generic_solve`.
    `grid` is the grid the solver worked on; `reason` says which check failed.
    """

    status: SolveStatus
    grid: Optional[Grid] = None
    reason: str = ""
    passes: int = 0

    @property
    def solved(self) -> bool:
        return self.status is SolveStatus.SOLVED

    def __bool__(self) -> bool:
        return self.solved
