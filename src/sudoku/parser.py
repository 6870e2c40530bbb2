"""Puzzle parser: convert puzzle text into a Grid.

Supports:
- Numeric format: 81 consecutive digits, `0` for an open cell.
- Bordered ASCII format:

    +-------+-------+-------+
    | 5 3 . | . 7 . | . . . |
    ...

  where `.` or `0` is an open cell and `!` a blanked cell. Lines are split on newline
  characters only; the newline after the last separator may be omitted and anything
  after line 13 is ignored.
"""

from typing import List, TextIO

from .bitset import ALL_CANDIDATES, BLANKED, add
from .model import BOX, CELL_COUNT, SIZE, Grid

SEPARATOR = "+-------+-------+-------+"
ASCII_LINES = SIZE + SIZE // BOX + 1
BODY_WIDTH = len(SEPARATOR)


class PuzzleFormatError(ValueError):
    """Raised when puzzle text matches neither supported layout."""


def parse_puzzle(text: str) -> Grid:
    """Parse a single puzzle, choosing the layout from its first character."""
    if not text:
        raise PuzzleFormatError("Empty puzzle text")
    first = text[0]
    if first.isdigit():
        return parse_numeric(text)
    if first == "+":
        return parse_ascii(text)
    raise PuzzleFormatError(f"Unrecognised puzzle format (starts with {first!r})")


def load(stream: TextIO) -> Grid:
    return parse_puzzle(stream.read())


def parse_numeric(text: str) -> Grid:
    digits = text[:CELL_COUNT]
    if len(digits) < CELL_COUNT:
        raise PuzzleFormatError(f"Numeric puzzle needs {CELL_COUNT} digits, got {len(digits)}")

    grid = Grid.empty()
    for index, char in enumerate(digits):
        if not ("0" <= char <= "9"):
            raise PuzzleFormatError(f"Character {index + 1}: expected a digit, got {char!r}")
        grid.set_flat(index, ALL_CANDIDATES if char == "0" else add(BLANKED, int(char)))

    rest = text[CELL_COUNT:]
    if rest and not rest.startswith(("\n", "\r\n")):
        raise PuzzleFormatError(f"Numeric puzzle has trailing characters: {rest[:10]!r}")
    return grid


def _parse_cell(char: str, line_no: int, pos: int) -> int:
    if char in ".0":
        return ALL_CANDIDATES
    if char == "!":
        return BLANKED
    if "1" <= char <= "9":
        return add(BLANKED, int(char))
    raise PuzzleFormatError(f"Line {line_no}, column {pos + 1}: invalid cell symbol {char!r}")


def _parse_body_line(line: str, line_no: int) -> List[int]:
    if len(line) != BODY_WIDTH:
        raise PuzzleFormatError(f"Line {line_no}: expected {BODY_WIDTH} characters, got {len(line)}")

    cells: List[int] = []
    for pos, char in enumerate(line):
        if pos % 8 == 0:
            if char != "|":
                raise PuzzleFormatError(f"Line {line_no}, column {pos + 1}: expected '|'")
        elif pos % 2 == 0:
            cells.append(_parse_cell(char, line_no, pos))
        elif char != " ":
            raise PuzzleFormatError(f"Line {line_no}, column {pos + 1}: expected a space")
    return cells


def parse_ascii(text: str) -> Grid:
    lines = text.split("\n")
    if len(lines) < ASCII_LINES:
        raise PuzzleFormatError(f"Bordered puzzle needs {ASCII_LINES} lines, got {len(lines)}")

    rows: List[List[int]] = []
    for line_no, line in enumerate(lines[:ASCII_LINES], start=1):
        if (line_no - 1) % (BOX + 1) == 0:
            if line != SEPARATOR:
                raise PuzzleFormatError(f"Line {line_no}: expected separator {SEPARATOR!r}")
        else:
            rows.append(_parse_body_line(line, line_no))
    return Grid(rows)


def split_puzzles(text: str) -> List[str]:
    """
    Split text holding several puzzles (either layout, blank lines and `#`
    comments allowed between them) into one string per puzzle.
    """
    lines = text.splitlines()
    puzzles: List[str] = []
    i = 0
    while i < len(lines):
        line = lines[i].strip()
        if not line or line.startswith("#"):
            i += 1
        elif line[0].isdigit():
            puzzles.append(line)
            i += 1
        elif line[0] == "+":
            puzzles.append("\n".join(lines[i:i + ASCII_LINES]) + "\n")
            i += ASCII_LINES
        else:
            raise PuzzleFormatError(f"Line {i + 1}: not the start of a puzzle: {line[:30]!r}")
    return puzzles
