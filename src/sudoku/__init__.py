"""Candidate-set Sudoku model, elimination/backtracking solver, generator and text I/O."""

from .model import Grid, SolveResult, SolveStatus
from .solver_core import solve, generic_solve
from .generator import generate, generate_puzzle, is_solvable
from .parser import PuzzleFormatError, parse_puzzle
from .printer import format_grid, format_numeric

__all__ = [
    "Grid",
    "SolveResult",
    "SolveStatus",
    "solve",
    "generic_solve",
    "generate",
    "generate_puzzle",
    "is_solvable",
    "PuzzleFormatError",
    "parse_puzzle",
    "format_grid",
    "format_numeric",
]
