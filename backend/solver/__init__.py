"""Puzzle engine exports."""

from .backtracking import (
    BLOCK_SHAPES,
    SudokuSolver,
    count_solutions,
    generate_solution,
    is_safe,
    is_valid_grid,
)
from .digger import dig_puzzle, make_puzzle
from .validation import compute_errors, find_hint, is_solved

__all__ = [
    "BLOCK_SHAPES",
    "SudokuSolver",
    "compute_errors",
    "count_solutions",
    "dig_puzzle",
    "find_hint",
    "generate_solution",
    "is_safe",
    "is_solved",
    "is_valid_grid",
    "make_puzzle",
]
