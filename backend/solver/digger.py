"""Dig unique-solution puzzles out of complete Sudoku solutions."""

from __future__ import annotations

import copy
import logging
import random
from typing import Optional

from .backtracking import Grid, SudokuSolver, generate_solution, is_valid_grid

_LOGGER = logging.getLogger(__name__)


def dig_puzzle(
    solution: Grid,
    clues_to_keep: int,
    rng: Optional[random.Random] = None,
) -> Grid:
    """
    Remove cells from a solution while the puzzle keeps exactly one completion.

    Cells are visited once in shuffled order. A removal is kept only if the
    solver still finds a single completion; otherwise the value is restored.
    Digging stops when ``size * size - clues_to_keep`` cells are empty or the
    order is exhausted, so the result may keep more clues than asked for.

    Args:
        solution: Complete solution grid (not modified)
        clues_to_keep: Target number of filled cells in the puzzle
        rng: Random source for the digging order

    Returns:
        Puzzle grid with 0 for empty cells

    Raises:
        ValueError: If the solution is not a square grid of a supported size
        with mutually consistent values
    """
    rng = rng or random.Random()
    size = len(solution)
    if not is_valid_grid(solution, size):
        raise ValueError(f"Not a valid {size}x{size} Sudoku grid")
    total_cells = size * size
    solver = SudokuSolver(size)

    board = copy.deepcopy(solution)

    indices = list(range(total_cells))
    rng.shuffle(indices)

    max_to_remove = total_cells - clues_to_keep
    removed = 0

    for idx in indices:
        if removed >= max_to_remove:
            break

        row, col = divmod(idx, size)
        if board[row][col] == 0:
            continue

        backup = board[row][col]
        board[row][col] = 0

        if solver.count_solutions(copy.deepcopy(board), max_count=2) == 1:
            removed += 1
        else:
            board[row][col] = backup

    _LOGGER.debug(
        "Dug %d of %d requested holes from %dx%d solution",
        removed,
        max(0, max_to_remove),
        size,
        size,
    )
    return board


def make_puzzle(
    size: int, clues: int, rng: Optional[random.Random] = None
) -> tuple[Grid, Grid]:
    """Generate a fresh ``(solution, puzzle)`` pair."""
    rng = rng or random.Random()
    solution = generate_solution(size, rng)
    puzzle = dig_puzzle(solution, clues, rng)
    return solution, puzzle
