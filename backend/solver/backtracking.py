"""Sudoku constraint checking and bounded backtracking search."""

from __future__ import annotations

import copy
import random
from enum import Enum
from typing import Optional, List, Tuple


Grid = List[List[int]]

# Box shape (rows, cols) per supported board size.
BLOCK_SHAPES = {
    6: (2, 3),
    9: (3, 3),
}


class SearchOutcome(Enum):
    """How a level of the backtracking search finished."""

    NO_EMPTY_CELL = "no_empty_cell"
    EXHAUSTED_CANDIDATES = "exhausted_candidates"
    LIMIT_REACHED = "limit_reached"


def block_shape(size: int) -> Tuple[int, int]:
    """Return ``(block_rows, block_cols)`` for a supported board size."""
    try:
        return BLOCK_SHAPES[size]
    except KeyError:
        raise ValueError(f"Unsupported Sudoku size: {size}") from None


def is_safe(grid: Grid, row: int, col: int, value: int, size: int) -> bool:
    """
    Check if placing value at (row, col) breaks no row, column or box rule.

    Args:
        grid: Current grid state
        row: Row index
        col: Column index
        value: Candidate value (1..size)
        size: Board size

    Returns:
        False if value already occurs in the row, column or box, True otherwise
    """
    block_rows, block_cols = block_shape(size)

    if value in grid[row]:
        return False

    for r in range(size):
        if grid[r][col] == value:
            return False

    box_row = row - row % block_rows
    box_col = col - col % block_cols

    for r in range(box_row, box_row + block_rows):
        for c in range(box_col, box_col + block_cols):
            if grid[r][c] == value:
                return False

    return True


class SudokuSolver:
    """Backtracking search over a Sudoku grid of a fixed size."""

    def __init__(self, size: int = 9):
        block_shape(size)
        self.size = size
        self.solutions_count = 0

    def count_solutions(self, grid: Grid, max_count: int = 2) -> int:
        """
        Count number of solutions (up to max_count).

        The grid is filled in place during the search and every placement is
        undone before returning.

        Args:
            grid: Grid to complete
            max_count: Stop counting after finding this many solutions

        Returns:
            min(number of solutions, max_count)
        """
        self.solutions_count = 0
        if max_count <= 0:
            return 0
        if not self._is_consistent_grid(grid):
            return 0
        self._count_solutions_recursive(grid, max_count)
        return self.solutions_count

    def _count_solutions_recursive(self, grid: Grid, max_count: int) -> SearchOutcome:
        """Recursively count solutions, unwinding as soon as max_count is hit."""
        empty = self._find_empty_cell(grid)
        if not empty:
            self.solutions_count += 1
            if self.solutions_count >= max_count:
                return SearchOutcome.LIMIT_REACHED
            return SearchOutcome.NO_EMPTY_CELL

        row, col = empty

        for num in range(1, self.size + 1):
            if not is_safe(grid, row, col, num, self.size):
                continue
            grid[row][col] = num
            try:
                outcome = self._count_solutions_recursive(grid, max_count)
            finally:
                grid[row][col] = 0
            if outcome is SearchOutcome.LIMIT_REACHED:
                return outcome

        return SearchOutcome.EXHAUSTED_CANDIDATES

    def fill(self, grid: Grid, rng: Optional[random.Random] = None) -> bool:
        """
        Complete the grid in place, trying candidates in random order.

        Returns:
            True if the grid was completed, False if no completion exists
            (the grid is left unchanged in that case)
        """
        rng = rng or random.Random()
        if not self._is_consistent_grid(grid):
            return False
        return self._fill_recursive(grid, rng)

    def _fill_recursive(self, grid: Grid, rng: random.Random) -> bool:
        empty = self._find_empty_cell(grid)
        if not empty:
            return True

        row, col = empty
        candidates = list(range(1, self.size + 1))
        rng.shuffle(candidates)

        for num in candidates:
            if is_safe(grid, row, col, num, self.size):
                grid[row][col] = num

                if self._fill_recursive(grid, rng):
                    return True

                grid[row][col] = 0

        return False

    def _find_empty_cell(self, grid: Grid) -> Optional[Tuple[int, int]]:
        """Find the first empty cell in row-major order."""
        for r in range(self.size):
            for c in range(self.size):
                if grid[r][c] == 0:
                    return (r, c)
        return None

    def _is_consistent_grid(self, grid: Grid) -> bool:
        """Check existing non-zero givens are mutually consistent."""
        for r in range(self.size):
            for c in range(self.size):
                num = grid[r][c]
                if num == 0:
                    continue
                grid[r][c] = 0
                try:
                    valid = is_safe(grid, r, c, num, self.size)
                finally:
                    grid[r][c] = num
                if not valid:
                    return False
        return True


def count_solutions(grid: Grid, size: int, limit: int = 2) -> int:
    """Convenience function to count completions of a grid, capped at limit."""
    return SudokuSolver(size).count_solutions(grid, max_count=limit)


def generate_solution(size: int, rng: Optional[random.Random] = None) -> Grid:
    """Build a random complete solution grid of the given size."""
    grid = [[0] * size for _ in range(size)]
    SudokuSolver(size).fill(grid, rng)
    return grid


def is_valid_grid(grid: Grid, size: int) -> bool:
    """
    Validate that a grid has correct structure and initial values.

    Args:
        grid: Grid to validate
        size: Expected board size

    Returns:
        True if grid is valid, False otherwise
    """
    if size not in BLOCK_SHAPES:
        return False

    if not isinstance(grid, list) or len(grid) != size:
        return False

    for row in grid:
        if not isinstance(row, list) or len(row) != size:
            return False
        for cell in row:
            if isinstance(cell, bool) or not isinstance(cell, int):
                return False
            if cell < 0 or cell > size:
                return False

    solver = SudokuSolver(size)
    return solver._is_consistent_grid(copy.deepcopy(grid))
