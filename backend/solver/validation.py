"""Rule-violation scanning and hint selection for boards in play."""

from __future__ import annotations

from typing import Iterator, Optional

from .backtracking import Grid, block_shape

Cell = tuple[int, int]


def _groups(size: int) -> Iterator[list[Cell]]:
    """Yield the cells of every row, column and box."""
    block_rows, block_cols = block_shape(size)

    for r in range(size):
        yield [(r, c) for c in range(size)]

    for c in range(size):
        yield [(r, c) for r in range(size)]

    for br in range(0, size, block_rows):
        for bc in range(0, size, block_cols):
            yield [
                (r, c)
                for r in range(br, br + block_rows)
                for c in range(bc, bc + block_cols)
            ]


def compute_errors(grid: Grid, size: int) -> set[Cell]:
    """Return every filled cell that shares its value with another cell in a group."""
    errors: set[Cell] = set()

    for cells in _groups(size):
        seen: dict[int, list[Cell]] = {}
        for r, c in cells:
            value = grid[r][c]
            if value == 0:
                continue
            seen.setdefault(value, []).append((r, c))
        for members in seen.values():
            if len(members) > 1:
                errors.update(members)

    return errors


def has_empty_cell(grid: Grid) -> bool:
    return any(0 in row for row in grid)


def is_solved(grid: Grid, size: int) -> bool:
    """A board is solved when it is full and breaks no rule."""
    return not has_empty_cell(grid) and not compute_errors(grid, size)


def find_hint(grid: Grid, size: int) -> Optional[Cell]:
    """
    Find the first empty cell (row-major) with exactly one conflict-free value.

    Returns:
        ``(row, col)`` of the hint target, or None if no cell qualifies
    """
    for r in range(size):
        for c in range(size):
            if grid[r][c] != 0:
                continue

            candidates = 0
            trial = [list(row) for row in grid]
            for value in range(1, size + 1):
                trial[r][c] = value
                if (r, c) not in compute_errors(trial, size):
                    candidates += 1
                if candidates > 1:
                    break

            if candidates == 1:
                return (r, c)

    return None
