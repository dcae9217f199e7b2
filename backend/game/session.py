"""Play-state manager for a single Sudoku game."""

from __future__ import annotations

import copy
import logging
import random
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..solver.backtracking import Grid
from ..solver.digger import make_puzzle
from ..solver.validation import Cell, compute_errors, find_hint, is_solved

_LOGGER = logging.getLogger(__name__)

STATUS_IDLE = "idle"
STATUS_PLAYING = "playing"
STATUS_COMPLETED = "completed"


@dataclass(frozen=True)
class GameMode:
    name: str
    size: int
    clues: int


DEFAULT_MODES: dict[str, GameMode] = {
    "easy": GameMode(name="easy", size=6, clues=18),
    "normal": GameMode(name="normal", size=9, clues=30),
}


def parse_cell_value(raw: Any, size: int) -> Optional[int]:
    """
    Convert raw player input into a cell value.

    An empty or whitespace-only string clears the cell. Anything else,
    ``0`` and ``None`` included, must be an integer in ``[1, size]``.

    Returns:
        Value in ``[0, size]``, or None if the input must be ignored
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return 0
        try:
            num = float(raw)
        except ValueError:
            return None
    elif isinstance(raw, (int, float)):
        num = raw
    else:
        return None

    if num != num or num in (float("inf"), float("-inf")):
        return None
    if int(num) != num:
        return None

    num = int(num)
    if num < 1 or num > size:
        return None
    return num


class SudokuGame:
    """Holds the boards and play state of one game and applies player actions."""

    def __init__(
        self,
        modes: Optional[dict[str, GameMode]] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.modes = modes or DEFAULT_MODES
        self._rng = rng or random.Random()
        self._clock = clock

        self.mode: Optional[str] = None
        self.size: Optional[int] = None
        self.solution: Grid = []
        self.initial_board: Grid = []
        self.board: Grid = []
        self.status = STATUS_IDLE
        self.errors: set[Cell] = set()
        self.hint: Optional[Cell] = None

        self._elapsed = 0.0
        self._resumed_at: Optional[float] = None

    @property
    def elapsed_seconds(self) -> int:
        """Whole seconds spent in the playing state since the last start or reset."""
        total = self._elapsed
        if self._resumed_at is not None:
            total += self._clock() - self._resumed_at
        return int(total)

    def start_new_game(self, mode: str) -> None:
        """Generate a fresh solution and puzzle and start playing."""
        if mode not in self.modes:
            raise ValueError(f"Unknown game mode: {mode}")

        config = self.modes[mode]
        solution, puzzle = make_puzzle(config.size, config.clues, self._rng)

        self.mode = mode
        self.size = config.size
        self.solution = solution
        self.initial_board = puzzle
        self.board = copy.deepcopy(puzzle)
        self._start_playing()

        _LOGGER.info(
            "Started %s game: %d clues on %dx%d board",
            mode,
            self.clue_count,
            config.size,
            config.size,
        )

    def reset_game(self) -> None:
        """Revert the board to the initial puzzle and restart the clock."""
        if not self.initial_board:
            return
        self.board = copy.deepcopy(self.initial_board)
        self._start_playing()

    def update_cell(self, row: int, col: int, raw_value: Any) -> bool:
        """
        Apply a player edit.

        Edits outside the playing state, on clue cells, or with values that do
        not parse into ``[1, size]`` are ignored.

        Returns:
            True if the edit was applied
        """
        if self.status != STATUS_PLAYING or not self.board:
            return False
        self._check_cell(row, col)

        if self.initial_board[row][col] != 0:
            return False

        num = parse_cell_value(raw_value, self.size)
        if num is None:
            return False

        next_board = copy.deepcopy(self.board)
        next_board[row][col] = num

        self.board = next_board
        self.errors = compute_errors(next_board, self.size)
        self.hint = None

        if is_solved(next_board, self.size):
            self._complete()
        return True

    def give_hint(self) -> Optional[Cell]:
        """Point at the first empty cell that has a single legal value."""
        if self.status != STATUS_PLAYING or not self.board or not self.size:
            return None
        cell = find_hint(self.board, self.size)
        if cell is not None:
            self.hint = cell
        return cell

    @property
    def clue_count(self) -> int:
        return sum(1 for row in self.initial_board for cell in row if cell != 0)

    def _check_cell(self, row: int, col: int) -> None:
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise IndexError(
                f"Cell ({row}, {col}) is outside the {self.size}x{self.size} board"
            )

    def _start_playing(self) -> None:
        self.errors = set()
        self.hint = None
        self.status = STATUS_PLAYING
        self._elapsed = 0.0
        self._resumed_at = self._clock()

    def _complete(self) -> None:
        if self._resumed_at is not None:
            self._elapsed += self._clock() - self._resumed_at
            self._resumed_at = None
        self.status = STATUS_COMPLETED
        _LOGGER.info(
            "Completed %s game in %d seconds", self.mode, self.elapsed_seconds
        )
