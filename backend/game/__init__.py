"""Game state and registry exports."""

from .session import DEFAULT_MODES, GameMode, SudokuGame
from .store import GameRecord, GameStore

__all__ = ["DEFAULT_MODES", "GameMode", "GameRecord", "GameStore", "SudokuGame"]
