"""In-memory registry of running games."""

from __future__ import annotations

import logging
import random
import threading
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from .session import DEFAULT_MODES, GameMode, SudokuGame

_LOGGER = logging.getLogger(__name__)

_ADJECTIVES = (
    "Amber", "Brave", "Calm", "Crimson", "Dusty", "Eager", "Gentle", "Golden",
    "Hidden", "Jolly", "Lucky", "Misty", "Noble", "Quiet", "Rapid", "Silent",
    "Silver", "Sunny", "Swift", "Wild",
)
_NOUNS = (
    "Badger", "Comet", "Falcon", "Forest", "Harbor", "Lantern", "Maple",
    "Meadow", "Otter", "Panda", "Pebble", "River", "Robin", "Summit", "Tiger",
    "Willow",
)

# Attempts at a fresh name before a random suffix is appended.
_NAME_ATTEMPTS = 50


def generate_game_name(rng: random.Random) -> str:
    """Build a readable game name such as ``"Swift Otter 42"``."""
    return f"{rng.choice(_ADJECTIVES)} {rng.choice(_NOUNS)} {rng.randint(1, 99)}"


@dataclass
class GameRecord:
    id: str
    name: str
    game: SudokuGame
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class GameStore:
    """Keeps games in memory, newest first, evicting the oldest past max_games."""

    def __init__(
        self,
        modes: Optional[dict[str, GameMode]] = None,
        max_games: int = 500,
        rng: Optional[random.Random] = None,
    ):
        self.modes = modes or DEFAULT_MODES
        self.max_games = max(1, int(max_games))
        self._rng = rng or random.Random()
        self._games: OrderedDict[str, GameRecord] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._games)

    def create(self, mode: str) -> GameRecord:
        """Start a new game in the given mode and register it under a unique name."""
        game = SudokuGame(modes=self.modes, rng=self._rng)
        game.start_new_game(mode)

        with self._lock:
            record = GameRecord(
                id=uuid.uuid4().hex, name=self._unique_name(), game=game
            )
            self._games[record.id] = record
            self._games.move_to_end(record.id, last=False)

            while len(self._games) > self.max_games:
                evicted_id, evicted = self._games.popitem(last=True)
                _LOGGER.info("Evicted game %s (%s)", evicted_id, evicted.name)

        _LOGGER.info("Created game %s (%s) in %s mode", record.id, record.name, mode)
        return record

    def get(self, game_id: str) -> Optional[GameRecord]:
        return self._games.get(game_id)

    def list_games(self) -> list[GameRecord]:
        """All games, newest first."""
        with self._lock:
            return list(self._games.values())

    def delete(self, game_id: str) -> bool:
        with self._lock:
            record = self._games.pop(game_id, None)
        if record is None:
            return False
        _LOGGER.info("Deleted game %s (%s)", game_id, record.name)
        return True

    def _unique_name(self) -> str:
        taken = {record.name for record in self._games.values()}
        for _ in range(_NAME_ATTEMPTS):
            name = generate_game_name(self._rng)
            if name not in taken:
                return name
        return f"{name} {uuid.uuid4().hex[:6]}"
