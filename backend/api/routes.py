"""API routes for the Sudoku game application."""

from __future__ import annotations

import logging
import os
import random
from typing import TypeVar

from fastapi import APIRouter, HTTPException, Request

from ..game.session import DEFAULT_MODES, STATUS_COMPLETED, GameMode
from ..game.store import GameRecord, GameStore
from ..models.schemas import (
    CellUpdateRequest,
    GameState,
    GameSummary,
    HealthResponse,
    NewGameRequest,
)

router = APIRouter()
_LOGGER = logging.getLogger(__name__)

_T = TypeVar("_T", int, float)


def _env(name: str, default: _T) -> _T:
    """Read an environment variable, converting to the same type as *default*."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return type(default)(raw)
    except (TypeError, ValueError):
        _LOGGER.warning("Ignoring invalid %s=%r, using %r", name, raw, default)
        return default


def load_modes() -> dict[str, GameMode]:
    """Mode table with clue counts overridable from the environment."""
    easy = DEFAULT_MODES["easy"]
    normal = DEFAULT_MODES["normal"]
    return {
        "easy": GameMode(
            name="easy", size=easy.size, clues=_env("SUDOKU_EASY_CLUES", easy.clues)
        ),
        "normal": GameMode(
            name="normal",
            size=normal.size,
            clues=_env("SUDOKU_NORMAL_CLUES", normal.clues),
        ),
    }


def validate_modes(modes: dict[str, GameMode]) -> None:
    """Raise ValueError if a mode asks for an impossible number of clues."""
    for mode in modes.values():
        if not 0 <= mode.clues <= mode.size * mode.size:
            raise ValueError(
                f"Mode '{mode.name}' keeps {mode.clues} clues on a "
                f"{mode.size}x{mode.size} board"
            )


def build_store() -> GameStore:
    seed = os.getenv("SUDOKU_SEED")
    rng = random.Random(seed) if seed is not None else random.Random()
    return GameStore(
        modes=load_modes(),
        max_games=_env("SUDOKU_MAX_GAMES", 500),
        rng=rng,
    )


def get_store(request: Request) -> GameStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        store = build_store()
        request.app.state.store = store
    return store


def _get_record(request: Request, game_id: str) -> GameRecord:
    record = get_store(request).get(game_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Game not found")
    return record


def _summary(record: GameRecord) -> GameSummary:
    game = record.game
    return GameSummary(
        id=record.id,
        name=record.name,
        mode=game.mode,
        size=game.size,
        status=game.status,
        clues=game.clue_count,
        created_at=record.created_at,
    )


def _state(record: GameRecord) -> GameState:
    game = record.game
    completed = game.status == STATUS_COMPLETED
    return GameState(
        **_summary(record).model_dump(),
        board=game.board,
        initial_board=game.initial_board,
        errors=[list(cell) for cell in sorted(game.errors)],
        hint=list(game.hint) if game.hint is not None else None,
        elapsed_seconds=game.elapsed_seconds,
        solution=game.solution if completed else None,
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """Health check endpoint."""
    store = get_store(request)
    return HealthResponse(
        status="healthy",
        games=len(store),
        modes={name: mode.size for name, mode in store.modes.items()},
    )


@router.get("/api/v1/games", response_model=list[GameSummary], tags=["Games"])
async def list_games(request: Request):
    """List games, newest first."""
    return [_summary(record) for record in get_store(request).list_games()]


@router.post("/api/v1/games", response_model=GameState, tags=["Games"])
def create_game(body: NewGameRequest, request: Request):
    """
    Start a new game.

    Digging a puzzle is CPU-bound, so this runs in the threadpool.

    Expected JSON format:
    {
        "mode": "easy" | "normal"
    }
    The server generates a fresh solution and a puzzle with a unique solution.
    """
    record = get_store(request).create(body.mode)
    return _state(record)


@router.get("/api/v1/games/{game_id}", response_model=GameState, tags=["Games"])
async def get_game(game_id: str, request: Request):
    """Return the full state of a game."""
    return _state(_get_record(request, game_id))


@router.put("/api/v1/games/{game_id}/cells", response_model=GameState, tags=["Games"])
async def update_cell(game_id: str, body: CellUpdateRequest, request: Request):
    """
    Apply a player edit.

    Edits of clue cells, edits with values outside the board's range and
    edits after completion are ignored; the unchanged state is returned.
    """
    record = _get_record(request, game_id)
    try:
        record.game.update_cell(body.row, body.col, body.value)
    except IndexError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _state(record)


@router.post(
    "/api/v1/games/{game_id}:reset", response_model=GameState, tags=["Games"]
)
async def reset_game(game_id: str, request: Request):
    """Revert the board to the initial puzzle."""
    record = _get_record(request, game_id)
    record.game.reset_game()
    return _state(record)


@router.post("/api/v1/games/{game_id}:hint", response_model=GameState, tags=["Games"])
async def give_hint(game_id: str, request: Request):
    """Highlight the first empty cell that has a single legal value, if any."""
    record = _get_record(request, game_id)
    record.game.give_hint()
    return _state(record)


@router.delete("/api/v1/games/{game_id}", tags=["Games"])
async def delete_game(game_id: str, request: Request):
    """Delete a game."""
    if not get_store(request).delete(game_id):
        raise HTTPException(status_code=404, detail="Game not found")
    return {"ok": True}
