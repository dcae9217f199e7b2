"""Pydantic models for API requests and responses."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Union

from pydantic import BaseModel, Field


class NewGameRequest(BaseModel):
    """Request to start a new game."""

    mode: Literal["easy", "normal"] = Field(
        description="Difficulty: 'easy' is a 6x6 board, 'normal' is 9x9"
    )


class CellUpdateRequest(BaseModel):
    """A player edit of one cell."""

    row: int = Field(ge=0, le=8, description="Row index (0-based)")
    col: int = Field(ge=0, le=8, description="Column index (0-based)")
    value: Union[int, float, str, None] = Field(
        description="New value in [1, size]; an empty string clears the cell",
    )

    class Config:
        json_schema_extra = {"example": {"row": 0, "col": 2, "value": "4"}}


class GameSummary(BaseModel):
    """Short description of a game for listings."""

    id: str = Field(description="Game identifier")
    name: str = Field(description="Human-readable game name")
    mode: str = Field(description="Difficulty mode")
    size: int = Field(description="Board size (6 or 9)")
    status: Literal["idle", "playing", "completed"] = Field(description="Play status")
    clues: int = Field(description="Number of given cells")
    created_at: datetime = Field(description="Creation time (UTC)")


class GameState(GameSummary):
    """Full state of a game."""

    board: list[list[int]] = Field(description="Working board (0 for empty cells)")
    initial_board: list[list[int]] = Field(
        description="Puzzle as generated; nonzero cells are fixed clues"
    )
    errors: list[list[int]] = Field(
        description="[row, col] pairs of cells breaking a row, column or box rule"
    )
    hint: list[int] | None = Field(
        default=None, description="[row, col] of the current hint target"
    )
    elapsed_seconds: int = Field(description="Seconds spent playing")
    solution: list[list[int]] | None = Field(
        default=None, description="Solution grid, revealed once completed"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "id": "3f2a9c0e5d6b4f1a8e7c9b0a1d2e3f40",
                "name": "Swift Otter 42",
                "mode": "easy",
                "size": 6,
                "status": "playing",
                "clues": 18,
                "created_at": "2026-01-01T00:00:00Z",
                "board": [
                    [1, 0, 3, 0, 5, 0],
                    [0, 5, 0, 1, 0, 3],
                    [2, 0, 4, 0, 6, 0],
                    [0, 6, 0, 2, 0, 4],
                    [3, 0, 5, 0, 1, 0],
                    [0, 1, 0, 3, 0, 5],
                ],
                "initial_board": [
                    [1, 0, 3, 0, 5, 0],
                    [0, 5, 0, 1, 0, 3],
                    [2, 0, 4, 0, 6, 0],
                    [0, 6, 0, 2, 0, 4],
                    [3, 0, 5, 0, 1, 0],
                    [0, 1, 0, 3, 0, 5],
                ],
                "errors": [],
                "hint": None,
                "elapsed_seconds": 12,
                "solution": None,
            }
        }


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service status")
    games: int = Field(description="Number of games held in memory")
    modes: dict[str, int] = Field(description="Board size per supported mode")
