"""Main FastAPI application for the Sudoku game."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import build_store, router, validate_modes

_LOGGER = logging.getLogger(__name__)


@asynccontextmanager
async def _app_lifespan(app: FastAPI):
    """Validate puzzle mode configuration so misconfiguration fails at startup."""
    store = build_store()
    try:
        validate_modes(store.modes)
    except ValueError as e:
        raise RuntimeError(f"Invalid puzzle mode configuration at startup: {e}") from e
    app.state.store = store
    _LOGGER.info(
        "Game store ready: modes=%s max_games=%d",
        ", ".join(f"{m.name}={m.size}x{m.size}/{m.clues}" for m in store.modes.values()),
        store.max_games,
    )
    yield


app = FastAPI(
    title="Sudoku Game API",
    description="API for generating, playing and checking Sudoku puzzles",
    version="1.0.0",
    lifespan=_app_lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Sudoku Game API", "docs": "/docs"}


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("backend.main:app", host="0.0.0.0", port=8000, reload=True)
