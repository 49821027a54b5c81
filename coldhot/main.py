'''
Cold-Hot API

Endpoints:
POST /games                -> start a game for a player
GET  /games                -> all games, newest first
GET  /games/{id}           -> one game with its attempts
POST /games/{id}/guess     -> submit a guess, get sorted hints

Every request gets its own DBGameStore bound to the request's DB session.
'''

from typing import List

import uvicorn
from fastapi import FastAPI, HTTPException, Depends
from fastapi.middleware.cors import CORSMiddleware

from .bootstrap_db import create_all    # dev-only: create tables
from .config import configure_logging, load_settings
from .db import get_db                  # SQLAlchemy Session dependency
from .engine import InvalidGuessFormat
from .random_client import fetch_secret
from .repository import DBGameStore     # DB-backed store
from .session import GameFinished, GameSession
from .store import AttemptConflict, AttemptRecord, GameRecord

from .schemas import (
    AttemptOut,
    GameDetail,
    GameSummary,
    GuessRequest,
    GuessResponse,
    NewGameRequest,
    NewGameResponse,
)

APP_ENV = load_settings().app_env

app = FastAPI(title="Cold-Hot API", version="1.0.0")

# The browser front end is served from elsewhere; allow everything
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

@app.on_event("startup")
def _setup_logging():
    configure_logging()

# --- Dev convenience: auto-create tables locally ---
if APP_ENV == "local":
    @app.on_event("startup")
    def _dev_create_tables():
        create_all()

def get_store(session = Depends(get_db)) -> DBGameStore:
    return DBGameStore(session)

def _summary_fields(game: GameRecord) -> dict:
    return dict(
        id=game.id,
        player_name=game.player_name,
        outcome=game.outcome,
        status=game.status,
        created_at=game.created_at,
        # secret stays hidden while the game can still be played
        secret_number=game.secret_number if game.status == "won" else None,
    )

def _to_attempt_out(attempt: AttemptRecord) -> AttemptOut:
    return AttemptOut(attempt_number=attempt.attempt_number, guess=attempt.guess, hints=attempt.hints)

# ---------------- Routes ----------------

@app.post("/games", response_model=NewGameResponse, summary="Start a new game")
def start_game(
    payload: NewGameRequest,
    store: DBGameStore = Depends(get_store),
) -> NewGameResponse:
    session = GameSession(store, secret_source=fetch_secret)
    try:
        game_id = session.start(payload.player_name)
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))

    return NewGameResponse(id=game_id, player_name=session.player_name, status=session.state.value)

@app.get("/games", response_model=List[GameSummary], summary="List games, newest first")
def list_games(store: DBGameStore = Depends(get_store)) -> List[GameSummary]:
    return [GameSummary(**_summary_fields(g)) for g in store.list_games()]

@app.get("/games/{game_id}", response_model=GameDetail, summary="Get a game and its attempts")
def get_game(
    game_id: int,
    store: DBGameStore = Depends(get_store),
) -> GameDetail:
    game = store.get_game(game_id)
    if not game:
        raise HTTPException(status_code=404, detail="Game not found")
    attempts = [_to_attempt_out(a) for a in store.list_attempts(game_id)]
    return GameDetail(**_summary_fields(game), attempts=attempts)

@app.post("/games/{game_id}/guess", response_model=GuessResponse, summary="Submit a guess")
def submit_guess(
    game_id: int,
    payload: GuessRequest,
    store: DBGameStore = Depends(get_store),
) -> GuessResponse:
    session = GameSession.resume(store, game_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Game not found")

    # a rejected guess is not recorded and doesn't use up an attempt number
    try:
        result = session.submit_guess(payload.guess)
    except InvalidGuessFormat as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    except GameFinished:
        raise HTTPException(status_code=409, detail="Game already won. No more guesses allowed.")
    except AttemptConflict:
        raise HTTPException(status_code=409, detail="Another guess was recorded first. Reload the game and try again.")

    return GuessResponse(
        accepted=result.accepted,
        attempt_number=result.attempt_number,
        hints=[hint.value for hint in result.hints],
        won=result.won,
        status=session.state.value,
        secret_number=session.secret if result.won else None,
        note=(f"Guessed in {result.attempt_number} attempt(s)!" if result.won else None),
    )

def serve() -> None:
    """`cold-hot-api` entry point: run the app under uvicorn."""
    settings = load_settings()
    uvicorn.run("coldhot.main:app", host=settings.host, port=settings.port)
