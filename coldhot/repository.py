"""
DB-backed Game Store, same methods as the in-memory InMemoryGameStore.

Public methods:
- create_game(player_name, secret) -> int
- record_outcome(game_id, outcome) -> None
- append_attempt(game_id, attempt_number, guess, hints) -> None
- append_winning_attempt(game_id, attempt_number, guess, hints) -> None
- list_games() -> list[GameRecord]          (newest first)
- get_game(game_id) -> GameRecord | None
- list_attempts(game_id) -> list[AttemptRecord]  (ascending attempt number)

Why: the session and the routes only see GameStore, so memory vs SQL is a swap.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy import select

from .models import Game as GameORM, Attempt as AttemptORM
from .store import AttemptConflict, AttemptRecord, GameNotFound, GameRecord
from .types import Guess, Outcome, Secret

logger = logging.getLogger(__name__)

# --- Small record builders: ORM rows never leave this module ---

def _to_game_record(game: GameORM) -> GameRecord:
    return GameRecord(
        id=game.id,
        player_name=game.player_name,
        secret_number=game.secret_number,
        outcome=game.outcome,
        created_at=game.created_at,
    )

def _to_attempt_record(attempt: AttemptORM) -> AttemptRecord:
    return AttemptRecord(
        game_id=attempt.game_id,
        attempt_number=attempt.attempt_number,
        guess=attempt.guess,
        hints=attempt.hints,
    )

class DBGameStore:
    """Game Store over one SQLAlchemy session (one per request / CLI command)."""

    def __init__(self, db: Session):
        self.db = db

    def _require(self, game_id: int) -> GameORM:
        # fresh row, locked for the rest of the transaction where the DB supports it
        game = self.db.get(GameORM, game_id, populate_existing=True, with_for_update=True)
        if not game:
            raise GameNotFound(f"Game {game_id} not found")
        return game

    def create_game(self, player_name: str, secret: Secret) -> int:
        game = GameORM(player_name=player_name, secret_number=secret)
        self.db.add(game)
        self.db.commit()
        self.db.refresh(game)
        logger.info("game %s created for %r", game.id, player_name)
        return game.id

    def record_outcome(self, game_id: int, outcome: Outcome) -> None:
        game = self._require(game_id)
        game.outcome = outcome
        self.db.commit()

    def _add_attempt(self, game_id: int, attempt_number: int, guess: Guess, hints: str, won: bool) -> None:
        game = self._require(game_id)
        if game.outcome == "won":
            raise AttemptConflict(f"Game {game_id} is already won")

        self.db.add(AttemptORM(game_id=game_id, attempt_number=attempt_number, guess=guess, hints=hints))
        if won:
            game.outcome = "won"

        # attempt row (+ outcome) in one commit
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise AttemptConflict(f"Game {game_id} already has attempt {attempt_number}")

    def append_attempt(self, game_id: int, attempt_number: int, guess: Guess, hints: str) -> None:
        self._add_attempt(game_id, attempt_number, guess, hints, won=False)

    def append_winning_attempt(self, game_id: int, attempt_number: int, guess: Guess, hints: str) -> None:
        self._add_attempt(game_id, attempt_number, guess, hints, won=True)

    def list_games(self) -> list[GameRecord]:
        games = (
            self.db.execute(select(GameORM).order_by(GameORM.created_at.desc(), GameORM.id.desc()))
            .scalars()
            .all()
        )
        return [_to_game_record(g) for g in games]

    def get_game(self, game_id: int) -> Optional[GameRecord]:
        game = self.db.get(GameORM, game_id)
        if not game:
            return None
        return _to_game_record(game)

    def list_attempts(self, game_id: int) -> list[AttemptRecord]:
        attempts = (
            self.db.execute(
                select(AttemptORM)
                .where(AttemptORM.game_id == game_id)
                .order_by(AttemptORM.attempt_number.asc())
            )
            .scalars()
            .all()
        )
        return [_to_attempt_record(a) for a in attempts]
