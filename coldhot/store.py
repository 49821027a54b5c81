"""
Game Store: the persistence contract the game needs, plus an in-memory store.

Any backend (SQL via SQLAlchemy in repository.py, or the dict-backed store below)
provides the same methods, so the session and the routes never care which one
they talk to.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from itertools import count
from threading import RLock
from typing import Dict, List, Optional, Protocol
import logging

from .engine import Hint, hints_from_text
from .types import GameStatus, Guess, Outcome, Secret

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    # naive UTC, SQLite DateTime columns drop tzinfo anyway
    return datetime.now(timezone.utc).replace(tzinfo=None)


class GameNotFound(LookupError):
    """Write against a game id the store doesn't know."""


class AttemptConflict(RuntimeError):
    """Attempt number already taken, or the game is already won."""


@dataclass(frozen=True)
class AttemptRecord:
    game_id: int
    attempt_number: int
    guess: Guess
    hints: str  # "Горячо Тепло Холодно"

    @property
    def hint_list(self) -> List[Hint]:
        return hints_from_text(self.hints)


@dataclass(frozen=True)
class GameRecord:
    id: int
    player_name: str
    secret_number: Secret
    outcome: Outcome = None
    created_at: datetime = field(default_factory=utcnow)

    @property
    def status(self) -> GameStatus:
        return "won" if self.outcome == "won" else "in_progress"


class GameStore(Protocol):
    def create_game(self, player_name: str, secret: Secret) -> int:
        """Persist a new game and return its id."""

    def record_outcome(self, game_id: int, outcome: Outcome) -> None:
        """Set (or clear) the game's outcome."""

    def append_attempt(self, game_id: int, attempt_number: int, guess: Guess, hints: str) -> None:
        """Append one attempt row; AttemptConflict on a taken number or a won game."""

    def append_winning_attempt(self, game_id: int, attempt_number: int, guess: Guess, hints: str) -> None:
        """Append the attempt and set outcome "won" in one step."""

    def list_games(self) -> List[GameRecord]:
        """All games, newest first."""

    def get_game(self, game_id: int) -> Optional[GameRecord]:
        """One game, or None."""

    def list_attempts(self, game_id: int) -> List[AttemptRecord]:
        """Attempts of one game, ascending attempt number."""


class InMemoryGameStore:
    def __init__(self) -> None:
        self._games: Dict[int, GameRecord] = {}
        self._attempts: Dict[int, List[AttemptRecord]] = {}
        self._ids = count(1)
        self._lock = RLock()

    def create_game(self, player_name: str, secret: Secret) -> int:
        with self._lock:
            game_id = next(self._ids)
            self._games[game_id] = GameRecord(id=game_id, player_name=player_name, secret_number=secret)
            self._attempts[game_id] = []
        logger.info("game %s created for %r", game_id, player_name)
        return game_id

    def _require(self, game_id: int) -> GameRecord:
        game = self._games.get(game_id)
        if game is None:
            raise GameNotFound(f"Game {game_id} not found")
        return game

    def record_outcome(self, game_id: int, outcome: Outcome) -> None:
        with self._lock:
            game = self._require(game_id)
            self._games[game_id] = replace(game, outcome=outcome)

    def append_attempt(self, game_id: int, attempt_number: int, guess: Guess, hints: str) -> None:
        with self._lock:
            game = self._require(game_id)
            if game.outcome == "won":
                raise AttemptConflict(f"Game {game_id} is already won")
            for attempt in self._attempts[game_id]:
                if attempt.attempt_number == attempt_number:
                    raise AttemptConflict(f"Game {game_id} already has attempt {attempt_number}")
            self._attempts[game_id].append(
                AttemptRecord(game_id=game_id, attempt_number=attempt_number, guess=guess, hints=hints)
            )

    def append_winning_attempt(self, game_id: int, attempt_number: int, guess: Guess, hints: str) -> None:
        # RLock: both writes happen under one hold
        with self._lock:
            self.append_attempt(game_id, attempt_number, guess, hints)
            self.record_outcome(game_id, "won")

    def list_games(self) -> List[GameRecord]:
        with self._lock:
            games = list(self._games.values())
        return sorted(games, key=lambda g: (g.created_at, g.id), reverse=True)

    def get_game(self, game_id: int) -> Optional[GameRecord]:
        with self._lock:
            return self._games.get(game_id)

    def list_attempts(self, game_id: int) -> List[AttemptRecord]:
        with self._lock:
            attempts = list(self._attempts.get(game_id, []))
        return sorted(attempts, key=lambda a: a.attempt_number)
