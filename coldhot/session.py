"""
One game, driven one guess at a time.

States: awaiting_name -> in_progress -> won (terminal)

- start(name): pick a secret, create the game in the store
- submit_guess(raw): validate, score, persist the attempt, then report
  (a rejected guess records nothing and doesn't use up an attempt number)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from .engine import (
    Hint,
    classify_hints,
    hints_to_text,
    InvalidGuessFormat,
    is_win,
    sort_hints,
    validate_guess,
)
from .random_client import fetch_secret
from .store import AttemptConflict, GameStore
from .types import Secret

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    AWAITING_NAME = "awaiting_name"
    IN_PROGRESS = "in_progress"
    WON = "won"


class GameNotStarted(RuntimeError):
    """Guess submitted before the player gave a name."""


class GameFinished(RuntimeError):
    """Guess submitted after the secret was already found."""


@dataclass(frozen=True)
class GuessResult:
    accepted: bool
    attempt_number: int = 0
    hints: Optional[List[Hint]] = None  # sorted Hot -> Warm -> Cold
    won: bool = False


class GameSession:
    def __init__(self, store: GameStore, secret_source: Optional[Callable[[], Secret]] = None) -> None:
        self.store = store
        self.secret_source = secret_source or fetch_secret
        self.state = SessionState.AWAITING_NAME
        self.game_id: Optional[int] = None
        self.player_name: Optional[str] = None
        self.secret: Optional[Secret] = None
        self.attempts = 0

    @classmethod
    def resume(cls, store: GameStore, game_id: int) -> Optional["GameSession"]:
        """Rebuild a session from what the store has (used by the stateless API)."""
        game = store.get_game(game_id)
        if game is None:
            return None

        session = cls(store)
        session.game_id = game.id
        session.player_name = game.player_name
        session.secret = game.secret_number
        session._resync()
        return session

    def _resync(self) -> None:
        game = self.store.get_game(self.game_id)
        self.attempts = len(self.store.list_attempts(self.game_id))
        self.state = SessionState.WON if game.outcome == "won" else SessionState.IN_PROGRESS

    def start(self, player_name: str) -> int:
        if self.state is not SessionState.AWAITING_NAME:
            raise RuntimeError("Session already started.")
        if not player_name or not player_name.strip():
            raise ValueError("Player name can't be empty.")

        self.player_name = player_name
        self.secret = self.secret_source()
        self.game_id = self.store.create_game(player_name, self.secret)
        self.attempts = 0
        self.state = SessionState.IN_PROGRESS
        return self.game_id

    def submit_guess(self, raw: str) -> GuessResult:
        if self.state is SessionState.AWAITING_NAME:
            raise GameNotStarted("Start the game with a player name first.")
        if self.state is SessionState.WON:
            raise GameFinished(f"Game {self.game_id} is already won.")

        try:
            guess = validate_guess(raw)
        except InvalidGuessFormat:
            logger.debug("game %s: rejected guess %r", self.game_id, raw)
            raise

        attempt_number = self.attempts + 1
        hints = sort_hints(classify_hints(self.secret, guess))
        won = is_win(self.secret, guess)

        # persisted before the caller sees the result
        try:
            if won:
                self.store.append_winning_attempt(self.game_id, attempt_number, guess, hints_to_text(hints))
            else:
                self.store.append_attempt(self.game_id, attempt_number, guess, hints_to_text(hints))
        except AttemptConflict:
            # another session wrote to this game since we were resumed
            self._resync()
            if self.state is SessionState.WON:
                raise GameFinished(f"Game {self.game_id} is already won.")
            raise

        if won:
            self.state = SessionState.WON
            logger.info("game %s won in %d attempt(s)", self.game_id, attempt_number)
        else:
            logger.info("game %s attempt %d: %s", self.game_id, attempt_number, hints_to_text(hints))
        self.attempts = attempt_number

        return GuessResult(accepted=True, attempt_number=attempt_number, hints=hints, won=won)


def start_game(store: GameStore, player_name: str, secret_source: Optional[Callable[[], Secret]] = None) -> GameSession:
    session = GameSession(store, secret_source=secret_source)
    session.start(player_name)
    return session


def submit_guess(session: GameSession, raw: str) -> GuessResult:
    """Like GameSession.submit_guess, but a malformed guess comes back as accepted=False."""
    try:
        return session.submit_guess(raw)
    except InvalidGuessFormat:
        return GuessResult(accepted=False, attempt_number=session.attempts)
