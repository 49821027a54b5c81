"""
Pure game logic (no HTTP, no storage).

Each guess gets one hint per position:
- Hot  ("Горячо"):  right digit, right place
- Warm ("Тепло"):   digit is somewhere else in the secret
- Cold ("Холодно"): digit is not in the secret at all

Hints are shown sorted Hot -> Warm -> Cold so the player can't tell which
position earned which hint. The Russian tokens are the storage format too.
"""

import random
from enum import Enum
from typing import Iterable, List, Optional

from .types import Guess, Secret

CODE_LENGTH = 3
DIGITS = "0123456789"
FIRST_DIGITS = "123456789"


class InvalidGuessFormat(ValueError):
    """The raw input is not exactly three decimal digits."""


class Hint(str, Enum):
    HOT = "Горячо"
    WARM = "Тепло"
    COLD = "Холодно"

    @property
    def rank(self) -> int:
        return _RANKS[self]


_RANKS = {Hint.HOT: 1, Hint.WARM: 2, Hint.COLD: 3}


def _shuffle(pool: List[str], rng: random.Random) -> None:
    # Fisher-Yates, in place
    i = len(pool) - 1
    while i > 0:
        j = rng.randrange(i + 1)
        pool[i], pool[j] = pool[j], pool[i]
        i -= 1


def generate_secret(rng: Optional[random.Random] = None) -> Secret:
    """
    Example: "729", "105", never "012" (leading zero) or "774" (repeat).

    First digit is drawn from 1..9, then the other 9 digits are shuffled and
    the first two taken, so each of the 9*9*8 = 648 secrets is equally likely.
    """
    if rng is None:
        rng = random.SystemRandom()

    first = FIRST_DIGITS[rng.randrange(len(FIRST_DIGITS))]

    pool = [d for d in DIGITS if d != first]
    _shuffle(pool, rng)

    return first + pool[0] + pool[1]


def is_valid_guess(raw: object) -> bool:
    """
    Exactly three ASCII digits. No trimming: " 123", "+12", "١٢٣" are all rejected.
    Repeated digits are fine for a guess.
    """
    if not isinstance(raw, str) or len(raw) != CODE_LENGTH:
        return False
    for ch in raw:
        if ch not in DIGITS:
            return False
    return True


def validate_guess(raw: object) -> Guess:
    if not is_valid_guess(raw):
        raise InvalidGuessFormat("Guess must be exactly three digits, ex. 123.")
    return raw


def classify_hints(secret: Secret, guess: Guess) -> List[Hint]:
    """
    Example:
      secret = "729"
      guess  = "792"
      -> [HOT, WARM, WARM]   (guess-position order, not sorted)

    Warm means "the secret contains this digit anywhere"; digits already
    matched as Hot are not consumed.
    """
    if len(secret) != CODE_LENGTH or len(guess) != CODE_LENGTH:
        raise ValueError("Secret and guess must both be three characters; validate the guess first.")

    hints = []
    for i in range(CODE_LENGTH):
        if guess[i] == secret[i]:
            hints.append(Hint.HOT)
        elif guess[i] in secret:
            hints.append(Hint.WARM)
        else:
            hints.append(Hint.COLD)
    return hints


def sort_hints(hints: Iterable[Hint]) -> List[Hint]:
    # sorted() is stable, equal ranks keep their order
    return sorted(hints, key=lambda hint: hint.rank)


def hints_to_text(hints: Iterable[Hint]) -> str:
    """Storage form: tokens joined by a single space, ex. "Горячо Тепло Тепло"."""
    return " ".join(hint.value for hint in hints)


def hints_from_text(text: str) -> List[Hint]:
    return [Hint(token) for token in text.split(" ") if token]


def is_win(secret: Secret, guess: Guess) -> bool:
    """Win = the guess is the secret, character for character."""
    return secret == guess
