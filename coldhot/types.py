"""
Labels for clarity.
"""

from typing import Literal, Optional

Secret = str  # 3 distinct digits, first one non-zero, ex. "729"
Guess = str   # 3 digits, repeats allowed, ex. "772"
GameStatus = Literal["in_progress", "won"]
Outcome = Optional[Literal["won"]]  # None while the game is being played
