"""
Pydantic models for the API.
- Requests are validated here (shape only; the guess format is checked by the game
  itself so a bad guess becomes a 400, same as any other rejected move).
- Responses never carry ORM rows or store records directly.
"""

from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, field_validator

# 1. Start a game
class NewGameRequest(BaseModel):
    player_name: str = Field(..., description="Display name of the player")

    @field_validator("player_name")
    @classmethod
    def not_blank(cls, name: str) -> str:
        if not name.strip():
            raise ValueError("Player name can't be empty.")
        return name

    model_config = {
        "json_schema_extra": {"examples": [{"player_name": "Anna"}]}
    }

class NewGameResponse(BaseModel):
    id: int = Field(..., description="Game ID; the secret is not returned")
    player_name: str
    status: Literal["in_progress", "won"] = Field(..., description="Current state of the game")

# 2. Submit a guess
class GuessRequest(BaseModel):
    guess: str = Field(..., description="Exactly three digits, repeats allowed")

    model_config = {
        "json_schema_extra": {"examples": [{"guess": "123"}, {"guess": "772"}]}
    }

class GuessResponse(BaseModel):
    accepted: bool
    attempt_number: int = Field(..., description="1 for the first accepted guess")
    hints: List[str] = Field(..., description="Sorted: Горячо, then Тепло, then Холодно")
    won: bool
    status: Literal["in_progress", "won"]
    secret_number: Optional[str] = Field(None, description="Only revealed once the game is won")
    note: Optional[str] = None

# 3. Reading games back
class AttemptOut(BaseModel):
    attempt_number: int
    guess: str
    hints: str = Field(..., description="Hint tokens joined by a single space")

class GameSummary(BaseModel):
    id: int
    player_name: str
    outcome: Optional[Literal["won"]] = Field(None, description="null while the game is in progress")
    status: Literal["in_progress", "won"]
    created_at: datetime
    secret_number: Optional[str] = Field(None, description="Only revealed once the game is won")

class GameDetail(GameSummary):
    attempts: List[AttemptOut] = Field(..., description="Ascending attempt number")
