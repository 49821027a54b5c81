"""
SQLAlchemy ORM models.

Tables:
- games: one row per game (player, plaintext secret, outcome)
- attempts: one row per accepted guess, hints stored as "Горячо Тепло Холодно"

attempts.game_id is the secondary index every read uses; (game_id, attempt_number) is unique.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import String, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .db import Base
from .store import utcnow


class Game(Base):
    __tablename__ = "games"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    player_name: Mapped[str] = mapped_column(String(255), nullable=False)

    # 3 distinct digits, ex. "729"
    secret_number: Mapped[str] = mapped_column(String(3), nullable=False)

    # NULL while playing, "won" once guessed
    outcome: Mapped[Optional[str]] = mapped_column(String(16), nullable=True, default=None)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    attempts: Mapped[list["Attempt"]] = relationship(
        back_populates="game",
        cascade="all, delete-orphan",
        order_by="Attempt.attempt_number.asc()",
    )

class Attempt(Base):
    __tablename__ = "attempts"
    __table_args__ = (
        # one row per attempt number per game; a stale second writer hits this
        UniqueConstraint("game_id", "attempt_number", name="uq_attempts_game_number"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    game_id: Mapped[int] = mapped_column(Integer, ForeignKey("games.id", ondelete="CASCADE"), index=True)
    game: Mapped[Game] = relationship(back_populates="attempts")

    # 1, 2, 3... per game
    attempt_number: Mapped[int] = mapped_column(Integer, nullable=False)

    guess: Mapped[str] = mapped_column(String(3), nullable=False)

    # sorted hint tokens joined by one space
    hints: Mapped[str] = mapped_column(String(64), nullable=False)
