# tests/test_repository.py
import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from coldhot.models import Attempt as AttemptORM, Game as GameORM
from coldhot.repository import DBGameStore
from coldhot.session import start_game
from coldhot.store import AttemptConflict

def test_repository_flow(db_session):
    repo = DBGameStore(db_session)

    session = start_game(repo, "Dasha", secret_source=lambda: "729")
    gid = session.game_id

    # Not a win
    result = session.submit_guess("792")
    assert result.won is False

    # Win
    result = session.submit_guess("729")
    assert result.won is True

    # Rows as stored: plaintext secret, hint tokens joined by spaces
    game_row = db_session.get(GameORM, gid)
    assert game_row.secret_number == "729"
    assert game_row.outcome == "won"

    rows = (
        db_session.execute(select(AttemptORM).where(AttemptORM.game_id == gid).order_by(AttemptORM.attempt_number))
        .scalars()
        .all()
    )
    assert [(r.attempt_number, r.guess, r.hints) for r in rows] == [
        (1, "792", "Горячо Тепло Тепло"),
        (2, "729", "Горячо Горячо Горячо"),
    ]

def test_orm_relationship_orders_attempts(db_session):
    repo = DBGameStore(db_session)
    gid = repo.create_game("Egor", "123")
    repo.append_attempt(gid, 2, "321", "Горячо Тепло Тепло")
    repo.append_attempt(gid, 1, "456", "Холодно Холодно Холодно")

    game_row = db_session.get(GameORM, gid)
    db_session.refresh(game_row)
    assert [a.attempt_number for a in game_row.attempts] == [1, 2]
    assert [a.attempt_number for a in repo.list_attempts(gid)] == [1, 2]

def test_attempt_number_is_unique_per_game(db_session):
    repo = DBGameStore(db_session)
    gid = repo.create_game("Pavel", "729")
    repo.append_attempt(gid, 1, "111", "Холодно Холодно Холодно")

    # the table itself refuses a second attempt #1, even bypassing the store
    db_session.add(AttemptORM(game_id=gid, attempt_number=1, guess="222", hints="Горячо Холодно Холодно"))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()

    # the store turns the same clash into AttemptConflict and leaves the session usable
    with pytest.raises(AttemptConflict):
        repo.append_attempt(gid, 1, "333", "Холодно Холодно Холодно")
    assert [a.guess for a in repo.list_attempts(gid)] == ["111"]
