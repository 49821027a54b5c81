"""
- Spins up a temp in-memory SQLite DB
- Create tables before tests run
- Provide a db_session fixture and override FastAPI's get_db so routes use the test session.
- Provide a client fixture (TestClient(app)) that already has the DB override applied.
"""
import os
import pytest
from typing import Generator

# Set before the app modules read their settings:
# no dev-only startup hooks, no file DB, no network for secrets
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ["RANDOM_SOURCE"] = "local"

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from coldhot.db import Base, get_db
from coldhot.main import app
from coldhot import models  # noqa: F401
from coldhot.repository import DBGameStore
from coldhot.store import InMemoryGameStore

TEST_DATABASE_URL = "sqlite+pysqlite:///:memory:"

@pytest.fixture(scope="session")
def engine():
    # StaticPool + check_same_thread=False lets Starlette's TestClient and SQLAlchemy
    # share ONE in-memory SQLite database across threads.
    engine = create_engine(
        TEST_DATABASE_URL,
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)

@pytest.fixture
def db_session(engine) -> Generator:
    """Provide a clean session per test with rollback."""
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    db = TestingSessionLocal()
    try:
        yield db
        db.rollback()
    finally:
        db.close()

@pytest.fixture(autouse=True)
def _clean_db(engine):
    """The store commits inside requests, so wipe rows before each test."""
    with engine.begin() as conn:
        conn.execute(text("DELETE FROM attempts"))
        conn.execute(text("DELETE FROM games"))
    yield

@pytest.fixture(autouse=True)
def override_dep(db_session):
    """Force the app to use our test session for every request."""
    def _get_db_for_tests():
        yield db_session

    app.dependency_overrides[get_db] = _get_db_for_tests
    yield
    app.dependency_overrides.clear()

@pytest.fixture
def client():
    return TestClient(app)

# Both Game Store implementations, so contract tests run against each
@pytest.fixture(params=["memory", "db"])
def store(request, db_session):
    if request.param == "memory":
        return InMemoryGameStore()
    return DBGameStore(db_session)
