"""
Single place to:
- Create a SQLAlchemy Engine from DATABASE_URL (SQLite by default, MySQL via PyMySQL)
- Create a Session factory (SessionLocal) for per-request / per-command DB sessions
- Provide get_db() dependency for FastAPI routes
"""

from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from .config import load_settings

DATABASE_URL = load_settings().database_url

# SQLite connections are used from FastAPI's worker threads too
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

# pool_pre_ping=True = auto-detect dead connections (helps with long-lived processes).
engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True,
    echo=False,
    future=True,
    connect_args=connect_args,
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

class Base(DeclarativeBase):
    pass

# FastAPI dependency that yields a DB session for the duration of a request.
def get_db() -> Generator:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
