"""
Dev convenience: create tables if they don't exist.
Called at API startup in local/dev only, and by the CLI before every command.
"""

from . import models  # noqa: F401  (registers the tables on Base.metadata)
from .db import engine, Base

def create_all(bind=None):
    Base.metadata.create_all(bind=bind or engine)
