"""
Runtime configuration, read from the environment.

- Loads a local .env if present (dev convenience; in prod the platform injects env vars)
- DATABASE_URL   -> SQLAlchemy URL, defaults to a SQLite file next to the working dir
- APP_ENV        -> "local" auto-creates tables on API startup
- RANDOM_SOURCE  -> "random_org" asks random.org for the secret, "local" never touches the network
- LOG_LEVEL      -> root logging level (unset: INFO for the API, WARNING for the CLI)
- HOST, PORT     -> where `cold-hot-api` listens
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_DATABASE_URL = "sqlite:///./cold-hot.db"
RANDOM_SOURCES = ("random_org", "local")


@dataclass(frozen=True)
class Settings:
    database_url: str
    app_env: str
    random_source: str
    log_level: Optional[str]
    host: str
    port: int


def load_settings() -> Settings:
    random_source = os.getenv("RANDOM_SOURCE", "local").strip().lower()
    if random_source not in RANDOM_SOURCES:
        raise RuntimeError(
            f"RANDOM_SOURCE must be one of {', '.join(RANDOM_SOURCES)}; got {random_source!r}."
        )
    return Settings(
        database_url=os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL,
        app_env=os.getenv("APP_ENV", "local"),
        random_source=random_source,
        log_level=(os.getenv("LOG_LEVEL") or "").strip().upper() or None,
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
    )


def configure_logging(level: Optional[str] = None, default: str = "INFO") -> None:
    """Set up root logging once for the CLI / API process; LOG_LEVEL wins over `default`."""
    logging.basicConfig(
        level=level or load_settings().log_level or default,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
