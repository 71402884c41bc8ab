"""SQLAlchemy engine and per-request sessions for the subscription store.

``DATABASE_URL`` picks the backend (any SQLAlchemy URL works). When it is unset
the store lives in ``./data/comingsoon.db`` so a fresh checkout runs as is.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

load_dotenv()


def _fallback_url() -> str:
    store_dir = Path.cwd() / "data"
    store_dir.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{(store_dir / 'comingsoon.db').as_posix()}"


def _engine_options(url: str) -> dict:
    options = {"pool_pre_ping": True}
    if url.startswith("sqlite"):
        # Request handlers run on a threadpool, not the thread that opened the connection
        options["connect_args"] = {"check_same_thread": False}
    return options


DATABASE_URL = (os.getenv("DATABASE_URL") or "").strip() or _fallback_url()

engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Yield one session per request and close it afterwards."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
