"""Store access for the helpdesk API.

`DATABASE_URL` selects the store; without it a `helpdesk.db` SQLite file in the
project root is used. Each request gets its own session from `get_db`, and
`init_db` creates the helpdesk tables at startup.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def _default_sqlite_url() -> str:
    db_path = PROJECT_ROOT / "helpdesk.db"
    return f"sqlite:///{db_path.as_posix()}"


DATABASE_URL: str = os.getenv("DATABASE_URL") or _default_sqlite_url()


def make_engine(url: str):
    """Build an engine for `url`, applying the SQLite threading options when needed."""
    if not url.startswith("sqlite"):
        return create_engine(url, future=True, pool_pre_ping=True)
    kwargs: dict = {"connect_args": {"check_same_thread": False}, "future": True}
    # An in-memory database only lives as long as its connection
    if url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


engine = make_engine(DATABASE_URL)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, class_=Session)

Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """One session per request, closed when the response is done."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def init_db(bind=None) -> None:
    """Create any missing helpdesk tables on `bind` (the app engine by default)."""
    import helpdesk.models  # noqa: F401  registers the tables on Base.metadata

    target = bind if bind is not None else engine
    logger.info("Ensuring helpdesk tables exist on %s", target.url.render_as_string(hide_password=True))
    try:
        Base.metadata.create_all(bind=target)
    except Exception:
        logger.exception("Could not create helpdesk tables")
        raise


__all__ = ["Base", "engine", "SessionLocal", "get_db", "init_db", "make_engine"]
