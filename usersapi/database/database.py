"""Database connection and session management for usersapi.

Supports:
- SQLite (local dev and tests)
- PostgreSQL or any other SQLAlchemy backend via `DATABASE_URL`

The engine is built once per process by the application factory and kept on
`app.state`; requests borrow a Session from the shared pool.
"""

from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from usersapi.config import Settings

# Base class for declarative models
Base = declarative_base()


def _is_sqlite_url(database_url: str) -> bool:
    return "sqlite" in (database_url or "")


def get_engine_kwargs(settings: Settings) -> dict:
    """Return deterministic create_engine kwargs for the configured DB URL.

    This is separated to allow deterministic unit testing without connecting.
    """
    engine_kwargs: dict = {
        "echo": settings.debug,
        # Drop stale pooled connections instead of failing the request.
        "pool_pre_ping": True,
    }

    if _is_sqlite_url(settings.database_url):
        # Sync handlers run in FastAPI's threadpool.
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        return engine_kwargs

    engine_kwargs["pool_size"] = settings.db_pool_size
    engine_kwargs["max_overflow"] = settings.db_max_overflow
    engine_kwargs["pool_timeout"] = settings.db_pool_timeout_sec
    return engine_kwargs


def build_engine(settings: Settings) -> Engine:
    return create_engine(settings.database_url, **get_engine_kwargs(settings))


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request) -> Iterator[Session]:
    """Get database session (dependency for FastAPI)."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Engine) -> None:
    """Create the schema if it does not exist yet."""
    # Import table models so they register on Base.metadata.
    from usersapi.database import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
