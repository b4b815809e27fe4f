# server/creomotion/infrastructure/persistence/database/session.py
from __future__ import annotations

"""SQLAlchemy engine/session setup + FastAPI dependency."""

from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from creomotion.core.config import settings

_engine: Engine | None = None
_SessionLocal: sessionmaker | None = None


def _enable_sqlite_fk(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ARG001
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(database_url: str) -> Engine:
    """
    Engine with dialect-aware connect_args.
    - PostgreSQL: connect_timeout
    - SQLite: no same-thread check, StaticPool for in-memory DBs, FK enforcement
    """
    url = make_url(database_url)
    backend = url.get_backend_name()
    kwargs: dict = dict(future=True, pool_pre_ping=True)
    connect_args: dict = {}

    if backend.startswith("postgresql"):
        connect_args["connect_timeout"] = int(settings.DB_CONNECT_TIMEOUT)
    elif backend.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        if (url.database or "").strip() in ("", ":memory:"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, connect_args=connect_args, **kwargs)
    if backend.startswith("sqlite"):
        _enable_sqlite_fk(engine)
    return engine


def init_engine() -> Engine:
    """Singleton Engine built from settings.DATABASE_URL."""
    global _engine
    if _engine is None:
        _engine = build_engine(settings.DATABASE_URL)
    return _engine


def init_sessionmaker() -> sessionmaker:
    """Create (once) and return the SessionLocal factory."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(
            bind=init_engine(),
            future=True,
            autoflush=True,
            expire_on_commit=False,
        )
    return _SessionLocal


def get_session() -> Session:
    """Return a new Session (caller is responsible for closing it)."""
    return init_sessionmaker()()


# FastAPI dependency (auto-close)
def get_db() -> Iterator[Session]:
    """
    Usage:
        def endpoint(db: Session = Depends(get_db)): ...
    """
    db = get_session()
    try:
        yield db
    finally:
        db.close()
