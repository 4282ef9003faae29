from __future__ import annotations

"""Engine, session factory and raw SQL execution helpers.

Repositories write their queries as SQL text with positional ``$N``
placeholders, the form produced by :mod:`jobly.app.utils.sql`. :func:`run_query`
rewrites them into SQLAlchemy bind parameters so the same text runs on
PostgreSQL and on the SQLite databases used in tests.
"""

import re
from typing import Any, Iterator, Sequence

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, RowMapping
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from config import get_settings
from jobly.app.obs import add_query_logger

from ..models import Base

_PLACEHOLDER_RE = re.compile(r"\$(\d+)")


def _enable_sqlite_foreign_keys(engine: Engine) -> None:
    """Turn on ``ON DELETE CASCADE`` support for SQLite connections."""

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_conn, _record):  # type: ignore[no-untyped-def]
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: str, name: str = "jobly") -> Engine:
    """Create an engine for ``url`` with query logging attached."""
    if url.startswith("sqlite"):
        kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        new_engine = create_engine(url, **kwargs)
        _enable_sqlite_foreign_keys(new_engine)
    else:
        new_engine = create_engine(url, pool_pre_ping=True)
    add_query_logger(new_engine, name, get_settings().db_slow_query_ms)
    return new_engine


def create_test_session() -> tuple[sessionmaker, Engine]:
    """Return a session factory and engine for tests.

    The database uses an in-memory SQLite engine with a static pool so that
    multiple connections share the same data.
    """

    test_engine = build_engine("sqlite://", "test")
    Base.metadata.create_all(bind=test_engine)
    session_factory = sessionmaker(bind=test_engine, autocommit=False, autoflush=False)
    return session_factory, test_engine


# Populated lazily from settings, or by tests via ``create_test_session``.
SessionLocal: sessionmaker | None = None
engine: Engine | None = None


def get_engine() -> Engine:
    """Return the application engine, creating it on first use."""
    global SessionLocal, engine
    if engine is None:
        engine = build_engine(get_settings().database_url)
        SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    return engine


def get_session() -> Iterator[Session]:
    """FastAPI dependency yielding a session that is closed afterwards."""
    if SessionLocal is None:
        get_engine()
    assert SessionLocal is not None  # for type checkers
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def to_bind_params(
    sql: str, values: Sequence[Any], dialect: str = "postgresql"
) -> tuple[str, dict[str, Any]]:
    """Translate ``$N`` placeholders into ``:pN`` binds for ``sqlalchemy.text``.

    SQLite has no ``ILIKE``; its ``LIKE`` is already case-insensitive for
    ASCII text so the operator is swapped there.
    """
    params = {f"p{idx}": value for idx, value in enumerate(values, start=1)}
    sql = _PLACEHOLDER_RE.sub(r":p\1", sql)
    if dialect == "sqlite":
        sql = sql.replace(" ILIKE ", " LIKE ")
    return sql, params


def run_query(
    session: Session, sql: str, values: Sequence[Any] = ()
) -> list[RowMapping]:
    """Execute ``sql`` with positional ``values`` and return mapping rows."""
    statement, params = to_bind_params(sql, values, session.get_bind().dialect.name)
    result = session.execute(text(statement), params)
    if not result.returns_rows:
        return []
    return list(result.mappings().all())


__all__ = [
    "SessionLocal",
    "engine",
    "build_engine",
    "create_test_session",
    "get_engine",
    "get_session",
    "run_query",
    "to_bind_params",
]
