"""SQLite engine and session handling for the club store.

The engine is built lazily from :func:`club_stats.config.get_settings` and
cached for the life of the process. Rankings only read, so callers that
never write should open a ``read_only`` scope, which rolls back instead
of committing.

Example:
    >>> from club_stats.data.db import init_db, session_scope
    >>> init_db()
    >>> with session_scope(read_only=True) as session:
    ...     session.scalars(select(Game)).all()
"""
from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import Engine, create_engine, event, inspect, text
from sqlalchemy.orm import Session, scoped_session, sessionmaker

from club_stats.config import get_settings
from club_stats.data.schema import Base

logger = logging.getLogger(__name__)

_engine: Engine | None = None
_sessions: scoped_session[Session] | None = None


def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
    # Foreign keys are off by default in SQLite; WAL lets rankings read
    # while a writer records a game.
    busy_timeout = get_settings().db_busy_timeout_ms
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA synchronous=NORMAL")
        cursor.execute(f"PRAGMA busy_timeout={int(busy_timeout)}")
    finally:
        cursor.close()
    logger.debug(f"Connection configured (busy_timeout={busy_timeout}ms)")


def get_engine() -> Engine:
    """Return the process-wide engine, creating it on first use.

    The parent directory of the database file is created when missing.
    """
    global _engine
    if _engine is not None:
        return _engine

    settings = get_settings()
    settings.db_path_obj.parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(settings.database_url, echo=False, pool_pre_ping=True)
    event.listen(engine, "connect", _on_connect)
    logger.debug(f"Engine created for {settings.database_url}")

    _engine = engine
    return engine


def get_session() -> Session:
    """Return the thread-local session bound to the club store."""
    global _sessions
    if _sessions is None:
        _sessions = scoped_session(sessionmaker(bind=get_engine()))
    return _sessions()


@contextmanager
def session_scope(read_only: bool = False) -> Generator[Session, None, None]:
    """Open a transactional scope around a series of operations.

    Commits on a clean exit unless ``read_only`` is set, in which case the
    transaction is always rolled back. Any exception rolls back and is
    re-raised.

    Args:
        read_only: Discard the transaction instead of committing it.

    Yields:
        The thread-local Session.

    Example:
        >>> with session_scope() as session:
        ...     session.add(Club(name="Pelada FC"))
    """
    session = get_session()
    try:
        yield session
        if read_only:
            session.rollback()
        else:
            session.commit()
    except Exception:
        logger.debug("Rolling back session after error")
        session.rollback()
        raise
    finally:
        session.close()


def init_db() -> None:
    """Create any missing club tables."""
    # Registers the models with Base.metadata
    from club_stats.data import models  # noqa: F401

    Base.metadata.create_all(get_engine())
    logger.info(f"Club tables ready in {get_settings().db_path}")


def database_exists() -> bool:
    """Return True when the configured database file already holds tables."""
    if not get_settings().db_path_obj.exists():
        return False
    return bool(inspect(get_engine()).get_table_names())


def reset_engine() -> None:
    """Drop the cached engine and sessions so settings are re-read."""
    global _engine, _sessions
    if _sessions is not None:
        _sessions.remove()
        _sessions = None
    if _engine is not None:
        _engine.dispose()
        _engine = None


def verify_foreign_keys_enabled() -> bool:
    """Report whether SQLite enforces foreign keys on this engine."""
    with get_engine().connect() as conn:
        return conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
