"""Data layer for club statistics.

Submodules:
    db: Database engine and session management
    schema: SQLAlchemy base class and mixins
    models: SQLAlchemy ORM model definitions
    readers: Row readers producing scoring snapshots

Example:
    >>> from club_stats.data import init_db, session_scope, ClubDataReader
    >>> init_db()
    >>> with session_scope() as session:
    ...     members = ClubDataReader(session).read_members("club-1")
"""
from __future__ import annotations

from club_stats.data.db import (
    database_exists,
    get_engine,
    get_session,
    init_db,
    reset_engine,
    session_scope,
    verify_foreign_keys_enabled,
)
from club_stats.data.models import (
    Club,
    Game,
    GameEvent,
    GameParticipant,
    Member,
    TeamAssignment,
    TeamConfiguration,
)
from club_stats.data.readers import ClubDataReader
from club_stats.data.schema import (
    Base,
    ClubScopedMixin,
    TimestampMixin,
    UuidPrimaryKeyMixin,
    new_id,
)

__all__ = [
    # Database utilities
    "database_exists",
    "get_engine",
    "get_session",
    "init_db",
    "reset_engine",
    "session_scope",
    "verify_foreign_keys_enabled",
    # Base and mixins
    "Base",
    "ClubScopedMixin",
    "TimestampMixin",
    "UuidPrimaryKeyMixin",
    "new_id",
    # Club reference models
    "Club",
    "Member",
    "TeamConfiguration",
    # Game models
    "Game",
    "GameEvent",
    "GameParticipant",
    "TeamAssignment",
    # Readers
    "ClubDataReader",
]
