"""Declarative base and column mixins shared by the club tables.

Clubs, members, games and team configurations are keyed by UUID text, the
format the hosted dashboard database hands out. Per-game rows (events,
RSVPs, lineups) use integer keys so that ordering by ID follows insertion.

Example:
    >>> class Sponsor(UuidPrimaryKeyMixin, ClubScopedMixin, TimestampMixin, Base):
    ...     __tablename__ = "sponsors"
    ...     name: Mapped[str] = mapped_column(String(100))
"""
from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import ForeignKey, MetaData, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Deterministic constraint names keep SQLite table rebuilds diffable
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


def new_id() -> str:
    """Generate a primary key in the hosted database's UUID text format."""
    return str(uuid.uuid4())


class UuidPrimaryKeyMixin:
    """UUID text primary key generated on insert."""

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)


class ClubScopedMixin:
    """Owning club of a row. Every read filters on it."""

    club_id: Mapped[str] = mapped_column(
        ForeignKey("clubs.id", ondelete="CASCADE"), nullable=False, index=True
    )


class TimestampMixin:
    """created_at and updated_at columns maintained on insert and update."""

    created_at: Mapped[datetime] = mapped_column(default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=func.now(), onupdate=func.now(), nullable=False
    )
