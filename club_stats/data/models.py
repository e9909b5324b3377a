"""SQLAlchemy ORM models for club data.

Models are organized into categories:
- Club Reference: Club, Member, TeamConfiguration
- Game Data: Game, GameParticipant, GameEvent, TeamAssignment

Example:
    >>> from club_stats.data.models import Game
    >>> from club_stats.data.db import session_scope
    >>> with session_scope() as session:
    ...     game = session.query(Game).first()
    ...     print(game.club.name)
"""
from __future__ import annotations

import datetime

from sqlalchemy import ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from club_stats.data.schema import (
    Base,
    ClubScopedMixin,
    TimestampMixin,
    UuidPrimaryKeyMixin,
)

# =============================================================================
# Club Reference Models
# =============================================================================


class Club(UuidPrimaryKeyMixin, TimestampMixin, Base):
    """Sports club owning members, games and team configurations.

    Attributes:
        id: UUID primary key.
        name: Club name.
        members: Relationship to the club's members.
        games: Relationship to the club's games.
        team_configurations: Relationship to configured teams.
    """

    __tablename__ = "clubs"

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    # Relationships
    members: Mapped[list[Member]] = relationship(back_populates="club")
    games: Mapped[list[Game]] = relationship(back_populates="club")
    team_configurations: Mapped[list[TeamConfiguration]] = relationship(
        back_populates="club"
    )

    def __repr__(self) -> str:
        return f"<Club(id={self.id!r}, name={self.name!r})>"


class Member(UuidPrimaryKeyMixin, ClubScopedMixin, TimestampMixin, Base):
    """Club member.

    Attributes:
        id: UUID primary key.
        club_id: Foreign key to clubs.
        name: Full name.
        nickname: Name shown in rankings when set.
        birth_date: Date of birth.
        registration_date: Membership start date.
        status: Membership status (e.g. 'active', 'inactive', 'system').
    """

    __tablename__ = "members"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    nickname: Mapped[str | None] = mapped_column(String(50), nullable=True)
    birth_date: Mapped[datetime.date | None] = mapped_column(nullable=True)
    registration_date: Mapped[datetime.date | None] = mapped_column(nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")

    # Relationships
    club: Mapped[Club] = relationship(back_populates="members")

    __table_args__ = (Index("ix_members_club_status", "club_id", "status"),)

    def __repr__(self) -> str:
        return f"<Member(id={self.id!r}, name={self.name!r}, status={self.status!r})>"


class TeamConfiguration(
    UuidPrimaryKeyMixin, ClubScopedMixin, TimestampMixin, Base
):
    """Team a club plays with in its games (e.g. "white" and "green").

    Attributes:
        id: UUID primary key.
        club_id: Foreign key to clubs.
        team_name: Identifier recorded on game events.
        team_color: Display color.
        is_active: Inactive teams are left out of standings.
    """

    __tablename__ = "team_configurations"

    team_name: Mapped[str] = mapped_column(String(50), nullable=False)
    team_color: Mapped[str | None] = mapped_column(String(20), nullable=True)
    is_active: Mapped[bool] = mapped_column(default=True, nullable=False)

    # Relationships
    club: Mapped[Club] = relationship(back_populates="team_configurations")

    def __repr__(self) -> str:
        return (
            f"<TeamConfiguration(club_id={self.club_id!r}, "
            f"team_name={self.team_name!r})>"
        )


# =============================================================================
# Game Models
# =============================================================================


class Game(UuidPrimaryKeyMixin, ClubScopedMixin, TimestampMixin, Base):
    """Scheduled or played game.

    Attributes:
        id: UUID primary key.
        club_id: Foreign key to clubs.
        date: Game date.
        status: 'scheduled', 'completed' or 'canceled'.
        title: Optional title.
        location: Optional field or venue name.
        participants: Relationship to RSVP records.
        events: Relationship to goal/own-goal/save events.
        assignments: Relationship to lineup entries.
    """

    __tablename__ = "games"

    date: Mapped[datetime.date] = mapped_column(nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="scheduled"
    )
    title: Mapped[str | None] = mapped_column(String(100), nullable=True)
    location: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Relationships
    club: Mapped[Club] = relationship(back_populates="games")
    participants: Mapped[list[GameParticipant]] = relationship(
        back_populates="game", cascade="all, delete-orphan"
    )
    events: Mapped[list[GameEvent]] = relationship(
        back_populates="game", cascade="all, delete-orphan"
    )
    assignments: Mapped[list[TeamAssignment]] = relationship(
        back_populates="game", cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("ix_games_club_date", "club_id", "date"),
        Index("ix_games_status", "status"),
    )

    def __repr__(self) -> str:
        return f"<Game(id={self.id!r}, date={self.date}, status={self.status!r})>"


class GameParticipant(Base):
    """A member's RSVP for a game.

    At most one record exists per (game_id, member_id).

    Attributes:
        id: Auto-increment primary key.
        game_id: Foreign key to games.
        member_id: Foreign key to members.
        status: 'confirmed', 'declined' or 'unconfirmed'.
    """

    __tablename__ = "game_participants"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    game_id: Mapped[str] = mapped_column(ForeignKey("games.id"), nullable=False)
    member_id: Mapped[str] = mapped_column(ForeignKey("members.id"), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="unconfirmed"
    )

    # Relationships
    game: Mapped[Game] = relationship(back_populates="participants")
    member: Mapped[Member] = relationship()

    __table_args__ = (
        UniqueConstraint("game_id", "member_id", name="uq_game_participant"),
    )

    def __repr__(self) -> str:
        return (
            f"<GameParticipant(game_id={self.game_id!r}, "
            f"member_id={self.member_id!r}, status={self.status!r})>"
        )


class GameEvent(Base):
    """Goal, own-goal or save recorded during a game.

    Attributes:
        id: Auto-increment primary key.
        game_id: Foreign key to games.
        member_id: Member credited with the event (nullable).
        team: Team the member played for.
        event_type: 'goal', 'own-goal' or 'save'.
    """

    __tablename__ = "game_events"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    game_id: Mapped[str] = mapped_column(ForeignKey("games.id"), nullable=False)
    member_id: Mapped[str | None] = mapped_column(
        ForeignKey("members.id"), nullable=True
    )
    team: Mapped[str] = mapped_column(String(50), nullable=False)
    event_type: Mapped[str] = mapped_column(String(20), nullable=False)

    # Relationships
    game: Mapped[Game] = relationship(back_populates="events")

    __table_args__ = (Index("ix_game_events_game", "game_id"),)

    def __repr__(self) -> str:
        return (
            f"<GameEvent(game_id={self.game_id!r}, team={self.team!r}, "
            f"event_type={self.event_type!r})>"
        )


class TeamAssignment(Base):
    """Lineup entry placing a member on a team for one game.

    Attributes:
        id: Auto-increment primary key.
        game_id: Foreign key to games.
        member_id: Foreign key to members.
        team: Team name the member was drafted into.
    """

    __tablename__ = "team_assignments"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    game_id: Mapped[str] = mapped_column(ForeignKey("games.id"), nullable=False)
    member_id: Mapped[str] = mapped_column(ForeignKey("members.id"), nullable=False)
    team: Mapped[str] = mapped_column(String(50), nullable=False)

    # Relationships
    game: Mapped[Game] = relationship(back_populates="assignments")

    __table_args__ = (
        UniqueConstraint("game_id", "member_id", name="uq_team_assignment"),
    )

    def __repr__(self) -> str:
        return (
            f"<TeamAssignment(game_id={self.game_id!r}, "
            f"member_id={self.member_id!r}, team={self.team!r})>"
        )
