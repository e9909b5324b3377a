"""Row readers for the scoring core.

Readers are the only place that talks to the database. They turn ORM rows
into the frozen row records from ``club_stats.types`` so that the scoring
functions work on plain, detached data.

Any SQLAlchemy failure is raised as ``DataAccessError``. Nothing is retried
and no partial snapshot is returned.

Example:
    >>> from club_stats.data.db import session_scope
    >>> from club_stats.data.readers import ClubDataReader
    >>> from club_stats.scoring.window import Window
    >>> with session_scope() as session:
    ...     snapshot = ClubDataReader(session).read_snapshot("club-1", Window.parse(2024))
"""
from __future__ import annotations

from collections.abc import Generator, Iterable, Sequence
from contextlib import contextmanager
from datetime import date
from typing import TYPE_CHECKING, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from club_stats.data.models import (
    Game,
    GameEvent,
    GameParticipant,
    Member,
    TeamAssignment,
    TeamConfiguration,
)
from club_stats.logging import FAIL, get_logger
from club_stats.types import (
    ClubId,
    ClubSnapshot,
    DataAccessError,
    EventRow,
    GameId,
    GameRow,
    GameStatus,
    MemberId,
    MemberRow,
    ParticipationRow,
    TeamAssignmentRow,
    TeamConfigRow,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

    from club_stats.scoring.window import Window

logger = get_logger(__name__)

# Keeps IN (...) lists under SQLite's bound parameter limit
IN_CLAUSE_CHUNK_SIZE: int = 500

T = TypeVar("T")


def _chunks(items: Sequence[T], size: int = IN_CLAUSE_CHUNK_SIZE) -> Iterable[Sequence[T]]:
    for start in range(0, len(items), size):
        yield items[start : start + size]


@contextmanager
def _reading(what: str) -> Generator[None, None, None]:
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(f"{FAIL} Failed to read {what}: {e}")
        raise DataAccessError(f"Failed to read {what}: {e}") from e


class ClubDataReader:
    """Reads club rows for one request.

    Attributes:
        session: SQLAlchemy session owned by the caller.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    # -------------------------------------------------------------------------
    # Games
    # -------------------------------------------------------------------------

    def read_games(
        self,
        club_id: ClubId,
        window: Window,
        statuses: Iterable[str] | None = None,
    ) -> tuple[GameRow, ...]:
        """Read the club's games dated inside the window.

        Args:
            club_id: Club to read.
            window: Date window. Unbounded windows read every game.
            statuses: Optional game statuses to keep.

        Returns:
            Games ordered by date, then ID.
        """
        stmt = select(Game).where(Game.club_id == club_id)
        if not window.is_all:
            stmt = stmt.where(Game.date >= window.start, Game.date <= window.end)
        if statuses is not None:
            stmt = stmt.where(Game.status.in_(list(statuses)))
        stmt = stmt.order_by(Game.date, Game.id)

        with _reading(f"games for club {club_id}"):
            games = self.session.scalars(stmt).all()

        return tuple(
            GameRow(id=g.id, club_id=g.club_id, date=g.date, status=g.status)
            for g in games
        )

    def read_earliest_game_with_events(self, club_id: ClubId) -> date | None:
        """Date of the club's first completed game that has any event."""
        stmt = (
            select(func.min(Game.date))
            .where(
                Game.club_id == club_id,
                Game.status == GameStatus.COMPLETED.value,
                Game.id.in_(select(GameEvent.game_id)),
            )
        )
        with _reading(f"earliest game for club {club_id}"):
            return self.session.scalar(stmt)

    # -------------------------------------------------------------------------
    # Game children
    # -------------------------------------------------------------------------

    def read_events(self, game_ids: Sequence[GameId]) -> tuple[EventRow, ...]:
        """Read event rows for the given games in insertion order."""
        rows: list[EventRow] = []
        with _reading("game events"):
            for chunk in _chunks(list(game_ids)):
                stmt = (
                    select(GameEvent)
                    .where(GameEvent.game_id.in_(chunk))
                    .order_by(GameEvent.id)
                )
                rows.extend(
                    EventRow(
                        game_id=e.game_id,
                        member_id=e.member_id,
                        team=e.team,
                        event_type=e.event_type,
                    )
                    for e in self.session.scalars(stmt)
                )
        return tuple(rows)

    def read_participations(
        self,
        game_ids: Sequence[GameId],
        status: str | None = None,
    ) -> tuple[ParticipationRow, ...]:
        """Read RSVP rows for the given games, optionally by status."""
        rows: list[ParticipationRow] = []
        with _reading("game participants"):
            for chunk in _chunks(list(game_ids)):
                stmt = select(GameParticipant).where(
                    GameParticipant.game_id.in_(chunk)
                )
                if status is not None:
                    stmt = stmt.where(GameParticipant.status == status)
                stmt = stmt.order_by(GameParticipant.id)
                rows.extend(
                    ParticipationRow(
                        game_id=p.game_id, member_id=p.member_id, status=p.status
                    )
                    for p in self.session.scalars(stmt)
                )
        return tuple(rows)

    def read_assignments(
        self, game_ids: Sequence[GameId]
    ) -> tuple[TeamAssignmentRow, ...]:
        """Read lineup entries for the given games."""
        rows: list[TeamAssignmentRow] = []
        with _reading("team assignments"):
            for chunk in _chunks(list(game_ids)):
                stmt = (
                    select(TeamAssignment)
                    .where(TeamAssignment.game_id.in_(chunk))
                    .order_by(TeamAssignment.id)
                )
                rows.extend(
                    TeamAssignmentRow(
                        game_id=a.game_id, member_id=a.member_id, team=a.team
                    )
                    for a in self.session.scalars(stmt)
                )
        return tuple(rows)

    # -------------------------------------------------------------------------
    # Club reference data
    # -------------------------------------------------------------------------

    def read_members(
        self, club_id: ClubId, status: str | None = None
    ) -> tuple[MemberRow, ...]:
        """Read the club's members, optionally restricted to one status."""
        stmt = select(Member).where(Member.club_id == club_id)
        if status is not None:
            stmt = stmt.where(Member.status == status)
        stmt = stmt.order_by(Member.created_at, Member.id)

        with _reading(f"members for club {club_id}"):
            members = self.session.scalars(stmt).all()
        return tuple(_member_row(m) for m in members)

    def read_member(self, club_id: ClubId, member_id: MemberId) -> MemberRow | None:
        """Read a single member of the club, or None if absent."""
        stmt = select(Member).where(Member.club_id == club_id, Member.id == member_id)
        with _reading(f"member {member_id}"):
            member = self.session.scalars(stmt).first()
        return _member_row(member) if member is not None else None

    def read_team_configurations(
        self, club_id: ClubId, active_only: bool = True
    ) -> tuple[TeamConfigRow, ...]:
        """Read the club's configured teams in creation order."""
        stmt = select(TeamConfiguration).where(TeamConfiguration.club_id == club_id)
        if active_only:
            stmt = stmt.where(TeamConfiguration.is_active.is_(True))
        stmt = stmt.order_by(TeamConfiguration.created_at, TeamConfiguration.id)

        with _reading(f"team configurations for club {club_id}"):
            teams = self.session.scalars(stmt).all()
        return tuple(
            TeamConfigRow(
                team_name=t.team_name, team_color=t.team_color, is_active=t.is_active
            )
            for t in teams
        )

    # -------------------------------------------------------------------------
    # Snapshot
    # -------------------------------------------------------------------------

    def read_snapshot(self, club_id: ClubId, window: Window) -> ClubSnapshot:
        """Read every row needed to rank a club over a window.

        Games of all statuses are included so that summaries can count
        canceled games. Scoring functions filter on status themselves.
        """
        games = self.read_games(club_id, window)
        game_ids = [g.id for g in games]
        snapshot = ClubSnapshot(
            club_id=club_id,
            games=games,
            events=self.read_events(game_ids) if game_ids else (),
            participations=self.read_participations(game_ids) if game_ids else (),
            members=self.read_members(club_id),
            teams=self.read_team_configurations(club_id),
            assignments=self.read_assignments(game_ids) if game_ids else (),
        )
        logger.debug(
            "Snapshot for club {} window {}: {} games, {} events, "
            "{} participations, {} members",
            club_id,
            window.label,
            len(snapshot.games),
            len(snapshot.events),
            len(snapshot.participations),
            len(snapshot.members),
        )
        return snapshot


def _member_row(member: Member) -> MemberRow:
    return MemberRow(
        id=member.id,
        name=member.name,
        nickname=member.nickname,
        birth_date=member.birth_date,
        registration_date=member.registration_date,
        status=member.status,
    )
