"""Entry points used by dashboards and the CLI.

Each fetch reads a fresh snapshot for one club and window, then runs the pure
scoring functions over it. Read failures surface as ``DataAccessError``.
Nothing is cached between calls.

Example:
    >>> from club_stats.data import session_scope
    >>> from club_stats.service import ClubStatsService
    >>> with session_scope(read_only=True) as session:
    ...     service = ClubStatsService(session)
    ...     standings = service.fetch_team_stats("club-1", 2024, "all")
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from club_stats.config import Settings, get_settings
from club_stats.data.db import session_scope
from club_stats.data.readers import ClubDataReader
from club_stats.logging import FAIL, SUCCESS, get_logger
from club_stats.scoring.participation import aggregate_participation_ranking
from club_stats.scoring.players import aggregate_player_stats
from club_stats.scoring.summary import (
    available_years,
    game_summary,
    member_score_details,
)
from club_stats.scoring.teams import aggregate_team_stats
from club_stats.scoring.window import ALL, Window, WindowValue
from club_stats.types import (
    ClubId,
    ClubSnapshot,
    ClubStatsError,
    GameSummary,
    MemberId,
    MemberNotFoundError,
    MemberScoreDetails,
    ParticipationRankingStats,
    PlayerStats,
    TeamStats,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

logger = get_logger(__name__)


class ClubStatsService:
    """Computes rankings and summaries for clubs.

    Attributes:
        reader: Row reader bound to the caller's session.
        settings: Application settings (member statuses, top-N limit).
        today: Fixed current date, or None to use the system date.
    """

    def __init__(
        self,
        session: Session,
        settings: Settings | None = None,
        today: date | None = None,
    ) -> None:
        self.reader = ClubDataReader(session)
        self.settings = settings or get_settings()
        self.today = today

    def _snapshot(self, club_id: ClubId, window: Window, what: str) -> ClubSnapshot:
        logger.info("Fetching {} for club {} ({})", what, club_id, window.label)
        try:
            return self.reader.read_snapshot(club_id, window)
        except ClubStatsError:
            logger.error(f"{FAIL} Could not fetch {what} for club {club_id}")
            raise

    # -------------------------------------------------------------------------
    # Rankings
    # -------------------------------------------------------------------------

    def fetch_team_stats(
        self, club_id: ClubId, year: WindowValue = ALL, month: WindowValue = ALL
    ) -> list[TeamStats]:
        """Team standings for the window, sorted by points."""
        window = Window.parse(year, month)
        snapshot = self._snapshot(club_id, window, "team stats")
        standings = aggregate_team_stats(snapshot)
        logger.info(f"{SUCCESS} {len(standings)} teams ranked for club {club_id}")
        return standings

    def fetch_player_stats(
        self, club_id: ClubId, year: WindowValue = ALL, month: WindowValue = ALL
    ) -> list[PlayerStats]:
        """Player performance ranking for the window."""
        window = Window.parse(year, month)
        snapshot = self._snapshot(club_id, window, "player stats")
        ranking = aggregate_player_stats(
            snapshot, active_status=self.settings.active_member_status
        )
        logger.info(f"{SUCCESS} {len(ranking)} players ranked for club {club_id}")
        return ranking

    def fetch_participation_ranking(
        self, club_id: ClubId, year: WindowValue = ALL, month: WindowValue = ALL
    ) -> list[ParticipationRankingStats]:
        """Participation ranking of every active member for the window."""
        window = Window.parse(year, month)
        snapshot = self._snapshot(club_id, window, "participation ranking")
        ranking = aggregate_participation_ranking(
            snapshot,
            window,
            active_status=self.settings.active_member_status,
            today=self.today,
        )
        logger.info(f"{SUCCESS} {len(ranking)} members ranked for club {club_id}")
        return ranking

    def fetch_top_players(
        self,
        club_id: ClubId,
        year: WindowValue = ALL,
        month: WindowValue = ALL,
        limit: int | None = None,
    ) -> list[ParticipationRankingStats]:
        """Head of the participation ranking."""
        size = self._limit(limit)
        return self.fetch_participation_ranking(club_id, year, month)[:size]

    def fetch_top_performers(
        self,
        club_id: ClubId,
        year: WindowValue = ALL,
        month: WindowValue = ALL,
        limit: int | None = None,
    ) -> list[PlayerStats]:
        """Head of the player performance ranking."""
        size = self._limit(limit)
        return self.fetch_player_stats(club_id, year, month)[:size]

    # -------------------------------------------------------------------------
    # Summaries
    # -------------------------------------------------------------------------

    def fetch_game_summary(
        self, club_id: ClubId, year: WindowValue = ALL, month: WindowValue = ALL
    ) -> GameSummary:
        """Completion rate and per-game averages for the window."""
        window = Window.parse(year, month)
        snapshot = self._snapshot(club_id, window, "game summary")
        return game_summary(snapshot, system_status=self.settings.system_member_status)

    def fetch_member_score_details(
        self,
        club_id: ClubId,
        member_id: MemberId,
        year: WindowValue = ALL,
        month: WindowValue = ALL,
    ) -> MemberScoreDetails:
        """Score breakdown for one member.

        Raises:
            MemberNotFoundError: If the member does not belong to the club.
        """
        window = Window.parse(year, month)
        member = self.reader.read_member(club_id, member_id)
        if member is None:
            raise MemberNotFoundError(
                f"Member {member_id} not found in club {club_id}"
            )
        snapshot = self._snapshot(club_id, window, f"score details of {member_id}")
        return member_score_details(snapshot, member, window, today=self.today)

    def fetch_available_years(self, club_id: ClubId) -> list[str]:
        """Year filter options for the club."""
        earliest = self.reader.read_earliest_game_with_events(club_id)
        return available_years(earliest, today=self.today)

    def _limit(self, limit: int | None) -> int:
        if limit is None:
            return self.settings.top_players_limit
        if limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")
        return limit


# =============================================================================
# Module-level shortcuts
# =============================================================================


def fetch_team_stats(
    club_id: ClubId, year: WindowValue = ALL, month: WindowValue = ALL
) -> list[TeamStats]:
    """Team standings using a session of its own."""
    with session_scope(read_only=True) as session:
        return ClubStatsService(session).fetch_team_stats(club_id, year, month)


def fetch_player_stats(
    club_id: ClubId, year: WindowValue = ALL, month: WindowValue = ALL
) -> list[PlayerStats]:
    """Player ranking using a session of its own."""
    with session_scope(read_only=True) as session:
        return ClubStatsService(session).fetch_player_stats(club_id, year, month)


def fetch_participation_ranking(
    club_id: ClubId, year: WindowValue = ALL, month: WindowValue = ALL
) -> list[ParticipationRankingStats]:
    """Participation ranking using a session of its own."""
    with session_scope(read_only=True) as session:
        return ClubStatsService(session).fetch_participation_ranking(
            club_id, year, month
        )
