"""Type definitions for club statistics.

Row records mirror the stored tables and are what the scoring functions
consume. Derived records are rebuilt on every request and never persisted.

Example:
    >>> from club_stats.types import EventRow, EventType
    >>> EventRow(game_id="g1", member_id="m1", team="white",
    ...          event_type=EventType.GOAL.value)
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from enum import Enum
from typing import Any

# =============================================================================
# Type Aliases
# =============================================================================

ClubId = str
MemberId = str
GameId = str
TeamName = str


# =============================================================================
# Enumerations
# =============================================================================


class EventType(Enum):
    """Kind of event recorded during a game."""

    GOAL = "goal"
    OWN_GOAL = "own-goal"
    SAVE = "save"


class ParticipationStatus(Enum):
    """A member's RSVP for a game."""

    CONFIRMED = "confirmed"
    DECLINED = "declined"
    UNCONFIRMED = "unconfirmed"


class GameStatus(Enum):
    """Lifecycle state of a game."""

    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELED = "canceled"


# Both spellings occur in stored data
CANCELED_STATUSES: frozenset[str] = frozenset({"canceled", "cancelled"})


# =============================================================================
# Row Records
# =============================================================================


@dataclass(frozen=True)
class GameRow:
    """A scheduled or played game."""

    id: GameId
    club_id: ClubId
    date: date
    status: str

    @property
    def is_completed(self) -> bool:
        return self.status == GameStatus.COMPLETED.value

    @property
    def is_canceled(self) -> bool:
        return self.status in CANCELED_STATUSES


@dataclass(frozen=True)
class EventRow:
    """One goal, own-goal or save within a game."""

    game_id: GameId
    member_id: MemberId | None
    team: TeamName
    event_type: str


@dataclass(frozen=True)
class ParticipationRow:
    """A member's attendance record for one game."""

    game_id: GameId
    member_id: MemberId
    status: str

    @property
    def is_confirmed(self) -> bool:
        return self.status == ParticipationStatus.CONFIRMED.value


@dataclass(frozen=True)
class MemberRow:
    """Club member attributes used for ranking."""

    id: MemberId
    name: str
    birth_date: date | None
    registration_date: date | None
    status: str
    nickname: str | None = None

    @property
    def display_name(self) -> str:
        return self.nickname or self.name


@dataclass(frozen=True)
class TeamConfigRow:
    """A team configured by the club (e.g. "white", "green")."""

    team_name: TeamName
    team_color: str | None = None
    is_active: bool = True


@dataclass(frozen=True)
class TeamAssignmentRow:
    """Lineup entry placing a member on a team for one game."""

    game_id: GameId
    member_id: MemberId
    team: TeamName


@dataclass(frozen=True)
class ClubSnapshot:
    """All rows needed to rank one club over one window.

    Games are already restricted to the club and window. Events,
    participations and assignments belong to those games.
    """

    club_id: ClubId
    games: tuple[GameRow, ...] = ()
    events: tuple[EventRow, ...] = ()
    participations: tuple[ParticipationRow, ...] = ()
    members: tuple[MemberRow, ...] = ()
    teams: tuple[TeamConfigRow, ...] = ()
    assignments: tuple[TeamAssignmentRow, ...] = ()


# =============================================================================
# Derived Records
# =============================================================================


@dataclass(frozen=True)
class TeamStats:
    """Standings line for one team.

    Attributes:
        name: Team name as configured by the club.
        wins: Games won.
        draws: Games drawn.
        losses: Games lost.
        goals_scored: Goals credited to the team, own-goals included.
        goals_conceded: Goals credited to opponents in the same games.
        total_games: Games the team appeared in.
        points: 3 per win, 1 per draw.
        win_rate: Whole percentage string, e.g. "67%".
        position: 1-based standing.
    """

    name: TeamName
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_scored: int = 0
    goals_conceded: int = 0
    total_games: int = 0
    points: int = 0
    win_rate: str = "0%"
    position: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PlayerStats:
    """Performance line for one member.

    Attributes:
        id: Member ID.
        name: Display name (nickname when set).
        games: Qualifying games the member was confirmed for.
        goals: Goals scored.
        own_goals: Own-goals scored.
        saves: Saves made.
        wins: Games won by the member's team.
        draws: Games drawn.
        losses: Games lost.
        points: Weighted performance score.
        goal_average: Goals per game.
        win_rate: Whole percentage string.
        position: 1-based rank.
    """

    id: MemberId
    name: str
    games: int = 0
    goals: int = 0
    own_goals: int = 0
    saves: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    points: float = 0.0
    goal_average: float = 0.0
    win_rate: str = "0%"
    position: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ParticipationRankingStats:
    """Participation line for one active member.

    Attributes:
        id: Member ID.
        name: Member name.
        games: Confirmed participations in the window's completed games.
        membership_time: Days from registration to the reference date.
        membership_months: Calendar month difference used by the score.
        age: Whole years from birth to the reference date.
        participation_rate: Percentage with exactly one decimal.
        points: Composite score with two decimals.
        position: 1-based rank.
    """

    id: MemberId
    name: str
    games: int = 0
    membership_time: int = 0
    membership_months: int = 0
    age: int = 0
    participation_rate: float = 0.0
    points: float = 0.0
    position: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class GameSummary:
    """Club-wide game figures for a window."""

    completed_games: int = 0
    canceled_games: int = 0
    completion_rate: float = 0.0
    average_goals_per_game: float = 0.0
    average_players_per_game: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MemberScoreDetails:
    """Score breakdown shown on a member's profile."""

    member_id: MemberId
    name: str
    participation_rate: float = 0.0
    membership_months: int = 0
    age: int = 0
    score: float = 0.0
    total_games: int = 0
    confirmed_games: int = 0
    goals: int = 0
    own_goals: int = 0
    saves: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# =============================================================================
# Exceptions
# =============================================================================


class ClubStatsError(Exception):
    """Base exception for club statistics errors."""


class DataAccessError(ClubStatsError):
    """Reading rows from the database failed."""


class InvalidWindowError(ClubStatsError, ValueError):
    """Year or month filter is not valid."""


class MemberNotFoundError(ClubStatsError):
    """Requested member does not exist in the club."""
