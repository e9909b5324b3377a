"""Participation ranking.

Each active member gets a composite score built from integers so that the
displayed value never drifts::

    participation_value = participation_rate (1 decimal) * 1000
    membership_value    = months of membership * 10
    age_value           = age in whole years
    points              = (sum of the three) / 1000, 2 decimals

Participation dominates. Tenure and age only separate members with the same
rate.

Example:
    >>> score = participation_score(games=6, total_games=8, months=37, age=28)
    >>> score.total_value, score.points
    (75398, Decimal('75.40'))
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from fractions import Fraction

from club_stats.logging import get_logger
from club_stats.scoring.ranking import rank_records
from club_stats.scoring.rounding import percentage, round_half_up
from club_stats.scoring.window import Window
from club_stats.types import (
    ClubSnapshot,
    GameId,
    MemberId,
    MemberRow,
    ParticipationRankingStats,
)

logger = get_logger(__name__)

PARTICIPATION_SCALE: int = 1000
MEMBERSHIP_MONTH_WEIGHT: int = 10
SCORE_DIVISOR: int = 1000

# 365.25 days per year, as an exact ratio
DAYS_PER_YEAR = Fraction(36525, 100)


@dataclass(frozen=True)
class ParticipationScore:
    """Intermediate values of the composite participation score."""

    participation_rate: Decimal
    membership_months: int
    age: int
    participation_value: int
    membership_value: int
    age_value: int
    total_value: int
    points: Decimal


def membership_days(registration_date: date | None, reference: date) -> int:
    """Whole days from registration to the reference date, floored at 0."""
    if registration_date is None:
        return 0
    return max((reference - registration_date).days, 0)


def membership_months(registration_date: date | None, reference: date) -> int:
    """Calendar month difference, ignoring the day of month."""
    if registration_date is None:
        return 0
    return (reference.year - registration_date.year) * 12 + (
        reference.month - registration_date.month
    )


def age_in_years(birth_date: date | None, reference: date) -> int:
    """Whole years from birth to the reference date (365.25-day years)."""
    if birth_date is None:
        return 0
    years = (reference - birth_date).days // DAYS_PER_YEAR
    return max(int(years), 0)


def participation_score(
    games: int, total_games: int, months: int, age: int
) -> ParticipationScore:
    """Compute the composite score on the integer path.

    Args:
        games: Confirmed participations.
        total_games: Completed games in the window.
        months: Months of membership.
        age: Age in whole years.

    Returns:
        ParticipationScore with every intermediate value.
    """
    rate = percentage(games, total_games, places=1)
    participation_value = int(rate * PARTICIPATION_SCALE)
    membership_value = months * MEMBERSHIP_MONTH_WEIGHT
    total_value = participation_value + membership_value + age
    return ParticipationScore(
        participation_rate=rate,
        membership_months=months,
        age=age,
        participation_value=participation_value,
        membership_value=membership_value,
        age_value=age,
        total_value=total_value,
        points=round_half_up(Fraction(total_value, SCORE_DIVISOR), 2),
    )


def completed_game_ids(snapshot: ClubSnapshot, window: Window) -> list[GameId]:
    """IDs of the snapshot's completed games inside the window."""
    return [
        game.id
        for game in snapshot.games
        if game.is_completed and window.contains(game.date)
    ]


def confirmed_counts(
    snapshot: ClubSnapshot, game_ids: list[GameId]
) -> dict[MemberId, int]:
    """Confirmed participations per member among the given games."""
    wanted = set(game_ids)
    seen: set[tuple[GameId, MemberId]] = set()
    counts: dict[MemberId, int] = {}
    for row in snapshot.participations:
        key = (row.game_id, row.member_id)
        if not row.is_confirmed or row.game_id not in wanted or key in seen:
            continue
        seen.add(key)
        counts[row.member_id] = counts.get(row.member_id, 0) + 1
    return counts


def score_member(
    member: MemberRow, games: int, total_games: int, reference: date
) -> ParticipationRankingStats:
    """Build one member's participation line (position left at 0)."""
    age = age_in_years(member.birth_date, reference)
    months = membership_months(member.registration_date, reference)
    score = participation_score(games, total_games, months, age)
    logger.debug(
        "Participation score for member {}: rate={} participation={} "
        "membership={} age={} total={} points={}",
        member.id,
        score.participation_rate,
        score.participation_value,
        score.membership_value,
        score.age_value,
        score.total_value,
        score.points,
    )
    return ParticipationRankingStats(
        id=member.id,
        name=member.name,
        games=games,
        membership_time=membership_days(member.registration_date, reference),
        membership_months=months,
        age=age,
        participation_rate=float(score.participation_rate),
        points=float(score.points),
    )


def aggregate_participation_ranking(
    snapshot: ClubSnapshot,
    window: Window,
    active_status: str = "active",
    today: date | None = None,
) -> list[ParticipationRankingStats]:
    """Rank every active member of the club by participation score.

    A window without completed games gives every member zero points, so
    tenure and age alone never rank anyone.

    Args:
        snapshot: Rows for one club and window.
        window: Window the snapshot was read for. Sets the reference date.
        active_status: Member status eligible for ranking.
        today: Current date for unbounded windows.

    Returns:
        One record per active member, zero games included, sorted by points
        with positions.
    """
    reference = window.reference_date(today)
    game_ids = completed_game_ids(snapshot, window)
    counts = confirmed_counts(snapshot, game_ids)

    stats = [
        score_member(member, counts.get(member.id, 0), len(game_ids), reference)
        for member in snapshot.members
        if member.status == active_status
    ]
    if not game_ids:
        # Nothing to attend: nobody scores and members keep their order
        stats = [replace(s, points=0.0) for s in stats]

    ranking = rank_records(stats, keys="points")
    logger.debug(
        "Participation ranking for club {} ({}): {} members over {} games",
        snapshot.club_id,
        window.label,
        len(ranking),
        len(game_ids),
    )
    return ranking
