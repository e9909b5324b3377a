"""Club-level summaries and a single member's score breakdown."""

from __future__ import annotations

from datetime import date
from fractions import Fraction

from club_stats.scoring.participation import (
    age_in_years,
    completed_game_ids,
    confirmed_counts,
    membership_months,
    participation_score,
)
from club_stats.scoring.players import PlayerTally, tally_games
from club_stats.scoring.rounding import percentage, round_half_up
from club_stats.scoring.window import ALL, Window
from club_stats.types import (
    ClubSnapshot,
    EventType,
    GameId,
    GameSummary,
    MemberRow,
    MemberScoreDetails,
)

GOAL_EVENT_TYPES: frozenset[str] = frozenset(
    {EventType.GOAL.value, EventType.OWN_GOAL.value}
)


def _average(total: int, count: int) -> float:
    if count <= 0:
        return 0.0
    return float(round_half_up(Fraction(total, count), 1))


def game_summary(snapshot: ClubSnapshot, system_status: str = "system") -> GameSummary:
    """Completion rate and per-game averages for a club snapshot.

    Scheduled games are ignored by the completion rate. Goal averages only
    consider games with at least one goal or own-goal. Player averages leave
    out system members and games without confirmed participants.

    Args:
        snapshot: Rows for one club and window.
        system_status: Member status of internal accounts.

    Returns:
        GameSummary with rates and averages rounded to one decimal.
    """
    completed = [g.id for g in snapshot.games if g.is_completed]
    canceled = sum(1 for g in snapshot.games if g.is_canceled)
    completed_ids = set(completed)

    goals_by_game: dict[GameId, int] = {}
    for event in snapshot.events:
        if event.game_id in completed_ids and event.event_type in GOAL_EVENT_TYPES:
            goals_by_game[event.game_id] = goals_by_game.get(event.game_id, 0) + 1

    regular_members = {m.id for m in snapshot.members if m.status != system_status}
    players_by_game: dict[GameId, set[str]] = {}
    for row in snapshot.participations:
        if (
            row.is_confirmed
            and row.game_id in completed_ids
            and row.member_id in regular_members
        ):
            players_by_game.setdefault(row.game_id, set()).add(row.member_id)

    return GameSummary(
        completed_games=len(completed),
        canceled_games=canceled,
        completion_rate=float(percentage(len(completed), len(completed) + canceled)),
        average_goals_per_game=_average(
            sum(goals_by_game.values()), len(goals_by_game)
        ),
        average_players_per_game=_average(
            sum(len(players) for players in players_by_game.values()),
            len(players_by_game),
        ),
    )


def member_score_details(
    snapshot: ClubSnapshot,
    member: MemberRow,
    window: Window,
    today: date | None = None,
) -> MemberScoreDetails:
    """Score breakdown for one member, regardless of membership status.

    Participation figures use every completed game in the window. Goals,
    saves and results follow the player ranking rules.
    """
    reference = window.reference_date(today)
    game_ids = completed_game_ids(snapshot, window)
    confirmed = confirmed_counts(snapshot, game_ids).get(member.id, 0)
    months = membership_months(member.registration_date, reference)
    age = age_in_years(member.birth_date, reference)
    score = participation_score(confirmed, len(game_ids), months, age)
    tally = tally_games(snapshot, [member.id]).get(member.id, PlayerTally())

    return MemberScoreDetails(
        member_id=member.id,
        name=member.display_name,
        participation_rate=float(score.participation_rate),
        membership_months=months,
        age=age,
        score=float(score.points),
        total_games=len(game_ids),
        confirmed_games=confirmed,
        goals=tally.goals,
        own_goals=tally.own_goals,
        saves=tally.saves,
        wins=tally.wins,
        draws=tally.draws,
        losses=tally.losses,
    )


def available_years(earliest: date | None, today: date | None = None) -> list[str]:
    """Year filter options, newest first, always starting with "all".

    Args:
        earliest: Date of the first completed game with events, if any.
        today: Current date.

    Returns:
        ``["all", "<current year>", ..., "<earliest year>"]``, or ``["all"]``.
    """
    if earliest is None:
        return [ALL]
    current_year = (today or date.today()).year
    return [ALL, *(str(year) for year in range(current_year, earliest.year - 1, -1))]
