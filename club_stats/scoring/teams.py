"""Team standings from game events.

Goals are rebuilt from the event log of each completed game. An own-goal is
shared equally among every other team in the game (a full goal when only two
teams played), and each team's total is rounded once all events are summed.

Example:
    >>> standings = aggregate_team_stats(snapshot)
    >>> standings[0].name, standings[0].points
    ('white', 7)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from fractions import Fraction

from club_stats.logging import WARN, get_logger
from club_stats.scoring.ranking import rank_records
from club_stats.scoring.results import (
    RESULT_POINTS,
    GameResult,
    game_result,
    games_with_events,
    teams_in_game,
)
from club_stats.scoring.rounding import percentage_label, round_to_int
from club_stats.types import ClubSnapshot, EventRow, EventType, TeamName, TeamStats

logger = get_logger(__name__)

# Standings order: points, then goals scored
TEAM_SORT_KEYS: tuple[str, ...] = ("points", "goals_scored")


@dataclass
class _TeamAccumulator:
    name: TeamName
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_scored: int = 0
    goals_conceded: int = 0

    @property
    def total_games(self) -> int:
        return self.wins + self.draws + self.losses

    def record(self, result: GameResult, scored: int, conceded: int) -> None:
        if result is GameResult.WIN:
            self.wins += 1
        elif result is GameResult.DRAW:
            self.draws += 1
        else:
            self.losses += 1
        self.goals_scored += scored
        self.goals_conceded += conceded

    def to_stats(self) -> TeamStats:
        points = (
            self.wins * RESULT_POINTS[GameResult.WIN]
            + self.draws * RESULT_POINTS[GameResult.DRAW]
        )
        return TeamStats(
            name=self.name,
            wins=self.wins,
            draws=self.draws,
            losses=self.losses,
            goals_scored=self.goals_scored,
            goals_conceded=self.goals_conceded,
            total_games=self.total_games,
            points=points,
            win_rate=percentage_label(self.wins, self.total_games),
        )


def team_goals(events: Sequence[EventRow]) -> dict[TeamName, int]:
    """Goals per team for one game, with fractional own-goal credit.

    Args:
        events: All event rows of a single game.

    Returns:
        Mapping of each team named in the events to its rounded goal total.
    """
    teams = teams_in_game(events)
    credit: dict[TeamName, Fraction] = {team: Fraction(0) for team in teams}

    for event in events:
        if event.event_type == EventType.GOAL.value:
            credit[event.team] += 1
        elif event.event_type == EventType.OWN_GOAL.value:
            beneficiaries = [team for team in teams if team != event.team]
            if not beneficiaries:
                continue
            share = Fraction(1, len(beneficiaries))
            for team in beneficiaries:
                credit[team] += share

    return {team: round_to_int(total) for team, total in credit.items()}


def aggregate_team_stats(snapshot: ClubSnapshot) -> list[TeamStats]:
    """Fold a club snapshot into team standings.

    Only completed games with at least one event contribute. When the club
    has active team configurations, exactly those teams are reported (teams
    without games get zeroed lines). Otherwise every team seen in the events
    is reported.

    Args:
        snapshot: Rows for one club and window.

    Returns:
        TeamStats sorted by points, then goals scored, with positions.
    """
    configured = [team.team_name for team in snapshot.teams if team.is_active]
    accumulators: dict[TeamName, _TeamAccumulator] = {
        name: _TeamAccumulator(name) for name in configured
    }

    games, events_by_game = games_with_events(snapshot)
    unmatched: set[TeamName] = set()
    for game in games:
        goals = team_goals(events_by_game[game.id])
        for team, scored in goals.items():
            if team not in accumulators:
                if configured:
                    unmatched.add(team)
                    continue
                accumulators[team] = _TeamAccumulator(team)
            conceded = sum(count for other, count in goals.items() if other != team)
            accumulators[team].record(game_result(team, goals), scored, conceded)

    matched = any(acc.total_games for acc in accumulators.values())
    if configured and unmatched and not matched:
        logger.warning(
            f"{WARN} No game events match the configured teams of club "
            f"{snapshot.club_id}: configured {sorted(configured)}, "
            f"events name {sorted(unmatched)}"
        )

    standings = rank_records(
        (acc.to_stats() for acc in accumulators.values()), keys=TEAM_SORT_KEYS
    )
    logger.debug(
        "Team standings for club {}: {} games, {} teams",
        snapshot.club_id,
        len(games),
        len(standings),
    )
    return standings
