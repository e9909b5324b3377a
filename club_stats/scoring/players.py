"""Player performance ranking.

Every confirmed, active participant of a completed game that has recorded
events earns the game credit. Goals, own-goals and saves come from that
member's events, and the game result comes from the team they played for.

Score weights::

    game 1, goal 1, own-goal -1, win 3, draw 1, loss 0, save 0.20

Unlike team standings, an own-goal here counts as a full goal for every
other team in the game.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal

from club_stats.logging import get_logger
from club_stats.scoring.ranking import rank_records
from club_stats.scoring.results import (
    GameResult,
    game_result,
    games_with_events,
    teams_in_game,
)
from club_stats.scoring.rounding import percentage_label, round_half_up
from club_stats.types import (
    ClubSnapshot,
    EventRow,
    EventType,
    GameId,
    MemberId,
    PlayerStats,
    TeamName,
)

logger = get_logger(__name__)

GAME_WEIGHT = Decimal(1)
GOAL_WEIGHT = Decimal(1)
OWN_GOAL_WEIGHT = Decimal(-1)
WIN_WEIGHT = Decimal(3)
DRAW_WEIGHT = Decimal(1)
SAVE_WEIGHT = Decimal("0.20")

# Ranking order: points, then games played, then goal average
PLAYER_SORT_KEYS: tuple[str, ...] = ("points", "games", "goal_average")


@dataclass
class PlayerTally:
    """Running totals for one member."""

    games: int = 0
    goals: int = 0
    own_goals: int = 0
    saves: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0

    def count_event(self, event: EventRow) -> None:
        if event.event_type == EventType.GOAL.value:
            self.goals += 1
        elif event.event_type == EventType.OWN_GOAL.value:
            self.own_goals += 1
        elif event.event_type == EventType.SAVE.value:
            self.saves += 1

    def count_result(self, result: GameResult) -> None:
        if result is GameResult.WIN:
            self.wins += 1
        elif result is GameResult.DRAW:
            self.draws += 1
        else:
            self.losses += 1

    @property
    def points(self) -> Decimal:
        return (
            self.games * GAME_WEIGHT
            + self.goals * GOAL_WEIGHT
            + self.own_goals * OWN_GOAL_WEIGHT
            + self.wins * WIN_WEIGHT
            + self.draws * DRAW_WEIGHT
            + self.saves * SAVE_WEIGHT
        )

    @property
    def goal_average(self) -> float:
        return self.goals / self.games if self.games > 0 else 0.0


def player_team_goals(
    events: Sequence[EventRow], extra_teams: Iterable[TeamName] = ()
) -> dict[TeamName, int]:
    """Goals per team for one game, crediting own-goals in full.

    Args:
        events: All event rows of a single game.
        extra_teams: Teams known from the lineup that may have no events.

    Returns:
        Mapping of team to goals: its own goals plus one for every own-goal
        by any other team.
    """
    teams = list(dict.fromkeys([*teams_in_game(events), *extra_teams]))
    goals = {team: 0 for team in teams}
    for event in events:
        if event.event_type == EventType.GOAL.value:
            goals[event.team] += 1
        elif event.event_type == EventType.OWN_GOAL.value:
            for team in teams:
                if team != event.team:
                    goals[team] += 1
    return goals


def player_team(
    member_id: MemberId,
    member_events: Sequence[EventRow],
    lineup: dict[MemberId, TeamName],
) -> TeamName | None:
    """Team a member played for: lineup entry first, else any event's team."""
    if member_id in lineup:
        return lineup[member_id]
    return next((event.team for event in member_events), None)


def tally_games(
    snapshot: ClubSnapshot,
    member_ids: Iterable[MemberId],
) -> dict[MemberId, PlayerTally]:
    """Tally confirmed participations of the given members.

    Only completed games with at least one event count. Members without a
    known team in a game get no win, draw or loss for it.

    Args:
        snapshot: Rows for one club and window.
        member_ids: Members whose participations count.

    Returns:
        Tallies keyed by member, in order of first confirmed game.
    """
    eligible = set(member_ids)
    games, events_by_game = games_with_events(snapshot)

    participants: dict[GameId, list[MemberId]] = {}
    for row in snapshot.participations:
        if not row.is_confirmed or row.member_id not in eligible:
            continue
        members = participants.setdefault(row.game_id, [])
        if row.member_id not in members:
            members.append(row.member_id)

    lineups: dict[GameId, dict[MemberId, TeamName]] = {}
    for assignment in snapshot.assignments:
        lineups.setdefault(assignment.game_id, {})[assignment.member_id] = (
            assignment.team
        )

    tallies: dict[MemberId, PlayerTally] = {}
    for game in games:
        events = events_by_game[game.id]
        lineup = lineups.get(game.id, {})
        goals = player_team_goals(events, lineup.values())

        for member_id in participants.get(game.id, []):
            tally = tallies.setdefault(member_id, PlayerTally())
            tally.games += 1

            member_events = [e for e in events if e.member_id == member_id]
            for event in member_events:
                tally.count_event(event)

            team = player_team(member_id, member_events, lineup)
            if team is None:
                continue
            tally.count_result(game_result(team, goals))

    return tallies


def aggregate_player_stats(
    snapshot: ClubSnapshot, active_status: str = "active"
) -> list[PlayerStats]:
    """Rank the club's active members by performance score.

    Args:
        snapshot: Rows for one club and window.
        active_status: Member status eligible for ranking.

    Returns:
        PlayerStats for every active member with at least one qualifying
        game, sorted by points, games, goal average, with positions.
    """
    active = {m.id: m for m in snapshot.members if m.status == active_status}
    tallies = tally_games(snapshot, active)

    stats = []
    for member_id, tally in tallies.items():
        member = active[member_id]
        stats.append(
            PlayerStats(
                id=member_id,
                name=member.display_name,
                games=tally.games,
                goals=tally.goals,
                own_goals=tally.own_goals,
                saves=tally.saves,
                wins=tally.wins,
                draws=tally.draws,
                losses=tally.losses,
                points=float(round_half_up(tally.points, 2)),
                goal_average=tally.goal_average,
                win_rate=percentage_label(tally.wins, tally.games),
            )
        )

    ranking = rank_records(stats, keys=PLAYER_SORT_KEYS)
    logger.debug(
        "Player ranking for club {}: {} players", snapshot.club_id, len(ranking)
    )
    return ranking
