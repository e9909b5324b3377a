"""Game outcome helpers shared by the team and player aggregators."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping
from enum import Enum

from club_stats.types import ClubSnapshot, EventRow, GameId, GameRow, TeamName


class GameResult(Enum):
    """Outcome of a game for one team."""

    WIN = "win"
    DRAW = "draw"
    LOSS = "loss"


# Standings points per outcome
RESULT_POINTS: dict[GameResult, int] = {
    GameResult.WIN: 3,
    GameResult.DRAW: 1,
    GameResult.LOSS: 0,
}


def group_events_by_game(events: Iterable[EventRow]) -> dict[GameId, list[EventRow]]:
    """Group event rows by game, preserving row order within each game."""
    grouped: dict[GameId, list[EventRow]] = defaultdict(list)
    for event in events:
        grouped[event.game_id].append(event)
    return dict(grouped)


def games_with_events(
    snapshot: ClubSnapshot,
) -> tuple[list[GameRow], dict[GameId, list[EventRow]]]:
    """Completed games that have at least one event, with their events.

    Returns:
        Tuple of (games in snapshot order, events grouped by game ID).
    """
    events_by_game = group_events_by_game(snapshot.events)
    games = [
        game
        for game in snapshot.games
        if game.is_completed and events_by_game.get(game.id)
    ]
    return games, {g.id: events_by_game[g.id] for g in games}


def teams_in_game(events: Iterable[EventRow]) -> list[TeamName]:
    """Distinct teams named by a game's events, in order of first appearance."""
    return list(dict.fromkeys(event.team for event in events))


def game_result(team: TeamName, goals: Mapping[TeamName, int]) -> GameResult:
    """Compare a team's goals with the best of all other teams in the game.

    Strictly more is a win, equal is a draw, anything else a loss. A team
    with no opponent in ``goals`` is compared against zero.
    """
    own = goals.get(team, 0)
    best_other = max(
        (count for other, count in goals.items() if other != team),
        default=0,
    )
    if own > best_other:
        return GameResult.WIN
    if own == best_other:
        return GameResult.DRAW
    return GameResult.LOSS
