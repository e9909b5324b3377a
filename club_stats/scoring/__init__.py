"""Scoring and ranking over club snapshots.

All functions here are pure: they take a ``ClubSnapshot`` read beforehand
and return new records.

Submodules:
    window: Year/month filter windows
    rounding: Exact half-up rounding
    ranking: Stable sorting and positioning
    results: Win/draw/loss determination
    teams: Team standings
    players: Player performance ranking
    participation: Participation ranking
    summary: Game summary, member breakdown, year options

Example:
    >>> from club_stats.scoring import Window, aggregate_player_stats
    >>> ranking = aggregate_player_stats(snapshot)
"""
from __future__ import annotations

from club_stats.scoring.participation import (
    ParticipationScore,
    aggregate_participation_ranking,
    age_in_years,
    membership_days,
    membership_months,
    participation_score,
)
from club_stats.scoring.players import (
    PLAYER_SORT_KEYS,
    aggregate_player_stats,
    player_team_goals,
)
from club_stats.scoring.ranking import assign_positions, rank_records, sort_records
from club_stats.scoring.results import GameResult, game_result
from club_stats.scoring.summary import (
    available_years,
    game_summary,
    member_score_details,
)
from club_stats.scoring.teams import TEAM_SORT_KEYS, aggregate_team_stats, team_goals
from club_stats.scoring.window import ALL, Window

__all__ = [
    # Windows
    "ALL",
    "Window",
    # Ranking
    "assign_positions",
    "rank_records",
    "sort_records",
    # Results
    "GameResult",
    "game_result",
    # Teams
    "TEAM_SORT_KEYS",
    "aggregate_team_stats",
    "team_goals",
    # Players
    "PLAYER_SORT_KEYS",
    "aggregate_player_stats",
    "player_team_goals",
    # Participation
    "ParticipationScore",
    "aggregate_participation_ranking",
    "age_in_years",
    "membership_days",
    "membership_months",
    "participation_score",
    # Summaries
    "available_years",
    "game_summary",
    "member_score_details",
]
