"""Tests for team standings."""
from __future__ import annotations

from collections.abc import Generator
from datetime import date

import pytest
from loguru import logger

from club_stats.scoring.results import GameResult, game_result
from club_stats.scoring.teams import aggregate_team_stats, team_goals
from club_stats.types import ClubSnapshot, TeamConfigRow


class TestTeamGoals:
    """Tests for team_goals."""

    def test_counts_goals_per_team(self, rows) -> None:
        """Each goal should count for the scorer's team."""
        events = [
            rows.goal("g1", "white"),
            rows.goal("g1", "white"),
            rows.goal("g1", "green"),
        ]

        assert team_goals(events) == {"white": 2, "green": 1}

    def test_own_goal_two_teams(self, rows) -> None:
        """With two teams an own-goal should be a full goal for the opponent."""
        events = [rows.own_goal("g1", "white"), rows.save("g1", "green")]

        assert team_goals(events) == {"white": 0, "green": 1}

    def test_own_goal_three_teams_rounds_half_up(self, rows) -> None:
        """Half credits in a three-team game should each round to 1."""
        events = [
            rows.own_goal("g1", "a"),
            rows.save("g1", "b"),
            rows.save("g1", "c"),
        ]

        assert team_goals(events) == {"a": 0, "b": 1, "c": 1}

    def test_shares_summed_before_rounding(self, rows) -> None:
        """Two half credits should add up to exactly one goal."""
        events = [
            rows.own_goal("g1", "a"),
            rows.own_goal("g1", "a"),
            rows.save("g1", "b"),
            rows.save("g1", "c"),
        ]

        assert team_goals(events) == {"a": 0, "b": 1, "c": 1}

    def test_saves_only(self, rows) -> None:
        """Saves should name teams without scoring."""
        assert team_goals([rows.save("g1", "white")]) == {"white": 0}


class TestGameResult:
    """Tests for game_result."""

    def test_win_draw_loss(self) -> None:
        """Results should compare against the best other team."""
        goals = {"a": 3, "b": 3, "c": 1}

        assert game_result("a", goals) is GameResult.DRAW
        assert game_result("c", goals) is GameResult.LOSS
        assert game_result("a", {"a": 2, "b": 1}) is GameResult.WIN

    def test_no_opponent_compares_against_zero(self) -> None:
        """A lone team with goals should win and without goals should draw."""
        assert game_result("a", {"a": 1}) is GameResult.WIN
        assert game_result("a", {"a": 0}) is GameResult.DRAW


class TestAggregateTeamStats:
    """Tests for aggregate_team_stats."""

    def test_sample_club(self, sample_snapshot: ClubSnapshot) -> None:
        """Standings should reflect one win, one draw and one loss each."""
        standings = aggregate_team_stats(sample_snapshot)

        white, green = standings
        assert (white.name, white.position) == ("white", 1)
        assert (green.name, green.position) == ("green", 2)
        assert (white.wins, white.draws, white.losses) == (1, 1, 1)
        assert (green.wins, green.draws, green.losses) == (1, 1, 1)
        assert white.goals_scored == 3
        assert white.goals_conceded == 3
        assert white.points == 4
        assert white.total_games == 3
        assert white.win_rate == "33%"

    def test_conservation(self, sample_snapshot: ClubSnapshot) -> None:
        """Wins and losses should balance across teams."""
        standings = aggregate_team_stats(sample_snapshot)

        assert sum(t.wins for t in standings) == sum(t.losses for t in standings)
        assert sum(t.goals_scored for t in standings) == sum(
            t.goals_conceded for t in standings
        )

    def test_sorted_by_points_then_goals(self, rows) -> None:
        """Equal points should be separated by goals scored."""
        snapshot = ClubSnapshot(
            club_id="club-1",
            games=(
                rows.game("g1", date(2024, 1, 6)),
                rows.game("g2", date(2024, 1, 13)),
            ),
            events=(
                rows.goal("g1", "white"),
                rows.save("g1", "green"),
                rows.goal("g2", "green"),
                rows.goal("g2", "green"),
                rows.goal("g2", "green"),
                rows.save("g2", "white"),
            ),
        )

        standings = aggregate_team_stats(snapshot)

        assert [t.name for t in standings] == ["green", "white"]
        assert [t.points for t in standings] == [3, 3]
        assert [t.goals_scored for t in standings] == [3, 1]

    def test_games_without_events_are_skipped(self, rows) -> None:
        """Completed games with no events should not count."""
        snapshot = ClubSnapshot(
            club_id="club-1",
            games=(
                rows.game("g1", date(2024, 1, 6)),
                rows.game("g2", date(2024, 1, 13)),
            ),
            events=(rows.goal("g1", "white"), rows.save("g1", "green")),
            teams=(TeamConfigRow("white"), TeamConfigRow("green")),
        )

        standings = aggregate_team_stats(snapshot)

        assert all(t.total_games == 1 for t in standings)

    def test_scheduled_and_canceled_games_are_skipped(self, rows) -> None:
        """Only completed games should count."""
        snapshot = ClubSnapshot(
            club_id="club-1",
            games=(
                rows.game("g1", date(2024, 1, 6), status="scheduled"),
                rows.game("g2", date(2024, 1, 13), status="cancelled"),
            ),
            events=(rows.goal("g1", "white"), rows.goal("g2", "green")),
        )

        assert aggregate_team_stats(snapshot) == []

    def test_configured_teams_without_games_are_zeroed(self) -> None:
        """Configured teams should be listed even with no games."""
        snapshot = ClubSnapshot(
            club_id="club-1",
            teams=(TeamConfigRow("white"), TeamConfigRow("green")),
        )

        standings = aggregate_team_stats(snapshot)

        assert [t.name for t in standings] == ["white", "green"]
        assert all(t.total_games == 0 for t in standings)
        assert all(t.win_rate == "0%" for t in standings)

    def test_unconfigured_teams_are_ignored_when_configured(self, rows) -> None:
        """Event teams outside the active configuration should be dropped."""
        snapshot = ClubSnapshot(
            club_id="club-1",
            games=(rows.game("g1", date(2024, 1, 6)),),
            events=(rows.goal("g1", "white"), rows.goal("g1", "guests")),
            teams=(TeamConfigRow("white"),),
        )

        standings = aggregate_team_stats(snapshot)

        assert [t.name for t in standings] == ["white"]
        assert standings[0].draws == 1
        assert standings[0].goals_conceded == 1

    def test_empty_snapshot(self) -> None:
        """No games and no teams should give empty standings."""
        assert aggregate_team_stats(ClubSnapshot(club_id="club-1")) == []


class TestConfiguredTeamMismatch:
    """Tests for events that name no configured team."""

    @pytest.fixture
    def warnings(self) -> Generator[list[str], None, None]:
        messages: list[str] = []
        sink_id = logger.add(
            lambda message: messages.append(message.record["message"]),
            level="WARNING",
        )
        yield messages
        logger.remove(sink_id)

    def test_warns_when_no_event_team_is_configured(
        self, rows, warnings: list[str]
    ) -> None:
        """Display names in the configuration should not silently zero standings."""
        snapshot = ClubSnapshot(
            club_id="club-1",
            games=(rows.game("g1", date(2024, 1, 6)),),
            events=(rows.goal("g1", "white"), rows.goal("g1", "green")),
            teams=(TeamConfigRow("Time Branco"), TeamConfigRow("Time Verde")),
        )

        standings = aggregate_team_stats(snapshot)

        assert all(t.total_games == 0 for t in standings)
        assert len(warnings) == 1
        assert "club-1" in warnings[0]
        assert "green" in warnings[0] and "Time Branco" in warnings[0]

    def test_no_warning_when_some_team_matches(
        self, rows, warnings: list[str]
    ) -> None:
        """A partial match should rank quietly."""
        snapshot = ClubSnapshot(
            club_id="club-1",
            games=(rows.game("g1", date(2024, 1, 6)),),
            events=(rows.goal("g1", "white"), rows.goal("g1", "guests")),
            teams=(TeamConfigRow("white"),),
        )

        aggregate_team_stats(snapshot)

        assert warnings == []
