"""Shared pytest fixtures for club statistics tests.

This module contains fixtures used across multiple test modules:
- Configuration fixtures (test settings)
- Database session fixtures (in-memory SQLite)
- Row builders and a sample club snapshot

Example:
    def test_something(sample_snapshot):
        # sample_snapshot is a ClubSnapshot with two teams and three games
        pass
"""
from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from club_stats.config import Settings, reset_settings
from club_stats.data.schema import Base
from club_stats.types import (
    ClubSnapshot,
    EventRow,
    GameRow,
    MemberRow,
    ParticipationRow,
    TeamConfigRow,
)

# =============================================================================
# Paths
# =============================================================================


@pytest.fixture
def tmp_data_dir(tmp_path: Path) -> Path:
    """Create and return temporary data directory."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    return data_dir


# =============================================================================
# Configuration
# =============================================================================


@pytest.fixture
def test_settings(tmp_data_dir: Path) -> Generator[Settings, None, None]:
    """Provide test settings with temporary directories.

    Automatically resets settings singleton after test.
    """
    import os

    # Set environment variables for test
    os.environ["CLUB_STATS_DB_PATH"] = str(tmp_data_dir / "test.db")
    os.environ["LOG_DIR"] = str(tmp_data_dir / "logs")
    os.environ["LOG_LEVEL"] = "DEBUG"

    reset_settings()
    from club_stats.config import get_settings

    settings = get_settings()
    settings.ensure_directories()

    yield settings

    # Cleanup
    reset_settings()
    for key in ["CLUB_STATS_DB_PATH", "LOG_DIR", "LOG_LEVEL"]:
        os.environ.pop(key, None)


# =============================================================================
# Database
# =============================================================================


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """In-memory SQLite session with all tables created."""
    # Registers the models with Base.metadata
    from club_stats.data import models  # noqa: F401

    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine)()

    yield session

    session.close()
    engine.dispose()


# =============================================================================
# Row Builders
# =============================================================================


class RowFactory:
    """Builders for row records used by the scoring tests."""

    @staticmethod
    def game(
        game_id: str,
        day: date,
        status: str = "completed",
        club_id: str = "club-1",
    ) -> GameRow:
        return GameRow(id=game_id, club_id=club_id, date=day, status=status)

    @staticmethod
    def member(
        member_id: str,
        name: str | None = None,
        status: str = "active",
        birth_date: date | None = date(1990, 1, 1),
        registration_date: date | None = date(2020, 1, 1),
        nickname: str | None = None,
    ) -> MemberRow:
        return MemberRow(
            id=member_id,
            name=name or member_id.capitalize(),
            birth_date=birth_date,
            registration_date=registration_date,
            status=status,
            nickname=nickname,
        )

    @staticmethod
    def goal(game_id: str, team: str, member_id: str | None = None) -> EventRow:
        return EventRow(
            game_id=game_id, member_id=member_id, team=team, event_type="goal"
        )

    @staticmethod
    def own_goal(game_id: str, team: str, member_id: str | None = None) -> EventRow:
        return EventRow(
            game_id=game_id, member_id=member_id, team=team, event_type="own-goal"
        )

    @staticmethod
    def save(game_id: str, team: str, member_id: str | None = None) -> EventRow:
        return EventRow(
            game_id=game_id, member_id=member_id, team=team, event_type="save"
        )

    @staticmethod
    def confirmed(game_id: str, member_id: str) -> ParticipationRow:
        return ParticipationRow(
            game_id=game_id, member_id=member_id, status="confirmed"
        )


@pytest.fixture
def rows() -> type[RowFactory]:
    """Return the row builders."""
    return RowFactory


# =============================================================================
# Sample Data
# =============================================================================


@pytest.fixture
def sample_snapshot() -> ClubSnapshot:
    """Two-team club with three completed games in March 2024.

    Results: g1 white 2-1 green, g2 white 1-1 green (white scores through a
    green own-goal), g3 green 1-0 white. Alice and Bob play for white, Carol
    for green.
    """
    r = RowFactory
    games = (
        r.game("g1", date(2024, 3, 2)),
        r.game("g2", date(2024, 3, 9)),
        r.game("g3", date(2024, 3, 16)),
    )
    events = (
        r.goal("g1", "white", "alice"),
        r.goal("g1", "white", "alice"),
        r.goal("g1", "green", "carol"),
        r.save("g1", "white", "bob"),
        r.goal("g2", "green", "carol"),
        r.own_goal("g2", "green", "carol"),
        r.save("g2", "white", "alice"),
        r.goal("g3", "green", "carol"),
        r.save("g3", "white", "bob"),
    )
    participations = (
        r.confirmed("g1", "alice"),
        r.confirmed("g1", "bob"),
        r.confirmed("g1", "carol"),
        r.confirmed("g2", "alice"),
        r.confirmed("g2", "carol"),
        r.confirmed("g3", "bob"),
        r.confirmed("g3", "carol"),
    )
    members = (r.member("alice"), r.member("bob"), r.member("carol"))
    teams = (TeamConfigRow("white"), TeamConfigRow("green"))
    return ClubSnapshot(
        club_id="club-1",
        games=games,
        events=events,
        participations=participations,
        members=members,
        teams=teams,
    )


def seed_sample_club(session: Session) -> None:
    """Store the sample club, plus extra rows, in a database session.

    On top of ``sample_snapshot`` this adds an inactive and a system member,
    a canceled game in March 2024, a scheduled game in April 2024, a
    completed game in November 2023 and a second club.
    """
    from club_stats.data.models import (
        Club,
        Game,
        GameEvent,
        GameParticipant,
        Member,
        TeamConfiguration,
    )

    session.add_all(
        [Club(id="club-1", name="Pelada FC"), Club(id="club-2", name="Rivals")]
    )
    session.flush()

    members = [
        ("alice", "Alice", "active"),
        ("bob", "Bob", "active"),
        ("carol", "Carol", "active"),
        ("erin", "Erin", "inactive"),
        ("bot", "Scoreboard", "system"),
    ]
    for index, (member_id, name, status) in enumerate(members):
        session.add(
            Member(
                id=member_id,
                club_id="club-1",
                name=name,
                status=status,
                birth_date=date(1990, 1, 1),
                registration_date=date(2020, 1, 1),
                created_at=datetime(2020, 1, 1, 12, index),
            )
        )
    session.add(Member(id="zoe", club_id="club-2", name="Zoe", status="active"))
    for index, team in enumerate(["white", "green"]):
        session.add(
            TeamConfiguration(
                club_id="club-1",
                team_name=team,
                created_at=datetime(2020, 1, 1, 12, index),
            )
        )
    session.add(
        TeamConfiguration(club_id="club-1", team_name="retired", is_active=False)
    )
    session.flush()

    games = [
        ("g0", "club-1", date(2023, 11, 4), "completed"),
        ("g1", "club-1", date(2024, 3, 2), "completed"),
        ("g2", "club-1", date(2024, 3, 9), "completed"),
        ("g3", "club-1", date(2024, 3, 16), "completed"),
        ("g4", "club-1", date(2024, 3, 23), "canceled"),
        ("g5", "club-1", date(2024, 4, 6), "scheduled"),
        ("x1", "club-2", date(2024, 3, 2), "completed"),
    ]
    session.add_all(
        Game(id=game_id, club_id=club_id, date=day, status=status)
        for game_id, club_id, day, status in games
    )
    session.flush()

    events = [
        ("g0", "alice", "white", "goal"),
        ("g0", "carol", "green", "save"),
        ("g1", "alice", "white", "goal"),
        ("g1", "alice", "white", "goal"),
        ("g1", "carol", "green", "goal"),
        ("g1", "bob", "white", "save"),
        ("g2", "carol", "green", "goal"),
        ("g2", "carol", "green", "own-goal"),
        ("g2", "alice", "white", "save"),
        ("g3", "carol", "green", "goal"),
        ("g3", "bob", "white", "save"),
        ("x1", "zoe", "blue", "goal"),
    ]
    session.add_all(
        GameEvent(game_id=game_id, member_id=member_id, team=team, event_type=kind)
        for game_id, member_id, team, kind in events
    )

    participations = [
        ("g0", "alice", "confirmed"),
        ("g0", "carol", "confirmed"),
        ("g0", "bot", "confirmed"),
        ("g1", "alice", "confirmed"),
        ("g1", "bob", "confirmed"),
        ("g1", "carol", "confirmed"),
        ("g1", "erin", "confirmed"),
        ("g2", "alice", "confirmed"),
        ("g2", "bob", "declined"),
        ("g2", "carol", "confirmed"),
        ("g3", "bob", "confirmed"),
        ("g3", "carol", "confirmed"),
        ("g5", "alice", "confirmed"),
        ("x1", "zoe", "confirmed"),
    ]
    session.add_all(
        GameParticipant(game_id=game_id, member_id=member_id, status=status)
        for game_id, member_id, status in participations
    )
    session.flush()


@pytest.fixture
def seeded_session(db_session: Session) -> Session:
    """In-memory session holding the sample club."""
    seed_sample_club(db_session)
    db_session.commit()
    return db_session


@pytest.fixture
def seeded_database(test_settings: Settings) -> Generator[Settings, None, None]:
    """Settings whose database file holds the sample club."""
    from club_stats.data.db import init_db, reset_engine, session_scope

    reset_engine()
    init_db()
    with session_scope() as session:
        seed_sample_club(session)

    yield test_settings

    reset_engine()


# =============================================================================
# Time Fixtures
# =============================================================================


@pytest.fixture
def frozen_today() -> date:
    """Return a fixed date for deterministic tests."""
    return date(2024, 6, 15)


# =============================================================================
# Marker Helpers
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
