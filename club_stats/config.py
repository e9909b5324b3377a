"""Runtime settings for club statistics.

Values come from the environment (or a ``.env`` file in the working
directory) and are validated by pydantic. Each field is read from the
environment variable named by its alias.

Example:
    >>> from club_stats.config import get_settings
    >>> get_settings().database_url
    'sqlite:///data/club.db'
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Club statistics configuration.

    Attributes:
        db_path: SQLite file holding clubs, members and games.
        db_busy_timeout_ms: How long a reader waits on a locked database.
        log_level: Minimum level for console and file logs.
        log_dir: Where the rotating log files go.
        active_member_status: Status a member needs to appear in rankings.
        system_member_status: Status of internal accounts that never count
            toward attendance.
        top_players_limit: Entries returned by the top-N fetches when no
            limit is given.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    db_path: str = Field(default="data/club.db", alias="CLUB_STATS_DB_PATH")
    db_busy_timeout_ms: int = Field(
        default=5000,
        alias="CLUB_STATS_DB_BUSY_TIMEOUT_MS",
        ge=0,
    )

    log_level: LogLevel = Field(default="INFO", alias="LOG_LEVEL")
    log_dir: str = Field(default="logs", alias="LOG_DIR")

    active_member_status: str = Field(default="active", alias="ACTIVE_MEMBER_STATUS")
    system_member_status: str = Field(default="system", alias="SYSTEM_MEMBER_STATUS")

    top_players_limit: int = Field(default=5, alias="TOP_PLAYERS_LIMIT", ge=1, le=100)

    @field_validator("db_path", "log_dir")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Reject blank paths."""
        if not v or v.isspace():
            raise ValueError("Path cannot be empty or whitespace")
        return v

    @field_validator("active_member_status", "system_member_status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        """Strip status labels and reject blank ones."""
        v = v.strip()
        if not v:
            raise ValueError("Member status cannot be empty")
        return v

    @property
    def db_path_obj(self) -> Path:
        return Path(self.db_path)

    @property
    def database_url(self) -> str:
        """SQLAlchemy URL for the configured SQLite file."""
        return f"sqlite:///{self.db_path_obj}"

    @property
    def log_dir_obj(self) -> Path:
        return Path(self.log_dir)

    def ensure_directories(self) -> None:
        """Create the database and log directories."""
        self.db_path_obj.parent.mkdir(parents=True, exist_ok=True)
        self.log_dir_obj.mkdir(parents=True, exist_ok=True)


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the cached settings, loading them on first call."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Forget the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
