"""Tests for logging module."""
from __future__ import annotations

import logging
from pathlib import Path

import pytest
from loguru import logger

from club_stats.logging import FAIL, SUCCESS, WARN, get_logger, setup_logging


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_creates_directory(self, tmp_path: Path) -> None:
        """setup_logging should create log directory if it doesn't exist."""
        log_dir = tmp_path / "nested" / "logs"
        setup_logging(log_dir=str(log_dir))

        assert log_dir.exists()

    def test_setup_logging_accepts_path(self, tmp_path: Path) -> None:
        """setup_logging should accept a Path for the log directory."""
        log_dir = tmp_path / "logs"
        setup_logging(level="DEBUG", log_dir=log_dir)

        assert log_dir.exists()

    def test_setup_logging_all_parameters(self, tmp_path: Path) -> None:
        """setup_logging should accept all custom parameters."""
        log_dir = tmp_path / "logs"
        setup_logging(
            level="WARNING",
            log_dir=str(log_dir),
            rotation="500 MB",
            retention="14 days",
            serialize=False,
        )

        assert log_dir.exists()

    def test_stdlib_logging_is_intercepted(self, tmp_path: Path) -> None:
        """Records from stdlib loggers should reach loguru sinks."""
        setup_logging(level="DEBUG", log_dir=tmp_path / "logs")
        messages: list[str] = []
        sink_id = logger.add(lambda message: messages.append(str(message)), level="DEBUG")

        try:
            logging.getLogger("club_stats.data.db").info("engine ready")
        finally:
            logger.remove(sink_id)

        assert any("engine ready" in message for message in messages)


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger_returns_logger(self) -> None:
        """get_logger should return a logger instance."""
        assert get_logger(__name__) is not None

    def test_get_logger_binds_name(self) -> None:
        """Records should carry the bound module name."""
        records: list[dict] = []
        sink_id = logger.add(lambda message: records.append(message.record), level="INFO")

        try:
            get_logger("club_stats.scoring").info("Ranking club {}", "club-1")
        finally:
            logger.remove(sink_id)

        assert records[-1]["extra"]["name"] == "club_stats.scoring"
        assert records[-1]["message"] == "Ranking club club-1"


class TestStatusTags:
    """Tests for status tag constants."""

    def test_tags_are_labelled(self) -> None:
        """Each tag should contain its label."""
        assert "[SUCCESS]" in SUCCESS
        assert "[FAIL]" in FAIL
        assert "[WARN]" in WARN


class TestLoggerExports:
    """Tests for module exports."""

    def test_logger_is_exported(self) -> None:
        """Base logger should be exported."""
        from club_stats.logging import logger as exported_logger

        assert exported_logger is logger

    def test_all_exports_available(self) -> None:
        """All expected exports should be available."""
        from club_stats.logging import __all__

        assert "setup_logging" in __all__
        assert "get_logger" in __all__
        assert "logger" in __all__


class TestConsoleOnly:
    """Tests for console-only logging."""

    def test_no_log_dir_writes_no_files(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """log_dir=None should not create a logs directory."""
        monkeypatch.chdir(tmp_path)
        setup_logging(level="INFO", log_dir=None)

        assert not (tmp_path / "logs").exists()
