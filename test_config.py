"""Tests for configuration and logging setup."""

import logging

import pytest

from kmapgrid.config import (
    HIGHLIGHT_PALETTE,
    MAX_INPUTS,
    MIN_INPUTS,
    log_file_from_env,
    log_level_from_env,
)
from kmapgrid.logging_config import setup_logging


@pytest.fixture
def clean_logger(monkeypatch):
    monkeypatch.delenv("KMAPGRID_LOG_LEVEL", raising=False)
    monkeypatch.delenv("KMAPGRID_LOG_FILE", raising=False)
    logger = logging.getLogger("kmapgrid")
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


class TestConfig:
    """Tests for module constants and environment lookups."""

    def test_input_range(self) -> None:
        assert (MIN_INPUTS, MAX_INPUTS) == (2, 6)
        assert len(HIGHLIGHT_PALETTE) == 5

    def test_log_level_default(self, monkeypatch) -> None:
        monkeypatch.delenv("KMAPGRID_LOG_LEVEL", raising=False)
        assert log_level_from_env() == logging.INFO

    @pytest.mark.parametrize("raw, expected", [
        ("debug", logging.DEBUG),
        ("WARNING", logging.WARNING),
        ("10", 10),
        ("nonsense", logging.INFO),
    ])
    def test_log_level_from_env(self, monkeypatch, raw: str, expected: int) -> None:
        monkeypatch.setenv("KMAPGRID_LOG_LEVEL", raw)
        assert log_level_from_env() == expected

    def test_log_file_from_env(self, monkeypatch) -> None:
        monkeypatch.delenv("KMAPGRID_LOG_FILE", raising=False)
        assert log_file_from_env() is None
        monkeypatch.setenv("KMAPGRID_LOG_FILE", "  ")
        assert log_file_from_env() is None
        monkeypatch.setenv("KMAPGRID_LOG_FILE", "/tmp/kmap.log")
        assert log_file_from_env() == "/tmp/kmap.log"


class TestSetupLogging:
    """Tests for the package logger setup."""

    def test_single_handler_after_rerun(self, clean_logger) -> None:
        """Re-running the page script does not stack handlers."""
        setup_logging(logging.DEBUG)
        logger = setup_logging(logging.DEBUG)
        assert logger is clean_logger
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_level_from_env(self, clean_logger, monkeypatch) -> None:
        monkeypatch.setenv("KMAPGRID_LOG_LEVEL", "warning")
        assert setup_logging().level == logging.WARNING

    def test_file_from_env_is_appended(self, clean_logger, monkeypatch, tmp_path) -> None:
        """KMAPGRID_LOG_FILE keeps solve logs across page reruns."""
        log_file = tmp_path / "kmap.log"
        monkeypatch.setenv("KMAPGRID_LOG_FILE", str(log_file))

        setup_logging(logging.INFO)
        logging.getLogger("kmapgrid.logic").info("first solve")
        logger = setup_logging(logging.INFO)
        logging.getLogger("kmapgrid.logic").info("second solve")
        for handler in logger.handlers:
            handler.flush()

        assert len(logger.handlers) == 2
        text = log_file.read_text(encoding="utf-8")
        assert "first solve" in text
        assert "second solve" in text

    def test_explicit_file_overrides_env(self, clean_logger, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv("KMAPGRID_LOG_FILE", str(tmp_path / "env.log"))
        explicit = tmp_path / "explicit.log"
        logger = setup_logging(logging.INFO, str(explicit))
        logging.getLogger("kmapgrid.render").info("drawn")
        for handler in logger.handlers:
            handler.flush()
        assert "drawn" in explicit.read_text(encoding="utf-8")
        assert not (tmp_path / "env.log").exists()
