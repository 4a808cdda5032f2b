"""Tests for logging setup."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from fitdiag.core.exceptions import MissingReferenceError
from fitdiag.core.logging import get_logger, setup_logging
from fitdiag.scoring.reference import default_reference_table


@pytest.fixture
def package_logger() -> Iterator[logging.Logger]:
    """Restore the package logger after each test."""
    logger = logging.getLogger("fitdiag")
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_console_only(self, package_logger: logging.Logger) -> None:
        setup_logging("debug")

        assert package_logger.level == logging.DEBUG
        assert len(package_logger.handlers) == 1
        assert not isinstance(package_logger.handlers[0], logging.FileHandler)

    def test_unknown_level_falls_back_to_info(self, package_logger: logging.Logger) -> None:
        setup_logging("chatty")

        assert package_logger.level == logging.INFO

    def test_repeated_setup_replaces_handlers(self, package_logger: logging.Logger) -> None:
        setup_logging()
        setup_logging()

        assert len(package_logger.handlers) == 1

    def test_log_file_in_new_directory(
        self, package_logger: logging.Logger, tmp_path: Path
    ) -> None:
        """A missing lookup should be written to the configured log file."""
        log_file = tmp_path / "logs" / "fitdiag.log"
        setup_logging("WARNING", str(log_file))

        with pytest.raises(MissingReferenceError):
            default_reference_table().baseline("9", "male")
        for handler in package_logger.handlers:
            handler.flush()

        text = log_file.read_text(encoding="utf-8")
        assert "fitdiag.scoring.reference" in text
        assert "No reference baseline for grade=9 gender=male" in text


class TestGetLogger:
    """Tests for get_logger."""

    def test_namespaces_foreign_names(self) -> None:
        assert get_logger("scripts.run").name == "fitdiag.scripts.run"

    def test_keeps_package_names(self) -> None:
        assert get_logger("fitdiag.analytics.trend").name == "fitdiag.analytics.trend"
