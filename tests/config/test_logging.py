"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from chronofmt.config.logging import PACKAGE_LOGGER, configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger(PACKAGE_LOGGER)
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)
    structlog.reset_defaults()


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("chronofmt").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("chronofmt").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        structlog.get_logger("chronofmt.test").warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "chronofmt.test"
        assert "timestamp" in parsed

    def test_formatter_builds_are_logged(self, capfd: pytest.CaptureFixture[str]) -> None:
        from chronofmt.services.dispatcher import DateFormatter

        configure_logging(verbose=True, log_json=True)
        DateFormatter(time_zone="UTC").format("2025-12-27")
        lines = [json.loads(line) for line in capfd.readouterr().err.splitlines()]
        loggers = {line["logger"] for line in lines}
        assert "chronofmt.infrastructure.cache" in loggers
        assert all(line["level"] == "debug" for line in lines)

    def test_quiet_when_not_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        from chronofmt.services.dispatcher import DateFormatter

        configure_logging(verbose=False, log_json=True)
        DateFormatter(time_zone="UTC").format("2025-12-27")
        assert capfd.readouterr().err == ""

    def test_third_party_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("babel").debug("locale data noise")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1
