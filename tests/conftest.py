"""Shared pytest fixtures for chronofmt tests."""

from __future__ import annotations

import logging
import time
from collections.abc import Generator

import pytest
from click.testing import CliRunner

from chronofmt.services.dispatcher import DateFormatter
from chronofmt.services.telemetry import disable_telemetry

# POSIX zone string: UTC-5 all year, needs no tz database.
LOCAL_TZ = "EST5"


@pytest.fixture(autouse=True)
def _local_timezone(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Pin the process-local zone so local-time output is deterministic."""
    monkeypatch.setenv("TZ", LOCAL_TZ)
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep CLI runs away from any chronofmt.toml above the test directory."""
    monkeypatch.delenv("CHRONOFMT_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))


@pytest.fixture(autouse=True)
def _reset_cli_state() -> Generator[None]:
    """Undo the logging and telemetry setup a CLI invocation leaves behind."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    pkg_level = logging.getLogger("chronofmt").level
    disable_telemetry()
    yield
    disable_telemetry()
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("chronofmt").setLevel(pkg_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def formatter() -> DateFormatter:
    """A fresh formatter rendering in UTC, with its own empty caches."""
    return DateFormatter(time_zone="UTC")
