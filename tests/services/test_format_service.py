"""Tests for FormatService result wrapping."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from chronofmt.services.dispatcher import DateFormatter
from chronofmt.services.format import FormatService
from chronofmt.services.result import INVALID_INPUT

NOW = datetime(2025, 12, 27, 15, 45, tzinfo=UTC)


@pytest.fixture
def service() -> FormatService:
    return FormatService(DateFormatter(time_zone="UTC", clock=lambda: NOW))


class TestFormat:
    def test_preset(self, service: FormatService) -> None:
        result = service.format("2025-12-27", "long")
        assert result.ok
        assert result.op == "format"
        assert result.data == {
            "input": "2025-12-27",
            "mode": "long",
            "route": "preset",
            "result": "December 27, 2025",
        }
        assert result.warnings == []

    def test_fallback_warns(self, service: FormatService) -> None:
        result = service.format("2025-12-27", "bogus-mode")
        assert result.ok
        assert result.data["mode"] == "date"
        assert result.data["result"] == "Dec 27, 2025"
        assert result.warnings == ["Unrecognized mode 'bogus-mode'; used 'date'"]

    def test_routes_reported(self, service: FormatService) -> None:
        assert service.format("2025-12-27T15:40:00Z", "relative").data["route"] == "relative"
        assert service.format("2025-12-27", "YYYY").data["route"] == "tokens"

    def test_invalid_input(self, service: FormatService) -> None:
        result = service.format("2025-02-30")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == INVALID_INPUT
        assert result.error.detail["value"] == "2025-02-30"
        assert "2025-02-30" in result.error.message

    def test_invalid_option(self, service: FormatService) -> None:
        result = service.format("2025-12-27", "date", locale="zz-ZZ")
        assert not result.ok
        assert result.error is not None
        assert result.error.detail["reason"] == "unknown locale"


class TestRelative:
    def test_phrase(self, service: FormatService) -> None:
        result = service.relative("2025-12-27T15:40:00Z")
        assert result.ok
        assert result.data["result"] == "5 minutes ago"

    def test_invalid(self, service: FormatService) -> None:
        result = service.relative("later")
        assert not result.ok
        assert result.op == "relative"


class TestTokens:
    def test_default_pattern_reported(self, service: FormatService) -> None:
        result = service.tokens("2025-12-27T12:00:00Z")
        assert result.data == {
            "input": "2025-12-27T12:00:00Z",
            "pattern": "YYYY-MM-DD",
            "result": "2025-12-27",
        }

    def test_explicit_pattern(self, service: FormatService) -> None:
        assert service.tokens("2025-12-27T12:00:00Z", "MM/DD").data["result"] == "12/27"


class TestAddDays:
    def test_result_fields(self, service: FormatService) -> None:
        result = service.add_days("2025-12-27", 5)
        assert result.ok
        assert result.data["result"] == "2026-01-01T00:00:00+00:00"
        assert result.data["epoch_ms"] == 1_767_225_600_000
        assert result.data["days"] == 5

    def test_overflow(self, service: FormatService) -> None:
        result = service.add_days("9999-12-31", 1)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == INVALID_INPUT
