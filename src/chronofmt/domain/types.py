"""Formatting enums shared across layers."""

from __future__ import annotations

from enum import StrEnum


class RelativeUnit(StrEnum):
    """Granularities for relative-time phrasing, finest first."""

    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class NumericMode(StrEnum):
    """Relative-time numeric display mode."""

    AUTO = "auto"
    ALWAYS = "always"


class RelativeStyle(StrEnum):
    """Length of relative-time phrases."""

    LONG = "long"
    SHORT = "short"
    NARROW = "narrow"


class FormatRoute(StrEnum):
    """Which formatting path a mode string resolves to."""

    PRESET = "preset"
    RELATIVE = "relative"
    TOKENS = "tokens"
