"""DateFormatter — owns the formatter caches and routes format requests.

A mode string resolves to one of three paths:

1. ``"relative"``: unit selection plus a cached relative-time formatter.
2. A preset name (``"date"``, ``"time"``, ...): the preset's fields merged
   with caller overrides, rendered by a cached CLDR formatter.
3. A token pattern (``"YYYY-MM-DD"``): the uncached token formatter.

Anything else falls back to the ``"date"`` preset.  Unrecognized modes
are never an error.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

from chronofmt.domain import instant as _instant
from chronofmt.domain import tokens as _tokens
from chronofmt.domain import units as _units
from chronofmt.domain.instant import DateInput, to_instant
from chronofmt.domain.keys import UNSET, serialize
from chronofmt.domain.types import FormatRoute, NumericMode, RelativeStyle
from chronofmt.infrastructure.cache import FormatterCache
from chronofmt.infrastructure.intl import (
    DEFAULT_LOCALE,
    FIELD_OPTIONS,
    DateTimeFormatter,
    RelativeTimeFormatter,
)
from chronofmt.services.telemetry import record_cache_lookup

logger = logging.getLogger(__name__)

RELATIVE_MODE = "relative"
DEFAULT_PRESET = "date"

# Options the relative path reads; the rest belong to the preset path.
RELATIVE_OPTIONS = ("locale", "numeric", "style", "now")

PRESETS: dict[str, dict[str, Any]] = {
    "date": {"year": "numeric", "month": "short", "day": "numeric"},
    "time": {"hour": "numeric", "minute": "2-digit"},
    "datetime": {
        "year": "numeric",
        "month": "short",
        "day": "numeric",
        "hour": "numeric",
        "minute": "2-digit",
    },
    "short": {"dateStyle": "short"},
    "medium": {"dateStyle": "medium"},
    "long": {"dateStyle": "long"},
    "full": {"dateStyle": "full"},
}


def merge_presets(overrides: Mapping[str, Mapping[str, Any]] | None) -> dict[str, dict[str, Any]]:
    """Built-in presets with *overrides* layered on top, per preset."""
    merged = {name: dict(fields) for name, fields in PRESETS.items()}
    for name, fields in (overrides or {}).items():
        merged[name] = {**merged.get(name, {}), **fields}
    return merged


class DateFormatter:
    """Formatting entry point holding its own pair of formatter caches.

    Independent instances never share cached formatters, so tests can
    build a fresh one instead of clearing global state.

    Usage::

        fmt = DateFormatter(locale="de-DE", time_zone="Europe/Berlin")
        fmt.format("2025-12-27T10:00:00Z", "long")
        fmt.format(some_datetime, "relative")
        fmt.format(some_datetime, "DD.MM.YYYY HH:mm")
    """

    def __init__(
        self,
        *,
        locale: str = DEFAULT_LOCALE,
        time_zone: str | None = None,
        numeric: str = NumericMode.AUTO,
        style: str = RelativeStyle.LONG,
        pattern: str = _tokens.DEFAULT_PATTERN,
        presets: Mapping[str, Mapping[str, Any]] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.locale = locale
        self.time_zone = time_zone
        self.numeric = str(numeric)
        self.style = str(style)
        self.pattern = pattern
        self.presets = merge_presets(presets)
        self._clock = clock or (lambda: datetime.now(UTC))
        self.datetime_cache: FormatterCache[DateTimeFormatter] = FormatterCache(
            "datetime", on_lookup=record_cache_lookup
        )
        self.relative_cache: FormatterCache[RelativeTimeFormatter] = FormatterCache(
            "relative", on_lookup=record_cache_lookup
        )

    # --- cached formatter lookup ---

    def datetime_formatter(
        self,
        locale: str,
        time_zone: str | None,
        options: Mapping[str, Any],
    ) -> DateTimeFormatter:
        """Cached CLDR formatter for a locale, zone, and field options.

        Options no formatter reads are dropped before keying, so they never
        split one formatter into several cache entries.
        """
        fields = {k: v for k, v in options.items() if k in FIELD_OPTIONS}
        zone = UNSET if time_zone is None else time_zone
        key = serialize({**fields, "locale": locale, "timeZone": zone})
        return self.datetime_cache.get_or_create(
            key, lambda: DateTimeFormatter.build(locale, time_zone, fields)
        )

    def relative_formatter(self, locale: str, numeric: str, style: str) -> RelativeTimeFormatter:
        """Cached relative-time formatter for a locale and display mode."""
        key = serialize({"locale": locale, "numeric": numeric, "style": style})
        return self.relative_cache.get_or_create(
            key, lambda: RelativeTimeFormatter.build(locale, numeric, style)
        )

    def clear_caches(self) -> None:
        """Empty both caches."""
        self.datetime_cache.clear()
        self.relative_cache.clear()

    # --- routing ---

    def resolve_mode(self, mode: str) -> tuple[FormatRoute, str]:
        """Route and effective mode name for *mode*.

        Unrecognized modes resolve to the default preset.
        """
        if mode == RELATIVE_MODE:
            return FormatRoute.RELATIVE, mode
        if mode in self.presets:
            return FormatRoute.PRESET, mode
        if _tokens.is_token_pattern(mode):
            return FormatRoute.TOKENS, mode
        logger.debug("Unrecognized mode %r, using %r", mode, DEFAULT_PRESET)
        return FormatRoute.PRESET, DEFAULT_PRESET

    def format(self, value: DateInput, mode: str = DEFAULT_PRESET, **options: Any) -> str:
        """Format *value* according to *mode*.

        Args:
            value: Anything :func:`~chronofmt.domain.instant.to_instant` accepts.
            mode: ``"relative"``, a preset name, or a token pattern.
            **options: Relative options (``locale``, ``numeric``, ``style``,
                ``now``) or preset overrides (``locale``, ``time_zone`` and
                field options, which win over the preset's own fields).
                Options the chosen path does not read are ignored.

        Raises:
            InvalidInput: If *value* is not a valid point in time.
        """
        instant = to_instant(value)
        route, name = self.resolve_mode(mode)
        if route is FormatRoute.RELATIVE:
            relative_options = {k: v for k, v in options.items() if k in RELATIVE_OPTIONS}
            return self.relative(instant, **relative_options)
        if route is FormatRoute.TOKENS:
            return _tokens.expand(name, instant)
        return self.format_intl(instant, **{**self.presets[name], **options})

    # --- paths ---

    def format_intl(
        self,
        value: DateInput,
        *,
        locale: str | None = None,
        time_zone: str | None = None,
        **options: Any,
    ) -> str:
        """Locale-aware formatting through the cached CLDR formatter.

        ``timeZone`` is accepted in *options* as an alias of *time_zone*.
        """
        instant = to_instant(value)
        alias = options.pop("timeZone", None)
        zone = time_zone or alias or self.time_zone
        formatter = self.datetime_formatter(locale or self.locale, zone, options)
        return formatter.format(instant)

    def relative(
        self,
        value: DateInput,
        *,
        locale: str | None = None,
        numeric: str | None = None,
        style: str | None = None,
        now: DateInput | None = None,
    ) -> str:
        """Phrase *value* relative to *now* ("3 days ago", "in 2 hours")."""
        reference = to_instant(now) if now is not None else self._clock()
        instant = to_instant(value)
        span = _units.select(reference, instant)
        formatter = self.relative_formatter(
            locale or self.locale,
            str(numeric or self.numeric),
            str(style or self.style),
        )
        return formatter.format(span.value, span.unit)

    def format_tokens(self, value: DateInput, pattern: str | None = None) -> str:
        """Expand every token in *pattern*, whatever else it contains."""
        return _tokens.expand(pattern or self.pattern, to_instant(value))

    @staticmethod
    def add_days(value: DateInput, days: int) -> datetime:
        """Shift *value* by whole UTC days."""
        return _instant.add_days(value, days)
