"""Module-level convenience functions backed by one default DateFormatter.

Applications that need their own defaults or isolated caches should
construct a :class:`~chronofmt.services.dispatcher.DateFormatter` instead.
"""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Any

from chronofmt.domain.instant import DateInput
from chronofmt.domain.tokens import DEFAULT_PATTERN
from chronofmt.services.dispatcher import DEFAULT_PRESET, DateFormatter

_default: DateFormatter | None = None
_default_lock = threading.Lock()


def default_formatter() -> DateFormatter:
    """The shared formatter, created on first use."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = DateFormatter()
    return _default


def format(value: DateInput, mode: str = DEFAULT_PRESET, **options: Any) -> str:  # noqa: A001
    """Format *value* as a preset, a relative phrase, or a token pattern."""
    return default_formatter().format(value, mode, **options)


def format_intl(
    value: DateInput,
    *,
    locale: str | None = None,
    time_zone: str | None = None,
    **options: Any,
) -> str:
    """Locale-aware formatting with ECMA-402 style field options."""
    return default_formatter().format_intl(value, locale=locale, time_zone=time_zone, **options)


def relative(
    value: DateInput,
    *,
    locale: str | None = None,
    numeric: str | None = None,
    style: str | None = None,
    now: DateInput | None = None,
) -> str:
    """Relative phrase for *value*, measured from *now* (default: current time)."""
    return default_formatter().relative(value, locale=locale, numeric=numeric, style=style, now=now)


def format_tokens(value: DateInput, pattern: str = DEFAULT_PATTERN) -> str:
    """Token substitution in local time: ``"DD.MM.YYYY HH:mm"``."""
    return default_formatter().format_tokens(value, pattern)


def add_days(value: DateInput, days: int) -> datetime:
    """Shift *value* by whole days using UTC calendar arithmetic."""
    return DateFormatter.add_days(value, days)


def clear_caches() -> None:
    """Drop every cached formatter of the default formatter."""
    default_formatter().clear_caches()
