"""Babel-backed formatter objects.

These are the expensive pieces the formatter caches exist for.  Building a
:class:`DateTimeFormatter` parses the locale, resolves the time zone, and
matches the requested fields against the locale's CLDR skeletons to find a
pattern.  Formatting afterwards is a single ``DateTimePattern.apply``.

Field options use the ECMA-402 vocabulary (``year="numeric"``,
``month="long"``, ``hour12=True``, ``dateStyle="medium"`` ...), mapped to
CLDR skeleton symbols.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from babel import Locale, UnknownLocaleError
from babel.dates import (
    DateTimePattern,
    format_timedelta,
    match_skeleton,
    parse_pattern,
    tokenize_pattern,
    untokenize_pattern,
)

from chronofmt.domain.instant import InvalidInput
from chronofmt.domain.types import NumericMode, RelativeStyle, RelativeUnit
from chronofmt.domain.units import UNIT_MS

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en-US"

STYLES = ("full", "long", "medium", "short")

DATE_FIELDS = ("era", "year", "month", "weekday", "day")
TIME_FIELDS = ("hour", "minute", "second", "timeZoneName")

# ECMA-402 option value -> CLDR skeleton symbol.  "{h}" is the hour symbol
# picked from hourCycle/hour12/the locale.
_FIELD_SYMBOLS: dict[str, dict[str, str]] = {
    "era": {"narrow": "GGGGG", "short": "G", "long": "GGGG"},
    "year": {"numeric": "y", "2-digit": "yy"},
    "month": {"numeric": "M", "2-digit": "MM", "short": "MMM", "long": "MMMM", "narrow": "MMMMM"},
    "weekday": {"narrow": "EEEEE", "short": "E", "long": "EEEE"},
    "day": {"numeric": "d", "2-digit": "dd"},
    "hour": {"numeric": "{h}", "2-digit": "{h}{h}"},
    "minute": {"numeric": "m", "2-digit": "mm"},
    "second": {"numeric": "s", "2-digit": "ss"},
    "timeZoneName": {"short": "z", "long": "zzzz", "shortOffset": "O", "longOffset": "OOOO"},
}

_HOUR_CYCLES = {"h11": "K", "h12": "h", "h23": "H", "h24": "k"}

# Every option a DateTimeFormatter reads; anything else is ignored.
FIELD_OPTIONS = frozenset((*_FIELD_SYMBOLS, "hour12", "hourCycle", "dateStyle", "timeStyle"))

_DEFAULT_FIELDS = {"year": "numeric", "month": "numeric", "day": "numeric"}

# Pattern symbol -> the skeleton symbol it answers for.
_SKELETON_SYMBOL = {"L": "M", "c": "E", "e": "E"}

# Always textual: widths 1-3 are abbreviated, 4 wide, 5 narrow.
_TEXT_FIELDS = {"E", "G"}

# Numeric at widths 1-2, textual from 3 up.
_MIXED_FIELDS = {"M", "L", "c", "e"}


def parse_locale(tag: str) -> Locale:
    """Parse a BCP 47 (``en-US``) or POSIX (``en_US``) locale identifier."""
    try:
        return Locale.parse(tag.replace("-", "_"))
    except (UnknownLocaleError, ValueError, TypeError, AttributeError) as exc:
        raise InvalidInput(tag, "unknown locale") from exc


def resolve_timezone(name: str | None) -> tzinfo | None:
    """IANA zone for *name*; None means the system local zone."""
    if name is None:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidInput(name, "unknown time zone") from exc


def _pattern_text(pattern: Any) -> str:
    return str(getattr(pattern, "pattern", pattern))


def _preferred_hour_symbol(locale: Locale, options: Mapping[str, Any]) -> str:
    cycle = options.get("hourCycle")
    if cycle is not None:
        if cycle not in _HOUR_CYCLES:
            raise InvalidInput(f"hourCycle={cycle!r}", "unsupported option value")
        return _HOUR_CYCLES[cycle]
    hour12 = options.get("hour12")
    if hour12 is not None:
        return "h" if hour12 else "H"
    return "h" if "h" in _pattern_text(locale.time_formats["short"]) else "H"


def _field_symbol(name: str, value: Any, hour_symbol: str) -> str:
    symbols = _FIELD_SYMBOLS[name]
    if value not in symbols:
        raise InvalidInput(f"{name}={value!r}", "unsupported option value")
    return symbols[value].replace("{h}", hour_symbol)


def build_skeletons(options: Mapping[str, Any], hour_symbol: str) -> tuple[str, str]:
    """Date and time skeletons for the requested fields.

    Falls back to a numeric year-month-day date when no field is requested.
    """
    requested = {k: v for k, v in options.items() if k in _FIELD_SYMBOLS and v is not None}
    if not requested:
        requested = dict(_DEFAULT_FIELDS)
    date_part = "".join(_field_symbol(f, requested[f], hour_symbol) for f in DATE_FIELDS if f in requested)
    time_part = "".join(_field_symbol(f, requested[f], hour_symbol) for f in TIME_FIELDS if f in requested)
    return date_part, time_part


def _adjust_widths(pattern: str, skeleton: str) -> str:
    """Bring the fields of a matched pattern to the requested widths.

    Text fields take the requested form (``E`` -> ``EEEE`` for a long
    weekday, ``MMM`` -> ``MMMM`` for a long month); numeric fields only
    ever widen (``d`` -> ``dd``), never shrink.
    """
    wanted = {value[0]: value[1] for kind, value in tokenize_pattern(skeleton) if kind == "field"}
    tokens = []
    for kind, value in tokenize_pattern(pattern):
        if kind == "field":
            value = (value[0], _field_width(*value, wanted))
        tokens.append((kind, value))
    return untokenize_pattern(tokens)


def _field_width(char: str, width: int, wanted: Mapping[str, int]) -> int:
    target = wanted.get(_SKELETON_SYMBOL.get(char, char), 0)
    if not target:
        return width
    if char in _TEXT_FIELDS:
        # Any request up to 3 means the abbreviated form.
        return target if target > 3 else min(width, 3)
    if char in _MIXED_FIELDS and width >= 3:
        return target if target >= 3 else width
    return target if width < target < 3 else width


def _match_pattern(locale: Locale, skeleton: str) -> str | None:
    skeletons = locale.datetime_skeletons
    if skeleton in skeletons:
        return _pattern_text(skeletons[skeleton])
    key = match_skeleton(skeleton, skeletons)
    if key is None:
        return None
    return _adjust_widths(_pattern_text(skeletons[key]), skeleton)


def _closest_pattern(locale: Locale, skeleton: str) -> str:
    pattern = _match_pattern(locale, skeleton)
    if pattern is None:
        key = match_skeleton(skeleton, locale.datetime_skeletons, allow_different_fields=True)
        if key is None:
            raise InvalidInput(skeleton, f"no {locale} pattern for these fields")
        pattern = _adjust_widths(_pattern_text(locale.datetime_skeletons[key]), skeleton)
    return pattern


def _join(locale: Locale, date_pattern: str, time_pattern: str, style: str = "medium") -> str:
    glue = _pattern_text(locale.datetime_formats[style])
    return glue.replace("{1}", date_pattern).replace("{0}", time_pattern)


def _style_pattern(locale: Locale, date_style: str | None, time_style: str | None) -> str:
    for style in (date_style, time_style):
        if style is not None and style not in STYLES:
            raise InvalidInput(style, "unsupported style")
    if date_style and time_style:
        return _join(
            locale,
            _pattern_text(locale.date_formats[date_style]),
            _pattern_text(locale.time_formats[time_style]),
            date_style,
        )
    if date_style:
        return _pattern_text(locale.date_formats[date_style])
    return _pattern_text(locale.time_formats[time_style])


def resolve_pattern(locale: Locale, options: Mapping[str, Any]) -> str:
    """CLDR pattern text for *options* in *locale*.

    ``dateStyle``/``timeStyle`` take precedence over individual fields.
    """
    date_style = options.get("dateStyle")
    time_style = options.get("timeStyle")
    if date_style is not None or time_style is not None:
        return _style_pattern(locale, date_style, time_style)

    date_skeleton, time_skeleton = build_skeletons(options, _preferred_hour_symbol(locale, options))
    combined = _match_pattern(locale, date_skeleton + time_skeleton)
    if combined is not None:
        return combined
    if date_skeleton and time_skeleton:
        return _join(
            locale,
            _closest_pattern(locale, date_skeleton),
            _closest_pattern(locale, time_skeleton),
        )
    return _closest_pattern(locale, date_skeleton or time_skeleton)


@dataclass(frozen=True, eq=False)
class DateTimeFormatter:
    """A locale, a zone, and a parsed CLDR pattern, ready to apply."""

    locale: Locale
    tzinfo: tzinfo | None
    pattern: DateTimePattern

    @classmethod
    def build(
        cls,
        locale: str,
        time_zone: str | None,
        options: Mapping[str, Any],
    ) -> DateTimeFormatter:
        babel_locale = parse_locale(locale)
        zone = resolve_timezone(time_zone)
        pattern = resolve_pattern(babel_locale, options)
        logger.debug("Resolved pattern %r for %s", pattern, babel_locale)
        return cls(locale=babel_locale, tzinfo=zone, pattern=parse_pattern(pattern))

    @property
    def pattern_text(self) -> str:
        return _pattern_text(self.pattern)

    def format(self, instant: datetime) -> str:
        """Render *instant* in this formatter's zone (local when unset)."""
        return self.pattern.apply(instant.astimezone(self.tzinfo), self.locale)


@dataclass(frozen=True, eq=False)
class RelativeTimeFormatter:
    """Locale-specific "in 5 minutes" / "5 minutes ago" phrasing.

    Pluralization and wording come from Babel's CLDR data.  Babel exposes
    no public table of idiomatic phrases ("yesterday"), so ``numeric="auto"``
    renders the same numeric phrase as ``"always"``.
    """

    locale: Locale
    numeric: NumericMode
    style: RelativeStyle

    @classmethod
    def build(cls, locale: str, numeric: str, style: str) -> RelativeTimeFormatter:
        try:
            numeric_mode = NumericMode(numeric)
            relative_style = RelativeStyle(style)
        except ValueError as exc:
            raise InvalidInput(f"numeric={numeric!r}, style={style!r}", "unsupported option value") from exc
        return cls(locale=parse_locale(locale), numeric=numeric_mode, style=relative_style)

    def format(self, value: int, unit: RelativeUnit) -> str:
        """Phrase a signed *value* of *unit*; negative values are in the past."""
        seconds = value * UNIT_MS[unit] // 1000
        # An infinite threshold pins Babel to the unit chosen by the caller.
        return format_timedelta(
            timedelta(seconds=seconds),
            granularity=unit.value,
            threshold=math.inf,
            add_direction=True,
            format=self.style.value,
            locale=self.locale,
        )
