"""Locale-independent token patterns ("YYYY-MM-DD", "DD.MM.YYYY HH:mm").

Substitution is a single left-to-right scan.  At each position the
longest recognized token wins, so ``YYYY`` is never read as two ``YY``
and ``MM`` is never read as two ``M``.  Everything else is copied
through verbatim.

INVARIANT: Substituted output is never rescanned for tokens.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

DEFAULT_PATTERN = "YYYY-MM-DD"

TOKENS: tuple[str, ...] = ("YYYY", "YY", "MM", "M", "DD", "D", "HH", "H", "mm", "m", "ss", "s")

# Alternation is leftmost-first, so listing longer tokens first makes the
# scan longest-match.
_TOKEN_PATTERN = re.compile("|".join(sorted(TOKENS, key=len, reverse=True)))


@dataclass(frozen=True)
class CalendarFields:
    """Wall-clock fields of an instant."""

    year: int
    month: int  # 1-12
    day: int
    hour: int  # 0-23
    minute: int
    second: int


FieldExtractor = Callable[[datetime], CalendarFields]


def local_fields(instant: datetime) -> CalendarFields:
    """Calendar fields of *instant* in the system's local time zone."""
    local = instant.astimezone()
    return CalendarFields(
        year=local.year,
        month=local.month,
        day=local.day,
        hour=local.hour,
        minute=local.minute,
        second=local.second,
    )


def _pad2(n: int) -> str:
    return f"{n:02d}"


def token_values(fields: CalendarFields) -> dict[str, str]:
    """Rendered text for every token."""
    year = str(fields.year)
    return {
        "YYYY": year,
        "YY": year[-2:],
        "MM": _pad2(fields.month),
        "M": str(fields.month),
        "DD": _pad2(fields.day),
        "D": str(fields.day),
        "HH": _pad2(fields.hour),
        "H": str(fields.hour),
        "mm": _pad2(fields.minute),
        "m": str(fields.minute),
        "ss": _pad2(fields.second),
        "s": str(fields.second),
    }


def expand(
    pattern: str,
    instant: datetime,
    fields: FieldExtractor = local_fields,
) -> str:
    """Substitute every token in *pattern* with the matching field of *instant*.

    Examples:
        >>> from datetime import UTC
        >>> def utc_fields(i):
        ...     u = i.astimezone(UTC)
        ...     return CalendarFields(u.year, u.month, u.day, u.hour, u.minute, u.second)
        >>> expand("DD.MM.YYYY", datetime(2025, 1, 5, tzinfo=UTC), fields=utc_fields)
        '05.01.2025'
    """
    values = token_values(fields(instant))
    return _TOKEN_PATTERN.sub(lambda match: values[match.group(0)], pattern)


def find_tokens(pattern: str) -> list[str]:
    """Tokens in *pattern* in scan order."""
    return _TOKEN_PATTERN.findall(pattern)


def is_token_pattern(text: str) -> bool:
    """Whether *text* reads as a token pattern rather than a mode name.

    A pattern has at least one token and no ASCII letters outside its
    tokens, so ``"DD/MM/YYYY HH:mm"`` qualifies while ``"bogus-mode"``
    (whose stray ``s`` and ``m`` are tokens) does not.
    """
    if not find_tokens(text):
        return False
    residue = _TOKEN_PATTERN.sub("", text)
    return not any(ch.isascii() and ch.isalpha() for ch in residue)
