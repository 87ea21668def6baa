"""Input coercion — every accepted input becomes an aware UTC datetime.

Accepted inputs:
- ``datetime``: aware values are converted to UTC; naive values are read
  as local wall-clock time.
- ``date``: local midnight of that day.
- ``int`` / ``float``: milliseconds since the Unix epoch.
- ``str``: ISO 8601 (``"2025-12-27"``, ``"2025-12-27T10:30:00+02:00"``)
  or RFC 2822 (``"Sat, 27 Dec 2025 10:30:00 +0000"``).  A bare ISO date
  means UTC midnight; an ISO date-time without offset means local time.

INVARIANT: Invalid inputs raise InvalidInput here, before any formatter
is looked up or built.
"""

from __future__ import annotations

import math
import re
from datetime import UTC, date, datetime, time, timedelta
from email.utils import parsedate_to_datetime

DateInput = datetime | date | int | float | str

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

# Largest offset a JavaScript-style millisecond timestamp may carry.
MAX_EPOCH_MS = 8.64e15

_ISO_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class InvalidInput(ValueError):
    """Raised when a value does not denote a valid point in time."""

    def __init__(self, value: object, reason: str = "not a valid point in time") -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid date {value!r}: {reason}")


def from_epoch_ms(ms: float) -> datetime:
    """Instant for a millisecond timestamp."""
    if not math.isfinite(ms) or abs(ms) > MAX_EPOCH_MS:
        raise InvalidInput(ms, "timestamp out of range")
    try:
        return EPOCH + timedelta(milliseconds=ms)
    except OverflowError as exc:
        raise InvalidInput(ms, "timestamp out of range") from exc


def to_epoch_ms(instant: datetime) -> int:
    """Milliseconds since the epoch for an aware datetime."""
    return (instant - EPOCH) // timedelta(milliseconds=1)


def _from_string(text: str) -> datetime:
    stripped = text.strip()
    if not stripped:
        raise InvalidInput(text, "empty string")
    if _ISO_DATE_ONLY.match(stripped):
        try:
            return datetime.fromisoformat(stripped).replace(tzinfo=UTC)
        except ValueError as exc:
            raise InvalidInput(text) from exc
    try:
        parsed = datetime.fromisoformat(stripped)
    except ValueError:
        try:
            parsed = parsedate_to_datetime(stripped)
        except (TypeError, ValueError) as exc:
            raise InvalidInput(text, "expected ISO 8601 or RFC 2822") from exc
    return _from_datetime(parsed, text)


def _from_datetime(value: datetime, original: object) -> datetime:
    try:
        return value.astimezone(UTC)
    except (OverflowError, OSError, ValueError) as exc:
        raise InvalidInput(original, "outside the representable range") from exc


def to_instant(value: DateInput) -> datetime:
    """Coerce *value* into an aware UTC datetime or raise InvalidInput."""
    if isinstance(value, datetime):
        return _from_datetime(value, value)
    if isinstance(value, date):
        return _from_datetime(datetime.combine(value, time()), value)
    if isinstance(value, bool):
        raise InvalidInput(value, "booleans are not timestamps")
    if isinstance(value, (int, float)):
        return from_epoch_ms(value)
    if isinstance(value, str):
        return _from_string(value)
    raise InvalidInput(value, f"unsupported type {type(value).__name__}")


def add_days(value: DateInput, days: int) -> datetime:
    """Shift *value* by whole days using UTC calendar arithmetic.

    The result does not follow local DST transitions: one day is always
    exactly 24 hours.
    """
    if isinstance(days, bool) or not isinstance(days, int):
        raise InvalidInput(days, "days must be an integer")
    instant = to_instant(value)
    try:
        return instant + timedelta(days=days)
    except OverflowError as exc:
        raise InvalidInput(value, f"shifting by {days} days leaves the representable range") from exc
