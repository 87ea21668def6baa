"""Relative-time unit selection.

Chooses the coarsest unit whose length the elapsed duration reaches,
then rounds the duration in that unit half away from zero.  Month and
year are fixed-length approximations (30 and 365 days).

INVARIANT: Selection is monotonic. A larger absolute duration never
selects a finer unit.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta

from chronofmt.domain.types import RelativeUnit

SECOND_MS = 1000
MINUTE_MS = 60 * SECOND_MS
HOUR_MS = 60 * MINUTE_MS
DAY_MS = 24 * HOUR_MS
WEEK_MS = 7 * DAY_MS
MONTH_MS = 30 * DAY_MS
YEAR_MS = 365 * DAY_MS

UNIT_MS: dict[RelativeUnit, int] = {
    RelativeUnit.SECOND: SECOND_MS,
    RelativeUnit.MINUTE: MINUTE_MS,
    RelativeUnit.HOUR: HOUR_MS,
    RelativeUnit.DAY: DAY_MS,
    RelativeUnit.WEEK: WEEK_MS,
    RelativeUnit.MONTH: MONTH_MS,
    RelativeUnit.YEAR: YEAR_MS,
}

# Coarsest first; the first threshold reached wins.
_THRESHOLDS: tuple[RelativeUnit, ...] = (
    RelativeUnit.YEAR,
    RelativeUnit.MONTH,
    RelativeUnit.WEEK,
    RelativeUnit.DAY,
    RelativeUnit.HOUR,
    RelativeUnit.MINUTE,
)


@dataclass(frozen=True)
class RelativeSpan:
    """A signed magnitude in one unit. Negative means the past."""

    unit: RelativeUnit
    value: int


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero.

    Examples:
        >>> round_half_away(1.5), round_half_away(-1.5), round_half_away(2.49)
        (2, -2, 2)
    """
    magnitude = math.floor(abs(value) + 0.5)
    return -magnitude if value < 0 else magnitude


def select_unit(diff_ms: float) -> RelativeSpan:
    """Pick the unit and rounded magnitude for a signed millisecond delta."""
    abs_ms = abs(diff_ms)
    unit = RelativeUnit.SECOND
    for candidate in _THRESHOLDS:
        if abs_ms >= UNIT_MS[candidate]:
            unit = candidate
            break
    return RelativeSpan(unit=unit, value=round_half_away(diff_ms / UNIT_MS[unit]))


def select(now: datetime, target: datetime) -> RelativeSpan:
    """Select the relative span from *now* to *target*."""
    diff_ms = (target - now) / timedelta(milliseconds=1)
    return select_unit(diff_ms)
