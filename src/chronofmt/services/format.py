"""FormatService — DateFormatter operations wrapped in ServiceResult.

Used by the CLI.  Each method converts InvalidInput into a structured
``INVALID_INPUT`` error instead of raising.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from chronofmt.domain.instant import DateInput, InvalidInput, to_epoch_ms
from chronofmt.domain.types import FormatRoute
from chronofmt.services.dispatcher import DEFAULT_PRESET, DateFormatter
from chronofmt.services.result import INVALID_INPUT, ServiceError, ServiceResult
from chronofmt.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


def _invalid(op: str, exc: InvalidInput) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(
            code=INVALID_INPUT,
            message=str(exc),
            detail={"value": str(exc.value), "reason": exc.reason},
        ),
    )


class FormatService:
    """Formatting operations for the command layer."""

    def __init__(self, formatter: DateFormatter) -> None:
        self._formatter = formatter

    def _run(self, op: str, render: Callable[[], Any], data: dict[str, Any]) -> ServiceResult:
        try:
            with trace_span(op):
                result = render()
        except InvalidInput as exc:
            logger.debug("%s rejected input: %s", op, exc)
            return _invalid(op, exc)
        return ServiceResult(ok=True, op=op, data={**data, "result": result})

    @traced
    def format(self, value: DateInput, mode: str = DEFAULT_PRESET, **options: Any) -> ServiceResult:
        """Dispatch on *mode*; reports the route taken alongside the text."""
        route, name = self._formatter.resolve_mode(mode)
        warnings: list[str] = []
        if route is FormatRoute.PRESET and name != mode:
            warnings.append(f"Unrecognized mode {mode!r}; used {name!r}")
        result = self._run(
            "format",
            lambda: self._formatter.format(value, mode, **options),
            {"input": str(value), "mode": name, "route": route.value},
        )
        if result.ok and warnings:
            result = result.model_copy(update={"warnings": warnings})
        return result

    @traced
    def relative(self, value: DateInput, **options: Any) -> ServiceResult:
        """Relative phrase for *value*."""
        return self._run(
            "relative",
            lambda: self._formatter.relative(value, **options),
            {"input": str(value)},
        )

    @traced
    def tokens(self, value: DateInput, pattern: str | None = None) -> ServiceResult:
        """Token expansion of *pattern* (default pattern when omitted)."""
        return self._run(
            "tokens",
            lambda: self._formatter.format_tokens(value, pattern),
            {"input": str(value), "pattern": pattern or self._formatter.pattern},
        )

    @traced
    def add_days(self, value: DateInput, days: int) -> ServiceResult:
        """Shift *value* by *days*; the result is an ISO 8601 UTC timestamp."""
        try:
            shifted = self._formatter.add_days(value, days)
        except InvalidInput as exc:
            return _invalid("add_days", exc)
        return ServiceResult(
            ok=True,
            op="add_days",
            data={
                "input": str(value),
                "days": days,
                "result": shifted.isoformat(),
                "epoch_ms": to_epoch_ms(shifted),
            },
        )
