"""Telemetry — formatter cache accounting for verbose CLI runs.

Off by default, costing one ContextVar lookup per call.  Under
``chronofmt -v`` every ``@traced`` service call opens a :class:`Span`.
The formatter caches report each lookup through
:func:`record_cache_lookup`, and the innermost open span counts it as a
hit or a miss.  The finished span tree is logged and lands in
``ServiceResult.meta["telemetry"]``::

    {"name": "FormatService.format", "duration_ms": 4.1,
     "stages": [{"name": "format", "duration_ms": 3.9,
                 "cache": {"datetime.miss": 1}}]}
"""

from __future__ import annotations

import functools
import time
from collections import Counter
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from chronofmt.services.result import ServiceResult

_enabled: ContextVar[bool] = ContextVar("_telemetry_enabled", default=False)
_open_span: ContextVar[Span | None] = ContextVar("_open_span", default=None)


@dataclass
class Span:
    """One timed stage of a service call and the cache lookups made in it."""

    name: str
    started: float = field(default_factory=time.perf_counter)
    duration_ms: float = 0.0
    lookups: Counter[str] = field(default_factory=Counter)
    stages: list[Span] = field(default_factory=list)

    def close(self) -> None:
        self.duration_ms = (time.perf_counter() - self.started) * 1000

    def record(self, cache: str, hit: bool) -> None:
        self.lookups[f"{cache}.{'hit' if hit else 'miss'}"] += 1

    def totals(self) -> Counter[str]:
        """Lookups made in this span and every stage below it."""
        total = Counter(self.lookups)
        for stage in self.stages:
            total.update(stage.totals())
        return total

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 3)}
        if self.lookups:
            data["cache"] = dict(sorted(self.lookups.items()))
        if self.stages:
            data["stages"] = [s.to_dict() for s in self.stages]
        return data


@contextmanager
def _opened(span: Span) -> Generator[Span]:
    token = _open_span.set(span)
    try:
        yield span
    finally:
        span.close()
        _open_span.reset(token)


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Open a stage under the current span.

    Yields None when telemetry is off or no traced call is running.
    """
    parent = _open_span.get() if _enabled.get() else None
    if parent is None:
        yield None
        return
    stage = Span(name=name)
    parent.stages.append(stage)
    with _opened(stage):
        yield stage


def record_cache_lookup(cache: str, hit: bool) -> None:
    """Count a formatter cache lookup against the open span, if any."""
    span = _open_span.get()
    if span is not None:
        span.record(cache, hit)


def _log_span(span: Span, *, ok: bool) -> None:
    totals = span.totals()
    structlog.get_logger("chronofmt.telemetry").debug(
        "span.complete",
        span_name=span.name,
        duration_ms=round(span.duration_ms, 3),
        ok=ok,
        cache_hits=sum(n for k, n in totals.items() if k.endswith(".hit")),
        cache_misses=sum(n for k, n in totals.items() if k.endswith(".miss")),
    )


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Decorator: run a service method inside a root span.

    A returned ServiceResult is copied with the span tree in its meta.
    """

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)
        span = Span(name=func.__qualname__)
        try:
            with _opened(span):
                result = func(*args, **kwargs)
        except Exception:
            _log_span(span, ok=False)
            raise
        _log_span(span, ok=True)
        if isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "telemetry": span.to_dict()}
            result = result.model_copy(update={"meta": meta})  # type: ignore[assignment]
        return result

    return wrapper


def enable_telemetry() -> None:
    """Turn span collection on (``-v``)."""
    _enabled.set(True)


def disable_telemetry() -> None:
    """Turn span collection off."""
    _enabled.set(False)
