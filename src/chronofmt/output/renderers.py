"""Rich renderers for ServiceResult.

Successful results print the formatted value on its own line so the
human output stays pipeable; verbose mode adds the request fields and
the telemetry span tree underneath.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.text import Text

from chronofmt.output.console import create_console, get_output, style_for_route

if TYPE_CHECKING:
    from rich.console import Console

    from chronofmt.services.result import ServiceResult

_DETAIL_KEYS = ("input", "mode", "route", "pattern", "days", "epoch_ms")


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    if result.ok:
        _render_ok(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Only the formatted value (or a one-line error) for ``--quiet``."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"
    return str(result.data.get("result", ""))


def _render_ok(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    console.print(Text(str(result.data.get("result", "")), style="chrono.value"))
    if not verbose:
        return
    console.print(Text("OK", style="chrono.ok"), Text(result.op, style="chrono.op"))
    for key in _DETAIL_KEYS:
        if key in result.data:
            _field(console, key, result.data[key])
    _render_meta(console, result)


def _field(console: Console, key: str, value: Any) -> None:
    style = style_for_route(str(value)) if key == "route" else ""
    console.print(Text(f"  {key}: ", style="chrono.key"), Text(str(value), style=style), sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(Text(f"    {k}: {v}"))


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)
    style = "yellow" if duration > 10 else "dim"
    line = f"{prefix}[{style}]{duration:>8.3f}ms[/{style}]  {name}"
    cache = span_data.get("cache") or {}
    if cache:
        line += "  (" + ", ".join(f"{k}={n}" for k, n in cache.items()) + ")"
    console.print(line)
    for child in span_data.get("stages", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(Text("ERROR", style="chrono.error"), Text(result.op, style="chrono.op"), Text(msg))
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))
