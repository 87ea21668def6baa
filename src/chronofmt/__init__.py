"""chronofmt — cached locale-aware, relative, and token date formatting."""

from __future__ import annotations

from chronofmt.api import (
    add_days,
    clear_caches,
    default_formatter,
    format,
    format_intl,
    format_tokens,
    relative,
)
from chronofmt.domain.instant import InvalidInput
from chronofmt.services.dispatcher import DateFormatter

__version__ = "0.1.0"

__all__ = [
    "DateFormatter",
    "InvalidInput",
    "__version__",
    "add_days",
    "clear_caches",
    "default_formatter",
    "format",
    "format_intl",
    "format_tokens",
    "relative",
]
