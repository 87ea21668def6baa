"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, chronofmt.toml only contains
overrides.  An empty file (or no file) yields en-US, the system time zone,
and the built-in presets.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, field_validator

from chronofmt.domain.tokens import DEFAULT_PATTERN
from chronofmt.domain.types import NumericMode, RelativeStyle
from chronofmt.infrastructure.intl import DEFAULT_LOCALE

# [presets.<name>] tables: preset name -> field overrides.
PresetOverrides = dict[str, dict[str, Any]]


class DefaultsConfig(BaseModel):
    """[defaults] section."""

    model_config = {"frozen": True}

    locale: str = DEFAULT_LOCALE
    time_zone: str | None = None
    numeric: NumericMode = NumericMode.AUTO
    style: RelativeStyle = RelativeStyle.LONG
    pattern: str = DEFAULT_PATTERN

    @field_validator("locale", "pattern")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "must not be blank"
            raise ValueError(msg)
        return value
