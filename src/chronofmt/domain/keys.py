"""Stable cache keys for formatter options.

A key is the concatenation of ``name=<tagged value>;`` for every field,
with names sorted so construction order never matters.  Values carry a
type tag so that ``5`` and ``"5"`` never produce the same key.

INVARIANT: Keys are built by concatenation, never hashing.  Two option
sets collide only if a name or string value contains ``=`` or ``;``.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from functools import singledispatch
from typing import Any, Final


class _Unset:
    """Marker for a field that is present in the key but has no value."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Final = _Unset()

FIELD_SEPARATOR = ";"


def _number_text(value: float) -> str:
    """Decimal text for a number; integral floats render like ints."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value)


@singledispatch
def encode_value(value: Any) -> str:
    """Encode a composite value (mapping, sequence, anything else).

    Mappings are serialized with sorted keys so nested option objects are
    order-independent too.
    """
    return "o:" + json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)


@encode_value.register
def _(value: _Unset) -> str:
    return "u"


@encode_value.register(type(None))
def _(value: None) -> str:
    return "n"


@encode_value.register
def _(value: str) -> str:
    return f"s:{value}"


@encode_value.register
def _(value: bool) -> str:
    return f"b:{1 if value else 0}"


@encode_value.register(int)
@encode_value.register(float)
def _(value: float) -> str:
    return f"d:{_number_text(value)}"


def serialize(fields: Mapping[str, Any]) -> str:
    """Serialize *fields* into a key independent of insertion order.

    Examples:
        >>> serialize({"locale": "en-US", "hour12": True})
        'hour12=b:1;locale=s:en-US;'
        >>> serialize({"b": 5, "a": "5"}) == serialize({"a": "5", "b": 5})
        True
    """
    parts: list[str] = []
    for name in sorted(fields):
        parts.append(f"{name}={encode_value(fields[name])}{FIELD_SEPARATOR}")
    return "".join(parts)
