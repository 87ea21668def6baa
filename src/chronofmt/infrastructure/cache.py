"""FormatterCache — build-once memoization of expensive formatters.

Each cache maps a serialized option key to the formatter built for it.
Entries live until :meth:`FormatterCache.clear`; there is no eviction,
since applications use only a handful of locale/zone/option combinations.

INVARIANT: For one cache instance, ``build`` runs at most once per key.

Infrastructure never imports the service layer, so a cache reports its
lookups through an optional ``on_lookup(name, hit)`` callback instead.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FormatterCache(Generic[T]):
    """Keyed store of lazily built formatter objects.

    The check-then-insert sequence runs under a lock so threads sharing a
    cache never build the same formatter twice.
    """

    def __init__(self, name: str, *, on_lookup: Callable[[str, bool], None] | None = None) -> None:
        self.name = name
        self._on_lookup = on_lookup
        self._entries: dict[str, T] = {}
        self._lock = threading.Lock()

    def get_or_create(self, key: str, build: Callable[[], T]) -> T:
        """Return the formatter for *key*, building it on first use.

        If *build* raises, nothing is stored or reported and the error
        propagates.
        """
        entry = self._entries.get(key)
        hit = entry is not None
        if entry is None:
            with self._lock:
                entry = self._entries.get(key)
                hit = entry is not None
                if entry is None:
                    logger.debug("Building %s formatter for %s", self.name, key)
                    entry = build()
                    self._entries[key] = entry
        if self._on_lookup is not None:
            self._on_lookup(self.name, hit)
        return entry

    def clear(self) -> None:
        """Drop every entry; later lookups rebuild."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __repr__(self) -> str:
        return f"FormatterCache(name={self.name!r}, size={len(self)})"
