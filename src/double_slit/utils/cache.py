"""Explicit memoization store shared by the pure model components."""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any


class MemoCache:
    """Unbounded key -> value store with exact-match keys.

    Owned by a simulation instance rather than living at module level,
    so tests and parameter resets can clear it.
    """

    def __init__(self) -> None:
        self._store: dict[Hashable, Any] = {}
        self.hits: int = 0
        self.misses: int = 0

    def get(self, key: Hashable) -> Any | None:
        """Return the cached value, or None on a miss."""
        value = self._store.get(key)
        if value is None:
            self.misses += 1
        else:
            self.hits += 1
        return value

    def set(self, key: Hashable, value: Any) -> Any:
        """Store and return value."""
        self._store[key] = value
        return value

    def reset(self) -> None:
        """Drop all entries and counters."""
        self._store.clear()
        self.hits = 0
        self.misses = 0

    def __contains__(self, key: Hashable) -> bool:
        return key in self._store

    def __len__(self) -> int:
        return len(self._store)
