# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""In-process TTL store used as the always-available fallback tier.

Entries hold the encoded text form of a value so that the local and
remote tiers store exactly the same thing.  Expiry is enforced lazily on
read; a write that pushes the store past ``max_entries`` additionally
sweeps every expired entry.  There is no background task.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

from tiercache.cache.base import TTLMode

# Entry count above which a write triggers an expiry sweep.
_DEFAULT_MAX_ENTRIES = 1000


class _Entry:
    """A cache entry with an optional expiry deadline."""

    __slots__ = ("expires_at", "value")

    def __init__(self, value: str, expires_at: float | None) -> None:
        self.value = value
        self.expires_at = expires_at

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


class LocalStore:
    """Thread-safe in-memory key/value store with per-entry TTL.

    Args:
        max_entries: Soft size bound.  Exceeding it on ``set`` prunes
            expired entries; live entries are never evicted.
        clock: Monotonic time source in seconds.
        wall_clock: Unix time source in seconds, used to translate
            absolute ``EXAT``/``PXAT`` deadlines onto *clock*.
    """

    def __init__(
        self,
        max_entries: int = _DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], float] = time.time,
    ) -> None:
        self._store: dict[str, _Entry] = {}
        self._lock = threading.Lock()
        self._max_entries = max_entries
        self._clock = clock
        self._wall_clock = wall_clock

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                del self._store[key]
                return None
            return entry.value

    def set(
        self,
        key: str,
        value: str,
        ttl: float | None = None,
        mode: TTLMode = TTLMode.EX,
    ) -> None:
        with self._lock:
            self._store[key] = _Entry(value, self._deadline(ttl, mode))
            if len(self._store) > self._max_entries:
                self._prune_expired()

    def delete(self, key: str) -> bool:
        """Remove *key*.  Returns ``True`` if a live entry was removed."""
        with self._lock:
            entry = self._store.pop(key, None)
            return entry is not None and not entry.is_expired(self._clock())

    def exists(self, key: str) -> bool:
        return self.get(key) is not None

    def size(self) -> int:
        """Return the number of live entries, pruning expired ones first."""
        with self._lock:
            self._prune_expired()
            return len(self._store)

    def sweep(self) -> int:
        """Remove every expired entry.  Returns the number removed."""
        with self._lock:
            return self._prune_expired()

    def clear(self) -> int:
        with self._lock:
            count = len(self._store)
            self._store.clear()
            return count

    def __len__(self) -> int:
        # Physical size, expired-but-unswept entries included
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.exists(key)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _deadline(self, ttl: float | None, mode: TTLMode) -> float | None:
        if ttl is None:
            return None
        mode = TTLMode(mode)
        now = self._clock()
        if mode is TTLMode.EX:
            return now + ttl
        if mode is TTLMode.PX:
            return now + ttl / 1000
        if mode is TTLMode.EXAT:
            return now + (ttl - self._wall_clock())
        # PXAT
        return now + (ttl / 1000 - self._wall_clock())

    def _prune_expired(self) -> int:
        """Remove all expired entries.  Caller must hold the lock."""
        now = self._clock()
        expired_keys = [k for k, v in self._store.items() if v.is_expired(now)]
        for k in expired_keys:
            del self._store[k]
        return len(expired_keys)
