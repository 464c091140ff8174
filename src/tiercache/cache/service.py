# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Two-tier cache facade: remote backend first, local store as safety net.

The :class:`CacheService` is the primary public interface for the caching
layer.  Every ``get``/``set``/``delete`` tries the remote handle when one is
enabled and resolvable, and always falls back to (or additionally writes
to) the :class:`~tiercache.cache.local.LocalStore`.  No remote failure is
ever raised to the caller.

The remote handle is obtained through an injected zero-argument accessor
on first use rather than at construction, so the component that owns the
remote client can itself depend on the cache without an import cycle.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from tiercache.cache.base import RemoteAccessor, RemoteHandle, TTLMode
from tiercache.cache.codec import JsonCodec, ValueCodec
from tiercache.cache.local import LocalStore
from tiercache.core.exceptions import CodecError

logger = logging.getLogger("tiercache.cache.service")

T = TypeVar("T")

# Local-tier TTL applied when the caller gives none (5 minutes).
DEFAULT_TTL = 300

# Module-level singleton
_service: CacheService | None = None


class CacheStats:
    """Per-tier hit/miss counters."""

    __slots__ = ("local_hits", "misses", "remote_errors", "remote_hits")

    def __init__(self) -> None:
        self.remote_hits: int = 0
        self.local_hits: int = 0
        self.misses: int = 0
        self.remote_errors: int = 0

    @property
    def hits(self) -> int:
        return self.remote_hits + self.local_hits

    @property
    def total(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        return self.hits / self.total if self.total else 0.0

    def to_dict(self) -> dict[str, object]:
        return {
            "hits": self.hits,
            "remote_hits": self.remote_hits,
            "local_hits": self.local_hits,
            "misses": self.misses,
            "remote_errors": self.remote_errors,
            "total": self.total,
            "hit_rate": round(self.hit_rate, 4),
        }


class CacheService:
    """Key/value cache with TTL over a remote backend and a local store.

    Args:
        local: The process-local fallback store.
        remote_accessor: Returns the remote handle, or ``None`` while the
            owner is not ready.  May also raise; either way the call is
            served locally and resolution is retried on the next call.
        remote_enabled: When false the service never resolves a remote
            handle and works purely on the local store.
        default_ttl: Local TTL in seconds used when ``set`` gets none.
        codec: Value codec; defaults to :class:`JsonCodec`.
        remote_timeout: Optional upper bound in seconds on each remote call.
    """

    def __init__(
        self,
        local: LocalStore | None = None,
        remote_accessor: RemoteAccessor | None = None,
        remote_enabled: bool = False,
        default_ttl: int = DEFAULT_TTL,
        codec: ValueCodec | None = None,
        remote_timeout: float | None = None,
    ) -> None:
        self._local = local if local is not None else LocalStore()
        self._remote_accessor = remote_accessor
        self._remote_enabled = remote_enabled
        self._remote: RemoteHandle | None = None
        self._default_ttl = default_ttl
        self._codec = codec or JsonCodec()
        self._remote_timeout = remote_timeout
        self._stats = CacheStats()

    # ------------------------------------------------------------------
    # Remote handle resolution
    # ------------------------------------------------------------------

    def register_remote(self, accessor: RemoteAccessor) -> None:
        """Install (or replace) the remote accessor once its owner is ready."""
        self._remote_accessor = accessor
        self._remote = None

    def _resolve_remote(self) -> RemoteHandle | None:
        if not self._remote_enabled:
            return None
        if self._remote is not None:
            return self._remote
        if self._remote_accessor is None:
            return None
        try:
            handle = self._remote_accessor()
        except Exception as exc:
            logger.debug("Remote cache backend not available: %s", exc)
            return None
        if handle is not None:
            self._remote = handle
        return handle

    async def _call_remote(
        self, op: str, key: str, call: Callable[[], Awaitable[T]]
    ) -> tuple[bool, T | None]:
        """Await a remote call, returning ``(ok, result)`` and never raising."""
        try:
            if self._remote_timeout is not None:
                result = await asyncio.wait_for(call(), timeout=self._remote_timeout)
            else:
                result = await call()
        except Exception as exc:
            self._stats.remote_errors += 1
            logger.debug("Remote cache %s failed for key %s: %s", op, key, exc)
            return False, None
        return True, result

    # ------------------------------------------------------------------
    # Cache operations
    # ------------------------------------------------------------------

    async def get(self, key: str) -> Any | None:
        """Return the cached value for *key*, or ``None`` when absent.

        A remote miss or failure falls through to the local store, so a
        live local entry is never masked by the remote tier.
        """
        remote = self._resolve_remote()
        if remote is not None:
            ok, raw = await self._call_remote("get", key, lambda: remote.get(key))
            if ok and raw is not None:
                try:
                    value = self._codec.decode(raw)
                except Exception as exc:
                    self._stats.remote_errors += 1
                    logger.warning("Undecodable remote cache payload for key %s: %s", key, exc)
                else:
                    self._stats.remote_hits += 1
                    return value

        raw = self._local.get(key)
        if raw is None:
            self._stats.misses += 1
            logger.debug("Cache MISS for key %s", key)
            return None
        try:
            value = self._codec.decode(raw)
        except Exception as exc:
            logger.warning("Undecodable local cache payload for key %s: %s", key, exc)
            self._local.delete(key)
            self._stats.misses += 1
            return None
        self._stats.local_hits += 1
        logger.debug("Cache HIT (local) for key %s", key)
        return value

    async def set(
        self,
        key: str,
        value: Any,
        ttl: float | None = None,
        mode: TTLMode | str = TTLMode.EX,
    ) -> None:
        """Store *value* under *key* in both tiers.

        Args:
            key: Cache key.
            value: Any value the codec can encode.
            ttl: Expiry amount interpreted per *mode*.  When ``None`` the
                remote keeps its own default and the local tier uses
                ``default_ttl`` seconds.
            mode: TTL interpretation, see :class:`TTLMode`.
        """
        try:
            mode = TTLMode(mode)
            encoded = self._codec.encode(value)
        except (CodecError, ValueError) as exc:
            logger.warning("Not caching key %s: %s", key, exc)
            return

        remote = self._resolve_remote()
        if remote is not None:
            if ttl is not None:
                await self._call_remote(
                    "set", key, lambda: remote.set(key, encoded, mode, ttl)
                )
            else:
                await self._call_remote("set", key, lambda: remote.set(key, encoded))

        if ttl is None:
            ttl, mode = self._default_ttl, TTLMode.EX
        self._local.set(key, encoded, ttl=ttl, mode=mode)
        logger.debug("Cached key %s (ttl=%s %s)", key, ttl, mode)

    async def delete(self, key: str) -> None:
        """Remove *key* from both tiers.  Missing keys are not an error."""
        remote = self._resolve_remote()
        if remote is not None:
            await self._call_remote("delete", key, lambda: remote.delete(key))
        self._local.delete(key)

    def clear_local(self) -> int:
        """Flush the local tier.  Returns the number of entries removed."""
        count = self._local.clear()
        logger.info("Local cache cleared: %d entries removed", count)
        return count

    @property
    def stats(self) -> CacheStats:
        """Return the hit/miss statistics object."""
        return self._stats

    @property
    def local(self) -> LocalStore:
        """Return the underlying local store."""
        return self._local

    @property
    def remote_enabled(self) -> bool:
        return self._remote_enabled

    @property
    def default_ttl(self) -> int:
        return self._default_ttl


def _default_remote_accessor() -> RemoteHandle | None:
    """Look up the Redis owner at call time to keep the import graph acyclic."""
    from tiercache.cache.redis import get_redis_remote

    return get_redis_remote()


def get_cache_service() -> CacheService:
    """Return the module-level :class:`CacheService` singleton.

    Creates a new instance on first call using application settings.
    """
    global _service
    if _service is None:
        from tiercache.core.config import get_settings

        settings = get_settings()
        _service = CacheService(
            local=LocalStore(max_entries=settings.cache_local_max_entries),
            remote_accessor=_default_remote_accessor if settings.use_redis else None,
            remote_enabled=settings.use_redis,
            default_ttl=settings.cache_default_ttl,
            remote_timeout=settings.cache_remote_timeout,
        )
    return _service


def reset_cache_service() -> None:
    """Reset the singleton (useful for testing)."""
    global _service
    _service = None
