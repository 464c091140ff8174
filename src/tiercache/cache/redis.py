# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Redis remote backend using the ``redis`` async client.

This module owns the Redis client: its construction, connection policy
and socket timeouts.  :class:`~tiercache.cache.service.CacheService` never
imports it eagerly; it asks :func:`get_redis_remote` for a handle on first
use.
"""

from __future__ import annotations

import logging

import redis.asyncio as aioredis

from tiercache.cache.base import RemoteHandle, TTLMode
from tiercache.core.exceptions import ConfigurationError, RemoteUnavailableError

logger = logging.getLogger("tiercache.cache.redis")

_DEFAULT_KEY_PREFIX = "tiercache:"

# Module-level singleton
_remote: RedisRemote | None = None

_TTL_KWARGS = {
    TTLMode.EX: "ex",
    TTLMode.PX: "px",
    TTLMode.EXAT: "exat",
    TTLMode.PXAT: "pxat",
}


# Second-based modes carrying a fraction are sent at millisecond precision
_MILLIS_MODES = {TTLMode.EX: TTLMode.PX, TTLMode.EXAT: TTLMode.PXAT}


def _ttl_kwargs(mode: TTLMode, ttl: float) -> dict[str, int]:
    if mode in _MILLIS_MODES and ttl != int(ttl):
        return {_TTL_KWARGS[_MILLIS_MODES[mode]]: round(ttl * 1000)}
    return {_TTL_KWARGS[mode]: round(ttl)}


class RedisRemote(RemoteHandle):
    """Redis-backed remote handle using ``redis-py`` async client.

    Args:
        redis_url: Redis connection URL (e.g. ``redis://localhost:6379/0``).
        password: Optional password overriding the one in *redis_url*.
        key_prefix: Namespace prepended to every key.
        socket_timeout: Seconds before a connect or command attempt fails.
        client: Pre-built client, mainly for tests.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        password: str | None = None,
        key_prefix: str = _DEFAULT_KEY_PREFIX,
        socket_timeout: float | None = 2.0,
        client: aioredis.Redis | None = None,
    ) -> None:
        self._key_prefix = key_prefix
        if client is not None:
            self._client = client
        else:
            self._client = aioredis.from_url(
                redis_url,
                password=password or None,
                decode_responses=True,
                socket_timeout=socket_timeout,
                socket_connect_timeout=socket_timeout,
            )

    # ------------------------------------------------------------------
    # RemoteHandle interface
    # ------------------------------------------------------------------

    async def get(self, key: str) -> str | None:
        result = await self._client.get(self._prefixed(key))
        return str(result) if result is not None else None

    async def set(
        self,
        key: str,
        value: str,
        mode: TTLMode | None = None,
        ttl: float | None = None,
    ) -> None:
        kwargs: dict[str, int] = {}
        if ttl is not None:
            kwargs.update(_ttl_kwargs(TTLMode(mode or TTLMode.EX), ttl))
        await self._client.set(self._prefixed(key), value, **kwargs)

    async def delete(self, key: str) -> None:
        await self._client.delete(self._prefixed(key))

    # ------------------------------------------------------------------
    # Owner-side operations
    # ------------------------------------------------------------------

    async def ping(self) -> bool:
        return bool(await self._client.ping())

    async def close(self) -> None:
        await self._client.aclose()

    def _prefixed(self, key: str) -> str:
        return f"{self._key_prefix}{key}"


def get_redis_remote() -> RedisRemote:
    """Return the process-wide :class:`RedisRemote`, creating it on first call.

    Raises:
        RemoteUnavailableError: If Redis is disabled in settings.
        ConfigurationError: If the configured Redis URL cannot be parsed.
    """
    global _remote
    if _remote is None:
        from tiercache.core.config import get_settings

        settings = get_settings()
        if not settings.use_redis:
            raise RemoteUnavailableError("Redis backend is disabled (TIERCACHE_USE_REDIS)")
        try:
            _remote = RedisRemote(
                redis_url=settings.redis_url,
                password=settings.redis_password,
                key_prefix=settings.redis_key_prefix,
                socket_timeout=settings.redis_socket_timeout,
            )
        except ValueError as exc:
            raise ConfigurationError(f"Invalid TIERCACHE_REDIS_URL: {exc}") from exc
        logger.info("Redis cache backend configured for %s", settings.redis_url)
    return _remote


async def close_redis_remote() -> None:
    """Close and drop the singleton client, if one was created."""
    global _remote
    if _remote is not None:
        await _remote.close()
        _remote = None
